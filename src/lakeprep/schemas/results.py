from enum import Enum

from pydantic import BaseModel


class ProvisionStatus(str, Enum):
    EXISTS = "exists"
    CREATED = "created"
    CREATED_FALLBACK = "created (fallback)"
    ENABLED = "enabled"
    ATTACHED = "attached"
    MISSING = "missing"


class ProvisionResult(BaseModel):
    kind: str
    name: str
    status: ProvisionStatus
    detail: str | None = None
