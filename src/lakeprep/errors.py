class LakePrepError(Exception):
    """Base class for errors that abort a lakeprep run."""


class ConfigError(LakePrepError):
    """Missing local tooling, credentials or configuration."""


class ProvisionError(LakePrepError):
    """Every creation path for a resource failed."""

    def __init__(self, kind: str, name: str, message: str) -> None:
        super().__init__(f"{kind} '{name}': {message}")
        self.kind = kind
        self.name = name


class AspectSchemaError(LakePrepError, ValueError):
    """Aspect data does not conform to its aspect type."""
