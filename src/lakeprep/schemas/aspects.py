import json
from typing import Any

from google.cloud import dataplex_v1
from pydantic import BaseModel, Field

from ..errors import AspectSchemaError


class EnumValue(BaseModel):
    index: int
    name: str


class TemplateField(BaseModel):
    name: str
    display_name: str
    index: int
    required: bool = True
    enum_values: list[EnumValue] = Field(min_length=1)

    @property
    def allowed_values(self) -> set[str]:
        return {v.name for v in self.enum_values}

    def to_template(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": "enum",
            "index": self.index,
            "annotations": {"displayName": self.display_name},
            "constraints": {"required": self.required},
            "enumValues": [v.model_dump() for v in self.enum_values],
        }


class AspectTypeSpec(BaseModel):
    """
    Metadata schema of a Dataplex aspect type: a record of enumerated fields.
    Renders to the REST body and to the client-library message from one source.
    """

    aspect_type_id: str
    display_name: str
    description: str = ""
    fields: list[TemplateField] = Field(min_length=1)

    def to_body(self) -> dict[str, Any]:
        return {
            "displayName": self.display_name,
            "description": self.description,
            "metadataTemplate": {
                "name": self.aspect_type_id.replace("-", "_"),
                "type": "record",
                "recordFields": [f.to_template() for f in self.fields],
            },
        }

    def to_message(self) -> dataplex_v1.AspectType:
        return dataplex_v1.AspectType.from_json(json.dumps(self.to_body()))

    def validate_data(self, data: dict[str, str]) -> None:
        """Raises AspectSchemaError unless data holds exactly the declared fields."""
        declared = {f.name: f for f in self.fields}

        unknown = set(data) - set(declared)
        if unknown:
            raise AspectSchemaError(
                f"Fields not declared by {self.aspect_type_id}: {sorted(unknown)}"
            )

        for name, field in declared.items():
            if name not in data:
                if field.required:
                    raise AspectSchemaError(f"Missing required field '{name}'")
                continue
            if data[name] not in field.allowed_values:
                raise AspectSchemaError(
                    f"Value '{data[name]}' for '{name}' not in "
                    f"{sorted(field.allowed_values)}"
                )


class AspectPayload(BaseModel):
    aspect_type: str = Field(description="Full aspect type resource name")
    data: dict[str, str]

    def to_body(self) -> dict[str, Any]:
        return {"aspectType": self.aspect_type, "data": self.data}
