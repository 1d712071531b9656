from typing import Literal

from pydantic import BaseModel, Field, model_validator

from ..core import (
    ASPECT_TYPE_DISPLAY_NAME,
    ASPECT_TYPE_ID,
    ASSET_DISPLAY_NAME,
    ASSET_ID,
    DEFAULT_REGION,
    LAKE_DISPLAY_NAME,
    LAKE_ID,
    ZONE_DISPLAY_NAME,
    ZONE_ID,
    ZONE_LOCATION_TYPE,
    ZONE_TYPE,
)


class LabConfig(BaseModel):
    project_id: str = Field(min_length=1)
    region: str = Field(default=DEFAULT_REGION, min_length=1)

    lake_id: str = LAKE_ID
    lake_display_name: str = LAKE_DISPLAY_NAME

    zone_id: str = ZONE_ID
    zone_display_name: str = ZONE_DISPLAY_NAME
    zone_type: Literal["RAW", "CURATED"] = ZONE_TYPE
    zone_location_type: Literal["SINGLE_REGION", "MULTI_REGION"] = ZONE_LOCATION_TYPE

    asset_id: str = ASSET_ID
    asset_display_name: str = ASSET_DISPLAY_NAME

    aspect_type_id: str = ASPECT_TYPE_ID
    aspect_type_display_name: str = ASPECT_TYPE_DISPLAY_NAME

    bucket_name: str = Field(default="", description="Defaults to the project id")

    @model_validator(mode="after")
    def _default_bucket(self) -> "LabConfig":
        if not self.bucket_name:
            self.bucket_name = self.project_id
        return self

    @property
    def location_path(self) -> str:
        return f"projects/{self.project_id}/locations/{self.region}"

    @property
    def lake_path(self) -> str:
        return f"{self.location_path}/lakes/{self.lake_id}"

    @property
    def zone_path(self) -> str:
        return f"{self.lake_path}/zones/{self.zone_id}"

    @property
    def asset_path(self) -> str:
        return f"{self.zone_path}/assets/{self.asset_id}"

    @property
    def aspect_type_path(self) -> str:
        return f"{self.location_path}/aspectTypes/{self.aspect_type_id}"

    @property
    def bucket_resource(self) -> str:
        return f"projects/{self.project_id}/buckets/{self.bucket_name}"
