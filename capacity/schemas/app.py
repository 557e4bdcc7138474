import uuid
from typing import Optional, List
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from capacity.models.app import DistributionChannelType, Platform
from capacity.schemas.common import dedupe

REQUEST_CONFIG = ConfigDict(use_enum_values=True, validate_default=True)


class DistributionChannel(BaseModel):
    model_config = REQUEST_CONFIG

    type: DistributionChannelType
    url: str = Field(min_length=1)
    label: Optional[str] = None


class AppCreate(BaseModel):
    model_config = REQUEST_CONFIG

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    platforms: List[Platform] = Field(default_factory=list)
    icon_url: Optional[str] = None
    screenshots: List[str] = Field(default_factory=list)
    distribution_channels: List[DistributionChannel] = Field(default_factory=list)
    privacy_policy_url: Optional[str] = None

    @field_validator("platforms")
    @classmethod
    def unique_platforms(cls, value):
        return dedupe(value)


class AppUpdate(BaseModel):
    model_config = REQUEST_CONFIG

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    platforms: Optional[List[Platform]] = None
    icon_url: Optional[str] = None
    screenshots: Optional[List[str]] = None
    distribution_channels: Optional[List[DistributionChannel]] = None
    privacy_policy_url: Optional[str] = None

    @field_validator("platforms")
    @classmethod
    def unique_platforms(cls, value):
        return dedupe(value) if value is not None else value


class DistributionChannelResponse(BaseModel):
    type: str
    url: str
    label: Optional[str] = None


class AppResponse(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    description: Optional[str] = None
    platforms: List[str] = []
    icon_url: Optional[str] = None
    screenshots: List[str] = []
    distribution_channels: List[DistributionChannelResponse] = []
    privacy_policy_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
