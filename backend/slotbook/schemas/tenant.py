"""Schemas for tenant provisioning."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class TenantCreate(BaseModel):
    slug: str = Field(
        min_length=2, max_length=120, pattern=r"^[A-Za-z0-9][A-Za-z0-9-]*$"
    )
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr | None = None
    timezone: str | None = Field(default=None, max_length=64)


class TenantRead(BaseModel):
    id: uuid.UUID
    slug: str
    name: str
    email: str | None = None
    timezone: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
