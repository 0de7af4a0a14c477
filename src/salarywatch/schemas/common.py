"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base schema exposing camelCase field names on the wire.

    Fields are declared in snake_case and may be populated either way.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(ApiModel):
    """Acknowledgement returned by endpoints that have no richer payload."""

    message: str
    id: uuid.UUID | None = None
