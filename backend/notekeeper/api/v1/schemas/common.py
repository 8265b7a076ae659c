from __future__ import annotations

from pydantic import Field, field_validator

from notekeeper.core.models.base import AppBaseModel
from notekeeper.utils.validation import is_valid_color


def clean_name(v: str | None) -> str | None:
    if v is None:
        return v
    stripped = v.strip()
    if not stripped:
        raise ValueError("Name cannot be blank")
    return stripped


def check_color(v: str | None) -> str | None:
    if v is not None and not is_valid_color(v):
        raise ValueError("Color must be a #RRGGBB hex value")
    return v


class NamedCreate(AppBaseModel):
    """Payload for a named, colored sidebar entity (tag, notebook or folder)."""

    name: str = Field(max_length=100)
    color: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return clean_name(v)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        return check_color(v)


class NamedUpdate(AppBaseModel):
    name: str | None = Field(default=None, max_length=100)
    color: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return clean_name(v)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        return check_color(v)
