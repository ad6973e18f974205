"""Pydantic schemas for runtime validation of conversion configuration."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from badavi.types import Direction

DEFAULT_LANGUAGE = "en"
DEFAULT_DIRECTION: Direction = "ltr"


class BadaviConfig(BaseModel):
    """Validated configuration shared by every file in a run.

    JSON documents may use either the snake_case field names or the
    camelCase keys written by earlier releases (``cssPath``,
    ``pandocArgs`` and so on).
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    default_language: str = Field(
        default=DEFAULT_LANGUAGE,
        validation_alias=AliasChoices(
            "default_language",
            "defaultLanguage",
            "defaultLanguageCodeIso639_2letter",
        ),
    )
    default_direction: Direction = Field(
        default=DEFAULT_DIRECTION,
        validation_alias=AliasChoices("default_direction", "defaultDirection"),
    )
    stylesheet_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("stylesheet_path", "cssPath"),
    )
    extra_engine_args: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("extra_engine_args", "pandocArgs"),
    )
    engine_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("engine_path", "pandocPath"),
    )

    @field_validator("default_language", mode="before")
    @classmethod
    def _validate_language(cls, value: object) -> str:
        if not isinstance(value, str):
            raise ValueError("default language must be a string.")
        normalized = value.strip().lower()
        if len(normalized) != 2 or not normalized.isascii() or not normalized.isalpha():
            raise ValueError("default language must be a 2-letter code.")
        return normalized

    @field_validator("extra_engine_args", mode="before")
    @classmethod
    def _validate_args(cls, value: object) -> object:
        if not isinstance(value, (list, tuple)):
            raise ValueError("extra engine arguments must be a list of strings.")
        return value

    @field_validator("stylesheet_path", "engine_path")
    @classmethod
    def _blank_path_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value
