"""Pydantic models for exercise catalog records."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ExerciseRecord(BaseModel):
    """A single exercise from the catalog."""

    id: Optional[str] = None
    name: str = ""
    category: Optional[str] = None
    equipment: Optional[str] = None
    force: Optional[str] = None
    level: Optional[str] = None
    mechanic: Optional[str] = None
    primary_muscles: tuple[str, ...] = Field(default=(), alias="primaryMuscles")
    secondary_muscles: tuple[str, ...] = Field(default=(), alias="secondaryMuscles")
    instructions: tuple[str, ...] = ()
    images: tuple[str, ...] = ()

    class Config:
        """Pydantic configuration."""

        frozen = True
        populate_by_name = True

    @field_validator("primary_muscles", "secondary_muscles", "instructions", "images", mode="before")
    @classmethod
    def _coerce_string_list(cls, value: Any) -> tuple[str, ...]:
        # Catalog dumps are loose: null, a bare string or a list with stray values
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(str(v) for v in value if v is not None)

    @field_validator("id", mode="before")
    @classmethod
    def _blank_id_is_missing(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("category", "equipment", "force", "level", "mechanic", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @model_validator(mode="before")
    @classmethod
    def _default_name_to_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name") and data.get("id"):
            data = {**data, "name": str(data["id"]).strip()}
        return data


class SearchFacets(BaseModel):
    """Structured filters for catalog searches. Unset facets do not filter."""

    category: Optional[str] = None
    equipment: Optional[str] = None
    muscle: Optional[str] = None
