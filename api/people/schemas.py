"""
Pydantic schemas for the people endpoints.

Models run in strict mode: JSON values must already have the declared type
(`name: 12345` is rejected, not coerced to "12345"; `true` is not an int).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PERSON_FIELDS = (
    "survived",
    "pclass",
    "name",
    "sex",
    "age",
    "siblings_spouses_abroad",
    "parents_children_abroad",
    "fare",
)

# Upper bound of the Postgres `integer` columns.
INT4_MAX = 2**31 - 1


def _reject_nul(value: str | None) -> str | None:
    # Postgres text columns cannot store NUL.
    if value is not None and "\x00" in value:
        raise ValueError("NUL characters are not allowed.")
    return value


class PersonCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True, allow_inf_nan=False)

    survived: int = Field(..., ge=0, le=1)
    pclass: int = Field(..., ge=1, le=3)
    name: str = Field(..., min_length=1, max_length=500)
    sex: str = Field(..., min_length=1, max_length=50)
    age: float = Field(..., ge=0)
    siblings_spouses_abroad: int = Field(..., ge=0, le=INT4_MAX)
    parents_children_abroad: int = Field(..., ge=0, le=INT4_MAX)
    fare: float = Field(..., ge=0)

    check_text = field_validator("name", "sex")(_reject_nul)


class PersonUpdate(BaseModel):
    """
    Full or partial update. Omitted fields keep their stored value;
    explicit nulls are rejected because every column is NOT NULL.
    """

    model_config = ConfigDict(extra="forbid", strict=True, allow_inf_nan=False)

    survived: int | None = Field(default=None, ge=0, le=1)
    pclass: int | None = Field(default=None, ge=1, le=3)
    name: str | None = Field(default=None, min_length=1, max_length=500)
    sex: str | None = Field(default=None, min_length=1, max_length=50)
    age: float | None = Field(default=None, ge=0)
    siblings_spouses_abroad: int | None = Field(default=None, ge=0, le=INT4_MAX)
    parents_children_abroad: int | None = Field(default=None, ge=0, le=INT4_MAX)
    fare: float | None = Field(default=None, ge=0)

    check_text = field_validator("name", "sex")(_reject_nul)

    @model_validator(mode="after")
    def check_supplied_fields(self) -> "PersonUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field is required.")
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields may not be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)
