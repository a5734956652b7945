from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator


class Informer(BaseModel):
    """Single informer record as returned by the billing API.

    Unknown keys are kept so the record can be handed back to callers
    (REST endpoint, editor dropdowns) in the shape the remote sent.
    Numeric IDs are read as strings and nulls fall back to the defaults.
    """

    model_config = ConfigDict(extra="allow", frozen=True, coerce_numbers_to_str=True)

    informer_id: str
    domain: str = ""
    active: bool = True
    created_at: str | None = None

    @field_validator("domain", mode="before")
    @classmethod
    def _null_domain(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("active", mode="before")
    @classmethod
    def _null_active(cls, value: Any) -> Any:
        return True if value is None else value

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(mode="json", exclude_unset=True)


InformerList = TypeAdapter(list[Informer])
