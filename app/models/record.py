# app/models/record.py

from typing import Any, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

KNOWN_FIELDS = ("id", "reference", "date", "amount", "description", "category")


def _split_fields(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Separate well-known fields from extras, dropping absent values."""
    data: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in mapping.items():
        if value is None:
            continue
        if key in KNOWN_FIELDS:
            data[key] = value
        else:
            extra[key] = value
    data["extra"] = extra
    return data


class FinancialRecord(BaseModel):
    """
    One transaction entry from either input collection.

    The well-known fields are optional; anything else a source file carries
    lives in `extra`, in the order it was read. `None` means absent.

    Serializes flat (extras inlined), and reads every input mapping as flat:
    a key named "extra" is an ordinary field like any other.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[Any] = None
    reference: Optional[Any] = None
    date: Optional[Any] = None
    amount: Optional[Any] = None
    description: Optional[Any] = None
    category: Optional[Any] = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def accept_flat_mapping(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        return _split_fields(data)

    @model_serializer
    def serialize_flat(self) -> dict[str, Any]:
        return self.fields()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "FinancialRecord":
        """Build a record from a flat field -> value mapping."""
        return cls.model_validate(mapping)

    def fields(self) -> dict[str, Any]:
        """Present fields: known ones first, then extras in insertion order."""
        present = {}
        for name in KNOWN_FIELDS:
            value = getattr(self, name)
            if value is not None:
                present[name] = value
        for name, value in self.extra.items():
            if value is not None and name not in present:
                present[name] = value
        return present

    def get(self, name: str) -> Any:
        if name in KNOWN_FIELDS:
            return getattr(self, name)
        return self.extra.get(name)

    def to_dict(self) -> dict[str, Any]:
        return self.fields()
