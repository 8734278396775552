"""Dynamic per-category attribute fields."""

from dataclasses import dataclass, field
from typing import List, Optional, Union

FIELD_TYPES = ("single-select", "multi-select", "photo", "notes")

FieldValue = Union[None, str, List[str]]


@dataclass
class FieldOption:
    id: str
    label: str


@dataclass
class CategoryField:
    """A user-defined attribute attached to one category.

    Attributes:
        id: Unique identifier of the field.
        type: One of FIELD_TYPES.
        label: Display label.
        options: Choices for the select types (empty for photo/notes).
    """

    id: str
    type: str
    label: str
    options: List[FieldOption] = field(default_factory=list)

    def find_option(self, option_id: str) -> Optional[FieldOption]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


@dataclass
class CategoryDataEntry:
    field_id: str
    value: FieldValue = None


@dataclass
class CategoryData:
    """All fields and their current values for one category."""

    fields: List[CategoryField] = field(default_factory=list)
    data: List[CategoryDataEntry] = field(default_factory=list)

    def find_field(self, field_id: str) -> Optional[CategoryField]:
        for category_field in self.fields:
            if category_field.id == field_id:
                return category_field
        return None

    def find_entry(self, field_id: str) -> Optional[CategoryDataEntry]:
        for entry in self.data:
            if entry.field_id == field_id:
                return entry
        return None


def initial_value(field_type: str) -> FieldValue:
    """Get the value a freshly added field starts with."""
    return [] if field_type == "multi-select" else None
