"""Service for dynamic attribute fields attached to categories."""

from typing import Dict, Iterable, List, Optional

from logger import get_logger
from models.category_data import (
    FIELD_TYPES,
    CategoryData,
    CategoryDataEntry,
    CategoryField,
    FieldOption,
    FieldValue,
    initial_value,
)
from tools.ids import IdGenerator

logger = get_logger()


class CategoryDataService:
    """Service for managing per-category fields and their values.

    Data is keyed by category ID but is not owned by the category tree:
    entries for deleted categories stay until purge() is called.

    Args:
        ids: Identifier generator for fields and options.
        data_map: Initial data keyed by category ID.
    """

    def __init__(self, ids: IdGenerator, data_map: Optional[Dict[str, CategoryData]] = None):
        self.ids = ids
        self.data_map: Dict[str, CategoryData] = data_map if data_map is not None else {}

    def get_fields_for_category(self, category_id: str) -> CategoryData:
        """Get the fields and values of a category (empty if it has none)."""
        return self.data_map.get(category_id) or CategoryData()

    def add_field(self, category_id: str, field_type: str, label: str) -> CategoryField:
        """Add a field to a category, creating its data entry on first use.

        Args:
            category_id: The category the field belongs to.
            field_type: One of single-select, multi-select, photo, notes.
            label: Display label.

        Returns:
            The created CategoryField.

        Raises:
            ValueError: If field_type is unknown or label is blank.
        """
        if field_type not in FIELD_TYPES:
            raise ValueError(
                f"Unknown field type '{field_type}'. Must be one of: {', '.join(FIELD_TYPES)}"
            )
        if not label.strip():
            raise ValueError("Field label cannot be empty")

        category_data = self.data_map.setdefault(category_id, CategoryData())
        new_field = CategoryField(id=self.ids.new_id(), type=field_type, label=label)
        category_data.fields.append(new_field)
        category_data.data.append(
            CategoryDataEntry(field_id=new_field.id, value=initial_value(field_type))
        )
        logger.info(f"Added {field_type} field '{label}' to category {category_id}")
        return new_field

    def remove_field(self, category_id: str, field_id: str) -> bool:
        """Remove a field and its value.

        Returns:
            True if the field was removed, False if not found.
        """
        category_data = self.data_map.get(category_id)
        if category_data is None or category_data.find_field(field_id) is None:
            return False

        category_data.fields = [f for f in category_data.fields if f.id != field_id]
        category_data.data = [d for d in category_data.data if d.field_id != field_id]
        logger.info(f"Removed field {field_id} from category {category_id}")
        return True

    def update_field_data(self, category_id: str, field_id: str, value: FieldValue) -> bool:
        """Set the value of a field.

        Select fields only accept IDs of their own options: a single ID (or
        None) for single-select, a list of IDs for multi-select. Photo and
        notes fields take a string or None.

        Returns:
            True if the value was stored, False if the field was not found.

        Raises:
            ValueError: If the value does not fit the field type.
        """
        category_data = self.data_map.get(category_id)
        if category_data is None:
            return False
        category_field = category_data.find_field(field_id)
        if category_field is None:
            return False

        _validate_value(category_field, value)

        entry = category_data.find_entry(field_id)
        if entry is None:
            category_data.data.append(CategoryDataEntry(field_id=field_id, value=value))
        else:
            entry.value = value
        return True

    def add_field_option(
        self, category_id: str, field_id: str, label: str
    ) -> Optional[FieldOption]:
        """Add a choice to a select field.

        Returns:
            The created FieldOption, or None if the field was not found.

        Raises:
            ValueError: If label is blank or the field is not a select field.
        """
        if not label.strip():
            raise ValueError("Option label cannot be empty")

        category_data = self.data_map.get(category_id)
        category_field = category_data.find_field(field_id) if category_data else None
        if category_field is None:
            return None
        if category_field.type not in ("single-select", "multi-select"):
            raise ValueError(f"Field '{category_field.label}' does not take options")

        option = FieldOption(id=self.ids.new_id(), label=label)
        category_field.options.append(option)
        return option

    def remove_field_option(self, category_id: str, field_id: str, option_id: str) -> bool:
        """Remove a choice from a select field and deselect it.

        Returns:
            True if the option was removed, False if not found.
        """
        category_data = self.data_map.get(category_id)
        category_field = category_data.find_field(field_id) if category_data else None
        if category_field is None or category_field.find_option(option_id) is None:
            return False

        category_field.options = [o for o in category_field.options if o.id != option_id]

        entry = category_data.find_entry(field_id)
        if entry is not None:
            if isinstance(entry.value, list):
                entry.value = [v for v in entry.value if v != option_id]
            elif entry.value == option_id:
                entry.value = None
        return True

    def purge(self, category_ids: Iterable[str]) -> int:
        """Drop the data of categories that no longer exist.

        Returns:
            Number of categories whose data was removed.
        """
        purged = 0
        for category_id in category_ids:
            if self.data_map.pop(category_id, None) is not None:
                purged += 1
        if purged:
            logger.info(f"Purged field data for {purged} deleted categories")
        return purged


def _validate_value(category_field: CategoryField, value: FieldValue) -> None:
    option_ids = {o.id for o in category_field.options}

    if category_field.type == "multi-select":
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"Field '{category_field.label}' expects a list of option IDs")
        unknown: List[str] = [v for v in value if v not in option_ids]
        if unknown:
            raise ValueError(f"Unknown option IDs for '{category_field.label}': {unknown}")
        return

    if value is not None and not isinstance(value, str):
        raise ValueError(f"Field '{category_field.label}' expects a single value")
    if category_field.type == "single-select" and value is not None and value not in option_ids:
        raise ValueError(f"Unknown option ID for '{category_field.label}': {value}")
