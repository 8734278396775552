#!/usr/bin/env python3

import sys
from models.category_data import FIELD_TYPES
from logger import get_logger

logger = get_logger()


def _require_category(services, category_id):
    category = services.categories.find(category_id)
    if not category:
        logger.error(f"Category with ID {category_id} not found.")
        sys.exit(1)
    return category


def cmd_list(args, services):
    """List the fields of a category with their values."""
    category = _require_category(services, args.category_id)
    category_data = services.category_data.get_fields_for_category(category.id)

    if not category_data.fields:
        logger.info(f"'{category.name}' has no fields.")
        return

    logger.info(f"\nFields of '{category.name}':")
    logger.info("=" * 80)
    for category_field in category_data.fields:
        entry = category_data.find_entry(category_field.id)
        logger.info(f"ID: {category_field.id}")
        logger.info(f"Label: {category_field.label} ({category_field.type})")
        for option in category_field.options:
            logger.info(f"  option {option.id}: {option.label}")
        logger.info(f"Value: {entry.value if entry else None}")
        logger.info("-" * 80)


def cmd_add(args, services):
    """Add a field to a category."""
    category = _require_category(services, args.category_id)

    try:
        category_field = services.category_data.add_field(
            category.id, args.field_type, args.label
        )
        for option_label in args.option or []:
            services.category_data.add_field_option(
                category.id, category_field.id, option_label
            )
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    services.save()
    logger.info(f"✓ Field created successfully with ID: {category_field.id}")


def cmd_remove(args, services):
    """Remove a field from a category."""
    if not services.category_data.remove_field(args.category_id, args.field_id):
        logger.error(f"Field {args.field_id} not found on category {args.category_id}.")
        sys.exit(1)

    services.save()
    logger.info("✓ Field removed.")


def cmd_set(args, services):
    """Set the value of a field."""
    category_data = services.category_data.get_fields_for_category(args.category_id)
    category_field = category_data.find_field(args.field_id)
    if category_field is None:
        logger.error(f"Field {args.field_id} not found on category {args.category_id}.")
        sys.exit(1)

    if category_field.type == "multi-select":
        value = list(args.values)
    elif args.values:
        value = " ".join(args.values)
    else:
        value = None

    try:
        services.category_data.update_field_data(args.category_id, args.field_id, value)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    services.save()
    logger.info(f"✓ '{category_field.label}' updated.")


def setup_parser(subparsers):
    """Setup fields subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "fields",
        help="Manage category fields",
        description="Attach attribute fields to categories and set their values",
    )

    fields_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available field commands",
        dest="subcommand",
        required=True,
    )

    # fields list
    list_parser = fields_subparsers.add_parser("list", help="List a category's fields")
    list_parser.add_argument("category_id", help="ID of the category")
    list_parser.set_defaults(func=cmd_list)

    # fields add
    add_parser = fields_subparsers.add_parser("add", help="Add a field to a category")
    add_parser.add_argument("category_id", help="ID of the category")
    add_parser.add_argument("field_type", choices=FIELD_TYPES, help="Type of the field")
    add_parser.add_argument("label", help="Field label")
    add_parser.add_argument(
        "--option", action="append", help="Choice for select fields (repeatable)"
    )
    add_parser.set_defaults(func=cmd_add)

    # fields remove
    remove_parser = fields_subparsers.add_parser("remove", help="Remove a field")
    remove_parser.add_argument("category_id", help="ID of the category")
    remove_parser.add_argument("field_id", help="ID of the field")
    remove_parser.set_defaults(func=cmd_remove)

    # fields set
    set_parser = fields_subparsers.add_parser("set", help="Set a field's value")
    set_parser.add_argument("category_id", help="ID of the category")
    set_parser.add_argument("field_id", help="ID of the field")
    set_parser.add_argument(
        "values",
        nargs="*",
        help="Value text, or option IDs for select fields (none to clear)",
    )
    set_parser.set_defaults(func=cmd_set)
