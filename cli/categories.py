#!/usr/bin/env python3

import sys
import gzip
import shutil
from pathlib import Path
from datetime import datetime
from errors import CategoryNotFoundError
from logger import get_logger

logger = get_logger()


def _log_tree(entries):
    for entry in entries:
        category = entry.category
        suffix = f"  [{len(category.linked_ids)} links]" if category.linked_ids else ""
        logger.info(f"{'  ' * entry.depth}{category.name} (ID: {category.id}){suffix}")


def cmd_list(args, services):
    """List the whole category tree."""
    entries = services.categories.find_all()

    if not entries:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    _log_tree(entries)
    logger.info("=" * 80)
    logger.info(f"\nTotal categories: {len(entries)}")


def cmd_search(args, services):
    """List categories whose name contains the query."""
    entries = services.categories.search(args.query)

    if not entries:
        logger.info(f"No categories matching '{args.query}'.")
        return

    for entry in entries:
        path = " / ".join(services.categories.path(entry.category.id))
        logger.info(f"{entry.category.id}  {path}")
    logger.info(f"\nMatches: {len(entries)}")


def cmd_show(args, services):
    """Show a single category with its children and links."""
    category = services.categories.find(args.category_id)
    if not category:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    logger.info(f"\nID: {category.id}")
    logger.info(f"Name: {category.name}")
    logger.info(f"Path: {' / '.join(services.categories.path(category.id))}")

    children = services.categories.children(category.id)
    logger.info(f"Children: {len(children)}")
    for child in children:
        logger.info(f"  - {child.name} (ID: {child.id})")

    linked = services.links.linked(category.id)
    logger.info(f"Links: {len(linked)}")
    for link, target in linked:
        logger.info(f"  - {link.name} -> {target.name} (ID: {target.id})")


def cmd_add(args, services):
    """Add a category under an optional parent."""
    try:
        category = services.categories.add(args.parent, args.name)
    except CategoryNotFoundError:
        logger.error(f"Parent category with ID {args.parent} not found.")
        sys.exit(1)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    services.save()
    logger.info(f"✓ Category created successfully with ID: {category.id}")


def cmd_rename(args, services):
    """Rename a category."""
    try:
        renamed = services.categories.rename(args.category_id, args.name)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    if not renamed:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    services.save()
    logger.info(f"✓ Category {args.category_id} renamed to '{args.name}'.")


def cmd_delete(args, services):
    """Delete a category and everything below it."""
    category_id = args.category_id

    category = services.categories.find(category_id)
    if not category:
        logger.error(f"Category with ID {category_id} not found.")
        sys.exit(1)

    descendants = services.categories.descendants(category_id)
    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Subcategories removed with it: {len(descendants)}")

    if not args.yes:
        confirm = (
            input("\nAre you sure you want to delete this category? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    removed = services.categories.delete(category_id)
    services.category_data.purge(removed)
    services.save()
    logger.info(f"✓ Category '{category.name}' deleted ({len(removed)} categories removed).")


def cmd_import(args, services):
    """Import an indented outline file as a category hierarchy."""
    outline_path = Path(args.outline_file)
    if not outline_path.exists():
        logger.error(f"File not found: {args.outline_file}")
        sys.exit(1)

    with open(outline_path, "r", encoding="utf-8") as f:
        text = f.read()

    try:
        created = services.categories.bulk_upload(text, args.parent)
    except CategoryNotFoundError:
        logger.error(f"Parent category with ID {args.parent} not found.")
        sys.exit(1)

    if not created:
        logger.info("No categories to import.")
        return

    services.save()

    config = services.config
    if config.archive_enabled:
        config.archive_dir.mkdir(parents=True, exist_ok=True)

        # Archive filename: {timestamp}_{original_filename}.gz
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        archive_path = config.archive_dir / f"{timestamp}_{outline_path.name}.gz"
        with open(outline_path, "rb") as f_in:
            with gzip.open(archive_path, "wb") as f_out:
                shutil.copyfileobj(f_in, f_out)

        logger.info(f"Archived outline to: {archive_path}")

    logger.info(f"✓ Imported {len(created)} categories.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, rename, delete, import and browse categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="Show the category tree")
    list_parser.set_defaults(func=cmd_list)

    # categories search
    search_parser = categories_subparsers.add_parser(
        "search", help="Find categories by name"
    )
    search_parser.add_argument("query", help="Text to look for in category names")
    search_parser.set_defaults(func=cmd_search)

    # categories show
    show_parser = categories_subparsers.add_parser("show", help="Show one category")
    show_parser.add_argument("category_id", help="ID of the category")
    show_parser.set_defaults(func=cmd_show)

    # categories add
    add_parser = categories_subparsers.add_parser("add", help="Add a category")
    add_parser.add_argument("name", help="Name of the new category")
    add_parser.add_argument(
        "--parent", default=None, help="ID of the parent category (omit for a root)"
    )
    add_parser.set_defaults(func=cmd_add)

    # categories rename
    rename_parser = categories_subparsers.add_parser("rename", help="Rename a category")
    rename_parser.add_argument("category_id", help="ID of the category")
    rename_parser.add_argument("name", help="New name")
    rename_parser.set_defaults(func=cmd_rename)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category and its subcategories"
    )
    delete_parser.add_argument("category_id", help="ID of the category to delete")
    delete_parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # categories import
    import_parser = categories_subparsers.add_parser(
        "import", help="Import an indented outline file"
    )
    import_parser.add_argument("outline_file", help="Text file, one category per line")
    import_parser.add_argument(
        "--parent", default=None, help="ID of the category to import under"
    )
    import_parser.set_defaults(func=cmd_import)
