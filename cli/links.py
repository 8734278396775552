#!/usr/bin/env python3

import sys
from errors import CategoryNotFoundError, LinkRejectedError
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the links of a category."""
    category = services.categories.find(args.category_id)
    if not category:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    linked = services.links.linked(category.id)
    if not linked:
        logger.info(f"'{category.name}' has no links.")
        return

    logger.info(f"\nLinks of '{category.name}':")
    logger.info("=" * 80)
    for link, target in linked:
        logger.info(f"{link.name}  ->  {target.name} (ID: {target.id})")
    logger.info(f"\nTotal links: {len(linked)}")


def cmd_add(args, services):
    """Link two categories."""
    try:
        link = services.links.link(args.source_id, args.target_id, args.name)
    except (CategoryNotFoundError, LinkRejectedError) as e:
        logger.error(str(e))
        sys.exit(1)

    services.save()
    logger.info(f"✓ Linked as '{link.name}'.")


def cmd_remove(args, services):
    """Remove the link between two categories."""
    if not services.links.unlink(args.source_id, args.target_id):
        logger.info("Categories were not linked.")
        return

    services.save()
    logger.info("✓ Link removed.")


def cmd_rename(args, services):
    """Rename the link between two categories."""
    try:
        renamed = services.links.rename_link(args.source_id, args.target_id, args.name)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    if not renamed:
        logger.error("Categories are not linked.")
        sys.exit(1)

    services.save()
    logger.info(f"✓ Link renamed to '{args.name}'.")


def cmd_candidates(args, services):
    """List categories a category can still be linked to."""
    try:
        entries = services.links.candidates(args.category_id, args.query)
    except CategoryNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    if not entries:
        logger.info("No categories available to link.")
        return

    for entry in entries:
        logger.info(f"{'  ' * entry.depth}{entry.category.name} (ID: {entry.category.id})")


def setup_parser(subparsers):
    """Setup links subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "links",
        help="Manage cross-links",
        description="Create, rename and remove named links between categories",
    )

    links_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available link commands",
        dest="subcommand",
        required=True,
    )

    # links list
    list_parser = links_subparsers.add_parser("list", help="List a category's links")
    list_parser.add_argument("category_id", help="ID of the category")
    list_parser.set_defaults(func=cmd_list)

    # links add
    add_parser = links_subparsers.add_parser("add", help="Link two categories")
    add_parser.add_argument("source_id", help="ID of the first category")
    add_parser.add_argument("target_id", help="ID of the second category")
    add_parser.add_argument(
        "--name", default=None, help="Link label (defaults to both category names)"
    )
    add_parser.set_defaults(func=cmd_add)

    # links remove
    remove_parser = links_subparsers.add_parser("remove", help="Unlink two categories")
    remove_parser.add_argument("source_id", help="ID of the first category")
    remove_parser.add_argument("target_id", help="ID of the second category")
    remove_parser.set_defaults(func=cmd_remove)

    # links rename
    rename_parser = links_subparsers.add_parser("rename", help="Rename a link")
    rename_parser.add_argument("source_id", help="ID of the first category")
    rename_parser.add_argument("target_id", help="ID of the second category")
    rename_parser.add_argument("name", help="New link label")
    rename_parser.set_defaults(func=cmd_rename)

    # links candidates
    candidates_parser = links_subparsers.add_parser(
        "candidates", help="List categories that can be linked"
    )
    candidates_parser.add_argument("category_id", help="ID of the category to link from")
    candidates_parser.add_argument(
        "--query", default=None, help="Only show names containing this text"
    )
    candidates_parser.set_defaults(func=cmd_candidates)
