#!/usr/bin/env python3
"""Reset script for Tagtree.

This script will:
1. Delete the data directory (including snapshot, logs, and archives)
2. Write a fresh, empty snapshot
"""

import shutil
import sys

from config import load_config
from db.manager import StoreManager
from models.category import CategoryTree
from models.serialization import to_document


def reset():
    """Reset the application state."""
    print("Tagtree Reset Script")
    print("=" * 50)

    config = load_config()

    if not config.enable_reset:
        print("\nReset is disabled in configuration (enable_reset=false).")
        print("To enable reset, set enable_reset=true in ~/.config/tagtree.toml")
        sys.exit(1)

    # Show what will be deleted
    print(f"\nData directory: {config.base_dir}")
    print(f"Snapshot: {config.store_path}")
    print(f"Logs: {config.log_dir}")
    print(f"Archives: {config.archive_dir}")

    response = input("\nThis will delete ALL data. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    if config.base_dir.exists():
        print(f"\nDeleting {config.base_dir}...")
        shutil.rmtree(config.base_dir)
        print("✓ Data directory deleted")
    else:
        print(f"\n✓ Data directory does not exist: {config.base_dir}")

    print("\nWriting empty snapshot...")
    StoreManager(config).save(to_document(CategoryTree(), {}))

    print("\n" + "=" * 50)
    print("Reset complete! Snapshot has been recreated.")
    print(f"Snapshot location: {config.store_path}")


if __name__ == "__main__":
    reset()
