"""Shared pytest fixtures for all tests."""

import pytest
from pathlib import Path

from config import Config
from services.base import Services


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary data directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "tagtree",
        store_data_dir=tmp_path / "tagtree" / "store",
        store_filename="test.json",
        log_level="DEBUG",
        log_dir=tmp_path / "tagtree" / "logs",
        archive_enabled=False,
        archive_dir=tmp_path / "tagtree" / "archives",
    )


@pytest.fixture
def memory_store():
    """Create a store manager that keeps the document in memory.

    Returns:
        A store manager whose saved document is available as ``.document``.
    """

    class MemoryStoreManager:
        """Test store manager that never touches the filesystem."""

        def __init__(self):
            self.document = {}
            self.save_count = 0

        def load(self):
            return self.document

        def save(self, document):
            self.document = document
            self.save_count += 1

        def get_store_path(self):
            """Return a fake path for the test store."""
            return Path(":memory:")

    return MemoryStoreManager()


@pytest.fixture
def services(test_config, memory_store):
    """Create a Services container with an empty in-memory store.

    Args:
        test_config: Test configuration fixture.
        memory_store: In-memory store manager.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, store_manager=memory_store)
