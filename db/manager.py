"""Store manager for reading and writing the JSON category snapshot."""

import json
from config import Config


class StoreManager:
    """Manages the snapshot file and its path.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        """Initialize the store manager.

        Args:
            config: Config object containing store configuration.
        """
        self.config = config

    def load(self) -> dict:
        """Read the stored document.

        Returns:
            dict: Parsed document, or an empty dict if no snapshot exists yet.

        Raises:
            ValueError: If the file is not valid JSON.
        """
        store_path = self.config.store_path
        if not store_path.exists():
            return {}

        with open(store_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def save(self, document: dict) -> None:
        """Write the document, replacing the previous snapshot atomically.

        Args:
            document: JSON-ready document to store.
        """
        store_path = self.config.store_path
        store_path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = store_path.with_name(store_path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
        tmp_path.replace(store_path)

    def get_store_path(self):
        """Get the current snapshot path.

        Returns:
            Path: Path to the snapshot file.
        """
        return self.config.store_path
