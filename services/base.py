"""Base services container for dependency injection."""

from config import Config
from db.manager import StoreManager
from models.serialization import from_document, to_document
from tools.ids import IdGenerator


class Services:
    """Container for all application services.

    Loads the stored snapshot on creation; call save() to persist changes.

    Args:
        config: Application configuration object.
        store_manager: Optional store manager for testing. If provided, the
            config's store path is ignored.
    """

    def __init__(self, config: Config, store_manager=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            store_manager: Optional store manager for dependency injection (testing).
                       If None, creates StoreManager from config.
        """
        self.config = config
        self.store_manager = store_manager or StoreManager(config)

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService
        from services.links import LinkService
        from services.category_data import CategoryDataService

        tree, data_map = from_document(self.store_manager.load())

        self.ids = IdGenerator()
        self.ids.reserve(tree.nodes)
        for category_data in data_map.values():
            for category_field in category_data.fields:
                self.ids.reserve([category_field.id])
                self.ids.reserve(option.id for option in category_field.options)

        self.categories = CategoryService(self.ids, tree)
        self.links = LinkService(self.categories, config.link_label_separator)
        self.category_data = CategoryDataService(self.ids, data_map)

    def save(self) -> None:
        """Persist the current snapshot and field data."""
        self.store_manager.save(
            to_document(self.categories.tree, self.category_data.data_map)
        )
