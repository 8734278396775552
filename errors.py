"""Exceptions raised by the category services."""


class CategoryNotFoundError(LookupError):
    """Raised when an operation needs a category that is not in the tree."""

    def __init__(self, category_id: str):
        super().__init__(f"Category with ID {category_id} not found")
        self.category_id = category_id


class LinkRejectedError(ValueError):
    """Raised when a link would duplicate tree containment or point at itself."""
