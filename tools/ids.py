"""Identifier generation for categories, fields and options."""

import secrets
import string
from typing import Iterable, Set

_ALPHABET = string.ascii_lowercase + string.digits


class IdGenerator:
    """Issues short random base-36 identifiers, never repeating within a session.

    IDs that already exist outside the generator (e.g. loaded from a snapshot)
    must be registered with reserve() so they are not issued again.

    Args:
        length: Number of characters per identifier.
    """

    def __init__(self, length: int = 9):
        self.length = length
        self._issued: Set[str] = set()

    def new_id(self) -> str:
        """Get a fresh identifier."""
        while True:
            candidate = "".join(secrets.choice(_ALPHABET) for _ in range(self.length))
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    def reserve(self, ids: Iterable[str]) -> None:
        """Mark identifiers as taken."""
        self._issued.update(ids)

    def __contains__(self, identifier) -> bool:
        return identifier in self._issued

    def __call__(self) -> str:
        return self.new_id()
