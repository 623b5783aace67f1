from abc import ABC, abstractmethod
from typing import Set

from ..models import Blueprint


class BlueprintPersistence(ABC):
    """
    Storage contract for blueprints.

    Implementations must keep (author, name) unique, keep points in the order
    they were appended, and raise the errors from `..errors` rather than
    returning empty results.
    """

    @abstractmethod
    def save_blueprint(self, bp: Blueprint) -> None:
        """Stores a new blueprint with its initial points, all or nothing.

        Raises BlueprintDuplicateError if the identity is taken.
        """

    @abstractmethod
    def get_blueprint(self, author: str, name: str) -> Blueprint:
        """Raises BlueprintNotFoundError if the identity does not exist."""

    @abstractmethod
    def get_blueprints_by_author(self, author: str) -> Set[Blueprint]:
        """Raises BlueprintNotFoundError if the author has no blueprints."""

    @abstractmethod
    def get_all_blueprints(self) -> Set[Blueprint]:
        ...

    @abstractmethod
    def add_point(self, author: str, name: str, x: int, y: int) -> None:
        """Appends a point at index max(idx) + 1 (or 0).

        Raises BlueprintNotFoundError if the identity does not exist.
        """
