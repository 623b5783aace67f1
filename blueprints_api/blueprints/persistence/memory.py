import logging
import threading
from typing import Dict, Iterable, List, Set, Tuple

from ..errors import BlueprintDuplicateError, BlueprintNotFoundError
from ..models import Blueprint, Point
from .base import BlueprintPersistence
from .locks import IdentityLocks

logger = logging.getLogger(__name__)

Key = Tuple[str, str]


def sample_blueprints() -> List[Blueprint]:
    """A few drawings to start a dev server with."""
    return [
        Blueprint(author="john", name="house", points=[
            Point(x=0, y=0), Point(x=10, y=0), Point(x=10, y=10), Point(x=0, y=10), Point(x=0, y=0),
        ]),
        Blueprint(author="john", name="garage", points=[
            Point(x=5, y=5), Point(x=15, y=5), Point(x=15, y=5), Point(x=15, y=15),
        ]),
        Blueprint(author="jane", name="garden", points=[
            Point(x=2, y=2), Point(x=3, y=4), Point(x=6, y=8), Point(x=6, y=8), Point(x=9, y=9),
        ]),
    ]


class InMemoryBlueprintPersistence(BlueprintPersistence):
    """
    Process-local store.

    Each blueprint maps sequence index -> Point. New identities are registered
    under a single lock; appends only take the lock of their own identity.
    Readers copy what they need and take no lock.
    """

    def __init__(self, initial: Iterable[Blueprint] = ()):
        self._blueprints: Dict[Key, Dict[int, Point]] = {}
        self._registry_lock = threading.Lock()
        self._identity_locks = IdentityLocks()
        for bp in initial:
            self.save_blueprint(bp)

    def save_blueprint(self, bp: Blueprint) -> None:
        # Built fully before it becomes visible
        points = {idx: p for idx, p in enumerate(bp.points)}
        with self._registry_lock:
            if bp.key in self._blueprints:
                raise BlueprintDuplicateError(bp.author, bp.name)
            self._blueprints[bp.key] = points
        logger.debug("Stored %s/%s with %d points", bp.author, bp.name, len(points))

    def get_blueprint(self, author: str, name: str) -> Blueprint:
        points = self._blueprints.get((author, name))
        if points is None:
            raise BlueprintNotFoundError.for_blueprint(author, name)
        return self._load(author, name, points)

    def get_blueprints_by_author(self, author: str) -> Set[Blueprint]:
        found = {
            self._load(a, n, points)
            for (a, n), points in list(self._blueprints.items())
            if a == author
        }
        if not found:
            raise BlueprintNotFoundError.for_author(author)
        return found

    def get_all_blueprints(self) -> Set[Blueprint]:
        return {self._load(a, n, points) for (a, n), points in list(self._blueprints.items())}

    def add_point(self, author: str, name: str, x: int, y: int) -> None:
        point = Point(x=x, y=y)
        with self._identity_locks.hold(author, name):
            points = self._blueprints.get((author, name))
            if points is None:
                raise BlueprintNotFoundError.for_blueprint(author, name)
            next_idx = max(points) + 1 if points else 0
            points[next_idx] = point
        logger.debug("Appended (%d, %d) to %s/%s at index %d", x, y, author, name, next_idx)

    @staticmethod
    def _load(author: str, name: str, points: Dict[int, Point]) -> Blueprint:
        snapshot = dict(points)
        return Blueprint(author=author, name=name, points=[snapshot[i] for i in sorted(snapshot)])
