import logging
from typing import Set

from .filters.base import BlueprintsFilter
from .models import Blueprint
from .persistence.base import BlueprintPersistence

logger = logging.getLogger(__name__)


class BlueprintsServices:
    """
    Single entry point for the API layer.

    Only `get_blueprint` goes through the active filter. Listings and
    mutations work on the stored points as they are.
    """

    def __init__(self, persistence: BlueprintPersistence, blueprint_filter: BlueprintsFilter):
        self.persistence = persistence
        self.filter = blueprint_filter

    def add_new_blueprint(self, bp: Blueprint) -> None:
        self.persistence.save_blueprint(bp)
        logger.info("Created blueprint %s/%s (%d points)", bp.author, bp.name, len(bp.points))

    def get_all_blueprints(self) -> Set[Blueprint]:
        return self.persistence.get_all_blueprints()

    def get_blueprints_by_author(self, author: str) -> Set[Blueprint]:
        logger.debug("Listing blueprints for %s", author)
        return self.persistence.get_blueprints_by_author(author)

    def get_blueprint(self, author: str, name: str) -> Blueprint:
        logger.debug("Fetching %s/%s through %r", author, name, self.filter)
        return self.filter.apply(self.persistence.get_blueprint(author, name))

    def add_point(self, author: str, name: str, x: int, y: int) -> None:
        self.persistence.add_point(author, name, x, y)
        logger.info("Added point (%d, %d) to %s/%s", x, y, author, name)
