from ..models import Blueprint
from .base import BlueprintsFilter


class IdentityFilter(BlueprintsFilter):
    """Default filter: returns the blueprint unchanged."""

    name = "identity"

    def apply(self, bp: Blueprint) -> Blueprint:
        return bp
