import logging
from typing import Dict, Type

from .base import BlueprintsFilter
from .identity import IdentityFilter
from .redundancy import RedundancyFilter
from .undersampling import UndersamplingFilter

logger = logging.getLogger(__name__)

FILTERS: Dict[str, Type[BlueprintsFilter]] = {
    cls.name: cls for cls in (IdentityFilter, RedundancyFilter, UndersamplingFilter)
}


def build_filter(name: str, **options) -> BlueprintsFilter:
    """
    Returns the filter registered under `name`.
    Called once at startup; the result is used for the whole process.
    """
    key = (name or IdentityFilter.name).strip().lower()
    if key not in FILTERS:
        raise ValueError(f"Unknown blueprint filter '{name}'. Valid: {sorted(FILTERS)}")
    blueprint_filter = FILTERS[key].from_options(**options)
    logger.info("Active blueprint filter: %r", blueprint_filter)
    return blueprint_filter
