from abc import ABC, abstractmethod

from ..models import Blueprint


class BlueprintsFilter(ABC):
    """
    Read-time transformation of a blueprint's points.

    Implementations keep author and name, never reorder the points they keep,
    return a blueprint without points unchanged, and hold no mutable state.
    """

    name: str = ""  # configuration key, see registry.FILTERS

    @classmethod
    def from_options(cls, **options) -> "BlueprintsFilter":
        return cls()

    @abstractmethod
    def apply(self, bp: Blueprint) -> Blueprint:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
