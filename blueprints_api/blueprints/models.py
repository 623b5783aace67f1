from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from typing import Annotated, List, Optional, Tuple

# Same range as a 32-bit SQL INTEGER column, so every store accepts the same points
COORD_MIN = -2**31
COORD_MAX = 2**31 - 1

Coordinate = Annotated[StrictInt, Field(ge=COORD_MIN, le=COORD_MAX)]


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: Coordinate
    y: Coordinate


class Blueprint(BaseModel):
    """
    An author-owned drawing: an ordered sequence of points.

    Identity is (author, name). Equality and hashing only look at the
    identity, so two blueprints with different points still compare equal.
    """
    model_config = ConfigDict(frozen=True)

    author: str = Field(min_length=1)
    name: str = Field(min_length=1)
    points: List[Point] = Field(default_factory=list)  # drawing order

    @field_validator("author", "name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def key(self) -> Tuple[str, str]:
        return (self.author, self.name)

    def with_points(self, points: List[Point]) -> "Blueprint":
        return self.model_copy(update={"points": list(points)})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Blueprint):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Blueprint(author={self.author!r}, name={self.name!r}, points={len(self.points)})"


class NewBlueprintRequest(BaseModel):
    author: str = Field(min_length=1)
    name: str = Field(min_length=1)
    points: Optional[List[Point]] = None

    @field_validator("author", "name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_blueprint(self) -> Blueprint:
        return Blueprint(author=self.author, name=self.name, points=self.points or [])
