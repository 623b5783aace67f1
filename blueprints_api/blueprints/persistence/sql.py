"""
SQL-backed blueprint store (SQLAlchemy Core).

Tables:
    blueprints(author, name)                 PK (author, name)
    blueprint_points(author, name, idx, x, y) PK (author, name, idx)

Works against PostgreSQL in production and SQLite for local runs and tests.
"""
import logging
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Set, Tuple

from sqlalchemy import (
    Column,
    ForeignKeyConstraint,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    func,
    insert,
    select,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import BlueprintDuplicateError, BlueprintNotFoundError, TransientStorageError
from ..models import Blueprint, Point
from .base import BlueprintPersistence
from .locks import IdentityLocks

logger = logging.getLogger(__name__)

metadata = MetaData()

blueprints_table = Table(
    "blueprints",
    metadata,
    Column("author", String(255), primary_key=True),
    Column("name", String(255), primary_key=True),
)

points_table = Table(
    "blueprint_points",
    metadata,
    Column("author", String(255), primary_key=True),
    Column("name", String(255), primary_key=True),
    Column("idx", Integer, primary_key=True),
    Column("x", Integer, nullable=False),
    Column("y", Integer, nullable=False),
    ForeignKeyConstraint(
        ["author", "name"],
        ["blueprints.author", "blueprints.name"],
    ),
)


def make_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Requests are served from a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


class SqlBlueprintPersistence(BlueprintPersistence):
    def __init__(self, engine: Engine, create_tables: bool = True):
        self._engine = engine
        self._identity_locks = IdentityLocks()
        if create_tables:
            with self._storage_errors("create tables"):
                metadata.create_all(engine)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlBlueprintPersistence":
        return cls(make_engine(database_url))

    def dispose(self) -> None:
        self._engine.dispose()

    @contextmanager
    def _storage_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.exception("Storage failure during %s", action)
            raise TransientStorageError(f"Failed to {action}: {e}") from e

    def save_blueprint(self, bp: Blueprint) -> None:
        with self._storage_errors("save blueprint"):
            # One transaction: the blueprint row and its points land together or not at all
            with self._engine.begin() as conn:
                try:
                    conn.execute(insert(blueprints_table).values(author=bp.author, name=bp.name))
                except IntegrityError as e:
                    raise BlueprintDuplicateError(bp.author, bp.name) from e
                if bp.points:
                    conn.execute(
                        insert(points_table),
                        [
                            {"author": bp.author, "name": bp.name, "idx": i, "x": p.x, "y": p.y}
                            for i, p in enumerate(bp.points)
                        ],
                    )

    def get_blueprint(self, author: str, name: str) -> Blueprint:
        with self._storage_errors("load blueprint"):
            with self._engine.connect() as conn:
                if not self._exists(conn, author, name):
                    raise BlueprintNotFoundError.for_blueprint(author, name)
                rows = conn.execute(
                    select(points_table.c.x, points_table.c.y)
                    .where(points_table.c.author == author, points_table.c.name == name)
                    .order_by(points_table.c.idx)
                ).all()
        return Blueprint(author=author, name=name, points=[Point(x=r.x, y=r.y) for r in rows])

    def get_blueprints_by_author(self, author: str) -> Set[Blueprint]:
        with self._storage_errors("load blueprints by author"):
            with self._engine.connect() as conn:
                found = self._load_many(conn, author)
        if not found:
            raise BlueprintNotFoundError.for_author(author)
        return found

    def get_all_blueprints(self) -> Set[Blueprint]:
        with self._storage_errors("load blueprints"):
            with self._engine.connect() as conn:
                return self._load_many(conn)

    def add_point(self, author: str, name: str, x: int, y: int) -> None:
        point = Point(x=x, y=y)
        # The in-process lock covers SQLite; FOR UPDATE covers other workers on PostgreSQL
        with self._identity_locks.hold(author, name):
            with self._storage_errors("add point"):
                with self._engine.begin() as conn:
                    parent = conn.execute(
                        select(blueprints_table.c.author)
                        .where(blueprints_table.c.author == author, blueprints_table.c.name == name)
                        .with_for_update()
                    ).first()
                    if parent is None:
                        raise BlueprintNotFoundError.for_blueprint(author, name)
                    next_idx = conn.execute(
                        select(func.coalesce(func.max(points_table.c.idx), -1) + 1)
                        .where(points_table.c.author == author, points_table.c.name == name)
                    ).scalar_one()
                    conn.execute(
                        insert(points_table).values(
                            author=author, name=name, idx=next_idx, x=point.x, y=point.y
                        )
                    )
        logger.debug("Appended (%d, %d) to %s/%s at index %d", x, y, author, name, next_idx)

    @staticmethod
    def _exists(conn: Connection, author: str, name: str) -> bool:
        count = conn.execute(
            select(func.count())
            .select_from(blueprints_table)
            .where(blueprints_table.c.author == author, blueprints_table.c.name == name)
        ).scalar_one()
        return count > 0

    @staticmethod
    def _load_many(conn: Connection, author: Optional[str] = None) -> Set[Blueprint]:
        """Loads blueprints and all their points with two queries."""
        bp_query = select(blueprints_table.c.author, blueprints_table.c.name)
        pt_query = select(
            points_table.c.author, points_table.c.name, points_table.c.x, points_table.c.y
        ).order_by(points_table.c.author, points_table.c.name, points_table.c.idx)
        if author is not None:
            bp_query = bp_query.where(blueprints_table.c.author == author)
            pt_query = pt_query.where(points_table.c.author == author)

        keys = conn.execute(bp_query).all()
        points: Dict[Tuple[str, str], List[Point]] = defaultdict(list)
        for row in conn.execute(pt_query):
            points[(row.author, row.name)].append(Point(x=row.x, y=row.y))

        return {
            Blueprint(author=k.author, name=k.name, points=points.get((k.author, k.name), []))
            for k in keys
        }
