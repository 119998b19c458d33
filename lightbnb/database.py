"""
Data access layer for LightBnB.

A Database is an explicitly opened handle around one SQLAlchemy engine (the
connection pool). Each public operation runs a single query in its own
session. Store failures are logged and re-raised as DataAccessError.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import lightbnb.models_sqlalchemy as models
from lightbnb.config import Settings
from lightbnb.exceptions import DataAccessError, InvalidArgumentError
from lightbnb.fixtures import load_fixture
from lightbnb.models_pydantic import (
    PropertyCreate,
    PropertyFilters,
    PropertyRecord,
    ReservationRecord,
    UserCreate,
    UserRecord,
)
from lightbnb.property_store import FixturePropertyStore, PropertyStore, SqlPropertyStore
from lightbnb.query_builder import average_rating, build_property_search

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


def _check_limit(limit: int):
    if limit is None or limit < 1:
        raise InvalidArgumentError("limit must be a positive integer")


def _as_float(value):
    # PostgreSQL returns avg() as Decimal
    return float(value) if value is not None else None


class Database:
    """
    Handle on the relational store.

    Usage:
        with Database(url) as db:
            db.get_user_with_email("a@b.com")

    Args:
        url: SQLAlchemy database URL
        pool_size: connections kept open (ignored for SQLite)
        echo: log every statement
        property_store: backend for add_property; defaults to a
            FixturePropertyStore seeded from properties.json
    """

    def __init__(self, url: str, pool_size: int = 5, echo: bool = False,
                 property_store: Optional[PropertyStore] = None):
        self.url = url
        self.pool_size = pool_size
        self.echo = echo
        if property_store is None:
            property_store = FixturePropertyStore(load_fixture("properties"))
        self.property_store = property_store
        self._engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        db = cls(settings.database_url, pool_size=settings.pool_size, echo=settings.echo_sql)
        if settings.property_store == "database":
            db.property_store = SqlPropertyStore(db.transaction)
        else:
            db.property_store = FixturePropertyStore(
                load_fixture("properties", settings.fixtures_dir)
            )
        return db

    # ---------- Lifecycle ----------
    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise DataAccessError("engine", "database is not open")
        return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> "Database":
        if self._engine is not None:
            return self
        if self.url.startswith("sqlite"):
            engine = create_engine(
                self.url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )

            # match PostgreSQL's case-sensitive LIKE
            @event.listens_for(engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute("PRAGMA case_sensitive_like=ON")
                cursor.close()
        else:
            engine = create_engine(self.url, echo=self.echo, pool_size=self.pool_size,
                                   pool_pre_ping=True)
        self._engine = engine
        self._sessionmaker = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        logger.info("Opened database pool for %s", engine.url.render_as_string(hide_password=True))
        return self

    def close(self):
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Closed database pool")

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @contextmanager
    def session(self) -> Iterator[Session]:
        if self._sessionmaker is None:
            raise DataAccessError("session", "database is not open")
        with self._sessionmaker() as session:
            yield session

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        if self._sessionmaker is None:
            raise DataAccessError("transaction", "database is not open")
        with self._sessionmaker.begin() as session:
            yield session

    @contextmanager
    def _translate_errors(self, operation: str):
        try:
            yield
        except SQLAlchemyError as err:
            logger.error("%s failed: %s", operation, err)
            raise DataAccessError(operation, str(err)) from err

    # ---------- Users ----------
    def get_user_with_email(self, email: str) -> Optional[UserRecord]:
        if not email:
            raise InvalidArgumentError("Email is required")
        with self._translate_errors("get_user_with_email"), self.session() as session:
            user = session.query(models.User).filter(models.User.email == email).first()
            return UserRecord.model_validate(user) if user else None

    def get_user_with_id(self, user_id: int) -> Optional[UserRecord]:
        if not user_id:
            raise InvalidArgumentError("ID is required")
        with self._translate_errors("get_user_with_id"), self.session() as session:
            user = session.query(models.User).filter(models.User.id == user_id).first()
            return UserRecord.model_validate(user) if user else None

    def add_user(self, user: UserCreate) -> UserRecord:
        with self._translate_errors("add_user"), self.transaction() as session:
            db_user = models.User(name=user.name, email=user.email, password=user.password)
            session.add(db_user)
            session.flush()
            return UserRecord.model_validate(db_user)

    def seed_users(self, users: dict) -> List[UserRecord]:
        """Insert fixture users (as loaded from users.json) in one transaction."""
        with self._translate_errors("seed_users"), self.transaction() as session:
            db_users = [
                models.User(name=u["name"], email=u["email"], password=u["password"])
                for u in users.values()
            ]
            session.add_all(db_users)
            session.flush()
            return [UserRecord.model_validate(u) for u in db_users]

    # ---------- Reservations ----------
    def get_all_reservations(self, guest_id: int, limit: int = DEFAULT_LIMIT) -> List[ReservationRecord]:
        _check_limit(limit)
        with self._translate_errors("get_all_reservations"), self.session() as session:
            rows = (
                session.query(models.Reservation, models.Property, average_rating.label("average_rating"))
                .join(models.Property, models.Property.id == models.Reservation.property_id)
                .join(models.PropertyReview, models.PropertyReview.property_id == models.Property.id)
                .filter(models.Reservation.guest_id == guest_id)
                .group_by(models.Reservation.id, models.Property.id)
                .order_by(models.Reservation.start_date.asc())
                .limit(limit)
                .all()
            )
            return [
                ReservationRecord(
                    id=reservation.id,
                    guest_id=reservation.guest_id,
                    property_id=reservation.property_id,
                    start_date=reservation.start_date,
                    end_date=reservation.end_date,
                    property=PropertyRecord.model_validate(prop),
                    average_rating=_as_float(rating),
                )
                for reservation, prop, rating in rows
            ]

    # ---------- Properties ----------
    def get_all_properties(self, filters: Optional[PropertyFilters] = None,
                           limit: int = DEFAULT_LIMIT) -> List[PropertyRecord]:
        _check_limit(limit)
        search = build_property_search(filters)
        with self._translate_errors("get_all_properties"), self.session() as session:
            query = (
                session.query(models.Property, average_rating.label("average_rating"))
                .join(models.PropertyReview, models.PropertyReview.property_id == models.Property.id)
                .filter(*search.where)
                .group_by(models.Property.id)
                .having(*search.having)
                .order_by(models.Property.cost_per_night.asc())
                .limit(limit)
            )
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s %s", query.statement, search.params() + [limit])
            results = []
            for prop, rating in query.all():
                record = PropertyRecord.model_validate(prop)
                record.average_rating = _as_float(rating)
                results.append(record)
            return results

    def add_property(self, property: PropertyCreate) -> PropertyRecord:
        with self._translate_errors("add_property"):
            return self.property_store.add_property(property)
