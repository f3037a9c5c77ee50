from __future__ import annotations

import logging
import secrets
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, Optional

import bcrypt
from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

logger = logging.getLogger(__name__)

PASSWORD_ALPHABET = "abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ23456789!@#$%^&*"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def generate_random_password(length: int = 16) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def _sqlite_pragmas(dbapi_connection, connection_record) -> None:
    # Dashboard reads run while ingest writes; WAL keeps readers unblocked.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


@lru_cache(maxsize=8)
def get_engine(database_url: str):
    is_sqlite = database_url.startswith("sqlite")
    engine = create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )
    if is_sqlite and ":memory:" not in database_url:
        event.listen(engine, "connect", _sqlite_pragmas)
    return engine


def init_db(database_url: str) -> None:
    # Table classes register themselves on SQLModel.metadata at import.
    from sentiment_dashboard.infra.db import models  # noqa: F401

    SQLModel.metadata.create_all(get_engine(database_url))


@contextmanager
def session_scope(database_url: str) -> Iterator[Session]:
    session = Session(get_engine(database_url))
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_default_admin(
    database_url: str,
    default_username: str = "admin",
    default_password: Optional[str] = None,
) -> Optional[str]:
    """Create the admin account when the users table is empty.

    Returns the password the new admin was created with, or None when any
    user already exists.
    """
    from sentiment_dashboard.infra.db.repos import UserRepo

    with session_scope(database_url) as session:
        users = UserRepo(session)
        if users.has_any():
            return None
        password = default_password or generate_random_password()
        users.create(
            username=default_username,
            password_hash=hash_password(password),
            is_admin=True,
        )
    logger.info("created default admin account %r", default_username)
    return password
