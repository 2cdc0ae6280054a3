# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from itertools import count

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
# Cheapest valid Argon2 parameters; hashing strength is not under test.
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "8")
os.environ.setdefault("ARGON2_PARALLELISM", "1")

from realworld_db.db.session import Base
from realworld_db.models import Article, User
from realworld_db.repositories import (
    ArticleRepository,
    CommentRepository,
    FavoriteRepository,
    FollowRepository,
    UserRepository,
)
from realworld_db.schemas import ArticleCreate, UserCreate

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)
_ARTICLE_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def users(db_session: Session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture()
def follows(db_session: Session) -> FollowRepository:
    return FollowRepository(db_session)


@pytest.fixture()
def articles(db_session: Session) -> ArticleRepository:
    return ArticleRepository(db_session)


@pytest.fixture()
def favorites(db_session: Session) -> FavoriteRepository:
    return FavoriteRepository(db_session)


@pytest.fixture()
def comments(db_session: Session) -> CommentRepository:
    return CommentRepository(db_session)


def make_user(users: UserRepository, username: str | None = None, password: str = "hunter2") -> User:
    """Create a user with a unique username and matching email."""
    username = username or f"user{next(_USER_COUNTER)}"
    return users.create(
        UserCreate(username=username, email=f"{username}@realworld.io", password=password)
    )


def make_article(
    articles: ArticleRepository,
    author: User,
    title: str | None = None,
    tags: list[str] | None = None,
) -> Article:
    """Create an article by ``author`` with a unique title."""
    title = title or f"Article number {next(_ARTICLE_COUNTER)}"
    return articles.create(
        author.user_id,
        ArticleCreate(
            title=title,
            description=f"About {title}",
            body=f"Body of {title}",
            tag_list=tags or [],
        ),
    )


@pytest.fixture()
def test_user(users: UserRepository) -> User:
    """Create and return a persisted test user."""
    return make_user(users, "jake")


@pytest.fixture()
def other_user(users: UserRepository) -> User:
    """Create and return a second persisted user."""
    return make_user(users, "jane")


@pytest.fixture()
def test_article(articles: ArticleRepository, test_user: User) -> Article:
    """Create an article authored by ``test_user``."""
    return make_article(articles, test_user, "How to train your dragon", ["dragons", "training"])
