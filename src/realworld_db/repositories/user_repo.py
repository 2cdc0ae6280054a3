"""Data access helpers for user accounts."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import exists, select

from realworld_db.core import security
from realworld_db.errors import NotFound
from realworld_db.models.follow import Follow
from realworld_db.models.user import User
from realworld_db.repositories.base import Repository
from realworld_db.schemas.user import Profile, UserCreate, UserUpdate

__all__ = ["UserRepository"]

logger = logging.getLogger(__name__)


class UserRepository(Repository):
    """CRUD operations for users.

    Username and email lookups are case-insensitive through the column
    collation; callers pass values as typed.
    """

    def create(self, data: UserCreate) -> User:
        """Persist a new user with an Argon2id password hash.

        Raises:
            ConstraintViolation: If the username or email is already taken,
                ignoring case (``user_username_key`` / ``user_email_key``).
        """
        user = User(
            username=data.username,
            email=str(data.email),
            password_hash=security.hash_password(data.password),
        )
        with self.write():
            self.session.add(user)
        logger.debug("Created user %s", user.user_id)
        return user

    def get(self, user_id: uuid.UUID) -> User:
        """Return a user by primary key."""
        with self.read():
            user = self.session.get(User, user_id)
        if user is None:
            raise NotFound("user", user_id)
        return user

    def get_by_username(self, username: str) -> User:
        """Return a user by username, ignoring case."""
        with self.read():
            user = self.session.scalars(select(User).where(User.username == username)).first()
        if user is None:
            raise NotFound("user", username)
        return user

    def get_by_email(self, email: str) -> User:
        """Return a user by email, ignoring case."""
        with self.read():
            user = self.session.scalars(select(User).where(User.email == email)).first()
        if user is None:
            raise NotFound("user", email)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Return the user owning ``email`` if ``password`` matches.

        The stored hash is upgraded in place when the hashing parameters have
        changed since it was produced.

        Raises:
            NotFound: For an unknown email or a wrong password alike.
        """
        user = self.get_by_email(email)
        if not security.verify_password(user.password_hash, password):
            raise NotFound("user", email)
        if security.needs_rehash(user.password_hash):
            with self.write():
                user.password_hash = security.hash_password(password)
        return user

    def update(self, user: User, update_data: UserUpdate) -> User:
        """Apply a partial update.

        ``updated_at`` only moves when a value actually changes.

        Raises:
            ConstraintViolation: If the new username or email is taken.
        """
        update_dict = update_data.model_dump(exclude_unset=True)
        password = update_dict.pop("password", None)
        if password is not None:
            update_dict["password_hash"] = security.hash_password(password)
        if "email" in update_dict:
            update_dict["email"] = str(update_dict["email"])

        with self.write(user):
            for key, value in update_dict.items():
                setattr(user, key, value)
        return user

    def delete(self, user: User) -> None:
        """Remove a user together with everything that references it.

        Follow edges in both directions, the user's articles (with their
        favorites and comments), and the user's own favorites and comments
        are removed by the database in the same transaction.
        """
        user_id = self.delete_cascading(user)
        logger.info("Deleted user %s and dependent rows", user_id)

    def profile(self, username: str, viewer_id: uuid.UUID | None = None) -> Profile:
        """Return the public profile of ``username`` as seen by ``viewer_id``."""
        user = self.get_by_username(username)
        following = False
        if viewer_id is not None:
            with self.read():
                following = bool(
                    self.session.scalar(
                        select(
                            exists().where(
                                Follow.following_user_id == viewer_id,
                                Follow.followed_user_id == user.user_id,
                            )
                        )
                    )
                )
        return Profile(
            username=user.username,
            bio=user.bio,
            image=user.image,
            following=following,
        )
