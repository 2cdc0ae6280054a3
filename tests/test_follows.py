"""Tests for the follow graph."""

import uuid

import pytest

from realworld_db.errors import ConstraintKind, ConstraintViolation
from tests.conftest import make_user


def test_follow_creates_edge(follows, test_user, other_user) -> None:
    edge = follows.follow(test_user.user_id, other_user.user_id)

    assert edge.following_user_id == test_user.user_id
    assert edge.followed_user_id == other_user.user_id
    assert edge.created_at is not None
    # Edges are never updated, so this stays NULL.
    assert edge.updated_at is None
    assert follows.is_following(test_user.user_id, other_user.user_id)
    assert not follows.is_following(other_user.user_id, test_user.user_id)


def test_self_follow_rejected(follows, test_user) -> None:
    with pytest.raises(ConstraintViolation) as excinfo:
        follows.follow(test_user.user_id, test_user.user_id)

    assert excinfo.value.kind is ConstraintKind.CHECK
    assert excinfo.value.constraint == "user_cannot_follow_self"


def test_duplicate_follow_rejected(follows, test_user, other_user) -> None:
    follows.follow(test_user.user_id, other_user.user_id)

    with pytest.raises(ConstraintViolation) as excinfo:
        follows.follow(test_user.user_id, other_user.user_id)

    assert excinfo.value.kind is ConstraintKind.UNIQUE
    assert excinfo.value.constraint == "follow_pkey"
    assert follows.following_ids(test_user.user_id) == [other_user.user_id]


def test_follow_unknown_user_rejected(follows, test_user) -> None:
    with pytest.raises(ConstraintViolation) as excinfo:
        follows.follow(test_user.user_id, uuid.uuid4())

    assert excinfo.value.kind is ConstraintKind.FOREIGN_KEY


def test_unfollow(follows, test_user, other_user) -> None:
    assert follows.unfollow(test_user.user_id, other_user.user_id) is False

    follows.follow(test_user.user_id, other_user.user_id)
    assert follows.unfollow(test_user.user_id, other_user.user_id) is True
    assert not follows.is_following(test_user.user_id, other_user.user_id)

    # Following again after unfollowing is a fresh edge.
    follows.follow(test_user.user_id, other_user.user_id)
    assert follows.is_following(test_user.user_id, other_user.user_id)


def test_following_and_follower_lists(users, follows, test_user, other_user) -> None:
    third = make_user(users, "june")
    follows.follow(test_user.user_id, other_user.user_id)
    follows.follow(test_user.user_id, third.user_id)
    follows.follow(third.user_id, other_user.user_id)

    assert set(follows.following_ids(test_user.user_id)) == {other_user.user_id, third.user_id}
    assert set(follows.follower_ids(other_user.user_id)) == {test_user.user_id, third.user_id}
    assert follows.follower_ids(test_user.user_id) == []
