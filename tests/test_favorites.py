"""Tests for article favorites."""

import pytest

from realworld_db.errors import ConstraintKind, ConstraintViolation
from tests.conftest import make_user


def test_favorite_and_count(users, favorites, test_article, other_user) -> None:
    assert favorites.count(test_article.article_id) == 0

    fav = favorites.favorite(test_article.article_id, other_user.user_id)
    assert fav.updated_at is None
    assert favorites.is_favorited(test_article.article_id, other_user.user_id)

    third = make_user(users, "kim")
    favorites.favorite(test_article.article_id, third.user_id)
    assert favorites.count(test_article.article_id) == 2


def test_author_may_favorite_own_article(favorites, test_article, test_user) -> None:
    favorites.favorite(test_article.article_id, test_user.user_id)
    assert favorites.is_favorited(test_article.article_id, test_user.user_id)


def test_duplicate_favorite_rejected(favorites, test_article, other_user) -> None:
    favorites.favorite(test_article.article_id, other_user.user_id)

    with pytest.raises(ConstraintViolation) as excinfo:
        favorites.favorite(test_article.article_id, other_user.user_id)

    assert excinfo.value.kind is ConstraintKind.UNIQUE
    assert excinfo.value.constraint == "article_favorite_pkey"
    assert favorites.count(test_article.article_id) == 1


def test_unfavorite(favorites, test_article, other_user) -> None:
    assert favorites.unfavorite(test_article.article_id, other_user.user_id) is False

    favorites.favorite(test_article.article_id, other_user.user_id)
    assert favorites.unfavorite(test_article.article_id, other_user.user_id) is True
    assert favorites.count(test_article.article_id) == 0
    assert not favorites.is_favorited(test_article.article_id, other_user.user_id)
