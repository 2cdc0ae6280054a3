"""Tests for articles: slugs, updates, tag queries and listings."""

import pytest

from realworld_db.errors import ConstraintViolation, NotFound
from realworld_db.schemas import ArticleCreate, ArticleUpdate
from tests.conftest import make_article, make_user


def test_create_article_derives_slug(articles, test_user) -> None:
    article = articles.create(
        test_user.user_id,
        ArticleCreate(
            title="Converting to Rust from C: It's as Easy as 1, 2, 3!",
            description="desc",
            body="body",
            tag_list=["rust", " c ", "rust", ""],
        ),
    )

    assert article.slug == "converting-to-rust-from-c-its-as-easy-as-1-2-3"
    assert article.tag_list == ["rust", "c"]
    assert article.author is test_user
    # Both timestamps start at creation time.
    assert article.updated_at == article.created_at
    assert articles.get_by_slug(article.slug) is article
    assert articles.get(article.article_id) is article


def test_explicit_slug_is_kept(articles, test_user) -> None:
    article = articles.create(
        test_user.user_id,
        ArticleCreate(title="Hello", description="d", body="b", slug="custom-slug"),
    )
    assert article.slug == "custom-slug"


def test_duplicate_slug_rejected(articles, test_user, other_user) -> None:
    make_article(articles, test_user, "Same Title")

    with pytest.raises(ConstraintViolation) as excinfo:
        make_article(articles, other_user, "same title")

    assert excinfo.value.constraint == "article_slug_key"


def test_missing_article_raises_not_found(articles) -> None:
    with pytest.raises(NotFound):
        articles.get_by_slug("does-not-exist")


def test_update_keeps_slug_and_touches_updated_at(articles, test_article) -> None:
    created = test_article.updated_at

    articles.update(test_article, ArticleUpdate(title="A brand new title"))

    assert test_article.title == "A brand new title"
    assert test_article.slug == "how-to-train-your-dragon"
    assert test_article.updated_at >= created


def test_noop_update_leaves_updated_at(articles, test_article) -> None:
    before = test_article.updated_at

    articles.update(
        test_article,
        ArticleUpdate(
            title=test_article.title,
            body=test_article.body,
            tag_list=list(test_article.tag_list),
        ),
    )

    assert test_article.updated_at == before


def test_update_tags(articles, test_article) -> None:
    articles.update(test_article, ArticleUpdate(tag_list=["dragons", "flying"]))

    assert test_article.tag_list == ["dragons", "flying"]
    assert [a.slug for a in articles.with_tag("flying")] == [test_article.slug]
    assert articles.with_tag("training") == []


def test_update_to_taken_slug_rejected(articles, test_user, test_article) -> None:
    other = make_article(articles, test_user, "Another one")

    with pytest.raises(ConstraintViolation):
        articles.update(other, ArticleUpdate(slug=test_article.slug))


def test_with_tag_and_all_tags(articles, test_user, other_user) -> None:
    first = make_article(articles, test_user, "First", ["python", "sql"])
    second = make_article(articles, other_user, "Second", ["sql"])
    make_article(articles, other_user, "Third")

    assert {a.article_id for a in articles.with_tag("sql")} == {
        first.article_id,
        second.article_id,
    }
    assert [a.article_id for a in articles.with_tag("python")] == [first.article_id]
    assert articles.with_tag("Python") == []
    assert articles.all_tags() == ["python", "sql"]


def test_by_author_and_favorited_by(articles, favorites, test_user, other_user) -> None:
    mine = make_article(articles, test_user, "Mine")
    theirs = make_article(articles, other_user, "Theirs")
    favorites.favorite(theirs.article_id, test_user.user_id)

    assert [a.article_id for a in articles.by_author("JAKE")] == [mine.article_id]
    assert [a.article_id for a in articles.favorited_by("jake")] == [theirs.article_id]
    assert articles.favorited_by("jane") == []


def test_feed_lists_followed_authors_only(users, articles, follows, test_user, other_user) -> None:
    stranger = make_user(users, "stranger")
    followed = make_article(articles, other_user, "Followed author")
    make_article(articles, stranger, "Unfollowed author")
    make_article(articles, test_user, "Own article")

    assert articles.feed(test_user.user_id) == []

    follows.follow(test_user.user_id, other_user.user_id)
    assert [a.article_id for a in articles.feed(test_user.user_id)] == [followed.article_id]
