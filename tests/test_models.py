"""Tests for Pydantic models."""

from blogwire.models import (
    BlogInfo,
    Category,
    Comment,
    CommentStatus,
    Media,
    MediaStatus,
    Post,
    PostStatus,
)


class TestPost:
    def test_defaults(self):
        post = Post()
        assert post.is_new
        assert post.status is PostStatus.NEW
        assert post.categories == []
        assert post.comment_allowed is True
        assert post.private is False

    def test_mark_error(self):
        post = Post(post_id="1")
        post.mark_error("boom")
        assert post.status is PostStatus.ERROR
        assert post.error == "boom"
        assert not post.is_new

    def test_categories_are_not_shared(self):
        first, second = Post(), Post()
        first.categories.append("News")
        assert second.categories == []


class TestOtherModels:
    def test_comment_mark_error(self):
        comment = Comment(content="hi")
        comment.mark_error("nope")
        assert comment.status is CommentStatus.ERROR

    def test_media_defaults(self):
        media = Media(name="a.bin")
        assert media.mimetype == "application/octet-stream"
        assert media.status is MediaStatus.NEW
        media.mark_error("too big")
        assert media.error == "too big"

    def test_category_round_trip(self):
        category = Category(name="Funny", category_id="42")
        assert Category.model_validate(category.model_dump()) == category

    def test_blog_info(self):
        assert BlogInfo(id="1").api_url == ""
