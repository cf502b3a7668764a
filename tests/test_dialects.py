"""Tests for the XML-RPC dialect builders and readers."""

import xmlrpc.client
from datetime import datetime, timezone

import pytest

from blogwire.core.category_cache import CacheKey, CategoryCache
from blogwire.dialects import (
    BLOGGER1,
    METAWEBLOG,
    MOVABLETYPE,
    WORDPRESS_BUGGY,
    Credentials,
    Operation,
    get_dialect,
)
from blogwire.dialects.blogger1 import blogger1_args
from blogwire.dialects.metaweblog import media_args, read_categories, read_media_url
from blogwire.dialects.movabletype import (
    category_assignment,
    read_post_categories,
    read_trackback_pings,
)
from blogwire.errors import ParsingError, TransportError
from blogwire.models.category import Category
from blogwire.models.media import Media
from blogwire.models.post import Post

CREDS = Credentials(blog_id="7", username="alice", password="secret", app_key="KEY")


@pytest.fixture
def cache():
    cache = CategoryCache(None, CacheKey("", "", ""))
    cache.replace(
        [
            Category(name="Funny", category_id="42"),
            Category(name="Serious", category_id="7"),
        ]
    )
    return cache


def test_get_dialect_is_case_insensitive():
    assert get_dialect("MovableType") is MOVABLETYPE
    with pytest.raises(ValueError):
        get_dialect("livejournal")


class TestBlogger1:
    def test_args_with_and_without_id(self):
        assert blogger1_args(CREDS) == ["KEY", "alice", "secret"]
        assert blogger1_args(CREDS, "12") == ["KEY", "12", "alice", "secret"]

    def test_post_args_embed_title_and_categories(self):
        post = Post(title="Hi", categories=["News"], content="Body", private=True)
        assert BLOGGER1.builder.post_args(post) == [
            "<title>Hi</title><category>News</category>Body",
            False,
        ]

    def test_read_post_extracts_markers(self, cache):
        post = Post()
        found = BLOGGER1.reader.read_post(
            post,
            {
                "postid": "12",
                "content": "<title>Hi</title><category>News</category>Body",
                "dateCreated": datetime(2024, 1, 2, 3, 4, 5),
            },
            cache,
        )

        assert found == ["News"]
        assert post.post_id == "12"
        assert post.title == "Hi"
        assert post.categories == ["News"]
        assert post.content == "Body"
        assert post.creation_datetime == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_read_post_without_markers(self, cache):
        post = Post(categories=["Kept"])
        BLOGGER1.reader.read_post(post, {"postId": 3, "content": "Plain"}, cache)

        assert post.post_id == "3"
        assert post.content == "Plain"
        assert post.categories == ["Kept"]

    def test_invalid_date_leaves_field_unchanged(self, cache):
        created = datetime(2020, 1, 1, tzinfo=timezone.utc)
        post = Post(creation_datetime=created)
        BLOGGER1.reader.read_post(post, {"content": "", "dateCreated": "garbage"}, cache)

        assert post.creation_datetime == created


class TestMetaWeblog:
    def test_default_args_have_no_app_key(self):
        assert METAWEBLOG.builder.default_args(CREDS, "7") == ["7", "alice", "secret"]
        assert METAWEBLOG.method(Operation.CREATE_POST) == "metaWeblog.newPost"

    def test_post_args_struct(self):
        post = Post(
            title="T",
            content="C",
            categories=["Funny"],
            creation_datetime=datetime(2024, 1, 2, 5, 0, tzinfo=timezone.utc),
        )
        struct, publish = METAWEBLOG.builder.post_args(post)

        assert publish is True
        assert struct["title"] == "T"
        assert struct["description"] == "C"
        assert struct["categories"] == ["Funny"]
        assert struct["dateCreated"] == datetime(2024, 1, 2, 5, 0)
        assert "lastModified" not in struct

    def test_read_post(self, cache):
        post = Post()
        found = METAWEBLOG.reader.read_post(
            post,
            {"postid": "5", "title": "T", "description": b"C", "categories": ["A", "B"]},
            cache,
        )

        assert found == ["A", "B"]
        assert (post.post_id, post.title, post.content) == ("5", "T", "C")

    def test_read_categories_struct_form(self):
        categories = read_categories(
            {"Funny": {"description": "Jokes", "htmlUrl": "http://x/funny", "categoryId": "42"}}
        )
        assert categories == [
            Category(name="Funny", description="Jokes", html_url="http://x/funny", category_id="42")
        ]

    def test_read_categories_list_form(self):
        categories = read_categories([{"categoryName": "Funny", "categoryId": 42, "parentId": 0}])
        assert categories[0].name == "Funny"
        assert categories[0].category_id == "42"
        assert categories[0].parent_id == "0"

    def test_read_categories_rejects_scalar(self):
        with pytest.raises(ParsingError):
            read_categories("nope")

    def test_media_args(self):
        args = media_args(CREDS, Media(name="a.png", mimetype="image/png", data=b"\x89PNG"))

        assert args[:3] == ["7", "alice", "secret"]
        assert args[3]["name"] == "a.png"
        assert args[3]["type"] == "image/png"
        assert isinstance(args[3]["bits"], xmlrpc.client.Binary)

    def test_read_media_url(self):
        assert read_media_url({"url": "http://x/a.png"}) == "http://x/a.png"
        with pytest.raises(ParsingError):
            read_media_url({"file": "a.png"})
        with pytest.raises(ParsingError):
            read_media_url("http://x/a.png")


class TestMovableType:
    def test_category_assignment_uses_numeric_ids(self, cache):
        assert category_assignment(["Funny", "Missing", "Serious"], cache) == [
            {"categoryId": 42},
            {"categoryId": 7},
        ]

    def test_post_args_extended_fields(self):
        post = Post(
            title="T",
            content="C",
            additional_content="More",
            summary="S",
            tags=["a", "b"],
            comment_allowed=False,
        )
        struct, publish = MOVABLETYPE.builder.post_args(post)

        assert struct["mt_allow_comments"] == 0
        assert struct["mt_allow_pings"] == 1
        assert struct["mt_excerpt"] == "S"
        assert struct["mt_keywords"] == "a,b"
        assert struct["mt_text_more"] == "More"

    def test_read_post_resolves_category_ids(self, cache):
        post = Post()
        found = MOVABLETYPE.reader.read_post(
            post,
            {
                "postid": "9",
                "title": "T",
                "description": "C",
                "mt_text_more": "More",
                "mt_keywords": "x, y",
                "mt_allow_comments": 0,
                "mt_allow_pings": "1",
                "wp_slug": "t",
                "permaLink": "http://x/t",
                "post_status": "draft",
                "categories": ["42", "Serious", "Unknown"],
            },
            cache,
        )

        assert found == ["Funny", "Serious"]
        assert post.categories == ["Funny", "Serious"]
        assert post.additional_content == "More"
        assert post.tags == ["x", "y"]
        assert post.comment_allowed is False
        assert post.trackback_allowed is True
        assert post.slug == "t"
        assert post.permalink == "http://x/t"
        assert post.private is True

    def test_read_post_published_clears_private_flag(self, cache):
        post = Post(private=True)
        MOVABLETYPE.reader.read_post(
            post, {"postid": "9", "title": "T", "post_status": "publish"}, cache
        )
        assert post.private is False

    def test_read_post_without_status_keeps_private_flag(self, cache):
        post = Post(private=True)
        MOVABLETYPE.reader.read_post(post, {"postid": "9", "title": "T"}, cache)
        assert post.private is True

    def test_read_post_categories(self):
        assert read_post_categories(
            [{"categoryName": "Funny", "categoryId": "42"}, {"categoryName": "Serious"}]
        ) == ["Funny", "Serious"]
        with pytest.raises(ParsingError):
            read_post_categories({"categoryName": "Funny"})

    def test_read_trackback_pings(self):
        pings = read_trackback_pings(
            [{"pingTitle": "Nice", "pingURL": "http://other/post", "pingIP": "10.0.0.1"}]
        )
        assert pings[0].title == "Nice"
        assert pings[0].url == "http://other/post"
        assert pings[0].ip == "10.0.0.1"


class TestWordpressBuggy:
    def test_create_request_uses_compact_dates(self):
        post = Post(
            title="Hello",
            content="<p>x</p>",
            creation_datetime=datetime(2024, 1, 2, 5, 4, 3, tzinfo=timezone.utc),
        )
        request = WORDPRESS_BUGGY.raw_writer.build(CREDS, post, Operation.CREATE_POST)
        body = request.body.decode("utf-8")

        assert "<methodName>metaWeblog.newPost</methodName>" in body
        assert "<dateTime.iso8601>20240102T05:04:03</dateTime.iso8601>" in body
        assert "<![CDATA[<p>x</p>]]>" in body
        assert "<boolean>1</boolean>" in body
        assert "categories" not in body
        assert request.headers["Content-Type"].startswith("text/xml")

    def test_modify_request_targets_post_id(self):
        post = Post(post_id="55", title="Hello", private=True)
        body = WORDPRESS_BUGGY.raw_writer.build(CREDS, post, Operation.MODIFY_POST).body.decode()

        assert "<methodName>metaWeblog.editPost</methodName>" in body
        assert "<![CDATA[55]]>" in body
        assert "<boolean>0</boolean>" in body

    def test_read_create_reply(self):
        text = "<methodResponse><params><param><value><string>123</string></value></param></params></methodResponse>"
        assert WORDPRESS_BUGGY.raw_writer.read_reply(text, Operation.CREATE_POST) == "123"

    def test_read_modify_reply(self):
        writer = WORDPRESS_BUGGY.raw_writer
        assert writer.read_reply("<value><boolean>1</boolean></value>", Operation.MODIFY_POST) is True
        with pytest.raises(TransportError):
            writer.read_reply("<value><boolean>0</boolean></value>", Operation.MODIFY_POST)
        with pytest.raises(ParsingError):
            writer.read_reply("<value><int>1</int></value>", Operation.MODIFY_POST)

    def test_read_fault(self):
        text = (
            "<methodResponse><fault><value><struct>"
            "<member><name>faultString</name><value><string>Bad login</string></value></member>"
            "</struct></value></fault></methodResponse>"
        )
        with pytest.raises(TransportError) as exc_info:
            WORDPRESS_BUGGY.raw_writer.read_reply(text, Operation.CREATE_POST)
        assert exc_info.value.message == "Bad login"
