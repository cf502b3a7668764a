"""Tests for the call registry."""

from blogwire.core.registry import CallRegistry, FlowState
from blogwire.models.post import Post


def _noop(entry, payload):
    pass


class TestCallRegistry:
    def test_tokens_start_at_one_and_increase(self):
        registry = CallRegistry()
        first = registry.register(_noop, "fetch_post")
        second = registry.register(_noop, "fetch_post")

        assert first.token == 1
        assert second.token == 2
        assert len(registry) == 2

    def test_resolve_succeeds_exactly_once(self):
        registry = CallRegistry()
        post = Post(title="hello")
        entry = registry.register(_noop, "create_post", post, creating=True)

        resolved = registry.resolve(entry.token)
        assert resolved is entry
        assert resolved.target is post
        assert resolved.creating is True
        assert registry.resolve(entry.token) is None
        assert entry.token not in registry

    def test_tokens_are_never_reused(self):
        registry = CallRegistry()
        entry = registry.register(_noop, "list_categories")
        registry.resolve(entry.token)
        registry.clear()

        assert registry.register(_noop, "list_categories").token == entry.token + 1

    def test_aux_fields(self):
        registry = CallRegistry()
        entry = registry.register(
            _noop,
            "create_post",
            state=FlowState.AWAITING_POST_WRITE,
            publish_after_categories=True,
            context={"number": 5},
        )

        assert entry.state is FlowState.AWAITING_POST_WRITE
        assert entry.publish_after_categories is True
        assert entry.context == {"number": 5}
        assert entry.error_handler is None

    def test_unknown_token(self):
        assert CallRegistry().resolve(99) is None
