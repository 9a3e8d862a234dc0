"""Tests for the session registry (selection_bar/session.py)."""

from __future__ import annotations

from selection_bar.session import SelectionKey, SessionRegistry


class TestSessionRegistry:
    def test_unknown_key_not_applied(self, registry: SessionRegistry) -> None:
        assert registry.has_applied(SelectionKey("obj", 0)) is False

    def test_mark_applied(self, registry: SessionRegistry) -> None:
        key = SelectionKey("obj", 0)
        registry.mark_applied(key)
        assert registry.has_applied(key) is True
        assert key in registry

    def test_mark_is_idempotent(self, registry: SessionRegistry) -> None:
        key = SelectionKey("obj", 1)
        registry.mark_applied(key)
        registry.mark_applied(key)
        assert len(registry) == 1

    def test_keys_distinguish_surface_and_index(
        self, registry: SessionRegistry
    ) -> None:
        registry.mark_applied(SelectionKey("obj", 0))
        assert not registry.has_applied(SelectionKey("obj", 1))
        assert not registry.has_applied(SelectionKey("other", 0))

    def test_reset_clears_everything(self, registry: SessionRegistry) -> None:
        key = SelectionKey("obj", 0)
        registry.mark_applied(key)
        registry.mark_applied(SelectionKey("obj", 1))
        registry.reset()
        assert registry.has_applied(key) is False
        assert len(registry) == 0

    def test_separate_registries_are_isolated(self) -> None:
        first, second = SessionRegistry(), SessionRegistry()
        first.mark_applied(SelectionKey("obj", 0))
        assert not second.has_applied(SelectionKey("obj", 0))


class TestSelectionKey:
    def test_string_form(self) -> None:
        assert str(SelectionKey("obj-42", 3)) == "obj-42::3"

    def test_equal_by_value(self) -> None:
        assert SelectionKey("a", 1) == SelectionKey("a", 1)
