"""Tests for the client UI state store."""

import pytest

from openclass.client.ui_store import UIStore


class TestUIStore:
    def test_defaults(self):
        store = UIStore()
        assert store.sidebar_open is True
        assert store.view_mode == "grid"
        assert store.is_loading is False

    def test_listeners_see_changes_until_unsubscribed(self):
        store = UIStore()
        seen = []
        unsubscribe = store.subscribe(lambda s: seen.append((s.sidebar_open, s.view_mode)))

        store.toggle_sidebar()
        store.set_view_mode("list")
        unsubscribe()
        store.set_loading(True)

        assert seen == [(False, "grid"), (False, "list")]
        assert store.is_loading is True

    def test_no_event_without_change(self):
        store = UIStore()
        seen = []
        store.subscribe(seen.append)
        store.set_view_mode("grid")
        assert seen == []

    def test_unknown_view_mode(self):
        with pytest.raises(ValueError):
            UIStore().set_view_mode("table")
