"""Tests for the application wiring and node identity."""

from core.config import ClientConfig
from core.models import NodeIdentity
from core.state import AppState, Notify

from fakes import FakeClient, FakeSink, InlineDispatcher, song


def make_state(config=None):
    state = AppState(config or ClientConfig(identity=NodeIdentity(node="me.os", process="music")))
    client, sink = FakeClient(), FakeSink()
    state.wire(client, sink, InlineDispatcher())
    return state, client, sink


class TestWiring:
    def test_search_drives_playback(self) -> None:
        state, client, sink = make_state()
        client.by_tag["jazz"] = [song("1"), song("2")]
        state.catalog.search("jazz")
        assert sink.source.endswith("id=1")

    def test_initial_load_uses_configured_tag(self) -> None:
        state, client, sink = make_state(ClientConfig(default_tag="chill"))
        client.by_tag["chill"] = [song("c")]
        state.catalog.activate()
        assert client.tag_calls == ["chill"]
        assert sink.source.endswith("id=c")

    def test_search_failure_goes_to_status_bar(self) -> None:
        state, client, _ = make_state()
        client.fail_tags.add("x")
        status, notes = [], []
        state.status_changed.connect(status.append)
        state.notification.connect(notes.append)

        state.catalog.search("x")

        assert len(status) == 1 and status[0].startswith("Search failed")
        assert notes == []

    def test_upload_notices_become_notifications(self) -> None:
        state, _, _ = make_state()
        notes = []
        state.notification.connect(notes.append)
        state.upload.submit()
        assert notes == [Notify(message="Please select a file and enter a tag", notify_type="warning")]


class TestIdentity:
    def test_connected(self) -> None:
        state, _, _ = make_state()
        assert state.node_connected

    def test_not_connected_keeps_components_usable(self) -> None:
        state, client, sink = make_state(ClientConfig())
        assert not state.node_connected
        client.by_tag["a"] = [song("1")]
        state.catalog.search("a")
        assert sink.source is not None
