"""Tests for the playback session and its auto-play subscription."""

from PySide6.QtCore import QObject, Signal

from core.catalog import CatalogQuery
from core.config import ClientConfig, PATH_BACKEND
from core.models import PlayableMedia, Song, Tag
from core.playback import PlaybackSession

from fakes import song


def wire(client, dispatcher, sink):
    query = CatalogQuery(client, dispatcher, default_tag="defaultKey")
    session = PlaybackSession(client, sink)
    session.attach(query)
    return query, session


class TestScenarios:
    def test_jazz_search_plays_first_result(self, client, dispatcher, sink) -> None:
        client.by_tag["jazz"] = [Song(id="1", name="Song A", tag=Tag(key="jazz", name=None))]
        query, _ = wire(client, dispatcher, sink)

        query.search("jazz")
        dispatcher.run_all()

        assert len(query.search_results) == 1
        assert "id=1" in sink.source
        url, meta = sink.played[-1]
        assert meta.song_id == "1"
        assert meta.title == "Song A"
        assert meta.tag == "jazz"
        assert meta.url == url

    def test_initial_load_autoplays(self, client, dispatcher, sink) -> None:
        client.by_tag["defaultKey"] = [song("d1"), song("d2")]
        query, _ = wire(client, dispatcher, sink)
        query.activate()
        dispatcher.run_all()
        assert sink.source.endswith("stream_audio?id=d1")


class TestAutoPlay:
    def test_every_non_empty_replacement_restarts_playback(self, client, dispatcher, sink) -> None:
        client.by_tag["a"] = [song("1"), song("2")]
        query, session = wire(client, dispatcher, sink)

        query.search("a")
        dispatcher.run_all()
        session.play_song(song("2"))
        query.search("a")
        dispatcher.run_all()

        assert [u.rsplit("=", 1)[1] for u, _ in sink.played] == ["1", "2", "1"]

    def test_empty_results_do_not_play(self, client, dispatcher, sink) -> None:
        query, _ = wire(client, dispatcher, sink)
        query.search("nothing")
        dispatcher.run_all()
        assert sink.played == []

    def test_failed_search_does_not_play(self, client, dispatcher, sink) -> None:
        client.fail_tags.add("x")
        query, _ = wire(client, dispatcher, sink)
        query.search("x")
        dispatcher.run_all()
        assert sink.played == []

    def test_fetch_all_does_not_play(self, client, dispatcher, sink) -> None:
        client.catalog = [song("1")]
        query, _ = wire(client, dispatcher, sink)
        query.fetch_all_songs()
        dispatcher.run_all()
        assert sink.played == []

    def test_stale_response_does_not_play(self, client, dispatcher, sink) -> None:
        client.by_tag["old"] = [song("old")]
        client.by_tag["new"] = [song("new")]
        query, _ = wire(client, dispatcher, sink)
        query.search("old")
        query.search("new")
        dispatcher.jobs[1].run()
        dispatcher.jobs[0].run()
        assert [u.rsplit("=", 1)[1] for u, _ in sink.played] == ["new"]


class TestPlaySong:
    def test_manual_pick_replaces_current_source(self, client, sink) -> None:
        session = PlaybackSession(client, sink)
        now_playing = []
        session.nowPlayingChanged.connect(now_playing.append)

        session.play_song(song("1"))
        session.play_song(song("2"))

        assert sink.source.endswith("id=2")
        assert [n.song_id for n in now_playing] == ["1", "2"]

    def test_path_backend_streams_by_path(self, client, sink) -> None:
        client.config = ClientConfig(backend=PATH_BACKEND)
        session = PlaybackSession(client, sink)
        s = Song(id="1", tag=Tag(key="t"), media=PlayableMedia(path="/songs/a.mp3"))
        session.play_song(s)
        assert sink.source == "http://localhost:8080/get_audio?path=%2Fsongs%2Fa.mp3"

    def test_unstreamable_song_reports_failure(self, client, sink) -> None:
        client.config = ClientConfig(backend=PATH_BACKEND)
        session = PlaybackSession(client, sink)
        failures = []
        session.playbackFailed.connect(failures.append)

        session.play_song(song("1"))

        assert sink.played == []
        assert len(failures) == 1

    def test_no_sink(self, client) -> None:
        session = PlaybackSession(client, None)
        failures = []
        session.playbackFailed.connect(failures.append)
        session.play_song(song("1"))
        assert failures == ["No audio output available"]

    def test_sink_errors_are_forwarded(self, client) -> None:
        class ErrSink(QObject):
            errorOccurred = Signal(str)

            def play_url(self, url, meta=None):
                self.errorOccurred.emit("404 from node")

        session = PlaybackSession(client, ErrSink())
        failures = []
        session.playbackFailed.connect(failures.append)
        session.play_song(song("1"))
        assert failures == ["404 from node"]
