"""Shared fakes for the controller tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from core.catalog_client import CatalogClient
from core.config import ClientConfig
from core.errors import CatalogError, TransportError
from core.models import Song, Tag


def song(song_id: str, tag: str = "jazz", name: str | None = None) -> Song:
    return Song(id=song_id, tag=Tag(key=tag), name=name)


@dataclass
class PendingJob:
    job: Callable[[], Any]
    on_success: Callable[[Any], None]
    on_failure: Callable[[str], None]
    done: bool = False

    def run(self) -> None:
        """Executes the job and delivers its outcome, like a worker would."""
        assert not self.done, "job already delivered"
        self.done = True
        try:
            result = self.job()
        except CatalogError as e:
            self.on_failure(str(e))
            return
        self.on_success(result)


class ManualDispatcher:
    """Queues jobs until the test delivers them, in any order."""

    def __init__(self):
        self.jobs: list[PendingJob] = []

    def __call__(self, job, on_success, on_failure) -> None:
        self.jobs.append(PendingJob(job, on_success, on_failure))

    def run_all(self) -> None:
        for p in self.jobs:
            if not p.done:
                p.run()


class InlineDispatcher(ManualDispatcher):
    """Delivers each job as soon as it is dispatched."""

    def __call__(self, job, on_success, on_failure) -> None:
        super().__call__(job, on_success, on_failure)
        self.jobs[-1].run()


@dataclass
class FakeClient:
    by_tag: dict[str, list[Song]] = field(default_factory=dict)
    catalog: list[Song] = field(default_factory=list)
    fail_tags: set[str] = field(default_factory=set)
    fail_listing: bool = False
    fail_upload: bool = False
    tag_calls: list[str] = field(default_factory=list)
    listing_calls: int = 0
    uploads: list[tuple] = field(default_factory=list)
    config: ClientConfig = field(default_factory=ClientConfig)

    def songs_for_tag(self, tag_key: str) -> list[Song]:
        self.tag_calls.append(tag_key)
        if tag_key in self.fail_tags:
            raise TransportError("GET /get_songs_from_tag returned HTTP 500", status_code=500)
        return list(self.by_tag.get(tag_key, []))

    def list_all_songs(self) -> list[Song]:
        self.listing_calls += 1
        if self.fail_listing:
            raise TransportError("connection refused")
        return list(self.catalog)

    def stream_url(self, s: Song) -> str:
        return CatalogClient(self.config).stream_url(s)

    def upload_song(self, file_path, tag: str, name: str) -> None:
        self.uploads.append((file_path, tag, name))
        if self.fail_upload:
            raise TransportError("POST /upload_song returned HTTP 500", status_code=500)


class FakeSink:
    def __init__(self):
        self.played: list[tuple[str, Any]] = []

    def play_url(self, url: str, meta=None) -> None:
        self.played.append((url, meta))

    @property
    def source(self) -> str | None:
        return self.played[-1][0] if self.played else None


