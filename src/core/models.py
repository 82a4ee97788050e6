# core/models.py
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from core.errors import MalformedResponse


@dataclass(frozen=True)
class Tag:
    key: str
    name: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.key


@dataclass(frozen=True)
class PlayableMedia:
    path: str
    name: str | None = None


@dataclass(frozen=True)
class Song:
    id: str
    tag: Tag
    name: str | None = None
    media: PlayableMedia | None = None  # set only by the path-addressed backend

    @property
    def addressing(self) -> str:
        return "path" if self.media is not None else "id"

    @property
    def locator(self) -> str:
        return self.media.path if self.media is not None else self.id

    @property
    def title(self) -> str:
        if self.name:
            return self.name
        if self.media is not None and self.media.name:
            return self.media.name
        return f"Untitled ({self.id})"

    def row_label(self) -> str:
        return f"{self.title} - Tag: {self.tag.label}"


@dataclass
class UploadDraft:
    file: Path | None = None
    tag: str = ""

    @property
    def is_complete(self) -> bool:
        return self.file is not None and bool(self.tag)

    def with_file(self, file: Path | None) -> "UploadDraft":
        return replace(self, file=file)

    def with_tag(self, tag: str) -> "UploadDraft":
        return replace(self, tag=tag or "")


@dataclass(frozen=True)
class NodeIdentity:
    node: str | None = None
    process: str | None = None

    @property
    def connected(self) -> bool:
        return bool(self.node) and bool(self.process)


# ----------------------------
# JSON -> models
# ----------------------------

def _opt_str(obj: dict, key: str, where: str) -> str | None:
    v = obj.get(key)
    if v is None:
        return None
    if not isinstance(v, str):
        raise MalformedResponse(f"{where}: '{key}' must be a string or null")
    return v


def _req_str(obj: dict, key: str, where: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise MalformedResponse(f"{where}: missing string '{key}'")
    return v


def parse_tag(raw: Any, where: str = "tag") -> Tag:
    if not isinstance(raw, dict):
        raise MalformedResponse(f"{where}: expected an object")
    return Tag(key=_req_str(raw, "key", where), name=_opt_str(raw, "name", where))


def parse_song(raw: Any, index: int = 0) -> Song:
    where = f"song[{index}]"
    if not isinstance(raw, dict):
        raise MalformedResponse(f"{where}: expected an object")

    media = None
    pm = raw.get("playable_media")
    if pm is not None:
        if not isinstance(pm, dict):
            raise MalformedResponse(f"{where}: 'playable_media' must be an object")
        media = PlayableMedia(
            path=_req_str(pm, "path", f"{where}.playable_media"),
            name=_opt_str(pm, "name", f"{where}.playable_media"),
        )

    return Song(
        id=_req_str(raw, "id", where),
        tag=parse_tag(raw.get("tag"), f"{where}.tag"),
        name=_opt_str(raw, "name", where),
        media=media,
    )


def parse_songs(payload: Any) -> list[Song]:
    """
    Turns a decoded song-list body into Song values, keeping server order.
    A null body counts as an empty list; duplicate ids reject the whole list.
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise MalformedResponse("song list: expected a JSON array")

    songs = [parse_song(item, i) for i, item in enumerate(payload)]

    seen: set[str] = set()
    for s in songs:
        if s.id in seen:
            raise MalformedResponse(f"song list: duplicate id {s.id!r}")
        seen.add(s.id)
    return songs


@dataclass(frozen=True)
class NowPlaying:
    song_id: str
    title: str
    tag: str
    url: str
