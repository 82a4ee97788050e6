# core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from core.errors import ConfigError
from core.models import NodeIdentity

DEFAULT_NODE_URL = "http://localhost:8080"
DEFAULT_TAG = "defaultKey"
PLACEHOLDER_UPLOAD_NAME = "fake_name"


class ResponseOrdering(Enum):
    REQUEST = "request"   # newest request wins, older responses are dropped
    ARRIVAL = "arrival"   # whatever response lands last wins


class UploadNamePolicy(Enum):
    PLACEHOLDER = "placeholder"
    FILENAME = "filename"
    METADATA = "metadata"


@dataclass(frozen=True)
class CatalogBackend:
    """
    One endpoint family of the catalog service. The two known families differ
    in the search route/param and in how a song is addressed for streaming.
    """
    name: str
    search_path: str
    search_param: str
    stream_path: str
    stream_param: str
    list_path: str = "/list_all_songs"
    upload_path: str = "/upload_song"


ID_BACKEND = CatalogBackend(
    name="id",
    search_path="/get_songs_from_tag",
    search_param="tag",
    stream_path="/stream_audio",
    stream_param="id",
)

PATH_BACKEND = CatalogBackend(
    name="path",
    search_path="/get_songs_from_key",
    search_param="tag_key",
    stream_path="/get_audio",
    stream_param="path",
)

BACKENDS = {b.name: b for b in (ID_BACKEND, PATH_BACKEND)}


@dataclass(frozen=True)
class UploadPolicy:
    name_policy: UploadNamePolicy = UploadNamePolicy.METADATA
    clear_draft_on_failure: bool = True
    placeholder_name: str = PLACEHOLDER_UPLOAD_NAME


@dataclass(frozen=True)
class ClientConfig:
    node_url: str = DEFAULT_NODE_URL
    base_path: str = ""
    backend: CatalogBackend = ID_BACKEND
    default_tag: str = DEFAULT_TAG
    identity: NodeIdentity = field(default_factory=NodeIdentity)
    ordering: ResponseOrdering = ResponseOrdering.REQUEST
    upload: UploadPolicy = field(default_factory=UploadPolicy)
    request_timeout_s: float | None = None
    log_level: int = logging.INFO

    @property
    def base_url(self) -> str:
        path = (self.base_path or "").strip()
        if path and not path.startswith("/"):
            path = "/" + path
        return self.node_url.rstrip("/") + path.rstrip("/")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ClientConfig":
        env = os.environ if env is None else env

        node_url = (env.get("SONGNODE_NODE_URL") or DEFAULT_NODE_URL).strip()
        base_path = (env.get("SONGNODE_BASE_PATH") or "").strip()

        backend_name = (env.get("SONGNODE_BACKEND") or "id").strip().lower()
        backend = BACKENDS.get(backend_name)
        if backend is None:
            raise ConfigError(f"SONGNODE_BACKEND must be one of {sorted(BACKENDS)}, got {backend_name!r}")

        # the process id is the app's base path without slashes unless given
        process = env.get("SONGNODE_PROCESS") or base_path.replace("/", "") or None
        identity = NodeIdentity(node=env.get("SONGNODE_NODE") or None, process=process)

        ordering = _enum(ResponseOrdering, env.get("SONGNODE_ORDERING"), ResponseOrdering.REQUEST, "SONGNODE_ORDERING")
        name_policy = _enum(UploadNamePolicy, env.get("SONGNODE_UPLOAD_NAME"), UploadNamePolicy.METADATA, "SONGNODE_UPLOAD_NAME")
        keep_draft = env.get("SONGNODE_KEEP_DRAFT_ON_FAILURE") == "1"

        timeout = None
        raw_timeout = env.get("SONGNODE_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(f"SONGNODE_TIMEOUT must be a number, got {raw_timeout!r}") from None
            if timeout <= 0:
                raise ConfigError("SONGNODE_TIMEOUT must be positive")

        level_name = (env.get("SONGNODE_LOG_LEVEL") or "INFO").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ConfigError(f"Unknown SONGNODE_LOG_LEVEL {level_name!r}")

        return cls(
            node_url=node_url,
            base_path=base_path,
            backend=backend,
            default_tag=env.get("SONGNODE_DEFAULT_TAG") or DEFAULT_TAG,
            identity=identity,
            ordering=ordering,
            upload=UploadPolicy(name_policy=name_policy, clear_draft_on_failure=not keep_draft),
            request_timeout_s=timeout,
            log_level=level,
        )


def _enum(enum_cls, raw: str | None, default, var: str):
    if not raw:
        return default
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ConfigError(f"{var} must be one of: {allowed}") from None
