# core/catalog_client.py
from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote, urlencode

import requests

from core.config import ClientConfig
from core.errors import MalformedResponse, TransportError
from core.models import Song, parse_songs

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Thin HTTP wrapper around the catalog service of one node.
    Every call is a single attempt; any non-2xx answer is a TransportError.
    """

    def __init__(self, config: ClientConfig, session: requests.Session | None = None):
        self.config = config
        self.backend = config.backend
        self.base_url = config.base_url
        self.timeout = config.request_timeout_s
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self._url(path)
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        if not r.ok:
            raise TransportError(f"{method} {path} returned HTTP {r.status_code}", status_code=r.status_code)
        return r

    def _get_songs(self, path: str, params: dict | None = None) -> list[Song]:
        r = self._send("GET", path, params=params)
        try:
            payload = r.json()
        except ValueError as e:
            raise MalformedResponse(f"GET {path}: body is not JSON") from e
        songs = parse_songs(payload)
        logger.debug("GET %s %s -> %d song(s)", path, params or "", len(songs))
        return songs

    # ----------------------------
    # Catalog calls
    # ----------------------------

    def songs_for_tag(self, tag_key: str) -> list[Song]:
        # empty keys go out as-is; the server decides what they mean
        return self._get_songs(self.backend.search_path, {self.backend.search_param: tag_key})

    def list_all_songs(self) -> list[Song]:
        return self._get_songs(self.backend.list_path)

    def stream_url(self, song: Song) -> str:
        if song.addressing != self.backend.stream_param:
            raise ValueError(
                f"song {song.id!r} is {song.addressing}-addressed, the {self.backend.name} backend streams by {self.backend.stream_param}"
            )
        query = urlencode({self.backend.stream_param: song.locator}, quote_via=quote)
        return f"{self._url(self.backend.stream_path)}?{query}"

    def upload_song(self, file_path: Path, tag: str, name: str) -> None:
        path = Path(file_path)
        try:
            fh = open(path, "rb")
        except OSError as e:
            raise TransportError(f"cannot read {path}: {e}") from e

        with fh:
            files = {"file": (path.name, fh, "audio/mpeg")}
            data = {"tag": tag, "name": name}
            self._send("POST", self.backend.upload_path, files=files, data=data)
        logger.info("Uploaded %s with tag %r as %r", path.name, tag, name)
