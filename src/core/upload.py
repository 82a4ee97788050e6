# core/upload.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from mutagen import File as MutagenFile
from mutagen._util import MutagenError
from PySide6.QtCore import QObject, Signal

from core.config import UploadNamePolicy, UploadPolicy
from core.models import UploadDraft

logger = logging.getLogger(__name__)

MSG_MISSING = "Please select a file and enter a tag"
MSG_BUSY = "An upload is already in progress"
MSG_OK = "Song uploaded successfully"
MSG_FAILED = "Failed to upload song"


def _first(easy, key: str) -> str | None:
    v = easy.get(key)
    if not v:
        return None
    if isinstance(v, list):
        return (str(v[0]).strip() if v else None) or None
    s = str(v).strip()
    return s or None


def upload_name_for(path: Path, policy: UploadPolicy) -> str:
    """Value sent in the multipart `name` field."""
    if policy.name_policy is UploadNamePolicy.PLACEHOLDER:
        return policy.placeholder_name

    stem = Path(path).stem or policy.placeholder_name
    if policy.name_policy is UploadNamePolicy.FILENAME:
        return stem

    try:
        audio = MutagenFile(str(path), easy=True)
    except (MutagenError, OSError) as e:
        logger.debug("No readable tags in %s: %s", path, e)
        return stem
    if audio is None:
        return stem
    return _first(audio, "title") or stem


class UploadController(QObject):
    """
    Holds the pending file + tag and submits them as one multipart POST.
    Does not touch the catalog lists on success.
    """
    draftChanged = Signal(object)        # UploadDraft
    busyChanged = Signal(bool)
    uploadFinished = Signal(bool, str)   # ok, message

    def __init__(self, client, dispatch: Callable, notify: Callable[[str, str], None],
                 policy: UploadPolicy | None = None, parent=None):
        super().__init__(parent)
        self.client = client
        self._dispatch = dispatch
        self._notify = notify
        self.policy = policy or UploadPolicy()

        self._draft = UploadDraft()
        self._busy = False

    @property
    def draft(self) -> UploadDraft:
        return self._draft

    @property
    def busy(self) -> bool:
        return self._busy

    def _set_draft(self, draft: UploadDraft) -> None:
        self._draft = draft
        self.draftChanged.emit(draft)

    def _set_busy(self, busy: bool) -> None:
        if busy != self._busy:
            self._busy = busy
            self.busyChanged.emit(busy)

    def select_file(self, path) -> None:
        self._set_draft(self._draft.with_file(Path(path) if path else None))

    def set_tag(self, tag: str) -> None:
        self._set_draft(self._draft.with_tag(tag))

    def clear_draft(self) -> None:
        self._set_draft(UploadDraft())

    def submit(self) -> bool:
        """Returns True when a request was sent."""
        draft = self._draft
        if not draft.is_complete:
            self._notify(MSG_MISSING, "warning")
            return False
        if self._busy:
            self._notify(MSG_BUSY, "info")
            return False

        file_path, tag, policy = draft.file, draft.tag, self.policy

        def job():
            name = upload_name_for(file_path, policy)
            self.client.upload_song(file_path, tag, name)
            return name

        self._set_busy(True)
        self._dispatch(job, self._on_uploaded, self._on_failed)
        return True

    def _on_uploaded(self, name) -> None:
        self._set_busy(False)
        self._notify(MSG_OK, "success")
        self.clear_draft()
        self.uploadFinished.emit(True, MSG_OK)

    def _on_failed(self, message: str) -> None:
        self._set_busy(False)
        logger.warning("Upload failed: %s", message)
        self._notify(MSG_FAILED, "error")
        if self.policy.clear_draft_on_failure:
            self.clear_draft()
        self.uploadFinished.emit(False, message)
