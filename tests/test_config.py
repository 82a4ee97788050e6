"""Tests for environment-driven configuration."""

import logging

import pytest

from core.config import (
    ClientConfig,
    ID_BACKEND,
    PATH_BACKEND,
    ResponseOrdering,
    UploadNamePolicy,
)
from core.errors import ConfigError


class TestFromEnv:
    def test_defaults(self) -> None:
        cfg = ClientConfig.from_env({})
        assert cfg.base_url == "http://localhost:8080"
        assert cfg.backend is ID_BACKEND
        assert cfg.default_tag == "defaultKey"
        assert cfg.ordering is ResponseOrdering.REQUEST
        assert cfg.upload.name_policy is UploadNamePolicy.METADATA
        assert cfg.upload.clear_draft_on_failure is True
        assert cfg.request_timeout_s is None
        assert cfg.log_level == logging.INFO
        assert not cfg.identity.connected

    def test_base_path_and_process(self) -> None:
        cfg = ClientConfig.from_env({
            "SONGNODE_NODE_URL": "http://node:8080/",
            "SONGNODE_BASE_PATH": "/music:music:me.os",
            "SONGNODE_NODE": "me.os",
        })
        assert cfg.base_url == "http://node:8080/music:music:me.os"
        assert cfg.identity.process == "music:music:me.os"
        assert cfg.identity.connected

    def test_explicit_process_wins(self) -> None:
        cfg = ClientConfig.from_env({"SONGNODE_BASE_PATH": "/app", "SONGNODE_PROCESS": "other"})
        assert cfg.identity.process == "other"

    def test_path_backend(self) -> None:
        cfg = ClientConfig.from_env({"SONGNODE_BACKEND": "PATH"})
        assert cfg.backend is PATH_BACKEND

    def test_policies(self) -> None:
        cfg = ClientConfig.from_env({
            "SONGNODE_ORDERING": "arrival",
            "SONGNODE_UPLOAD_NAME": "placeholder",
            "SONGNODE_KEEP_DRAFT_ON_FAILURE": "1",
            "SONGNODE_TIMEOUT": "2.5",
            "SONGNODE_LOG_LEVEL": "debug",
        })
        assert cfg.ordering is ResponseOrdering.ARRIVAL
        assert cfg.upload.name_policy is UploadNamePolicy.PLACEHOLDER
        assert cfg.upload.clear_draft_on_failure is False
        assert cfg.request_timeout_s == 2.5
        assert cfg.log_level == logging.DEBUG

    @pytest.mark.parametrize("env", [
        {"SONGNODE_BACKEND": "ftp"},
        {"SONGNODE_ORDERING": "random"},
        {"SONGNODE_UPLOAD_NAME": "guess"},
        {"SONGNODE_TIMEOUT": "soon"},
        {"SONGNODE_TIMEOUT": "0"},
        {"SONGNODE_LOG_LEVEL": "LOUD"},
    ])
    def test_invalid_values(self, env) -> None:
        with pytest.raises(ConfigError):
            ClientConfig.from_env(env)

    def test_base_path_without_leading_slash(self) -> None:
        cfg = ClientConfig(node_url="http://n", base_path="app/")
        assert cfg.base_url == "http://n/app"
