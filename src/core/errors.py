# core/errors.py
from __future__ import annotations


class CatalogError(Exception):
    """Any failure talking to the catalog service."""


class TransportError(CatalogError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(CatalogError):
    pass


class ConfigError(ValueError):
    pass
