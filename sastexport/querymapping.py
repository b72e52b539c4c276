"""Mapping of SAST query ids to AST query ids."""

from __future__ import annotations

import json
import logging
import shutil
import tempfile
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Protocol
from urllib.parse import urlsplit

from .queryid import get_ast_query_id

logger = logging.getLogger(__name__)

_TMP_DIR_PREFIX = "query_mapping_"
_FILE_NAME = "mapping.json"


@dataclass
class QueryMap:
    ast_id: str = ""
    sast_id: str = ""


class RetryableHTTPAdapter(Protocol):
    def get(self, url: str) -> BinaryIO:
        """Return a readable stream with the body found at ``url``."""
        ...


class _UrllibClient:
    def get(self, url: str) -> BinaryIO:
        return urllib.request.urlopen(url)  # noqa: S310


def _is_url(path: str) -> bool:
    parts = urlsplit(path)
    return bool(parts.scheme) and bool(parts.netloc)


def _field(obj: dict[str, Any], name: str) -> Any:
    if name in obj:
        return obj[name]
    lowered = name.lower()
    for key, value in obj.items():
        if key.lower() == lowered:
            return value
    return None


def _string_field(obj: dict[str, Any], name: str) -> str:
    value = _field(obj, name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"query mapping field {name} must be a string")
    return value


def _parse_mappings(data: bytes) -> list[QueryMap]:
    document = json.loads(data)
    if document is None:
        return []
    if not isinstance(document, dict):
        raise ValueError("query mapping document must be a JSON object")
    entries = _field(document, "mappings")
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ValueError("query mappings must be a JSON array")
    mappings = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError("query mapping entry must be a JSON object")
        mappings.append(
            QueryMap(ast_id=_string_field(entry, "astId"), sast_id=_string_field(entry, "sastId"))
        )
    return mappings


def _remove_tmp_dir(tmp_dir: str) -> None:
    try:
        shutil.rmtree(tmp_dir)
    except OSError:
        logger.exception("Could not remove temporary directory with query mapping file %s", tmp_dir)


def _download(url: str, client: RetryableHTTPAdapter) -> bytes:
    tmp_dir = tempfile.mkdtemp(prefix=_TMP_DIR_PREFIX)
    try:
        tmp_file = Path(tmp_dir) / _FILE_NAME
        with tmp_file.open("wb") as out:
            response = client.get(url)
            try:
                shutil.copyfileobj(response, out)
            finally:
                close = getattr(response, "close", None)
                if close is not None:
                    close()
        return tmp_file.read_bytes()
    finally:
        _remove_tmp_dir(tmp_dir)


class QueryMappingProvider:
    """Loads query mappings from a local file or a URL."""

    def __init__(self, query_mapping_path: str, client: RetryableHTTPAdapter | None = None) -> None:
        if _is_url(query_mapping_path):
            data = _download(query_mapping_path, client or _UrllibClient())
        else:
            data = Path(query_mapping_path).read_bytes()
        self._query_mappings = _parse_mappings(data)

    def get_mapping(self) -> list[QueryMap]:
        return self._query_mappings

    def add_query_mapping(self, language: str, name: str, group: str, sast_query_id: str) -> None:
        """Add a mapping for a SAST query unless one is already present."""
        if any(mapping.sast_id == sast_query_id for mapping in self._query_mappings):
            return
        ast_id = get_ast_query_id(language, name, group)
        self._query_mappings.append(QueryMap(ast_id=ast_id, sast_id=sast_query_id))