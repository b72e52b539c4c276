"""Working directory for export files, and export file naming."""

from __future__ import annotations

import dataclasses
import json
import os
import shutil
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

USERS_FILE_NAME = "users.json"
ROLES_FILE_NAME = "roles.json"
LDAP_SERVERS_FILE_NAME = "ldap_servers.json"
LDAP_ROLE_MAPPINGS_FILE_NAME = "ldap_role_mappings.json"
LDAP_TEAM_MAPPINGS_FILE_NAME = "ldap_team_mappings.json"
SAML_IDP_FILE_NAME = "saml_identity_providers.json"
SAML_ROLE_MAPPINGS_FILE_NAME = "saml_role_mappings.json"
SAML_TEAM_MAPPINGS_FILE_NAME = "saml_team_mappings.json"
TEAMS_FILE_NAME = "teams.json"
PROJECTS_FILE_NAME = "projects.json"
QUERIES_FILE_NAME = "queries.xml"
PRESETS_DIR_NAME = "presets"
PRESETS_FILE_NAME = "presets.json"
INSTALLATION_FILE_NAME = "installation.json"
RESULTS_MAPPING_FILE_NAME = "results_mapping.csv"

DATE_TIME_FORMAT = "%Y-%m-%d-%H-%M-%S"

_FILE_PERM = 0o600
_DIR_PERM = 0o750

DataSource = Callable[[], bytes]


@dataclass
class Export:
    """A directory collecting the files of one export run."""

    tmp_dir: str
    file_list: list[str] = field(default_factory=list)
    run_time: datetime | None = None

    def __enter__(self) -> Export:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clean()

    def add_file(self, file_name: str, data: bytes) -> None:
        """Write ``data`` to ``file_name`` inside the export directory."""
        self.file_list.append(file_name)
        file_path = os.path.join(self.tmp_dir, file_name)
        fd = os.open(file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_PERM)
        with os.fdopen(fd, "wb") as out:
            out.write(data)

    def add_file_with_data_source(self, file_name: str, data_source: DataSource) -> None:
        """Write the content produced by ``data_source`` to ``file_name``."""
        content = data_source()
        self.add_file(file_name, content)

    def create_dir(self, dir_name: str) -> None:
        """Create a directory inside the export directory."""
        os.mkdir(os.path.join(self.tmp_dir, dir_name), _DIR_PERM)

    def clean(self) -> None:
        """Remove the export directory and everything in it."""
        shutil.rmtree(self.tmp_dir, ignore_errors=True)


def create_export(prefix: str, run_time: datetime) -> Export:
    """Create an export in a new temporary directory named after ``prefix``."""
    tmp_dir = tempfile.mkdtemp(prefix=prefix, dir=tempfile.gettempdir())
    return Export(tmp_dir=tmp_dir, run_time=run_time)


def create_export_local(output_path: str, run_time: datetime) -> Export:
    """Create an export in ``output_path``, which must not exist yet."""
    os.mkdir(output_path, _DIR_PERM)
    return Export(tmp_dir=output_path, run_time=run_time)


def _walk_files(root: str) -> Iterator[str]:
    for name in sorted(os.listdir(root)):
        full = os.path.join(root, name)
        if os.path.isdir(full):
            yield from _walk_files(full)
        else:
            yield full


def create_export_from_local(input_path: str, run_time: datetime) -> Export:
    """Create an export over an existing directory, listing the files it holds."""
    os.stat(input_path)
    file_list = [
        os.path.relpath(full, input_path).replace(os.sep, "/")
        for full in _walk_files(input_path)
    ]
    return Export(tmp_dir=input_path, file_list=file_list, run_time=run_time)


def create_export_file_name(prefix: str, suffix: str, extension: str, now: datetime) -> str:
    """Return ``{prefix}-yyyy-mm-dd-HH-MM-SS[-{suffix}].{extension}``."""
    stamp = now.strftime(DATE_TIME_FORMAT)
    if suffix:
        return f"{prefix}-{stamp}-{suffix}.{extension}"
    return f"{prefix}-{stamp}.{extension}"


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def json_data_source(obj: Any) -> DataSource:
    """Return a data source producing the compact JSON encoding of ``obj``."""

    def source() -> bytes:
        return json.dumps(obj, separators=(",", ":"), default=_json_default).encode("utf-8")

    return source