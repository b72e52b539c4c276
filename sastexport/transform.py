"""Transformations applied to exported data, mainly flattening of teams."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field

INSTALLATION_ENGINE_SERVICE_NAME = "Checkmarx Engine Service"
_INSTALLATION_SCANS_MANAGER_NAME = "Checkmarx Scans Manager"
_INSTALLATION_CONTENT_PACK_NAME = "Checkmarx Queries Pack"
_ENGINE_SERVERS_STATUS_OFFLINE = "Offline"


@dataclass
class TransformOptions:
    nested_teams: bool = False


@dataclass
class Team:
    id: int = 0
    name: str = ""
    full_name: str = ""
    parent_id: int = 0


@dataclass
class User:
    id: int = 0
    user_name: str = ""
    team_ids: list[int] = field(default_factory=list)


@dataclass
class SamlTeamMapping:
    id: int = 0
    saml_identity_provider_id: int = 0
    team_id: int = 0
    team_full_path: str = ""
    saml_attribute_value: str = ""


@dataclass
class EngineServer:
    id: int = 0
    name: str = ""
    uri: str = ""
    cx_version: str = ""
    status: str = ""


@dataclass
class InstallationSetting:
    name: str = ""
    version: str = ""
    hotfix: str = ""


@dataclass
class InstallationMapping:
    name: str = ""
    version: str = ""
    hotfix: str = ""


def _flatten_path(path: str) -> str:
    return path.lstrip("/").replace("/", "_")


def transform_teams(teams: list[Team], options: TransformOptions) -> list[Team]:
    """Flatten teams so that every team is a root team named after its full path."""
    if options.nested_teams:
        return teams
    for team in teams:
        team.parent_id = 0
        team.name = _flatten_path(team.full_name)
        team.full_name = "/" + team.name
    return list(teams)


def _get_all_child_team_ids(root: int, teams: list[Team]) -> list[int]:
    out: list[int] = []
    for team in teams:
        if team.parent_id == root:
            out.append(team.id)
            out.extend(_get_all_child_team_ids(team.id, teams))
    return out


def transform_users(users: list[User], teams: list[Team], options: TransformOptions) -> list[User]:
    """Add every descendant team to each user; ``teams`` must be the unflattened list."""
    if options.nested_teams:
        return users
    for user in users:
        for team_id in list(user.team_ids):
            user.team_ids.extend(_get_all_child_team_ids(team_id, teams))
    return list(users)


def transform_saml_team_mappings(
    saml_team_mappings: list[SamlTeamMapping] | None, options: TransformOptions
) -> list[SamlTeamMapping] | None:
    """Point SAML team mappings at the flattened team paths."""
    if options.nested_teams:
        return saml_team_mappings
    mappings = saml_team_mappings or []
    for mapping in mappings:
        mapping.team_full_path = "/" + _flatten_path(mapping.team_full_path)
    return list(mappings)


def contains_engine(needle: str, data: list[InstallationMapping]) -> bool:
    """Return whether a mapping with name ``needle`` is present."""
    return any(mapping.name == needle for mapping in data)


def transform_xml_installation_mappings(
    installation_settings: list[InstallationSetting] | None,
) -> list[InstallationMapping]:
    """Select engine service and content pack versions from installation settings."""
    if installation_settings is None:
        return []
    out: list[InstallationMapping] = []
    scans_manager: InstallationMapping | None = None
    for setting in installation_settings:
        if setting.name == INSTALLATION_ENGINE_SERVICE_NAME:
            out.append(
                InstallationMapping(INSTALLATION_ENGINE_SERVICE_NAME, setting.version, setting.hotfix)
            )
        elif setting.name == _INSTALLATION_SCANS_MANAGER_NAME:
            scans_manager = InstallationMapping(
                INSTALLATION_ENGINE_SERVICE_NAME, setting.version, setting.hotfix
            )
        elif setting.name == _INSTALLATION_CONTENT_PACK_NAME:
            out.append(InstallationMapping(setting.name, setting.version, setting.hotfix))
    if scans_manager is not None and not contains_engine(INSTALLATION_ENGINE_SERVICE_NAME, out):
        out.append(scans_manager)
    return out


_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(value: str) -> str:
    parts = []
    for char in value:
        if char in _SIMPLE_ESCAPES:
            parts.append(_SIMPLE_ESCAPES[char])
        elif char.isprintable():
            parts.append(char)
        elif ord(char) < 0x80:
            parts.append(f"\\x{ord(char):02x}")
        elif ord(char) <= 0xFFFF:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(f"\\U{ord(char):08x}")
    return '"' + "".join(parts) + '"'


def _replace_key_value(data: bytes, key: str, get_value: Callable[[str], str]) -> bytes:
    pattern = re.compile(b"(" + re.escape(key.encode("utf-8")) + b')="([^"]+)"')

    def replace(match: re.Match[bytes]) -> bytes:
        value = get_value(match.group(2).decode("utf-8", errors="replace"))
        return f"{key}={_quote(value)}".encode("utf-8")

    return pattern.sub(replace, data)


def transform_scan_report(xml: bytes, options: TransformOptions) -> bytes:
    """Rewrite the team attributes of a scan report to the flattened team name."""
    if options.nested_teams:
        return xml
    team_path = ""

    def flatten(value: str) -> str:
        nonlocal team_path
        team_path = value.replace("\\", "_")
        return team_path

    out = _replace_key_value(xml, "TeamFullPathOnReportDate", flatten)
    return _replace_key_value(out, "Team", lambda _value: team_path)


def transform_engine_servers(servers: list[EngineServer] | None) -> list[InstallationMapping]:
    """Derive the engine service version from the engine servers."""
    if not servers:
        return []
    if len(servers) == 1:
        return [InstallationMapping(INSTALLATION_ENGINE_SERVICE_NAME, servers[0].cx_version, "")]
    online = next(
        (server for server in servers if server.status != _ENGINE_SERVERS_STATUS_OFFLINE),
        None,
    )
    if online is None:
        return []
    return [InstallationMapping(INSTALLATION_ENGINE_SERVICE_NAME, online.cx_version, "")]