"""Permissions required by the export and checks against token claims."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .options import RESULTS_OPTION, TEAMS_OPTION, USERS_OPTION

USE_ODATA_PERMISSION = "use-odata"
GENERATE_SCAN_REPORT_PERMISSION = "generate-scan-report"
MANAGE_AUTH_PROVIDER_PERMISSION = "manage-authentication-providers"
MANAGE_ROLES_PERMISSION = "manage-roles"
MANAGE_SYSTEM_SETTINGS = "manage-system-settings"
VIEW_RESULTS = "view-results"

_PERMISSION_DESCRIPTIONS = {
    USE_ODATA_PERMISSION: "Sast > API > Use Odata",
    GENERATE_SCAN_REPORT_PERMISSION: "Sast > Reports > Generate Scan Report",
    VIEW_RESULTS: "Sast > Scan Results > View Results",
    MANAGE_SYSTEM_SETTINGS: "Sast > System Configuration > Manage System Settings",
    MANAGE_AUTH_PROVIDER_PERMISSION: "Access Control > General > Manage Authentication Providers",
    MANAGE_ROLES_PERMISSION: "Access Control > General > Manage Roles",
}

_OPTION_PERMISSIONS = {
    USERS_OPTION: (MANAGE_AUTH_PROVIDER_PERMISSION, MANAGE_ROLES_PERMISSION),
    TEAMS_OPTION: (MANAGE_AUTH_PROVIDER_PERMISSION,),
    RESULTS_OPTION: (USE_ODATA_PERMISSION, GENERATE_SCAN_REPORT_PERMISSION, VIEW_RESULTS),
}


def get_from_export_options(export_options: Iterable[str]) -> list[str]:
    """Return the distinct permissions needed for the given export options."""
    output = [MANAGE_SYSTEM_SETTINGS]
    for option in export_options:
        output.extend(_OPTION_PERMISSIONS.get(option, ()))
    return list(dict.fromkeys(output))


def _get_from_jwt_claim(claims: Mapping[str, Any], key: str) -> list[Any]:
    if key not in claims:
        return []
    value = claims[key]
    if isinstance(value, list):
        return list(value)
    if value is None:
        raise ValueError("could not parse permissions")
    return [value]


def get_from_jwt_claims(jwt_claims: Mapping[str, Any], keys: Iterable[str]) -> list[Any]:
    """Collect the permissions held under ``keys`` in the token claims."""
    permissions: list[Any] = []
    for key in keys:
        try:
            permissions.extend(_get_from_jwt_claim(jwt_claims, key))
        except ValueError:
            raise ValueError(f"could not parse {key} permissions") from None
    return permissions


def get_description(permission: Any) -> str:
    """Return the human readable description of a permission."""
    try:
        return _PERMISSION_DESCRIPTIONS[permission]
    except (KeyError, TypeError):
        raise ValueError(f"unknown permission {permission}") from None


def get_missing(required: Iterable[Any], available: Iterable[Any]) -> list[Any]:
    """Return the required permissions that are not available."""
    available = list(available)
    return [permission for permission in required if permission not in available]