import pytest

from sastexport import permissions
from sastexport.options import RESULTS_OPTION, TEAMS_OPTION, USERS_OPTION
from sastexport.permissions import (
    get_description,
    get_from_export_options,
    get_from_jwt_claims,
    get_missing,
)

AUTH = permissions.MANAGE_AUTH_PROVIDER_PERMISSION
ROLES = permissions.MANAGE_ROLES_PERMISSION
SETTINGS = permissions.MANAGE_SYSTEM_SETTINGS
ODATA = permissions.USE_ODATA_PERMISSION
REPORT = permissions.GENERATE_SCAN_REPORT_PERMISSION
VIEW = permissions.VIEW_RESULTS


@pytest.mark.parametrize(
    ("export_options", "expected"),
    [
        ([USERS_OPTION], [AUTH, ROLES, SETTINGS]),
        ([TEAMS_OPTION], [AUTH, SETTINGS]),
        ([RESULTS_OPTION], [ODATA, REPORT, VIEW, SETTINGS]),
        ([USERS_OPTION, TEAMS_OPTION], [AUTH, ROLES, SETTINGS]),
        ([USERS_OPTION, RESULTS_OPTION], [AUTH, ROLES, ODATA, REPORT, VIEW, SETTINGS]),
        ([RESULTS_OPTION, USERS_OPTION], [AUTH, ROLES, ODATA, REPORT, VIEW, SETTINGS]),
        ([TEAMS_OPTION, RESULTS_OPTION], [AUTH, ODATA, REPORT, VIEW, SETTINGS]),
    ],
)
def test_get_from_export_options(export_options, expected):
    result = get_from_export_options(export_options)
    assert sorted(result) == sorted(expected)
    assert len(result) == len(set(result))


def test_get_all_from_jwt_claims():
    claims = {"aaa": ["a", "b"], "bbb": ["c", "d"], "ccc": ["e", "f"]}
    result = get_from_jwt_claims(claims, ["aaa", "bbb"])
    assert sorted(result) == ["a", "b", "c", "d"]


def test_claims_without_permission():
    assert get_from_jwt_claims({"test": "test"}, ["permissions"]) == []


def test_claims_with_one_permission():
    claims = {"test": "test", "permissions": "use-odata"}
    assert get_from_jwt_claims(claims, ["permissions"]) == ["use-odata"]


def test_claims_with_more_than_one_permission():
    claims = {"test": "test", "permissions": ["use-odata", "generate-scan-report"]}
    result = get_from_jwt_claims(claims, ["permissions"])
    assert sorted(result) == sorted(["use-odata", "generate-scan-report"])


def test_claims_with_null_permission_fails():
    with pytest.raises(ValueError, match="could not parse permissions permissions"):
        get_from_jwt_claims({"permissions": None}, ["permissions"])


@pytest.mark.parametrize(
    ("required", "available", "expected"),
    [
        ([], [], []),
        ([], ["a", "b", "c"], []),
        (["a", "b"], ["a", "b", "c"], []),
        (["a", "b", "c"], ["a", "b"], ["c"]),
        (["a", "b", "c", "d", "e", "f"], ["a", "b", "d", "f"], ["c", "e"]),
    ],
)
def test_get_missing(required, available, expected):
    assert sorted(get_missing(required, available)) == expected


@pytest.mark.parametrize(
    ("permission", "expected"),
    [
        (ODATA, "Sast > API > Use Odata"),
        (REPORT, "Sast > Reports > Generate Scan Report"),
        (VIEW, "Sast > Scan Results > View Results"),
        (AUTH, "Access Control > General > Manage Authentication Providers"),
        (ROLES, "Access Control > General > Manage Roles"),
    ],
)
def test_get_description(permission, expected):
    assert get_description(permission) == expected


def test_get_description_unknown():
    with pytest.raises(ValueError) as excinfo:
        get_description("invalid")
    assert str(excinfo.value) == "unknown permission invalid"