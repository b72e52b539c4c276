"""Export options selectable from the command line."""

USERS_OPTION = "users"
TEAMS_OPTION = "teams"
RESULTS_OPTION = "triage"
PROJECTS_OPTION = "projects"
QUERIES_OPTION = "queries"
PRESETS_OPTION = "presets"


def get_options() -> list[str]:
    """Return every export option, in the default order."""
    return [
        USERS_OPTION,
        TEAMS_OPTION,
        RESULTS_OPTION,
        PROJECTS_OPTION,
        QUERIES_OPTION,
        PRESETS_OPTION,
    ]