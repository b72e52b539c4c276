"""Access to preset details."""

from typing import Any

from .interfaces import PresetRepo


class PresetProvider:
    """Fetches preset details from a preset repository."""

    def __init__(self, preset_repo: PresetRepo) -> None:
        self._preset_repo = preset_repo

    def get_preset_details(self, preset_id: int) -> Any:
        return self._preset_repo.get_preset_details(preset_id)