"""User preferences kept beside the records: theme and privacy notice."""

from enum import Enum

from hustle_planner.services.storage import KeyValueStore


THEME_KEY = "hustle-theme"
PRIVACY_NOTICE_KEY = "privacy-notice-seen"


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"


class Preferences:
    """Typed access to the preference keys of the key-value store."""

    def __init__(self, kv_store: KeyValueStore, default_theme: Theme = Theme.DARK):
        self._kv = kv_store
        self._default_theme = default_theme

    @property
    def theme(self) -> Theme:
        stored = self._kv.get(THEME_KEY)
        try:
            return Theme(stored)
        except ValueError:
            return self._default_theme

    @theme.setter
    def theme(self, value: Theme) -> None:
        self._kv.set(THEME_KEY, Theme(value).value)

    @property
    def privacy_notice_acknowledged(self) -> bool:
        return self._kv.get(PRIVACY_NOTICE_KEY, False) is True

    def acknowledge_privacy_notice(self) -> None:
        """One-time flag; there is no way to un-acknowledge."""
        self._kv.set(PRIVACY_NOTICE_KEY, True)
