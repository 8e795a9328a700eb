"""Display preferences service."""

from dataclasses import dataclass
from typing import Protocol

from site_ledger.domain.preferences import DisplayPreferences


class PreferencesRepository(Protocol):
    """Persistence interface for display preferences."""

    def get_preferences(self, user_id: str) -> DisplayPreferences | None:
        """Return stored preferences for a user, if any."""

    def save_preferences(self, user_id: str, preferences: DisplayPreferences) -> None:
        """Persist preferences for a user."""


@dataclass
class PreferencesService:
    """Loads preferences at session start and saves them on change."""

    repository: PreferencesRepository

    def load(self, user_id: str) -> DisplayPreferences:
        """Return the user's preferences or the defaults."""
        return self.repository.get_preferences(user_id) or DisplayPreferences()

    def set_show_holidays(
        self, user_id: str, show_holidays: bool
    ) -> DisplayPreferences:
        """Update the holiday toggle, saving only when it changes."""
        current = self.load(user_id)
        if current.show_holidays == show_holidays:
            return current
        updated = DisplayPreferences(show_holidays=show_holidays)
        self.repository.save_preferences(user_id, updated)
        return updated
