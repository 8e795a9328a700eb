"""Supabase repository for display preferences."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from site_ledger.domain.preferences import DisplayPreferences
from site_ledger.services.preferences import PreferencesRepository


@dataclass
class SupabasePreferencesRepository(PreferencesRepository):
    """Supabase implementation for display preferences."""

    client: Client

    def get_preferences(self, user_id: str) -> DisplayPreferences | None:
        """Return stored preferences for a user."""
        response = (
            self.client.table("user_preferences")
            .select("show_holidays")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return DisplayPreferences(show_holidays=bool(row.get("show_holidays", True)))

    def save_preferences(self, user_id: str, preferences: DisplayPreferences) -> None:
        """Insert or update the user's preferences."""
        self.client.table("user_preferences").upsert(
            {
                "user_id": user_id,
                "show_holidays": preferences.show_holidays,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
