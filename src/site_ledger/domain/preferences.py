"""Domain models for display preferences."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DisplayPreferences:
    """Per-user display toggles for the attendance views."""

    show_holidays: bool = True
