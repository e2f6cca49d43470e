"""Filter state for the registration list search panel."""
from dataclasses import dataclass
from typing import List

from src.models.registration import Registration, level_label, track_label


@dataclass
class FilterState:
    """Search text plus optional track and level filters."""

    search: str = ""
    track: str = ""
    level: str = ""

    def is_active(self) -> bool:
        """Check if any filter narrows the list."""
        return self.search != "" or self.track != "" or self.level != ""

    def reset(self) -> None:
        self.search = ""
        self.track = ""
        self.level = ""

    def matches(self, registration: Registration) -> bool:
        """
        Check a registration against every filter.

        Behavior:
            - Search text matches the name or the phone as a substring,
              ignoring case
            - Track and level must match exactly when set
            - Empty filters match everything
        """
        matches_search = (
            self.search == ""
            or self.search.lower() in registration.name.lower()
            or self.search.lower() in registration.phone.lower()
        )
        matches_track = self.track == "" or registration.track == self.track
        matches_level = self.level == "" or registration.level == self.level

        return matches_search and matches_track and matches_level

    def summary(self) -> str:
        """
        Describe the active filters with display labels.

        Example:
            ' Nom/Tél: "jean" • Filière: "IW"'
        """
        parts: List[str] = []
        if self.search:
            parts.append(f' Nom/Tél: "{self.search}"')
        if self.track:
            parts.append(f' • Filière: "{track_label(self.track)}"')
        if self.level:
            parts.append(f' • Niveau: "{level_label(self.level)}"')
        return "".join(parts)
