"""Form state for the sign-up form."""
import re
from dataclasses import dataclass


@dataclass
class RegistrationForm:
    """Values currently typed or selected in the sign-up form."""

    name: str = ""
    track: str = ""
    level: str = ""
    phone: str = ""

    def clean_phone(self) -> str:
        """Phone number with every whitespace character removed."""
        return re.sub(r"\s", "", self.phone or "")

    def clear(self) -> None:
        """Reset every field to empty."""
        self.name = ""
        self.track = ""
        self.level = ""
        self.phone = ""

    def is_empty(self) -> bool:
        return not (self.name or self.track or self.level or self.phone)
