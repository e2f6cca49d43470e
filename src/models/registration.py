"""Registration data model for the academic visit sign-up list."""
from dataclasses import dataclass
from typing import Any, Dict

# (value, label) pairs offered by the selects
TRACKS = [
    ("genie-logiciel", "Génie Logiciel"),
    ("reseau-securite", "Réseau et Sécurité"),
    ("iw", "IW"),
    ("cmn", "CMN"),
]

LEVELS = [
    ("bts1", "BTS 1"),
    ("bts2", "BTS 2"),
    ("licence", "Licence"),
    ("master1", "Master 1"),
    ("master2", "Master 2"),
]

TRACK_VALUES = [value for value, _ in TRACKS]
LEVEL_VALUES = [value for value, _ in LEVELS]


def track_label(value: str) -> str:
    """Return the display label of a track, or the raw value if unknown."""
    return dict(TRACKS).get(value, value)


def level_label(value: str) -> str:
    """Return the display label of a level, or the raw value if unknown."""
    return dict(LEVELS).get(value, value)


@dataclass
class Registration:
    """One sign-up for the visit."""

    id: str
    user_id: str
    name: str
    track: str
    level: str
    phone: str
    registered_date: str
    registered_time: str

    def __post_init__(self):
        """Validate registration data."""
        if not self.id or not self.id.strip():
            raise ValueError("Registration ID cannot be empty")

        if not self.name or not self.name.strip():
            raise ValueError("Name cannot be empty")

        if not self.phone or not self.phone.strip():
            raise ValueError("Phone cannot be empty")

    def is_owned_by(self, user_id: str) -> bool:
        """Check whether the given visitor created this registration."""
        return bool(user_id) and self.user_id == user_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the stored JSON keys."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "nom": self.name,
            "filiere": self.track,
            "niveau": self.level,
            "telephone": self.phone,
            "dateInscription": self.registered_date,
            "heureInscription": self.registered_time,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Registration":
        """
        Build a registration from a stored record.

        Raises:
            KeyError: If a required key is missing
            ValueError: If a field fails validation
        """
        return cls(
            id=str(data["id"]),
            user_id=data.get("userId", ""),
            name=data["nom"],
            track=data.get("filiere", ""),
            level=data.get("niveau", ""),
            phone=data["telephone"],
            registered_date=data.get("dateInscription", ""),
            registered_time=data.get("heureInscription", ""),
        )
