"""Data validation utilities."""
import re
from typing import Tuple

from src.models.registration import LEVEL_VALUES, TRACK_VALUES

# Cameroonian mobile numbers, optional +237 / 237 prefix
PHONE_PATTERN = re.compile(r"^(\+237|237)?[6][0-9]{8,9}$")


def normalize_phone(phone: str) -> str:
    """
    Normalize phone number for format and duplicate checks.

    Args:
        phone: Phone number as typed

    Returns:
        Phone number with all whitespace removed

    Behavior:
        - "+237 677 12 34 56" → "+237677123456"
        - Leaves every other character untouched
    """
    return re.sub(r"\s", "", phone or "")


def is_valid_phone(phone: str) -> bool:
    """Check a phone number against the Cameroonian mobile pattern."""
    return PHONE_PATTERN.match(normalize_phone(phone)) is not None


def validate_name(name: str) -> Tuple[bool, str]:
    """
    Validate full name.

    Args:
        name: Name to validate

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if valid
        - (False, "Veuillez entrer votre nom complet") if empty
    """
    if not name or not name.strip():
        return False, "Veuillez entrer votre nom complet"
    return True, ""


def validate_track(track: str) -> Tuple[bool, str]:
    """
    Validate selected track.

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (False, "Veuillez sélectionner votre filière") if nothing selected
        - (False, "Filière inconnue") if not in the catalogue
    """
    if not track:
        return False, "Veuillez sélectionner votre filière"
    if track not in TRACK_VALUES:
        return False, "Filière inconnue"
    return True, ""


def validate_level(level: str) -> Tuple[bool, str]:
    """
    Validate selected level.

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (False, "Veuillez sélectionner votre niveau") if nothing selected
        - (False, "Niveau inconnu") if not in the catalogue
    """
    if not level:
        return False, "Veuillez sélectionner votre niveau"
    if level not in LEVEL_VALUES:
        return False, "Niveau inconnu"
    return True, ""


def validate_phone(phone: str) -> Tuple[bool, str]:
    """
    Validate phone number format.

    Args:
        phone: Phone number as typed (spaces allowed)

    Returns:
        Tuple of (is_valid: bool, error_message: str)
    """
    if not is_valid_phone(phone):
        return False, "Veuillez entrer un numéro de téléphone camerounais valide (+237 ou 6...)"
    return True, ""
