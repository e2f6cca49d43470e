"""Unit tests for validation utilities."""
import pytest

from src.utils.validation import (
    is_valid_phone,
    normalize_phone,
    validate_level,
    validate_name,
    validate_phone,
    validate_track,
)


class TestPhoneValidation:
    """Test Cameroonian phone number rules."""

    @pytest.mark.parametrize("phone", [
        "+237677123456",
        "237677123456",
        "677123456",
        "6771234567",
        "+237 677 12 34 56",
        "6 77 12 34 56",
    ])
    def test_accepts_valid_numbers(self, phone):
        assert is_valid_phone(phone) is True

    @pytest.mark.parametrize("phone", [
        "123456789",
        "77123456",
        "67712345",
        "+33677123456",
        "+2376771234567890",
        "6771234a56",
        "",
    ])
    def test_rejects_invalid_numbers(self, phone):
        assert is_valid_phone(phone) is False

    def test_validate_phone_message(self):
        """Test the error message for a bad number."""
        is_valid, message = validate_phone("123456789")
        assert is_valid is False
        assert message == "Veuillez entrer un numéro de téléphone camerounais valide (+237 ou 6...)"

    def test_validate_phone_ok(self):
        assert validate_phone("677123456") == (True, "")

    def test_normalize_phone(self):
        assert normalize_phone("+237 677\t123 456") == "+237677123456"
        assert normalize_phone(None) == ""


class TestFieldValidation:
    """Test name, track and level validation."""

    def test_empty_name(self):
        assert validate_name("") == (False, "Veuillez entrer votre nom complet")
        assert validate_name("   ") == (False, "Veuillez entrer votre nom complet")

    def test_valid_name(self):
        assert validate_name("Jean Dupont") == (True, "")

    def test_missing_track(self):
        assert validate_track("") == (False, "Veuillez sélectionner votre filière")

    def test_unknown_track(self):
        assert validate_track("physique") == (False, "Filière inconnue")

    def test_valid_track(self):
        assert validate_track("iw") == (True, "")

    def test_missing_level(self):
        assert validate_level("") == (False, "Veuillez sélectionner votre niveau")

    def test_unknown_level(self):
        assert validate_level("doctorat") == (False, "Niveau inconnu")

    def test_valid_level(self):
        assert validate_level("master2") == (True, "")
