"""Integration tests for the sign-up, search and delete flow."""
import json

import pytest

from src.models.filter_state import FilterState
from src.models.registration_form import RegistrationForm
from src.services import registration_service
from src.services.identity_service import get_or_create_user_id
from src.services.registration_service import (
    delete_registration,
    is_list_full,
    load_registrations,
    submit_registration,
)
from src.services.search_service import filter_registrations, footer_text, result_count_text
from src.services.storage_service import KeyValueStore


@pytest.fixture
def configured_store(tmp_path, monkeypatch):
    """Point the shared store at a temp file with a small cap and no delay."""
    store_path = tmp_path / "data" / "local_store.json"
    monkeypatch.setenv("REGISTRATION_STORE_FILE", str(store_path))
    monkeypatch.setenv("MAX_INSCRIPTIONS", "5")
    monkeypatch.setenv("SUBMIT_DELAY_SECONDS", "0")
    registration_service._clear_cache()

    yield store_path

    registration_service._clear_cache()


class TestRegistrationFlow:
    """Two visitors sharing one store."""

    def test_full_flow(self, configured_store):
        """Sign up, search, refuse a foreign delete, delete own entry."""
        alice = get_or_create_user_id(KeyValueStore(str(configured_store.parent / "alice.json")))
        bob = get_or_create_user_id(KeyValueStore(str(configured_store.parent / "bob.json")))
        assert alice != bob

        # Step 1: two visitors sign up
        success, _ = submit_registration(
            RegistrationForm(name="Alice Mbarga", track="iw", level="licence", phone="677111111"), alice
        )
        assert success is True
        success, _ = submit_registration(
            RegistrationForm(name="Bob Fotso", track="cmn", level="bts2", phone="+237 699 222 222"), bob
        )
        assert success is True

        # Step 2: newest first, stored with the localStorage record keys
        registrations = load_registrations()
        assert [r.name for r in registrations] == ["Bob Fotso", "Alice Mbarga"]
        stored = json.loads(json.loads(configured_store.read_text(encoding="utf-8"))["inscriptions"])
        assert set(stored[0]) == {
            "id", "userId", "nom", "filiere", "niveau",
            "telephone", "dateInscription", "heureInscription",
        }

        # Step 3: search
        filters = FilterState(track="iw")
        filtered = filter_registrations(registrations, filters)
        assert [r.name for r in filtered] == ["Alice Mbarga"]
        assert result_count_text(len(filtered), len(registrations), filters) == "1 résultat(s) (sur 2 total)"

        # Step 4: Bob can't delete Alice's entry
        alice_entry = filtered[0]
        success, message = delete_registration(alice_entry.id, bob)
        assert success is False
        assert message == "Vous ne pouvez supprimer que vos propres inscriptions"

        # Step 5: Alice deletes her own entry
        success, message = delete_registration(alice_entry.id, alice)
        assert success is True
        assert [r.name for r in load_registrations()] == ["Bob Fotso"]

    def test_capacity_from_config(self, configured_store):
        """The configured cap of 5 closes the list."""
        for i in range(5):
            success, _ = submit_registration(
                RegistrationForm(name=f"Étudiant {i}", track="iw", level="bts1", phone=f"67700000{i}"), "user-1"
            )
            assert success is True

        assert is_list_full(load_registrations()) is True
        assert footer_text(5) == "5 inscrit(s) (100% de la capacité)"

        success, message = submit_registration(
            RegistrationForm(name="En retard", track="iw", level="bts1", phone="677000009"), "user-1"
        )
        assert success is False
        assert message == "Maximum d'inscriptions atteint (5)"

    def test_list_reloaded_verbatim(self, configured_store):
        """A list written by another session is read back unchanged."""
        record = {
            "id": "1760770000000-0.42",
            "userId": "user-1760770000000-abcdefghi",
            "nom": "Hélène Ngo",
            "filiere": "reseau-securite",
            "niveau": "master2",
            "telephone": "+237 690 00 00 00",
            "dateInscription": "1 septembre 2026",
            "heureInscription": "08:15",
        }
        KeyValueStore(str(configured_store)).set_item("inscriptions", json.dumps([record]))

        registrations = load_registrations()
        assert [r.to_dict() for r in registrations] == [record]
