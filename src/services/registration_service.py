"""Registration service: load, validate, dedupe, cap, persist and delete sign-ups."""
import json
import logging
import time
from datetime import datetime
from typing import List, Optional, Tuple

from src.models.registration import Registration
from src.models.registration_form import RegistrationForm
from src.services.identity_service import generate_registration_id
from src.services.storage_service import KeyValueStore
from src.utils import config
from src.utils.date_utils import format_registration_date, format_registration_time
from src.utils.exceptions import PermissionDeniedError, RegistrationNotFoundError
from src.utils.validation import (
    normalize_phone,
    validate_level,
    validate_name,
    validate_phone,
    validate_track,
)

logger = logging.getLogger(__name__)

INSCRIPTIONS_KEY = "inscriptions"

# Shared store, built lazily from config
_store: Optional[KeyValueStore] = None


def _clear_cache():
    """Drop the shared store so the next call re-reads config."""
    global _store
    _store = None


def get_store() -> KeyValueStore:
    """Return the shared key-value store."""
    global _store

    if _store is None:
        _store = KeyValueStore(config.get_store_file())
    return _store


def load_registrations(store: Optional[KeyValueStore] = None) -> List[Registration]:
    """
    Load the persisted registration list.

    Returns:
        List[Registration]: newest first, exactly as stored

    Behavior:
        - Missing entry → empty list
        - Unparseable entry → logged, empty list
        - Unreadable individual records are skipped with a warning
    """
    store = store or get_store()
    raw = store.get_item(INSCRIPTIONS_KEY)
    if not raw:
        return []

    try:
        records = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse stored registrations: {e}")
        return []

    if not isinstance(records, list):
        logger.error("Stored registrations are not a list, ignoring them")
        return []

    registrations = []
    for record in records:
        try:
            registrations.append(Registration.from_dict(record))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping unreadable registration record {record!r}: {e}")

    return registrations


def save_registrations(registrations: List[Registration], store: Optional[KeyValueStore] = None) -> None:
    """
    Persist the whole list.

    Raises:
        IOError: If the store file can't be written
    """
    store = store or get_store()
    payload = json.dumps([r.to_dict() for r in registrations], ensure_ascii=False)
    store.set_item(INSCRIPTIONS_KEY, payload)


def is_phone_registered(phone: str, registrations: List[Registration]) -> bool:
    """Check whether phone is already in the list, ignoring whitespace."""
    wanted = normalize_phone(phone)
    return any(normalize_phone(r.phone) == wanted for r in registrations)


def is_list_full(registrations: List[Registration], max_inscriptions: Optional[int] = None) -> bool:
    if max_inscriptions is None:
        max_inscriptions = config.get_max_inscriptions()
    return len(registrations) >= max_inscriptions


def validate_registration_form(
    form: RegistrationForm,
    registrations: List[Registration],
    max_inscriptions: Optional[int] = None,
) -> Tuple[bool, str]:
    """
    Validate a form submission against the current list.

    Args:
        form: Submitted form values
        registrations: Current list
        max_inscriptions: Capacity (default from config)

    Returns:
        Tuple of (is_valid: bool, error_message: str); the first failing
        rule wins in this order: name, track, level, phone format,
        duplicate phone, capacity
    """
    if max_inscriptions is None:
        max_inscriptions = config.get_max_inscriptions()

    for is_valid, error_msg in (
        validate_name(form.name),
        validate_track(form.track),
        validate_level(form.level),
        validate_phone(form.clean_phone()),
    ):
        if not is_valid:
            return False, error_msg

    if is_phone_registered(form.clean_phone(), registrations):
        return False, "Ce numéro de téléphone est déjà inscrit"

    if is_list_full(registrations, max_inscriptions):
        return False, f"Maximum d'inscriptions atteint ({max_inscriptions})"

    return True, ""


def build_registration(form: RegistrationForm, user_id: str, now: Optional[datetime] = None) -> Registration:
    """Create a new registration owned by user_id, stamped with now."""
    now = now or datetime.now()
    return Registration(
        id=generate_registration_id(),
        user_id=user_id,
        name=form.name.strip(),
        track=form.track,
        level=form.level,
        phone=form.phone.strip(),
        registered_date=format_registration_date(now),
        registered_time=format_registration_time(now),
    )


def submit_registration(
    form: RegistrationForm,
    user_id: str,
    store: Optional[KeyValueStore] = None,
    max_inscriptions: Optional[int] = None,
    delay: Optional[float] = None,
) -> Tuple[bool, str]:
    """
    Register the visitor described by form.

    Args:
        form: Submitted form values; cleared on success
        user_id: Current visitor identifier, recorded as owner
        store: Key-value store (default: shared store)
        max_inscriptions: Capacity (default from config)
        delay: Seconds to wait before confirming (default from config)

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Inscription réussie ! 🎉") on success
        - (False, error_message) on validation failure

    Behavior:
        - Validates against the stored list, waits, then re-checks
          duplicates and capacity under the store lock
        - Prepends the new entry and persists the whole list
    """
    store = store or get_store()
    if max_inscriptions is None:
        max_inscriptions = config.get_max_inscriptions()
    if delay is None:
        delay = config.get_submit_delay()

    is_valid, error_msg = validate_registration_form(
        form, load_registrations(store), max_inscriptions
    )
    if not is_valid:
        logger.info(f"Registration refused: {error_msg}")
        return False, error_msg

    if delay > 0:
        time.sleep(delay)

    try:
        with store.lock():
            # Reload to see entries saved by other sessions during the delay
            registrations = load_registrations(store)
            is_valid, error_msg = validate_registration_form(form, registrations, max_inscriptions)
            if not is_valid:
                logger.info(f"Registration refused: {error_msg}")
                return False, error_msg

            registration = build_registration(form, user_id)
            save_registrations([registration] + registrations, store)

    except (IOError, TimeoutError) as e:
        logger.error(f"Store operation failed during registration: {e}")
        return False, "Erreur système, veuillez réessayer"

    logger.info(f"Registered {registration.name} ({registration.id}) for {user_id}")
    form.clear()
    return True, "Inscription réussie ! 🎉"


def remove_owned_registration(
    registrations: List[Registration],
    registration_id: str,
    user_id: str,
) -> List[Registration]:
    """
    Return the list without registration_id.

    Raises:
        RegistrationNotFoundError: If no registration has that ID
        PermissionDeniedError: If user_id is not the owner
    """
    target = next((r for r in registrations if r.id == registration_id), None)
    if target is None:
        raise RegistrationNotFoundError(registration_id)
    if not target.is_owned_by(user_id):
        raise PermissionDeniedError(registration_id)
    return [r for r in registrations if r.id != registration_id]


def delete_registration(
    registration_id: str,
    user_id: str,
    store: Optional[KeyValueStore] = None,
) -> Tuple[bool, str]:
    """
    Delete one of the visitor's own registrations.

    Returns:
        Tuple of (success: bool, message: str)
        - (True, "Inscription supprimée")
        - (False, "Inscription non trouvée") if the ID is unknown
        - (False, "Vous ne pouvez supprimer que vos propres inscriptions")
    """
    store = store or get_store()

    try:
        with store.lock():
            registrations = load_registrations(store)
            remaining = remove_owned_registration(registrations, registration_id, user_id)
            save_registrations(remaining, store)

    except RegistrationNotFoundError:
        logger.warning(f"Delete of unknown registration {registration_id} by {user_id}")
        return False, "Inscription non trouvée"
    except PermissionDeniedError:
        logger.warning(f"Visitor {user_id} denied deleting registration {registration_id}")
        return False, "Vous ne pouvez supprimer que vos propres inscriptions"
    except (IOError, TimeoutError) as e:
        logger.error(f"Store operation failed during deletion: {e}")
        return False, "Erreur système, veuillez réessayer"

    logger.info(f"Registration {registration_id} deleted by its owner")
    return True, "Inscription supprimée"
