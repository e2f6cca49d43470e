"""Visitor identifier generation and lookup."""
import logging
import random
import string

from src.utils.date_utils import epoch_millis

logger = logging.getLogger(__name__)

USER_ID_KEY = "userId"

_BASE36 = string.digits + string.ascii_lowercase


def generate_user_id() -> str:
    """
    Create a new visitor identifier.

    Returns:
        "user-<epoch ms>-<9 random base-36 chars>"
    """
    suffix = "".join(random.choice(_BASE36) for _ in range(9))
    return f"user-{epoch_millis()}-{suffix}"


def generate_registration_id() -> str:
    """Create a registration ID from the current time and a random float."""
    return f"{epoch_millis()}-{random.random()}"


def get_or_create_user_id(store) -> str:
    """
    Return the visitor identifier held in store, creating it on first use.

    Args:
        store: Object with get_item(key) and set_item(key, value)

    Returns:
        The existing or newly stored identifier
    """
    user_id = store.get_item(USER_ID_KEY)
    if user_id:
        return user_id

    user_id = generate_user_id()
    store.set_item(USER_ID_KEY, user_id)
    logger.info(f"Generated new visitor identifier {user_id}")
    return user_id
