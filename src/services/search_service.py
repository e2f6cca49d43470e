"""Filtered view of the registration list and the counters shown around it."""
import math
from typing import List, Optional

from src.models.filter_state import FilterState
from src.models.registration import Registration
from src.utils import config

# Share of the cap from which the footer shows the fill percentage
CAPACITY_WARNING_RATIO = 0.8


def filter_registrations(registrations: List[Registration], filters: FilterState) -> List[Registration]:
    """
    Apply filters to the list, preserving order.

    Args:
        registrations: Full list, newest first
        filters: Current filter state

    Returns:
        List[Registration]: entries matching every active filter
    """
    return [r for r in registrations if filters.matches(r)]


def result_count_text(filtered_count: int, total_count: int, filters: FilterState) -> str:
    """
    Result line above the list.

    Example:
        "3 résultat(s) (sur 12 total)" when filters are active
    """
    text = f"{filtered_count} résultat(s)"
    if filters.is_active():
        text += f" (sur {total_count} total)"
    return text


def capacity_percentage(count: int, max_inscriptions: Optional[int] = None) -> int:
    """Fill level of the list as a rounded percentage."""
    if max_inscriptions is None:
        max_inscriptions = config.get_max_inscriptions()
    return math.floor(count / max_inscriptions * 100 + 0.5)


def footer_text(count: int, max_inscriptions: Optional[int] = None) -> str:
    """
    Footer counter.

    Behavior:
        - "N inscrit(s)" always
        - Appends "(P% de la capacité)" once count reaches 80% of the cap
    """
    if max_inscriptions is None:
        max_inscriptions = config.get_max_inscriptions()

    text = f"{count} inscrit(s)"
    if count >= max_inscriptions * CAPACITY_WARNING_RATIO:
        text += f" ({capacity_percentage(count, max_inscriptions)}% de la capacité)"
    return text
