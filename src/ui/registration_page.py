"""Sign-up page: registration form, advanced search and registration list."""
from typing import List

import streamlit as st

from src.models.filter_state import FilterState
from src.models.registration import (
    LEVEL_VALUES,
    TRACK_VALUES,
    Registration,
    level_label,
    track_label,
)
from src.models.registration_form import RegistrationForm
from src.services.identity_service import get_or_create_user_id
from src.services.registration_service import (
    delete_registration,
    is_list_full,
    load_registrations,
    submit_registration,
)
from src.services.search_service import filter_registrations, footer_text, result_count_text
from src.ui.html_utils import escape_text, html_block
from src.ui.visitor_store import QueryParamStore
from src.utils import config

FORM_KEYS = {
    "name": "form_nom",
    "track": "form_filiere",
    "level": "form_niveau",
    "phone": "form_telephone",
}

# Widget keys; Streamlit drops them while the search panel is hidden
FILTER_KEYS = {
    "search": "search_nom",
    "track": "filter_filiere",
    "level": "filter_niveau",
}

# Filter values kept across runs whether or not the panel is shown
FILTER_VALUE_KEYS = {
    "search": "filter_value_search",
    "track": "filter_value_track",
    "level": "filter_value_level",
}

FEEDBACK_KEY = "registration_feedback"
USER_ID_STATE_KEY = "current_user_id"
SHOW_SEARCH_KEY = "show_advanced_search"

EVENT_TITLE = "Club Informatique"
EVENT_SUBTITLE = "Visite Académique ISTC - Institut ROCCAD"
FOOTER_NOTE = "Visite Académique ISTC - Institut Universitaire ROCCAD 2026"


def _ensure_page_state() -> None:
    """Ensure form, filter and visitor keys exist."""
    for key in list(FORM_KEYS.values()) + list(FILTER_VALUE_KEYS.values()):
        if key not in st.session_state:
            st.session_state[key] = ""

    if SHOW_SEARCH_KEY not in st.session_state:
        st.session_state[SHOW_SEARCH_KEY] = False

    if USER_ID_STATE_KEY not in st.session_state:
        st.session_state[USER_ID_STATE_KEY] = get_or_create_user_id(QueryParamStore())


def _form_from_state() -> RegistrationForm:
    return RegistrationForm(**{field: st.session_state.get(key, "") for field, key in FORM_KEYS.items()})


def _write_form_to_state(form: RegistrationForm) -> None:
    for field, key in FORM_KEYS.items():
        st.session_state[key] = getattr(form, field)


def _filters_from_state() -> FilterState:
    return FilterState(**{field: st.session_state.get(key, "") for field, key in FILTER_VALUE_KEYS.items()})


def _restore_filter_widgets() -> None:
    """Seed the filter widgets from the kept values before they are built."""
    for field, key in FILTER_KEYS.items():
        st.session_state[key] = st.session_state.get(FILTER_VALUE_KEYS[field], "")


def _sync_filters() -> None:
    """Filter widget callback: keep the new value outside widget state."""
    for field, key in FILTER_KEYS.items():
        if key in st.session_state:
            st.session_state[FILTER_VALUE_KEYS[field]] = st.session_state[key]


def _set_feedback(kind: str, message: str) -> None:
    st.session_state[FEEDBACK_KEY] = {"type": kind, "message": message}


def _handle_submit() -> None:
    """Submit button callback; runs before widgets are rebuilt."""
    form = _form_from_state()
    with st.spinner("Inscription en cours..."):
        success, message = submit_registration(form, st.session_state[USER_ID_STATE_KEY])

    if success:
        # submit_registration cleared the form on success
        _write_form_to_state(form)
        _set_feedback("success", message)
    else:
        _set_feedback("error", message)


def _handle_delete(registration_id: str) -> None:
    success, message = delete_registration(registration_id, st.session_state[USER_ID_STATE_KEY])
    _set_feedback("success" if success else "error", message)


def _handle_reset_filters() -> None:
    for key in list(FILTER_KEYS.values()) + list(FILTER_VALUE_KEYS.values()):
        st.session_state[key] = ""


def _toggle_search() -> None:
    st.session_state[SHOW_SEARCH_KEY] = not st.session_state[SHOW_SEARCH_KEY]


def _render_feedback() -> None:
    feedback = st.session_state.pop(FEEDBACK_KEY, None)
    if not feedback:
        return
    if feedback.get("type") == "success":
        st.success(feedback["message"])
    else:
        st.error(feedback["message"])


def _inject_page_styles():
    """Inject page specific styles."""
    st.markdown(
        html_block(
            """
            <style>
            .reg-header {
                display: flex;
                justify-content: space-between;
                align-items: center;
                padding: 20px 0 24px;
                border-bottom: 1px solid rgba(148, 163, 184, 0.25);
                margin-bottom: 24px;
            }
            .reg-header__title {
                margin: 0;
                font-size: 30px;
                font-weight: 700;
                background: linear-gradient(90deg, #2563eb 0%, #7c3aed 100%);
                -webkit-background-clip: text;
                color: transparent;
            }
            .reg-header__subtitle {
                color: #475569;
                font-size: 14px;
                margin-top: 4px;
            }
            .reg-header__count {
                font-size: 26px;
                font-weight: 700;
                color: #0f172a;
            }
            .reg-header__max {
                color: #475569;
                font-size: 14px;
            }
            .reg-card {
                background: #ffffff;
                border: 1px solid rgba(148, 163, 184, 0.3);
                border-radius: 12px;
                padding: 14px 18px;
                margin-bottom: 8px;
            }
            .reg-card__top {
                display: flex;
                align-items: center;
                gap: 10px;
                margin-bottom: 8px;
            }
            .reg-card__number {
                display: flex;
                align-items: center;
                justify-content: center;
                width: 24px;
                height: 24px;
                border-radius: 50%;
                background: linear-gradient(135deg, #3b82f6 0%, #8b5cf6 100%);
                color: #ffffff;
                font-size: 12px;
                font-weight: 700;
            }
            .reg-card__name {
                font-weight: 600;
                color: #0f172a;
            }
            .reg-card__grid {
                display: grid;
                grid-template-columns: 1fr 1fr;
                gap: 6px;
                font-size: 14px;
                margin-bottom: 8px;
            }
            .reg-card__label {
                color: #64748b;
            }
            .reg-card__meta {
                font-size: 12px;
                color: #475569;
            }
            .reg-card__phone {
                font-family: monospace;
                background: #f1f5f9;
                padding: 2px 8px;
                border-radius: 6px;
                margin-right: 8px;
            }
            .reg-notice {
                padding: 12px;
                border-radius: 10px;
                font-size: 14px;
                margin-bottom: 12px;
            }
            .reg-notice--info {
                background: #eff6ff;
                border: 1px solid #bfdbfe;
                color: #1e40af;
            }
            .reg-empty {
                text-align: center;
                padding: 40px 16px;
                color: #475569;
                background: #ffffff;
                border-radius: 12px;
                border: 1px solid rgba(148, 163, 184, 0.3);
            }
            .reg-footer {
                text-align: center;
                color: #475569;
                font-size: 13px;
                padding: 24px 0;
                margin-top: 40px;
                border-top: 1px solid rgba(148, 163, 184, 0.25);
            }
            </style>
            """
        ),
        unsafe_allow_html=True,
    )


def _header_html(count: int, max_inscriptions: int) -> str:
    """Return page header HTML with the registration counter."""
    return html_block(
        f"""
        <div class="reg-header">
            <div>
                <h1 class="reg-header__title">{EVENT_TITLE}</h1>
                <div class="reg-header__subtitle">{EVENT_SUBTITLE}</div>
            </div>
            <div>
                <span class="reg-header__count">👥 {count}</span>
                <span class="reg-header__max">/ {max_inscriptions}</span>
            </div>
        </div>
        """
    )


def _registration_card_html(registration: Registration, position: int) -> str:
    """Return HTML for one list entry; position is 1-based."""
    return html_block(
        f"""
        <div class="reg-card">
            <div class="reg-card__top">
                <span class="reg-card__number">{position}</span>
                <span class="reg-card__name">{escape_text(registration.name)}</span>
                <span>✅</span>
            </div>
            <div class="reg-card__grid">
                <div><span class="reg-card__label">Filière:</span><br/>{escape_text(track_label(registration.track))}</div>
                <div><span class="reg-card__label">Niveau:</span><br/>{escape_text(level_label(registration.level))}</div>
            </div>
            <div class="reg-card__meta">
                <span class="reg-card__phone">{escape_text(registration.phone)}</span>
                🕒 {escape_text(registration.registered_date)} à {escape_text(registration.registered_time)}
            </div>
        </div>
        """
    )


def _active_filters_html(filters: FilterState) -> str:
    """Return the active-filters notice, or an empty string when none apply."""
    if not filters.is_active():
        return ""
    return html_block(
        f"""
        <div class="reg-notice reg-notice--info">
            <strong>Filtres actifs :</strong>{escape_text(filters.summary())}
        </div>
        """
    )


def _empty_state_html(title: str, hint: str) -> str:
    return html_block(
        f"""
        <div class="reg-empty">
            <div style="font-size: 36px; margin-bottom: 8px;">👥</div>
            <div style="font-weight: 600;">{title}</div>
            <div style="font-size: 13px; margin-top: 4px;">{hint}</div>
        </div>
        """
    )


def _render_form(is_full: bool) -> None:
    """Render the sign-up form column."""
    st.markdown("### S'inscrire")

    if is_full:
        st.warning("Les inscriptions sont complètes")

    st.text_input("Nom complet", key=FORM_KEYS["name"], placeholder="Jean Dupont", disabled=is_full)
    st.selectbox(
        "Filière",
        options=[""] + TRACK_VALUES,
        format_func=lambda value: track_label(value) if value else "Choisir une filière",
        key=FORM_KEYS["track"],
        disabled=is_full,
    )
    st.selectbox(
        "Niveau",
        options=[""] + LEVEL_VALUES,
        format_func=lambda value: level_label(value) if value else "Choisir un niveau",
        key=FORM_KEYS["level"],
        disabled=is_full,
    )
    st.text_input("Téléphone", key=FORM_KEYS["phone"], placeholder="+237 6XX XXX XXX", disabled=is_full)

    st.button(
        "S'inscrire",
        key="submit_registration",
        type="primary",
        use_container_width=True,
        disabled=is_full,
        on_click=_handle_submit,
    )

    if is_full:
        st.error("⚠️ Limite d'inscriptions atteinte")


def _render_search_panel(filters: FilterState) -> None:
    """Render the advanced search toggle, inputs and active-filter notice."""
    show_search = st.session_state[SHOW_SEARCH_KEY]
    st.button(
        f"🔍 {'Masquer' if show_search else 'Afficher'} la recherche avancée",
        key="toggle_search",
        use_container_width=True,
        on_click=_toggle_search,
    )

    if show_search:
        _restore_filter_widgets()
        with st.container(border=True):
            st.text_input(
                "Rechercher par nom ou téléphone",
                key=FILTER_KEYS["search"],
                placeholder="Entrez un nom ou un numéro...",
                on_change=_sync_filters,
            )
            st.selectbox(
                "Filière",
                options=[""] + TRACK_VALUES,
                format_func=lambda value: track_label(value) if value else "Toutes les filières",
                key=FILTER_KEYS["track"],
                on_change=_sync_filters,
            )
            st.selectbox(
                "Niveau",
                options=[""] + LEVEL_VALUES,
                format_func=lambda value: level_label(value) if value else "Tous les niveaux",
                key=FILTER_KEYS["level"],
                on_change=_sync_filters,
            )
            if filters.is_active():
                st.button(
                    "✖ Réinitialiser les filtres",
                    key="reset_filters",
                    use_container_width=True,
                    on_click=_handle_reset_filters,
                )

    notice = _active_filters_html(filters)
    if notice:
        st.markdown(notice, unsafe_allow_html=True)


def _render_list(registrations: List[Registration], filters: FilterState, max_inscriptions: int) -> None:
    """Render the filtered registration list and counters."""
    user_id = st.session_state[USER_ID_STATE_KEY]

    if not registrations:
        st.markdown(
            _empty_state_html("Aucune inscription pour le moment", "Soyez le premier à vous inscrire !"),
            unsafe_allow_html=True,
        )
        return

    filtered = filter_registrations(registrations, filters)

    if not filtered:
        st.markdown(
            _empty_state_html(
                "Aucun résultat ne correspond à vos critères",
                "Essayez de modifier vos filtres de recherche",
            ),
            unsafe_allow_html=True,
        )
    else:
        st.markdown(f"**{result_count_text(len(filtered), len(registrations), filters)}**")

        for position, registration in enumerate(filtered, 1):
            card_col, action_col = st.columns([12, 1])
            card_col.markdown(_registration_card_html(registration, position), unsafe_allow_html=True)
            with action_col:
                if registration.is_owned_by(user_id):
                    st.button(
                        "🗑️",
                        key=f"delete_{registration.id}",
                        help="Supprimer votre inscription",
                        on_click=_handle_delete,
                        args=(registration.id,),
                    )
                else:
                    st.button(
                        "🗑️",
                        key=f"delete_{registration.id}",
                        help="Vous ne pouvez pas supprimer cette inscription",
                        disabled=True,
                    )

    st.info(footer_text(len(registrations), max_inscriptions))


def render_registration_page():
    """Render the whole sign-up page."""
    _ensure_page_state()
    _inject_page_styles()

    max_inscriptions = config.get_max_inscriptions()
    registrations = load_registrations()
    is_full = is_list_full(registrations, max_inscriptions)
    filters = _filters_from_state()

    st.markdown(_header_html(len(registrations), max_inscriptions), unsafe_allow_html=True)
    _render_feedback()

    form_col, list_col = st.columns([1, 2], gap="large")

    with form_col:
        _render_form(is_full)

    with list_col:
        _render_search_panel(filters)
        _render_list(registrations, filters, max_inscriptions)

    st.markdown(f"<div class='reg-footer'>{FOOTER_NOTE}</div>", unsafe_allow_html=True)
