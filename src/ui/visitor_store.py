"""Per-browser storage for the visitor identifier."""
from typing import Optional

import streamlit as st


class QueryParamStore:
    """
    Key-value store kept in the page URL query string.

    Values survive a reload of the same tab, which is what ties a visitor
    identifier to one browser.
    """

    def get_item(self, key: str) -> Optional[str]:
        return st.query_params.get(key)

    def set_item(self, key: str, value: str) -> None:
        st.query_params[key] = value

    def remove_item(self, key: str) -> None:
        if key in st.query_params:
            del st.query_params[key]
