"""Utilities for preparing HTML snippets before rendering in Streamlit."""
import html
from textwrap import dedent


def html_block(template: str) -> str:
    """
    Normalize multi-line HTML so Streamlit doesn't treat it as Markdown code.

    Lines with four or more leading spaces render as code blocks in
    Markdown, so every line is dedented and left-stripped.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def escape_text(value: str) -> str:
    """Escape visitor-typed text before placing it inside markup."""
    return html.escape(value or "", quote=True)
