from __future__ import annotations

import reflex as rx

from .components.header import app_header
from .state import AppState


def app_shell(*children: rx.Component) -> rx.Component:
    """Wrap pages in the common application shell."""

    return rx.box(
        app_header(),
        rx.container(
            rx.box(*children, width="100%", padding_y="6"),
            size="4",
        ),
        width="100%",
        min_height="100vh",
        background=rx.cond(AppState.dark_mode, "#111827", "#f3f4f6"),
        color=rx.cond(AppState.dark_mode, "#f3f4f6", "#1f2937"),
    )
