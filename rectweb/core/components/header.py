from __future__ import annotations

import reflex as rx

from ..state import AppState


def app_header() -> rx.Component:
    """Render the persistent application header."""

    theme_icon = rx.cond(AppState.dark_mode, rx.icon("sun"), rx.icon("moon"))

    return rx.box(
        rx.container(
            rx.hstack(
                rx.icon("ruler"),
                rx.heading("Rectangle Distance", size="5"),
                rx.spacer(),
                rx.icon_button(
                    theme_icon,
                    aria_label="Toggle theme",
                    on_click=AppState.toggle_theme,
                    variant="ghost",
                ),
                spacing="4",
                align="center",
                width="100%",
            ),
            size="4",
        ),
        width="100%",
        padding_y="4",
        border_bottom="1px solid",
        border_color=rx.cond(AppState.dark_mode, "#374151", "#e5e7eb"),
        background=rx.cond(AppState.dark_mode, "#111827", "white"),
        position="sticky",
        top="0",
        z_index="1000",
    )
