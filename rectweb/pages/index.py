from __future__ import annotations

import reflex as rx

from ..components import preview_canvas, records_table
from ..core import app_shell


def index() -> rx.Component:
    """Saved measurements with a preview of the selected one."""

    content = rx.vstack(
        rx.heading("Saved Measurements", size="7"),
        rx.text(
            "Rectangles are drawn in the desktop tool; search, sort and review the results here.",
            color_scheme="gray",
        ),
        rx.grid(
            rx.box(records_table(), width="100%"),
            rx.box(preview_canvas(), width="100%"),
            columns=rx.breakpoints(initial="1", md="2"),
            spacing="6",
            width="100%",
        ),
        spacing="6",
        width="100%",
    )

    return app_shell(content)
