from __future__ import annotations

import reflex as rx

from ..state import RecordsState


def _sort_header(label: str, field: str) -> rx.Component:
    return rx.table.column_header_cell(
        rx.hstack(
            rx.text(label),
            rx.text(RecordsState.sort_indicator[field], color_scheme="indigo"),
            spacing="1",
        ),
        on_click=RecordsState.sort_by(field),
        cursor="pointer",
        title=f"Click to sort by {label.lower()}",
    )


def _record_row(row: rx.Var) -> rx.Component:
    return rx.table.row(
        rx.table.cell(
            rx.vstack(
                rx.text(row["first"], size="2"),
                rx.text(row["second"], size="2"),
                spacing="0",
            )
        ),
        rx.table.cell(row["distance"]),
        rx.table.cell(row["created_at"]),
        rx.table.cell(
            rx.button(
                rx.icon("trash-2", size=14),
                "Delete",
                size="1",
                color_scheme="red",
                variant="soft",
                on_click=RecordsState.delete_record(row["id"]).stop_propagation,
            ),
            text_align="center",
        ),
        on_click=RecordsState.select_record(row["id"]),
        cursor="pointer",
        background=rx.cond(
            RecordsState.selected_id == row["id"],
            "var(--purple-3)",
            "transparent",
        ),
    )


def records_table() -> rx.Component:
    """Searchable, sortable list of saved measurements."""

    table = rx.table.root(
        rx.table.header(
            rx.table.row(
                rx.table.column_header_cell("Rectangles"),
                _sort_header("Distance", "distance"),
                _sort_header("Time", "timestamp"),
                rx.table.column_header_cell("Delete", text_align="center"),
            )
        ),
        rx.table.body(rx.foreach(RecordsState.visible_rows, _record_row)),
        width="100%",
    )

    return rx.vstack(
        rx.input(
            placeholder="Search measurements...",
            value=RecordsState.search_query,
            on_change=RecordsState.set_search_query,
            width="100%",
        ),
        rx.cond(
            RecordsState.records.length() > 0,
            table,
            rx.center(
                rx.text("No measurements saved yet", color_scheme="gray"),
                padding_y="6",
                width="100%",
            ),
        ),
        rx.hstack(
            rx.button(
                "Refresh",
                on_click=RecordsState.load_records,
                loading=RecordsState.loading,
                variant="outline",
            ),
            rx.button(
                "Delete all",
                on_click=RecordsState.clear_records,
                color_scheme="red",
                variant="outline",
            ),
            rx.spacer(),
            rx.text(RecordsState.count_label, size="2", color_scheme="gray"),
            width="100%",
            align="center",
        ),
        rx.cond(
            RecordsState.error != "",
            rx.callout(RecordsState.error, icon="triangle_alert", color_scheme="red"),
        ),
        spacing="4",
        width="100%",
    )
