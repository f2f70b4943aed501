from __future__ import annotations

import reflex as rx

from rectmeasure.rendering import grid_lines

from ..state import CANVAS_HEIGHT, CANVAS_WIDTH, RecordsState


def _grid() -> list[rx.Component]:
    return [
        rx.el.svg.line(
            x1=line.start.x,
            y1=line.start.y,
            x2=line.end.x,
            y2=line.end.y,
            stroke=line.color,
            stroke_width=line.width,
        )
        for line in grid_lines(CANVAS_WIDTH, CANVAS_HEIGHT)
    ]


def _rectangles() -> rx.Component:
    return rx.foreach(
        RecordsState.preview_rects,
        lambda shape: rx.el.svg.rect(
            x=shape["x"],
            y=shape["y"],
            width=shape["width"],
            height=shape["height"],
            rx=shape["radius"],
            fill=shape["fill"],
            stroke=shape["stroke"],
            stroke_width="2",
        ),
    )


def _centers() -> rx.Component:
    return rx.foreach(
        RecordsState.preview_centers,
        lambda marker: rx.el.svg.circle(
            cx=marker["cx"],
            cy=marker["cy"],
            r=marker["r"],
            fill=marker["fill"],
        ),
    )


def _connectors() -> rx.Component:
    return rx.foreach(
        RecordsState.preview_connectors,
        lambda line: rx.el.svg.line(
            x1=line["x1"],
            y1=line["y1"],
            x2=line["x2"],
            y2=line["y2"],
            stroke=line["stroke"],
            stroke_dasharray=line["dash"],
        ),
    )


def preview_canvas() -> rx.Component:
    """Read-only rendering of the selected measurement."""

    drawing = rx.el.svg(
        *_grid(),
        _rectangles(),
        _centers(),
        _connectors(),
        view_box=f"0 0 {CANVAS_WIDTH} {CANVAS_HEIGHT}",
        width="100%",
        height="100%",
        style={"background": "white"},
    )

    return rx.vstack(
        rx.hstack(
            rx.heading("Preview", size="4"),
            rx.spacer(),
            rx.cond(
                RecordsState.selected_distance != "",
                rx.badge(RecordsState.selected_distance, color_scheme="violet"),
                rx.text("Select a measurement to preview it.", size="2", color_scheme="gray"),
            ),
            width="100%",
            align="center",
        ),
        rx.box(
            drawing,
            width="100%",
            aspect_ratio=f"{CANVAS_WIDTH} / {CANVAS_HEIGHT}",
            border="2px solid var(--gray-5)",
            border_radius="8px",
            overflow="hidden",
        ),
        spacing="3",
        width="100%",
    )
