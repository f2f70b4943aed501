from __future__ import annotations

import reflex as rx

from .pages import index
from .state import RecordsState

app = rx.App()
app.add_page(
    index,
    route="/",
    title="Rectangle Distance Measurement",
    on_load=RecordsState.load_records,
)
