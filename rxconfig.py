from __future__ import annotations

import os

import reflex as rx

config = rx.Config(
    app_name="rectweb",
    # Reflex runs its own backend; keep it off the records API port.
    backend_port=int(os.environ.get("REFLEX_BACKEND_PORT", "8010")),
)
