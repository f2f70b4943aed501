from .preview_canvas import preview_canvas
from .records_table import records_table

__all__ = ["preview_canvas", "records_table"]
