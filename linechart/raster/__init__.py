from .canvas import draw_hline, draw_vline, fill_canvas, new_canvas
from .draw_lines import draw_polyline
from .draw_text import draw_text, text_size

__all__ = [
    "draw_hline",
    "draw_vline",
    "draw_polyline",
    "draw_text",
    "fill_canvas",
    "new_canvas",
    "text_size",
]
