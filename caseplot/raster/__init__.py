from .canvas import blit, draw_filled_rect, draw_hline, draw_pixel, draw_rect_outline, draw_vline, new_canvas
from .draw_lines import draw_polyline
from .draw_markers import draw_marker_outline, draw_markers, marker_outline
from .draw_text import draw_text, text_size

__all__ = [
    "blit",
    "draw_filled_rect",
    "draw_hline",
    "draw_marker_outline",
    "draw_markers",
    "draw_pixel",
    "draw_polyline",
    "draw_rect_outline",
    "draw_text",
    "draw_vline",
    "marker_outline",
    "new_canvas",
    "text_size",
]
