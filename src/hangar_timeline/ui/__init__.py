from .renderers import (
    RenderResult,
    render_day_header_html,
    render_project_card_html,
    render_task_bar_html,
    render_today_marker_html,
    render_window,
)

__all__ = [
    "RenderResult",
    "render_window",
    "render_day_header_html",
    "render_task_bar_html",
    "render_today_marker_html",
    "render_project_card_html",
]
