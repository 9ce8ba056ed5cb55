"""
Linha do tempo do Hangar Timeline.

Componentes principais:
    - geometry → conversões dia/hora → px, marcador de hoje, colunas de dia
    - windower → janela virtualizada e adapter de eventos de rolagem
    - palette  → cor das barras por tipo e avanço

Limites explícitos:
    - Não altera tarefas
    - Não depende de nenhum toolkit de UI
"""

from .geometry import (  # noqa: F401
    BarGeometry,
    DayColumn,
    bar_geometry,
    day_columns,
    day_label_date,
    grid_width,
    to_pixels,
    today_offset_days,
    total_height,
)
from .palette import color_for, task_border_color, task_color  # noqa: F401
from .windower import (  # noqa: F401
    TimelineViewport,
    VisibleRow,
    VisibleWindow,
    auto_center_scroll_left,
    compute_visible_window,
    window_bounds,
)
