# src/hangar_timeline/ui/renderers.py
"""
Timeline UI Adapter (v1)

Objetivo:
- Renderizar uma janela visível (VisibleWindow) como HTML autocontido.
- NÃO altera tarefas nem o snapshot.
- NÃO propaga, NÃO filtra: recebe a janela já calculada.
- NÃO depende de nenhum toolkit de UI (HTML puro + estilos inline).

Saídas:
- HTML (string) com cabeçalho de dias, marcador de hoje e barras
- fallback textual sempre preenchido (uma linha por tarefa visível)
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence

from ..core.config.settings import TimelineSettings
from ..core.schedule.types import Project, Task, TaskType
from ..core.timeline.geometry import DayColumn, bar_geometry, day_columns, grid_width, today_offset_days
from ..core.timeline.palette import color_for, task_border_color
from ..core.timeline.windower import VisibleRow, VisibleWindow


TODAY_COLOR = "#ef4444"


@dataclass(frozen=True)
class RenderResult:
    """Resultado de renderização (apenas apresentação)."""
    html: Optional[str]  # HTML string (quando aplicável)
    text: str            # fallback textual (sempre preenchido)


def _escape(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def _px(value: float) -> str:
    return f"{value:g}px"


def _type_label(task: Task) -> str:
    return task.type.value if isinstance(task.type, TaskType) else str(task.type)


def render_day_header_html(columns: Sequence[DayColumn], settings: TimelineSettings) -> str:
    """Cabeçalho fixo: inicial do dia da semana + número do dia."""
    cells = []
    for col in columns:
        bg = "background:rgba(239,68,68,0.1);" if col.is_today else ""
        color = f"color:{TODAY_COLOR};" if col.is_today else ""
        cells.append(
            f"<div class='day{' today' if col.is_today else ''}' "
            f"style='flex:none;width:{_px(settings.day_width)};text-align:center;{bg}{color}' "
            f"title='{col.date.isoformat()}'>"
            f"<span>{_escape(col.initial)}</span><br><b>{col.number}</b></div>"
        )
    return (
        f"<div class='day-header' style='display:flex;position:sticky;top:0;height:{_px(settings.header_height)};'>"
        + "".join(cells)
        + "</div>"
    )


def render_task_bar_html(row: VisibleRow, settings: TimelineSettings) -> str:
    """Linha absoluta (top = índice absoluto × altura) com a barra da tarefa."""
    task = row.task
    geom = bar_geometry(task, settings.day_width)
    check = "✓ " if task.is_complete else ""
    return (
        f"<div class='row' data-index='{row.display_index}' "
        f"style='position:absolute;left:0;width:100%;height:{_px(settings.row_height)};top:{_px(row.top)};'>"
        f"<div class='bar' data-task='{_escape(task.id)}' "
        f"style='position:absolute;top:8px;height:32px;left:{_px(geom.left)};width:{_px(geom.width)};"
        f"background:{color_for(task)};border:1px solid {task_border_color(task.progress)};' "
        f"title='{_escape(task.description)}'>"
        f"<div class='progress' style='width:{task.progress}%;'></div>"
        f"<span>{check}{_escape(task.title)}</span>"
        "</div></div>"
    )


def render_today_marker_html(offset_days: float, settings: TimelineSettings) -> str:
    return (
        f"<div class='today-marker' style='position:absolute;top:0;bottom:0;width:2px;"
        f"background:{TODAY_COLOR};left:{_px(offset_days * settings.day_width)};'>"
        "<span>HOY</span></div>"
    )


def _text_line(row: VisibleRow) -> str:
    t = row.task
    return (
        f"{row.display_index:>5} {t.id} [{_type_label(t)}] "
        f"d{t.start}+{t.start_hour}h dur {t.duration}d{t.duration_hours}h {t.progress}% {t.title}"
    )


def render_window(
    window: VisibleWindow,
    project: Project,
    *,
    settings: Optional[TimelineSettings] = None,
    now: Optional[datetime] = None,
) -> RenderResult:
    """
    Renderiza a janela visível de um projeto.

    Apenas as linhas de `window.rows` são desenhadas; a altura total do
    container vem de `window.total_height` para manter a barra de rolagem
    proporcional ao total de tarefas.
    """
    settings = settings or TimelineSettings()
    offset = today_offset_days(project.start_date, now)
    columns = day_columns(project.start_date, project.interval_days, now)
    width = grid_width(project.interval_days, settings.day_width)

    parts: List[str] = [
        f"<div class='timeline' data-project='{_escape(project.name)}' "
        f"style='position:relative;width:{_px(width)};height:{_px(window.total_height)};'>"
    ]
    if offset > 0:
        parts.append(render_today_marker_html(offset, settings))
    parts.append(render_day_header_html(columns, settings))
    parts.append("<div class='rows' style='position:relative;'>")
    parts.extend(render_task_bar_html(row, settings) for row in window.rows)
    parts.append("</div></div>")

    header = f"{project.name} rows {window.first_index}..{window.last_index} today={offset:.2f}"
    text = "\n".join([header] + [_text_line(row) for row in window.rows])
    return RenderResult(html="".join(parts), text=text)


def render_project_card_html(project: Project, title: Optional[str] = None) -> str:
    """Card simples com os metadados do projeto (apresentação pura)."""
    fields: Mapping[str, Any] = {
        "customer": project.customer,
        "ac": project.ac,
        "model": project.model,
        "msn": project.msn,
        "wo": project.wo,
        "lp": project.lp,
        "pm": project.pm,
        "start_date": project.start_date.isoformat(),
        "interval_days": project.interval_days,
    }
    rows = "".join(
        f"<tr><td><code>{_escape(k)}</code></td><td>{_escape(v if v is not None else '-')}</td></tr>"
        for k, v in fields.items()
    )
    return (
        "<div style='border:1px solid #ddd; border-radius:12px; padding:12px; margin:8px 0;'>"
        f"<h3 style='margin:0 0 6px 0;'>{_escape(title or project.name)}</h3>"
        "<table><thead><tr><th>key</th><th>value</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>"
        "</div>"
    )
