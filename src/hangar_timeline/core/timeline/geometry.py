# src/hangar_timeline/core/timeline/geometry.py
"""
Geometria da linha do tempo.

Fórmulas puras que convertem unidades de dia/hora em pixels e posicionam o
marcador de "hoje". São usadas pela janela de visualização e pelo
renderizador externo.

Princípios fundamentais:
    - Funções puras, sem estado
    - O marcador de hoje usa dias fracionários (sem arredondamento)
    - Datas de coluna são calculadas a partir do meio-dia, evitando
      deslocamentos de fuso ao somar dias

Limites explícitos:
    - Não desenha nada
    - Não conhece rolagem nem tamanho do container
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Union

from ..schedule.types import HOURS_PER_DAY, Task


DateLike = Union[date, datetime, str]

SECONDS_PER_DAY = 24 * 3600
MIN_BAR_WIDTH = 10

# Iniciais dos dias da semana, domingo primeiro.
DAY_INITIALS = ("D", "L", "M", "X", "J", "V", "S")


@dataclass(frozen=True)
class BarGeometry:
    """Posição horizontal (px) de uma barra de tarefa."""
    left: float
    width: float


@dataclass(frozen=True)
class DayColumn:
    """Coluna do cabeçalho da linha do tempo."""
    index: int
    date: date
    initial: str
    number: int
    is_today: bool


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    return datetime.fromisoformat(str(value).strip())


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip().split("T")[0])


def to_pixels(days: float, hours: float, day_width: float) -> float:
    """Converte dias + horas em pixels: `((dias*24 + horas) / 24) * largura`."""
    return ((days * HOURS_PER_DAY + hours) / HOURS_PER_DAY) * day_width


def today_offset_days(project_start: DateLike, now: Optional[datetime] = None) -> float:
    """
    Distância fracionária, em dias, entre o início do projeto e `now`.

    Uma data sem horário é tomada à meia-noite. Quando apenas um dos lados
    possui fuso, o outro é interpretado no mesmo fuso.
    """
    start = _as_datetime(project_start)
    current = now if now is not None else datetime.now()
    if start.tzinfo is None and current.tzinfo is not None:
        start = start.replace(tzinfo=current.tzinfo)
    elif start.tzinfo is not None and current.tzinfo is None:
        current = current.replace(tzinfo=start.tzinfo)
    return (current - start).total_seconds() / SECONDS_PER_DAY


def day_label_date(project_start: DateLike, index: int) -> date:
    """Data de calendário da coluna `index` (construída ao meio-dia)."""
    midday = datetime.combine(_as_date(project_start), time(12, 0, 0))
    return (midday + timedelta(days=index)).date()


def day_initial(day: date) -> str:
    # weekday(): segunda = 0; a tabela começa no domingo
    return DAY_INITIALS[(day.weekday() + 1) % 7]


def day_columns(
    project_start: DateLike,
    interval_days: int,
    now: Optional[datetime] = None,
) -> List[DayColumn]:
    """Colunas do cabeçalho para `interval_days` dias a partir do início."""
    today_index = math.floor(today_offset_days(project_start, now))
    columns: List[DayColumn] = []
    for i in range(max(0, interval_days)):
        d = day_label_date(project_start, i)
        columns.append(
            DayColumn(
                index=i,
                date=d,
                initial=day_initial(d),
                number=i + 1,
                is_today=(i == today_index),
            )
        )
    return columns


def bar_geometry(task: Task, day_width: float) -> BarGeometry:
    """Barra da tarefa; largura mínima de 10px para durações muito curtas."""
    left = to_pixels(task.start, task.start_hour, day_width)
    width = to_pixels(task.duration, task.duration_hours, day_width)
    return BarGeometry(left=left, width=max(MIN_BAR_WIDTH, width))


def grid_width(interval_days: int, day_width: float) -> float:
    return interval_days * day_width


def total_height(task_count: int, row_height: float, header_height: float) -> float:
    return task_count * row_height + header_height
