# src/hangar_timeline/core/timeline/windower.py
"""
Viewport Windower - janela virtualizada da linha do tempo.

Dado o conjunto de tarefas (já propagado) e o estado de rolagem/tamanho do
container, calcula a fatia mínima de linhas que precisa ser desenhada e o
índice absoluto de cada linha visível.

O índice absoluto (`display_index`), e não o índice local na fatia, é o
que posiciona cada linha verticalmente: refatiar durante a rolagem nunca
provoca saltos visuais.

Princípios fundamentais:
    - `compute_visible_window` é uma função pura de (tarefas, rolagem, altura)
    - Custo proporcional ao tamanho da janela, nunca ao total de tarefas
    - Nenhuma tarefa é mutada

Componentes:
    - compute_visible_window → janela para um estado de rolagem
    - auto_center_scroll_left → rolagem horizontal que centraliza "hoje"
    - TimelineViewport → adapter fino para eventos de rolagem/resize

Limites explícitos:
    - Não propaga datas
    - Não desenha nada
    - Não deve ler um snapshot que ainda está sendo propagado
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from ..config.settings import TimelineSettings
from ..schedule.types import Task
from .geometry import DateLike, today_offset_days, total_height


@dataclass(frozen=True)
class VisibleRow:
    """Tarefa visível com sua posição absoluta na grade."""
    task: Task
    display_index: int
    top: float


@dataclass(frozen=True)
class VisibleWindow:
    """
    Fatia visível da lista de tarefas.

    `rows` corresponde a `tasks[first_index:last_index]`.
    """
    rows: List[VisibleRow]
    first_index: int
    last_index: int
    total_height: float

    @property
    def tasks(self) -> List[Task]:
        return [row.task for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


def window_bounds(
    task_count: int,
    scroll_top: float,
    viewport_height: float,
    row_height: float,
    header_height: float,
    buffer: int,
) -> Tuple[int, int]:
    """Índices [first, last) da janela, já limitados a [0, task_count]."""
    if row_height <= 0:
        raise ValueError("row_height must be > 0")
    first = max(0, math.floor((scroll_top - header_height) / row_height) - buffer)
    last = min(task_count, math.ceil((scroll_top + viewport_height) / row_height) + buffer)
    # rolagem além do fim da lista produz janela vazia, nunca invertida
    first = min(first, task_count)
    last = max(last, first)
    return first, last


def compute_visible_window(
    tasks: Sequence[Task],
    scroll_top: float,
    viewport_height: float,
    row_height: float = 48,
    header_height: float = 56,
    buffer: int = 5,
) -> VisibleWindow:
    """
    Calcula a janela visível para o estado de rolagem informado.

    `first = max(0, floor((scroll_top - header) / row) - buffer)`
    `last  = min(n, ceil((scroll_top + altura) / row) + buffer)`

    Args:
        tasks: lista ordenada (precisa suportar `len` e fatiamento).
        scroll_top: deslocamento vertical em px.
        viewport_height: altura medida do container em px.
        row_height: altura de cada linha em px.
        header_height: altura do cabeçalho fixo em px.
        buffer: linhas extras acima e abaixo da área visível.

    Returns:
        VisibleWindow com as linhas e seus índices absolutos.
    """
    n = len(tasks)
    first, last = window_bounds(n, scroll_top, viewport_height, row_height, header_height, buffer)
    rows = [
        VisibleRow(task=task, display_index=first + offset, top=(first + offset) * row_height)
        for offset, task in enumerate(tasks[first:last])
    ]
    return VisibleWindow(
        rows=rows,
        first_index=first,
        last_index=last,
        total_height=total_height(n, row_height, header_height),
    )


def auto_center_scroll_left(today_offset: float, day_width: float, client_width: float) -> float:
    """Rolagem horizontal que põe o marcador de hoje no meio da área visível."""
    return max(0.0, today_offset * day_width - client_width / 2)


@dataclass
class TimelineViewport:
    """
    Adapter fino entre eventos de UI e a janela virtualizada.

    Mantém apenas o estado de rolagem/tamanho e o último snapshot de
    tarefas recebido. A janela é recalculada quando a lista de tarefas, a
    rolagem vertical ou a altura medida mudam; o resultado anterior é
    reutilizado enquanto a chave (versão, rolagem, altura) for a mesma.

    A rolagem horizontal é centralizada em "hoje" uma única vez por
    combinação (projeto, data de início).
    """

    settings: TimelineSettings = field(default_factory=TimelineSettings)
    tasks: Sequence[Task] = field(default_factory=tuple)
    version: int = 0
    scroll_top: float = 0.0
    scroll_left: float = 0.0
    viewport_height: float = 0.0
    client_width: float = 0.0

    _cache_key: Optional[Tuple[int, float, float]] = field(default=None, init=False, repr=False)
    _cache: Optional[VisibleWindow] = field(default=None, init=False, repr=False)
    _centered_for: Optional[Tuple[Any, str]] = field(default=None, init=False, repr=False)

    def window(self) -> VisibleWindow:
        key = (self.version, self.scroll_top, self.viewport_height)
        if self._cache is None or self._cache_key != key:
            self._cache = compute_visible_window(
                self.tasks,
                self.scroll_top,
                self.viewport_height,
                row_height=self.settings.row_height,
                header_height=self.settings.header_height,
                buffer=self.settings.buffer,
            )
            self._cache_key = key
        return self._cache

    def on_scroll(self, scroll_top: float, scroll_left: Optional[float] = None) -> VisibleWindow:
        self.scroll_top = scroll_top
        if scroll_left is not None:
            self.scroll_left = scroll_left
        return self.window()

    def on_resize(self, viewport_height: float, client_width: Optional[float] = None) -> VisibleWindow:
        self.viewport_height = viewport_height
        if client_width is not None:
            self.client_width = client_width
        return self.window()

    def on_snapshot(self, tasks: Sequence[Task], version: Optional[int] = None) -> VisibleWindow:
        self.tasks = tasks
        self.version = self.version + 1 if version is None else version
        # versão explícita repetida com outra lista ainda invalida o cache
        self._cache = None
        return self.window()

    def on_project_change(
        self,
        project: Any,
        project_start: DateLike,
        now: Optional[datetime] = None,
    ) -> float:
        key = (project, str(project_start))
        if self._centered_for == key:
            return self.scroll_left
        offset = today_offset_days(project_start, now)
        self.scroll_left = auto_center_scroll_left(offset, self.settings.day_width, self.client_width)
        self._centered_for = key
        return self.scroll_left
