"""Classificação de cor das barras de tarefa.

A cor é função pura de (tipo, avanço):
- avanço 100 → cor de "concluída", independente do tipo
- caso contrário → cor do tipo na paleta fechada
- tipo desconhecido → cor neutra
"""

from __future__ import annotations

from typing import Dict, Union

from ..schedule.types import Task, TaskType


COMPLETE_COLOR = "#15803d"
COMPLETE_BORDER = "#4ade80"
DEFAULT_BORDER = "rgba(255,255,255,0.2)"
NEUTRAL_COLOR = "#334155"

TYPE_COLORS: Dict[str, str] = {
    TaskType.INTERIOR.value: "#0891b2",
    TaskType.AVIONICS.value: "#7c3aed",
    TaskType.AIRFRAME.value: "#b91c1c",
    TaskType.SHEET_METAL.value: "#15803d",
}


def _type_key(task_type: Union[TaskType, str, None]) -> str:
    if isinstance(task_type, TaskType):
        return task_type.value
    return "" if task_type is None else str(task_type)


def task_color(task_type: Union[TaskType, str, None], progress: int) -> str:
    if progress == 100:
        return COMPLETE_COLOR
    return TYPE_COLORS.get(_type_key(task_type), NEUTRAL_COLOR)


def task_border_color(progress: int) -> str:
    return COMPLETE_BORDER if progress == 100 else DEFAULT_BORDER


def color_for(task: Task) -> str:
    return task_color(task.type, task.progress)
