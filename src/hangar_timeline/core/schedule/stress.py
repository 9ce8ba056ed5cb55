"""Gerador determinístico de carga para o cronograma.

Reproduz o cenário de estresse documentado (1.000 tarefas encadeadas em um
único projeto) usado para medir propagação e janela de visualização.

- Tarefa i começa no dia `i // 10`, às 08h, com duração `2 + i % 5` dias.
- Tarefa i depende da tarefa i-1.
- Tipos alternam AP, INT, AVI, SM.
- O avanço é sorteado com `random.Random(seed)` para ser reprodutível.
"""

from __future__ import annotations

import random
from typing import List, Optional

from .types import Task, TaskType


STRESS_PROJECT = "STRESS-UNIT"
STRESS_SIZE = 1000

_TYPES = (TaskType.AIRFRAME, TaskType.INTERIOR, TaskType.AVIONICS, TaskType.SHEET_METAL)


def generate_stress_tasks(
    count: int = STRESS_SIZE,
    *,
    project: str = STRESS_PROJECT,
    seed: Optional[int] = 0,
) -> List[Task]:
    if count < 0:
        raise ValueError("count must be >= 0")
    rng = random.Random(seed)
    tasks: List[Task] = []
    for i in range(count):
        tasks.append(
            Task(
                id=f"stress-{i}",
                title=f"TAREA TÁCTICA AUTOMATIZADA #{i}",
                description=(
                    f"DETALLE OPERATIVO PARA LA TAREA #{i}: "
                    "PROCEDIMIENTO ESTÁNDAR DE VERIFICACIÓN Y CONTROL."
                ),
                type=_TYPES[i % 4],
                start=i // 10,
                start_hour=8,
                duration=2 + (i % 5),
                duration_hours=0,
                progress=rng.randrange(100),
                project=project,
                dependencies=(f"stress-{i - 1}",) if i > 0 else (),
            )
        )
    return tasks
