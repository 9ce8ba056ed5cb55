"""
Agendamento do Hangar Timeline.

Este pacote contém os tipos de registro, o índice deduplicado de tarefas
(Schedule Graph Store) e o motor de propagação de datas por dependência.

Componentes principais:
    - types       → Task, Project, TaskType e instantes em horas
    - store       → deduplicação e indexação por id
    - propagation → relaxação até ponto fixo com diagnóstico explícito
    - stress      → gerador determinístico de carga

Limites explícitos:
    - Não realiza I/O
    - Não mantém estado persistente
"""

from .types import (  # noqa: F401
    HOURS_PER_DAY,
    Project,
    Task,
    TaskType,
    coerce_task_type,
    end_instant,
    start_instant,
)
from .store import ScheduleGraphStore  # noqa: F401
from .propagation import (  # noqa: F401
    MAX_PASSES,
    PropagationResult,
    PropagationStatus,
    detect_cycles,
    propagate,
    propagate_tasks,
    topological_order,
    unresolved_tasks,
)
from .stress import STRESS_PROJECT, STRESS_SIZE, generate_stress_tasks  # noqa: F401
