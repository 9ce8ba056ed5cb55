# src/hangar_timeline/core/state/snapshot.py
"""
Snapshot versionado do cronograma.

Um snapshot é a visão imutável e completa do estado em um instante:
tarefas já propagadas, projetos, projeto ativo e o diagnóstico da última
propagação. Leitores (janela de visualização, relatórios, renderizadores)
só recebem snapshots publicados; nunca observam uma propagação em curso.

Invariantes:
    - `version` cresce de 1 em 1 a cada publicação
    - `tasks` é uma tupla de registros imutáveis
    - `projects` é um mapeamento somente leitura
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from ..schedule.propagation import PropagationResult
from ..schedule.types import Project, Task


ALL_PROJECTS = "ALL"


def _freeze(projects: Mapping[str, Project]) -> Mapping[str, Project]:
    return MappingProxyType(dict(projects))


@dataclass(frozen=True)
class ScheduleSnapshot:
    """Estado publicado do cronograma."""

    version: int = 0
    tasks: Tuple[Task, ...] = field(default_factory=tuple)
    projects: Mapping[str, Project] = field(default_factory=lambda: _freeze({}))
    active_project: str = ALL_PROJECTS
    propagation: Optional[PropagationResult] = None

    def __post_init__(self) -> None:
        if not isinstance(self.tasks, tuple):
            object.__setattr__(self, "tasks", tuple(self.tasks))
        if not isinstance(self.projects, MappingProxyType):
            object.__setattr__(self, "projects", _freeze(self.projects))

    def task(self, task_id: str) -> Optional[Task]:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def project_tasks(self, project: str) -> Tuple[Task, ...]:
        if project == ALL_PROJECTS:
            return self.tasks
        return tuple(t for t in self.tasks if t.project == project)

    def project_names(self) -> Tuple[str, ...]:
        return tuple(self.projects.keys())

    def to_dict(self) -> Dict[str, object]:
        """Resumo serializável (sem as tarefas)."""
        return {
            "version": self.version,
            "tasks": len(self.tasks),
            "projects": list(self.projects.keys()),
            "active_project": self.active_project,
            "propagation_status": self.propagation.status.value if self.propagation else None,
        }
