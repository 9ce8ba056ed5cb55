# src/hangar_timeline/core/schedule/store.py
"""
Schedule Graph Store - deduplicação e indexação de tarefas.

Este módulo constrói o conjunto de trabalho consumido pelo motor de
propagação a partir de um snapshot bruto de tarefas.

Política de deduplicação (v1):
    - inserção em ordem de entrada, indexada por `task.id`
    - uma ocorrência posterior do mesmo id **sobrescreve o valor**
    - a posição no conjunto de trabalho é a da **primeira ocorrência**

A política coincide com a semântica de atribuição em `dict`: reatribuir
uma chave existente troca o valor sem mover a chave.

Invariantes:
    - Cada id aparece exatamente uma vez no conjunto de trabalho
    - A ordem do conjunto de trabalho é determinística para a mesma entrada
    - O índice resolve qualquer id do conjunto em O(1)

Limites explícitos:
    - Não valida dependências (ids ausentes são resolvidos como None)
    - Não restringe dependências ao mesmo projeto
    - Não altera tarefas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .types import Task


@dataclass(frozen=True)
class ScheduleGraphStore:
    """
    Índice imutável id → tarefa sobre o conjunto deduplicado.

    Campos:
        - order: ids na ordem do conjunto de trabalho
        - index: mapa id → tarefa (valor da última ocorrência)
        - rows_before: quantidade de registros recebidos
        - duplicates: ids que apareceram mais de uma vez
    """
    order: Tuple[str, ...]
    index: Mapping[str, Task]
    rows_before: int = 0
    duplicates: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def build(cls, tasks: Iterable[Task]) -> "ScheduleGraphStore":
        by_id: Dict[str, Task] = {}
        seen_twice: Dict[str, None] = {}
        rows_before = 0
        for task in tasks:
            rows_before += 1
            if task.id in by_id:
                seen_twice[task.id] = None
            by_id[task.id] = task
        return cls(
            order=tuple(by_id.keys()),
            index=by_id,
            rows_before=rows_before,
            duplicates=tuple(seen_twice.keys()),
        )

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self) -> Iterator[Task]:
        for task_id in self.order:
            yield self.index[task_id]

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.index

    def get(self, task_id: str) -> Optional[Task]:
        return self.index.get(task_id)

    def tasks(self) -> List[Task]:
        """Conjunto de trabalho (valores do mapa) na ordem canônica."""
        return [self.index[task_id] for task_id in self.order]

    def resolved_dependencies(self, task: Task) -> List[Task]:
        """Dependências de `task` presentes no índice (ausentes são ignoradas)."""
        out: List[Task] = []
        for dep_id in task.dependencies:
            dep = self.index.get(dep_id)
            if dep is not None:
                out.append(dep)
        return out

    def missing_dependencies(self) -> Dict[str, List[str]]:
        """Mapa id → dependências que não resolvem no índice."""
        missing: Dict[str, List[str]] = {}
        for task in self:
            absent = [d for d in task.dependencies if d not in self.index]
            if absent:
                missing[task.id] = absent
        return missing

    def cross_project_links(self) -> List[Tuple[str, str]]:
        """Pares (tarefa, dependência) cujas tarefas pertencem a projetos distintos."""
        links: List[Tuple[str, str]] = []
        for task in self:
            for dep in self.resolved_dependencies(task):
                if dep.project != task.project:
                    links.append((task.id, dep.id))
        return links

    def audit(self) -> Dict[str, int]:
        """Auditoria de antes/depois da deduplicação."""
        rows_after = len(self.order)
        return {
            "rows_before": self.rows_before,
            "rows_after": rows_after,
            "rows_removed": self.rows_before - rows_after,
        }
