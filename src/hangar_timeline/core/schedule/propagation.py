# src/hangar_timeline/core/schedule/propagation.py
"""
Motor de propagação de datas por dependência.

Este módulo garante que nenhuma tarefa comece antes do término de todas as
suas dependências resolvíveis, empurrando tarefas para frente na linha do
tempo quando necessário.

Fluxo:
    1. deduplicação + indexação (`ScheduleGraphStore`)
    2. relaxação até ponto fixo, limitada a `max_passes` passes
    3. diagnóstico explícito do resultado (convergiu, parcial, ciclo)

Estratégias:
    - "relaxation" (padrão): varre o conjunto de trabalho em sua ordem atual
      a cada passe; um passe sem mudanças encerra o laço. Cadeias longas em
      ordem adversa podem exigir mais passes que o limite.
    - "topological": ordena as tarefas pelo algoritmo de Kahn (empates pela
      posição no conjunto de trabalho) e relaxa cada tarefa uma única vez;
      só as tarefas presas em ciclos recebem relaxação iterativa limitada.

Princípios fundamentais:
    - Entradas nunca são mutadas; tarefas movidas são registros novos
    - Um instante de início nunca diminui entre passes (monotonicidade)
    - Dependências ausentes são ignoradas, não são erro
    - Atingir o limite de passes nunca é silencioso: o resultado carrega
      status e payload explícitos

Limites explícitos:
    - Não valida legalidade de negócio do grafo
    - Não restringe dependências ao mesmo projeto
    - Não persiste nem publica o resultado
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..errors import (
    HangarErrorPayload,
    propagation_cycle_detected,
    propagation_partial,
)
from ..events import EventLog
from .store import ScheduleGraphStore
from .types import HOURS_PER_DAY, Task, end_instant, start_instant


MAX_PASSES = 100
STRATEGIES = ("relaxation", "topological")

_COMPONENT = "schedule.propagation"


class PropagationStatus(str, Enum):
    """
    Estado final de uma propagação.

        - CONVERGED: todas as restrições resolvíveis estão satisfeitas
        - PARTIAL: limite de passes atingido com restrições pendentes
        - CYCLIC: restrições pendentes envolvendo um ciclo de dependências
    """
    CONVERGED = "converged"
    PARTIAL = "partial"
    CYCLIC = "cyclic"


@dataclass(frozen=True)
class PropagationResult:
    """
    Resultado imutável de uma propagação.

    Campos:
        - tasks: conjunto de trabalho corrigido (ordem da primeira ocorrência)
        - status: `PropagationStatus`
        - passes: passes de relaxação executados
        - strategy: estratégia utilizada
        - shifted_ids: tarefas cujo início foi adiado
        - unresolved_ids: tarefas que ainda começam antes de uma dependência
        - cyclic_ids: tarefas não ordenáveis topologicamente
        - missing_dependencies: id → dependências inexistentes (informativo)
        - cross_project_links: pares (tarefa, dependência) entre projetos
        - duplicates: ids recebidos mais de uma vez
        - issue: payload explícito quando o status não é CONVERGED
    """
    tasks: List[Task]
    status: PropagationStatus
    passes: int
    strategy: str = "relaxation"
    shifted_ids: List[str] = field(default_factory=list)
    unresolved_ids: List[str] = field(default_factory=list)
    cyclic_ids: List[str] = field(default_factory=list)
    missing_dependencies: Dict[str, List[str]] = field(default_factory=dict)
    cross_project_links: List[Tuple[str, str]] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)
    issue: Optional[HangarErrorPayload] = None

    @property
    def converged(self) -> bool:
        return self.status is PropagationStatus.CONVERGED


def _required_start(task: Task, current: Dict[str, Task]) -> Optional[int]:
    """
    Maior instante de término entre as dependências resolvíveis.

    Devolve `None` quando nenhuma dependência é resolvível: a tarefa fica sem
    restrição e um início negativo é mantido, sem ajuste para zero.
    """
    required: Optional[int] = None
    for dep_id in task.dependencies:
        dep = current.get(dep_id)
        if dep is None:
            continue
        dep_end = end_instant(dep)
        if required is None or dep_end > required:
            required = dep_end
    return required


def _relax(task_id: str, current: Dict[str, Task]) -> bool:
    """Adia a tarefa para o término da dependência mais tardia, se preciso."""
    task = current[task_id]
    if not task.dependencies:
        return False
    required = _required_start(task, current)
    if required is None or start_instant(task) >= required:
        return False
    current[task_id] = replace(
        task,
        start=required // HOURS_PER_DAY,
        start_hour=required % HOURS_PER_DAY,
    )
    return True


def _relaxation_passes(order: Sequence[str], current: Dict[str, Task], max_passes: int) -> int:
    passes = 0
    changed = True
    while changed and passes < max_passes:
        changed = False
        passes += 1
        for task_id in order:
            if _relax(task_id, current):
                changed = True
    return passes


def topological_order(store: ScheduleGraphStore) -> Tuple[List[str], List[str]]:
    """
    Ordena o conjunto de trabalho pelas dependências resolvíveis.

    Variação determinística do algoritmo de Kahn: entre tarefas prontas,
    vence a de menor posição no conjunto de trabalho.

    Returns:
        (ordenadas, não ordenáveis). As não ordenáveis são membros de
        ciclos e tarefas que dependem deles, na ordem do conjunto.
    """
    position = {task_id: i for i, task_id in enumerate(store.order)}
    incoming: Dict[str, int] = {}
    outgoing: Dict[str, List[str]] = {task_id: [] for task_id in store.order}

    for task in store:
        deps: Set[str] = {d for d in task.dependencies if d in store}
        incoming[task.id] = len(deps)
        for dep_id in deps:
            outgoing[dep_id].append(task.id)

    ready: List[Tuple[int, str]] = [
        (position[task_id], task_id) for task_id in store.order if incoming[task_id] == 0
    ]
    heapq.heapify(ready)
    ordered: List[str] = []

    while ready:
        _, task_id = heapq.heappop(ready)
        ordered.append(task_id)
        for child in outgoing[task_id]:
            incoming[child] -= 1
            if incoming[child] == 0:
                heapq.heappush(ready, (position[child], child))

    done = set(ordered)
    leftover = [task_id for task_id in store.order if task_id not in done]
    return ordered, leftover


def detect_cycles(store: ScheduleGraphStore) -> List[str]:
    """Ids que não podem ser ordenados (ciclos e seus dependentes)."""
    _, leftover = topological_order(store)
    return leftover


def unresolved_tasks(tasks: Iterable[Task]) -> List[str]:
    """Ids cujo início ainda precede o término de alguma dependência resolvível."""
    current = {t.id: t for t in tasks}
    out: List[str] = []
    for task in current.values():
        required = _required_start(task, current)
        if required is not None and start_instant(task) < required:
            out.append(task.id)
    return out


def propagate(
    tasks: Iterable[Task],
    *,
    max_passes: int = MAX_PASSES,
    strategy: str = "relaxation",
    events: Optional[EventLog] = None,
) -> PropagationResult:
    """
    Propaga restrições de dependência e devolve um conjunto corrigido.

    Para cada tarefa com dependências, o instante de início passa a ser no
    mínimo o maior instante de término entre as dependências resolvíveis:
    `start = floor(fim / 24)`, `start_hour = fim % 24`.

    Decisões arquiteturais:
        - Deduplicação: última ocorrência vence, posição da primeira
        - A relaxação lê sempre os valores já corrigidos no mesmo passe
        - O limite de passes é um teto de custo, não um critério de sucesso
        - O status final é derivado das restrições, não do contador
        - CYCLIC só quando alguma tarefa não resolvida está em um ciclo ou
          depende dele; fora disso, o limite atingido é PARTIAL

    Invariantes:
        - Tarefas sem dependências mantêm `start`/`start_hour`
        - Nenhum instante de início diminui
        - As tarefas de entrada não são alteradas

    Args:
        tasks: snapshot de tarefas (pode conter ids repetidos).
        max_passes: limite de passes de relaxação (padrão 100).
        strategy: "relaxation" ou "topological".
        events: log estruturado opcional.

    Returns:
        PropagationResult com tarefas corrigidas e diagnóstico.

    Raises:
        ValueError: se `max_passes` for negativo ou a estratégia desconhecida.
    """
    if max_passes < 0:
        raise ValueError("max_passes must be >= 0")
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown propagation strategy: {strategy}")

    store = ScheduleGraphStore.build(tasks)
    current: Dict[str, Task] = dict(store.index)
    ordered, cyclic_ids = topological_order(store)

    if strategy == "relaxation":
        passes = _relaxation_passes(store.order, current, max_passes)
    else:
        passes = 0
        if ordered and max_passes > 0:
            passes = 1
            for task_id in ordered:
                _relax(task_id, current)
        if cyclic_ids and max_passes > passes:
            passes += _relaxation_passes(cyclic_ids, current, max_passes - passes)

    result_tasks = [current[task_id] for task_id in store.order]
    unresolved_ids = unresolved_tasks(result_tasks)
    shifted_ids = [
        task_id
        for task_id in store.order
        if start_instant(current[task_id]) != start_instant(store.index[task_id])
    ]

    issue: Optional[HangarErrorPayload] = None
    if not unresolved_ids:
        status = PropagationStatus.CONVERGED
    elif set(unresolved_ids) & set(cyclic_ids):
        status = PropagationStatus.CYCLIC
        issue = propagation_cycle_detected(cyclic_ids=list(cyclic_ids), unresolved_ids=unresolved_ids)
    else:
        status = PropagationStatus.PARTIAL
        issue = propagation_partial(passes=passes, max_passes=max_passes, unresolved_ids=unresolved_ids)

    result = PropagationResult(
        tasks=result_tasks,
        status=status,
        passes=passes,
        strategy=strategy,
        shifted_ids=shifted_ids,
        unresolved_ids=unresolved_ids,
        cyclic_ids=list(cyclic_ids),
        missing_dependencies=store.missing_dependencies(),
        cross_project_links=store.cross_project_links(),
        duplicates=list(store.duplicates),
        issue=issue,
    )

    if events is not None:
        events.log(
            component=_COMPONENT,
            level="info",
            message="propagation finished",
            strategy=strategy,
            status=status.value,
            passes=passes,
            tasks=len(result_tasks),
            shifted=len(shifted_ids),
            **store.audit(),
        )
        if issue is not None:
            events.log(
                component=_COMPONENT,
                level="warning",
                message=issue.message,
                error_type=issue.type,
                unresolved=len(unresolved_ids),
            )

    return result


def propagate_tasks(tasks: Iterable[Task], *, max_passes: int = MAX_PASSES) -> List[Task]:
    """Atalho que devolve apenas o conjunto de tarefas corrigido."""
    return propagate(tasks, max_passes=max_passes).tasks
