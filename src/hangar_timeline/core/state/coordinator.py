# src/hangar_timeline/core/state/coordinator.py
"""
SnapshotCoordinator - único escritor do estado do cronograma.

O coordenador é o dono do snapshot corrente. Toda edição local (formulário,
importação) e toda carga remota passa por ele, que:

    1. monta a nova lista de tarefas a partir do snapshot corrente
    2. executa a propagação uma única vez por edição lógica
    3. publica um novo snapshot (versão + 1) de forma atômica
    4. notifica os leitores inscritos com o snapshot publicado

Decisões arquiteturais:
    - Disciplina de um escritor e muitos leitores: escritas são serializadas
      por um lock; leitores só enxergam snapshots completos
    - Notificações remotas substituem o snapshot inteiro, nunca o alteram
      parcialmente
    - `expected_version` permite publicar somente sobre a versão lida
      (`StaleSnapshotError` caso contrário)

Limites explícitos:
    - Não persiste nada (colaboradores externos ouvem as publicações)
    - Não resolve conflitos entre múltiplos escritores remotos
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..config.settings import TimelineSettings
from ..errors import state_stale_snapshot, state_unknown_project
from ..events import EventLog
from ..exceptions import StaleSnapshotError, UnknownProjectError
from ..schedule.propagation import PropagationResult, propagate
from ..schedule.types import Project, Task
from .snapshot import ALL_PROJECTS, ScheduleSnapshot


Listener = Callable[[ScheduleSnapshot], None]

_COMPONENT = "state.coordinator"


def _upsert(existing: Iterable[Task], incoming: Iterable[Task]) -> List[Task]:
    """Substitui tarefas de mesmo id na posição original; novas vão ao fim."""
    merged: Dict[str, Task] = {t.id: t for t in existing}
    for task in incoming:
        merged[task.id] = task
    return list(merged.values())


class SnapshotCoordinator:
    """Dono do snapshot corrente do cronograma."""

    def __init__(
        self,
        *,
        settings: Optional[TimelineSettings] = None,
        events: Optional[EventLog] = None,
        initial: Optional[ScheduleSnapshot] = None,
    ) -> None:
        self.settings = settings or TimelineSettings()
        self.events = events if events is not None else EventLog()
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._current = initial if initial is not None else ScheduleSnapshot()

    # -----------------------------
    # Leitura
    # -----------------------------
    @property
    def current(self) -> ScheduleSnapshot:
        return self._current

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Inscreve um leitor; devolve a função que cancela a inscrição."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # -----------------------------
    # Publicação
    # -----------------------------
    def _check_version(self, expected_version: Optional[int]) -> None:
        if expected_version is None or expected_version == self._current.version:
            return
        payload = state_stale_snapshot(
            expected_version=expected_version,
            current_version=self._current.version,
        )
        raise StaleSnapshotError(message=payload.message, details=payload.details, hint=payload.hint)

    def _propagate(self, tasks: Iterable[Task]) -> PropagationResult:
        return propagate(
            tasks,
            max_passes=self.settings.max_passes,
            strategy=self.settings.strategy,
            events=self.events,
        )

    def _commit(
        self,
        *,
        reason: str,
        tasks: Optional[Iterable[Task]] = None,
        projects: Optional[Mapping[str, Project]] = None,
        active_project: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> Tuple[ScheduleSnapshot, List[Listener]]:
        """Publica o novo snapshot. Deve ser chamado com o lock adquirido."""
        self._check_version(expected_version)
        prev = self._current

        propagation = prev.propagation
        new_tasks = prev.tasks
        if tasks is not None:
            propagation = self._propagate(tasks)
            new_tasks = tuple(propagation.tasks)

        snapshot = ScheduleSnapshot(
            version=prev.version + 1,
            tasks=new_tasks,
            projects=prev.projects if projects is None else projects,
            active_project=prev.active_project if active_project is None else active_project,
            propagation=propagation,
        )
        self._current = snapshot

        self.events.log(
            component=_COMPONENT,
            level="info",
            message="snapshot published",
            reason=reason,
            version=snapshot.version,
            tasks=len(snapshot.tasks),
            projects=len(snapshot.projects),
        )
        return snapshot, list(self._listeners)

    @staticmethod
    def _notify(published: Tuple[ScheduleSnapshot, List[Listener]]) -> ScheduleSnapshot:
        # fora do lock
        snapshot, listeners = published
        for listener in listeners:
            listener(snapshot)
        return snapshot

    def _require_project(self, name: str, *, allow_all: bool = True) -> None:
        if (allow_all and name == ALL_PROJECTS) or name in self._current.projects:
            return
        payload = state_unknown_project(project=name, known_projects=list(self._current.projects))
        raise UnknownProjectError(message=payload.message, details=payload.details, hint=payload.hint)

    # -----------------------------
    # Tarefas
    # -----------------------------
    def save_task(self, task: Task, *, expected_version: Optional[int] = None) -> ScheduleSnapshot:
        return self.save_tasks([task], expected_version=expected_version, reason="save_task")

    def save_tasks(
        self,
        tasks: Iterable[Task],
        *,
        expected_version: Optional[int] = None,
        reason: str = "save_tasks",
    ) -> ScheduleSnapshot:
        with self._lock:
            merged = _upsert(self._current.tasks, tasks)
            published = self._commit(reason=reason, tasks=merged, expected_version=expected_version)
        return self._notify(published)

    def delete_task(self, task_id: str, *, expected_version: Optional[int] = None) -> ScheduleSnapshot:
        with self._lock:
            remaining = [t for t in self._current.tasks if t.id != task_id]
            published = self._commit(reason="delete_task", tasks=remaining, expected_version=expected_version)
        return self._notify(published)

    # -----------------------------
    # Projetos
    # -----------------------------
    def save_project(self, project: Project, *, expected_version: Optional[int] = None) -> ScheduleSnapshot:
        with self._lock:
            projects = dict(self._current.projects)
            projects[project.name] = project
            published = self._commit(reason="save_project", projects=projects, expected_version=expected_version)
        return self._notify(published)

    def delete_project(self, name: str, *, expected_version: Optional[int] = None) -> ScheduleSnapshot:
        """Remove o projeto e todas as suas tarefas."""
        with self._lock:
            self._require_project(name, allow_all=False)
            projects = {k: v for k, v in self._current.projects.items() if k != name}
            remaining = [t for t in self._current.tasks if t.project != name]
            active = ALL_PROJECTS if self._current.active_project == name else self._current.active_project
            published = self._commit(
                reason="delete_project",
                tasks=remaining,
                projects=projects,
                active_project=active,
                expected_version=expected_version,
            )
        return self._notify(published)

    def set_active_project(self, name: str) -> ScheduleSnapshot:
        with self._lock:
            self._require_project(name)
            published = self._commit(reason="set_active_project", active_project=name)
        return self._notify(published)

    # -----------------------------
    # Carga remota
    # -----------------------------
    def replace_from_remote(
        self,
        tasks: Iterable[Task],
        projects: Mapping[str, Project],
    ) -> ScheduleSnapshot:
        """
        Substitui o snapshot inteiro a partir de uma carga remota completa.

        O projeto ativo é preservado quando ainda existe; caso contrário a
        visão volta para `ALL`.
        """
        with self._lock:
            active = self._current.active_project
            if active != ALL_PROJECTS and active not in projects:
                active = ALL_PROJECTS
            published = self._commit(
                reason="replace_from_remote",
                tasks=list(tasks),
                projects=projects,
                active_project=active,
            )
        return self._notify(published)
