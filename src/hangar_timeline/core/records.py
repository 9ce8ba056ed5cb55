# src/hangar_timeline/core/records.py
"""
Mapeamento entre registros do core e linhas de armazenamento colunar.

Colaboradores de persistência gravam tarefas e projetos com nomes de
coluna em snake_case. Este módulo traduz nos dois sentidos, de forma
determinística:

    Task.start_hour      ↔ start_hour
    Task.duration_hours  ↔ duration_hours
    Project.start_date   ↔ start_date (ISO `YYYY-MM-DD`)
    Project.interval_days ↔ interval_days

Regras de leitura:
    - metadados opcionais do projeto (model, msn, lp, pm) ausentes → None
    - descrição ausente → ""
    - dependências ausentes → tupla vazia
    - códigos de tipo desconhecidos são preservados como texto

Limites explícitos:
    - Não acessa banco, rede ou arquivo
    - Não valida faixas numéricas (responsabilidade de quem cria o registro)
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .schedule.types import Project, Task, TaskType, coerce_task_type


TASK_COLUMNS = (
    "id",
    "title",
    "description",
    "type",
    "start",
    "start_hour",
    "duration",
    "duration_hours",
    "progress",
    "project",
    "dependencies",
)

PROJECT_COLUMNS = (
    "name",
    "customer",
    "ac",
    "model",
    "msn",
    "wo",
    "lp",
    "pm",
    "start_date",
    "interval_days",
)

_OPTIONAL_PROJECT_FIELDS = ("model", "msn", "lp", "pm")


def _int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    return int(value)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text != "" else None


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip().split("T")[0])


def task_to_row(task: Task) -> Dict[str, Any]:
    task_type = task.type.value if isinstance(task.type, TaskType) else task.type
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "type": task_type,
        "start": task.start,
        "start_hour": task.start_hour,
        "duration": task.duration,
        "duration_hours": task.duration_hours,
        "progress": task.progress,
        "project": task.project,
        "dependencies": list(task.dependencies),
    }


def task_from_row(row: Mapping[str, Any]) -> Task:
    return Task(
        id=str(row["id"]),
        title=row.get("title") or "",
        description=row.get("description") or "",
        type=coerce_task_type(row.get("type")),
        start=_int(row.get("start")),
        start_hour=_int(row.get("start_hour")),
        duration=_int(row.get("duration"), default=1),
        duration_hours=_int(row.get("duration_hours")),
        progress=_int(row.get("progress")),
        project=row.get("project") or "",
        dependencies=tuple(row.get("dependencies") or ()),
    )


def project_to_row(project: Project) -> Dict[str, Any]:
    return {
        "name": project.name,
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


def project_from_row(row: Mapping[str, Any], *, default_interval_days: int = 45) -> Project:
    optional = {k: _optional_str(row.get(k)) for k in _OPTIONAL_PROJECT_FIELDS}
    return Project(
        name=str(row["name"]),
        customer=row.get("customer") or "",
        ac=row.get("ac") or "",
        wo=row.get("wo") or "",
        start_date=_parse_date(row["start_date"]),
        interval_days=_int(row.get("interval_days"), default=default_interval_days),
        **optional,
    )


def tasks_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[Task]:
    return [task_from_row(r) for r in rows]


def projects_from_rows(rows: Iterable[Mapping[str, Any]]) -> Dict[str, Project]:
    """Projetos indexados por nome (ordem de chegada preservada)."""
    out: Dict[str, Project] = {}
    for r in rows:
        project = project_from_row(r)
        out[project.name] = project
    return out
