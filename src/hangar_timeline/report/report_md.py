"""
src/hangar_timeline/report/report_md.py

Gerador canônico do relatório imprimível de cronograma (Markdown, v1).

Regras:
- O relatório é derivado EXCLUSIVAMENTE de um snapshot publicado e das
  tarefas já filtradas para a visão (projeto ativo, busca, filtro).
- Não propaga, não recalcula datas, não acessa filesystem.
- Mesmo snapshot + mesmo filtro + mesma data => mesmo Markdown
  (ordem estável: projetos por nome, tarefas por início).

Estrutura mínima obrigatória:
# XTREME AVIATION - OPS REPORT

## Summary
## Tasks
## Sign-off
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from hangar_timeline.core.schedule.types import Project, Task
from hangar_timeline.core.state.snapshot import ALL_PROJECTS, ScheduleSnapshot
from hangar_timeline.core.state.views import ViewFilter, filter_tasks


REPORT_TITLE = "# XTREME AVIATION - OPS REPORT"

REQUIRED_SECTIONS: List[str] = [
    REPORT_TITLE,
    "## Summary",
    "## Tasks",
    "## Sign-off",
]

TABLE_HEADER = "| TIE | DUR. | PROG. | DESCRIPCIÓN DE LA TAREA | ESTADO / FIRMA |"
TABLE_RULE = "|---|---|---|---|---|"

EMPTY_MESSAGE = "NO HAY TAREAS QUE COINCIDAN CON EL FILTRO SELECCIONADO"


def report_subtitle(view_filter: ViewFilter, active_project: str, project: Optional[Project]) -> str:
    if view_filter is ViewFilter.PENDING:
        return "REPORTE DE TAREAS PENDIENTES"
    if view_filter is ViewFilter.TODAY:
        return "REPORTE TÁCTICO DEL DÍA"
    if active_project == ALL_PROJECTS:
        return "REPORTE GLOBAL DE FLOTA"
    return f"LP# {(project.lp if project else None) or 'N/A'}"


def _cell(text: str) -> str:
    # pipes quebrariam a tabela
    return (text or "").replace("|", "/").replace("\n", " ").strip()


def format_duration(task: Task) -> str:
    if task.duration_hours > 0:
        return f"{task.duration} d | {task.duration_hours} h"
    return f"{task.duration} d"


def format_status(task: Task) -> str:
    return "DONE" if task.progress == 100 else "[ ] PENDIENTE"


def _task_row(task: Task) -> str:
    description = _cell(task.title.upper())
    if task.description:
        description = f"**{description}** <br> _{_cell(task.description)}_"
    else:
        description = f"**{description}**"
    return (
        f"| DÍA {task.start + 1} | {format_duration(task)} | {task.progress}% "
        f"| {description} | {format_status(task)} |"
    )


def _project_summary(project: Project) -> List[str]:
    return [
        f"- **CUSTOMER**: {project.customer or 'N/A'}",
        f"- **A/C | MODEL | MSN**: {project.ac or '-'} | {project.model or '-'} | {project.msn or '-'}",
        f"- **WO | INTERVAL**: {project.wo or 'N/A'} | {project.interval_days} DÍAS",
        f"- **PM (PROJECT MANAGER)**: {project.pm or 'N/A'}",
    ]


def _fleet_summary(tasks: Sequence[Task], projects: Dict[str, Project], names: List[str]) -> List[str]:
    customers: List[str] = []
    for name in names:
        customer = projects[name].customer if name in projects else ""
        if customer and customer not in customers:
            customers.append(customer)
    return [
        f"- **AIRCRAFT ACTIVOS (A/C)**: {len(names)} A/C(S)",
        f"- **CUSTOMERS ACTIVOS**: {', '.join(customers) or '-'}",
        f"- **TOTAL TAREAS**: {len(tasks)} REGISTRADAS",
    ]


def generate_schedule_report_md(
    snapshot: ScheduleSnapshot,
    view_filter: ViewFilter = ViewFilter.ALL,
    generated_at: Optional[datetime] = None,
    *,
    tasks: Optional[Sequence[Task]] = None,
    query: str = "",
) -> str:
    """
    Gera o relatório Markdown do snapshot.

    Quando `tasks` não é informado, as tarefas são filtradas do snapshot com
    `filter_tasks(snapshot, query, view_filter, generated_at)`.
    """
    if not isinstance(snapshot, ScheduleSnapshot):
        raise ValueError("A published ScheduleSnapshot is required to generate the report")

    view_filter = ViewFilter(view_filter)
    generated_at = generated_at or datetime.now()
    if tasks is None:
        tasks = filter_tasks(snapshot, query=query, view_filter=view_filter, now=generated_at)

    projects = dict(snapshot.projects)
    active = snapshot.active_project
    active_data = projects.get(active)
    names = sorted({t.project for t in tasks})

    lines: List[str] = []

    lines.append(REPORT_TITLE + "\n")
    lines.append(f"**{report_subtitle(view_filter, active, active_data)}**")
    badge = "FLOTA ACTIVA" if active == ALL_PROJECTS else (active_data.name if active_data else active)
    lines.append(f"- **UNIDAD**: {badge}")
    lines.append(f"- **FECHA REPORTE**: {generated_at.date().isoformat()}")
    lines.append("")

    lines.append("## Summary")
    if active != ALL_PROJECTS and active_data is not None:
        lines.extend(_project_summary(active_data))
    else:
        lines.extend(_fleet_summary(tasks, projects, names))
    lines.append("")

    lines.append("## Tasks")
    if not tasks:
        lines.append(EMPTY_MESSAGE)
        lines.append("")
    mode = "SOLO PENDIENTES" if view_filter is ViewFilter.PENDING else "PLAN TÁCTICO"
    for name in names:
        project = projects.get(name)
        project_tasks = sorted((t for t in tasks if t.project == name), key=lambda t: t.start)
        heading = f"### A/C: {(project.ac if project else '') or name}"
        if project is not None:
            heading += f" | LP#: {project.lp or '-'} | WO: {project.wo}"
        lines.append(f"{heading} ({mode})")
        lines.append("")
        lines.append(TABLE_HEADER)
        lines.append(TABLE_RULE)
        for task in project_tasks:
            lines.append(_task_row(task))
        lines.append("")

    lines.append("## Sign-off")
    lines.append("- FIRMA PROJECT MANAGER: ____________________")
    lines.append("- FIRMA QA / INSPECTOR: ____________________")
    lines.append("")
    lines.append(f"_REPORT_REF: {active}_{generated_at.strftime('%Y%m%dT%H%M%S')} // snapshot v{snapshot.version}_")

    content = "\n".join(lines)

    for sec in REQUIRED_SECTIONS:
        if sec not in content:
            raise RuntimeError(f"Report generation failed: missing required section: {sec}")

    return content
