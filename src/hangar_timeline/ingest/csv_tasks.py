"""Importação de tarefas a partir de planilhas CSV de work order (v1).

Responsabilidades:
- ler o arquivo de forma determinística (pandas, sem inferência de tipos)
- localizar a linha de cabeçalho (primeira coluna contendo `ITEM#`)
- mapear colunas por posição através de um único `COLUMN_MAP` declarativo
- registrar origem (path) e fingerprint (sha256) no resultado

Colunas esperadas (por posição):
    0 ITEM#         → id (`{projeto}-{item}`)
    1 DISCREPANCY   → título (maiúsculas, até 40 caracteres)
    2 DESCRIPTION   → descrição (fallback: título bruto)
    3 SKILL         → tipo (`A&P` → `AP`; vazio → `AP`)
    4 DIA INI       → start (>= 0)
    5 DIA DURACION  → duration (>= 1)
    6 PLANNED HOURS → ignorada
    7 ADD HOURS     → duration_hours (>= 0; prefixo decimal, fração truncada)
    8 AVANCE        → progress (0..100)

Limites explícitos (v1):
- NÃO cria dependências entre tarefas importadas
- NÃO grava no estado (o chamador entrega as tarefas ao coordenador)
"""

from __future__ import annotations

import csv
import hashlib
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import pandas as pd

from hangar_timeline.core.errors import import_header_not_found, import_project_required
from hangar_timeline.core.events import EventLog
from hangar_timeline.core.exceptions import ImportHeaderNotFoundError, ImportProjectRequiredError
from hangar_timeline.core.schedule.types import Task, coerce_task_type
from hangar_timeline.core.state.snapshot import ALL_PROJECTS


HEADER_MARKER = "ITEM#"
TITLE_MAX_LENGTH = 40
UNTITLED = "SIN TITULO"

_COMPONENT = "ingest.csv_tasks"


def _parse_int(value: str, default: int) -> int:
    """Prefixo inteiro do texto (`"12h"` → 12); inválido → default."""
    text = (value or "").strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if not ch.isdigit():
            break
        digits += ch
    if not digits:
        return default
    return sign * int(digits)


def _parse_float(value: str, default: float) -> float:
    """Prefixo decimal do texto (`"2.5h"` → 2.5); inválido → default."""
    text = (value or "").strip()
    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    number = ""
    for ch in text:
        if ch.isdigit() or (ch == "." and "." not in number):
            number += ch
            continue
        break
    if not number.strip("."):
        return default
    return sign * float(number)


def _skill(value: str) -> str:
    code = (value or "").strip().upper()
    if code == "A&P":
        return "AP"
    return code or "AP"


@dataclass(frozen=True)
class ColumnRule:
    """Regra de uma coluna: posição no arquivo, campo de destino e conversão."""

    position: int
    header: str
    field: Optional[str]
    convert: Callable[[str], Any]


COLUMN_MAP: Tuple[ColumnRule, ...] = (
    ColumnRule(0, "ITEM#", "item", lambda v: v.strip()),
    ColumnRule(1, "DISCREPANCY", "title", lambda v: v[:TITLE_MAX_LENGTH].upper() or UNTITLED),
    ColumnRule(2, "DESCRIPTION", "description", lambda v: v),
    ColumnRule(3, "SKILL", "type", _skill),
    ColumnRule(4, "DIA INI", "start", lambda v: max(0, _parse_int(v, 0))),
    ColumnRule(5, "DIA DURACION", "duration", lambda v: max(1, _parse_int(v, 1))),
    ColumnRule(6, "PLANNED HOURS", None, lambda v: v),
    ColumnRule(7, "ADD HOURS", "duration_hours", lambda v: int(max(0.0, _parse_float(v, 0.0)))),
    ColumnRule(8, "AVANCE", "progress", lambda v: max(0, min(100, _parse_int(v, 0)))),
)


@dataclass(frozen=True)
class ImportResult:
    tasks: List[Task] = field(default_factory=list)
    skipped: int = 0
    source: str = ""
    sha256: str = ""

    @property
    def imported(self) -> int:
        return len(self.tasks)


def _column_count(text: str) -> int:
    widths = [len(row) for row in csv.reader(io.StringIO(text))]
    return max(widths + [len(COLUMN_MAP)])


def _read_frame(text: str) -> pd.DataFrame:
    width = _column_count(text)
    df = pd.read_csv(
        io.StringIO(text),
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
    )
    return df.fillna("")


def _cell(row: List[str], position: int) -> str:
    if position >= len(row):
        return ""
    return str(row[position]).strip().replace('"', "")


def _row_to_task(row: List[str], *, project: str, start_hour: int) -> Task:
    values: Dict[str, Any] = {}
    for rule in COLUMN_MAP:
        if rule.field is None:
            continue
        values[rule.field] = rule.convert(_cell(row, rule.position))

    raw_title = _cell(row, 1)
    return Task(
        id=f"{project}-{values['item']}",
        title=values["title"],
        description=values["description"] or raw_title,
        type=coerce_task_type(values["type"]),
        start=values["start"],
        start_hour=start_hour,
        duration=values["duration"],
        duration_hours=values["duration_hours"],
        progress=values["progress"],
        project=project,
    )


def parse_csv_text(
    text: str,
    *,
    project: str,
    start_hour: int = 8,
    source: str = "<memory>",
    events: Optional[EventLog] = None,
) -> ImportResult:
    """
    Converte o conteúdo de um CSV em tarefas do projeto informado.

    Raises:
        ImportProjectRequiredError: projeto vazio ou `ALL`.
        ImportHeaderNotFoundError: nenhuma linha com `ITEM#` na primeira coluna.
    """
    if not project or project == ALL_PROJECTS:
        payload = import_project_required(active_project=project or "")
        raise ImportProjectRequiredError(message=payload.message, details=payload.details, hint=payload.hint)

    sha256 = hashlib.sha256(text.encode("utf-8")).hexdigest()
    rows = _read_frame(text).itertuples(index=False, name=None) if text.strip() else ()

    header_found = False
    tasks: List[Task] = []
    skipped = 0
    for raw in rows:
        row = [str(v) for v in raw]
        if not header_found:
            if HEADER_MARKER in _cell(row, 0).upper():
                header_found = True
            continue
        if not any(cell.strip() for cell in row):
            continue
        if not _cell(row, 0) or not _cell(row, 1):
            skipped += 1
            continue
        tasks.append(_row_to_task(row, project=project, start_hour=start_hour))

    if not header_found:
        payload = import_header_not_found(source=source, marker=HEADER_MARKER)
        if events is not None:
            events.log(component=_COMPONENT, level="error", message=payload.message, source=source)
        raise ImportHeaderNotFoundError(message=payload.message, details=payload.details, hint=payload.hint)

    if events is not None:
        events.log(
            component=_COMPONENT,
            level="info",
            message="tasks imported",
            source=source,
            project=project,
            rows=len(tasks),
            skipped=skipped,
            sha256=sha256,
        )
        if not tasks:
            events.log(component=_COMPONENT, level="warning", message="no valid task rows found", source=source)

    return ImportResult(tasks=tasks, skipped=skipped, source=source, sha256=sha256)


def import_tasks_csv(
    path: Union[str, Path],
    *,
    project: str,
    start_hour: int = 8,
    events: Optional[EventLog] = None,
) -> ImportResult:
    """Lê o arquivo em `path` (UTF-8) e delega a `parse_csv_text`."""
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")
    if not p.is_file():
        raise ValueError(f"Path is not a file: {p}")
    text = p.read_text(encoding="utf-8-sig")
    return parse_csv_text(text, project=project, start_hour=start_hour, source=str(p), events=events)
