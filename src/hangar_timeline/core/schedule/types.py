# src/hangar_timeline/core/schedule/types.py
"""
Tipos canônicos do cronograma de manutenção.

Este módulo define os registros que circulam entre o core de agendamento
e os colaboradores externos (persistência, sincronização, importação):

    - TaskType → enum fechado de especialidades (tipo de tarefa)
    - Task     → tarefa de manutenção posicionada na linha do tempo
    - Project  → projeto (aeronave) que serve de origem para os offsets

Unidades de tempo:
    - `start` e `duration` são dias inteiros relativos ao `start_date` do projeto
    - `start_hour` e `duration_hours` são horas inteiras (0–23) adicionais
    - instantes são contagens de horas desde o início do projeto
      (`dias * 24 + horas`)

Princípios fundamentais:
    - Registros são imutáveis (frozen); correções produzem novos registros
    - O core confia no formato dos campos, não na consistência entre eles
    - Nenhuma validação de faixa (hora > 23, dias negativos) ocorre aqui

Limites explícitos:
    - Não persiste registros
    - Não valida regras de negócio do grafo de dependências
    - Não conhece UI nem formulários
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Tuple, Union


HOURS_PER_DAY = 24


class TaskType(str, Enum):
    """
    Especialidades de manutenção (conjunto fechado).

    Os valores textuais são os códigos curtos gravados pelos colaboradores
    externos e exibidos no cronograma.
    """
    AIRFRAME = "AP"
    INTERIOR = "INT"
    AVIONICS = "AVI"
    SHEET_METAL = "SM"


@dataclass(frozen=True)
class Task:
    """
    Tarefa de manutenção posicionada na linha do tempo de um projeto.

    Campos:
        - id: identificador único no conjunto de trabalho
        - title / description: textos livres
        - type: `TaskType` ou código bruto desconhecido (preservado como str)
        - start / start_hour: início em dias + horas relativos ao projeto
        - duration / duration_hours: duração em dias + horas adicionais
        - progress: avanço 0–100
        - project: referência ao `Project.name`
        - dependencies: ids das tarefas que precisam terminar antes desta

    Invariantes:
        - A instância nunca é alterada após criada
        - `dependencies` é sempre uma tupla (ordem de declaração preservada)
    """
    id: str
    title: str = ""
    description: str = ""
    type: Union[TaskType, str] = TaskType.AIRFRAME
    start: int = 0
    start_hour: int = 0
    duration: int = 1
    duration_hours: int = 0
    progress: int = 0
    project: str = ""
    dependencies: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # listas vindas de colaboradores externos viram tuplas
        if not isinstance(self.dependencies, tuple):
            object.__setattr__(self, "dependencies", tuple(self.dependencies or ()))

    @property
    def start_instant(self) -> int:
        return start_instant(self)

    @property
    def end_instant(self) -> int:
        return end_instant(self)

    @property
    def is_complete(self) -> bool:
        return self.progress == 100


@dataclass(frozen=True)
class Project:
    """
    Projeto de manutenção (uma aeronave em um work order).

    `start_date` é a origem de todos os offsets de dia das suas tarefas e
    `interval_days` é a largura visível da linha do tempo, em dias.
    Os metadados opcionais (modelo, MSN, LP, PM) podem estar ausentes.
    """
    name: str
    customer: str = ""
    ac: str = ""
    wo: str = ""
    start_date: date = field(default_factory=date.today)
    interval_days: int = 45
    model: Optional[str] = None
    msn: Optional[str] = None
    lp: Optional[str] = None
    pm: Optional[str] = None


def start_instant(task: Task) -> int:
    """Instante de início em horas desde o início do projeto."""
    return task.start * HOURS_PER_DAY + task.start_hour


def end_instant(task: Task) -> int:
    """Instante de término em horas desde o início do projeto."""
    return (
        task.start * HOURS_PER_DAY
        + task.start_hour
        + task.duration * HOURS_PER_DAY
        + task.duration_hours
    )


def coerce_task_type(value: Union[TaskType, str, None]) -> Union[TaskType, str]:
    """
    Converte um código textual em `TaskType` quando reconhecido.

    Códigos desconhecidos são preservados como string (o palette usa a cor
    neutra para eles). Aceita também o nome do membro (ex.: "AVIONICS").
    """
    if isinstance(value, TaskType):
        return value
    if value is None:
        return TaskType.AIRFRAME
    raw = str(value).strip()
    try:
        return TaskType(raw)
    except ValueError:
        pass
    key = raw.upper().replace("-", "_")
    if key in TaskType.__members__:
        return TaskType[key]
    return raw
