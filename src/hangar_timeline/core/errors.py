"""
Hangar Timeline - Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros e sinais de degradação do
Hangar Timeline. O core de agendamento não levanta exceções para dados
malformados; em vez disso, devolve payloads explícitos que o dono do
estado pode exibir, registrar ou ignorar.

Payloads devem ser:

- explícitos
- serializáveis
- acionáveis
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HangarErrorPayload:
    """
    Payload canônico de erro/sinal do Hangar Timeline.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos (v1)
# ---------------------------------------------------------------------------

# Propagação de cronograma
PROPAGATION_PARTIAL = "PROPAGATION_PARTIAL"
PROPAGATION_CYCLE_DETECTED = "PROPAGATION_CYCLE_DETECTED"

# Importação CSV
IMPORT_PROJECT_REQUIRED = "IMPORT_PROJECT_REQUIRED"
IMPORT_HEADER_NOT_FOUND = "IMPORT_HEADER_NOT_FOUND"

# Estado / snapshots
STATE_STALE_SNAPSHOT = "STATE_STALE_SNAPSHOT"
STATE_UNKNOWN_PROJECT = "STATE_UNKNOWN_PROJECT"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def propagation_partial(
    *,
    passes: int,
    max_passes: int,
    unresolved_ids: List[str],
    hint: str = "Aumente propagation.max_passes ou use a estratégia 'topological' para cadeias longas.",
) -> HangarErrorPayload:
    return HangarErrorPayload(
        type=PROPAGATION_PARTIAL,
        message="Propagação interrompida pelo limite de passes",
        details={
            "passes": passes,
            "max_passes": max_passes,
            "unresolved_ids": unresolved_ids,
        },
        hint=hint,
    )


def propagation_cycle_detected(
    *,
    cyclic_ids: List[str],
    unresolved_ids: List[str],
    hint: str = "Remova a dependência circular entre as tarefas listadas.",
) -> HangarErrorPayload:
    return HangarErrorPayload(
        type=PROPAGATION_CYCLE_DETECTED,
        message="Subgrafo de dependências sem resolução (ciclo)",
        details={
            "cyclic_ids": cyclic_ids,
            "unresolved_ids": unresolved_ids,
        },
        hint=hint,
    )


def import_project_required(
    *,
    active_project: str,
    hint: str = "Selecione um projeto específico antes de importar tarefas.",
) -> HangarErrorPayload:
    return HangarErrorPayload(
        type=IMPORT_PROJECT_REQUIRED,
        message="Importação exige um projeto específico",
        details={"active_project": active_project},
        hint=hint,
    )


def import_header_not_found(
    *,
    source: str,
    marker: str,
    hint: str = "Verifique se o arquivo contém a linha de cabeçalho com a coluna ITEM#.",
) -> HangarErrorPayload:
    return HangarErrorPayload(
        type=IMPORT_HEADER_NOT_FOUND,
        message="Cabeçalho do CSV não encontrado",
        details={"source": source, "marker": marker},
        hint=hint,
    )


def state_stale_snapshot(
    *,
    expected_version: int,
    current_version: int,
    hint: str = "Recarregue o snapshot atual e reaplique a edição.",
) -> HangarErrorPayload:
    return HangarErrorPayload(
        type=STATE_STALE_SNAPSHOT,
        message="Edição baseada em snapshot desatualizado",
        details={
            "expected_version": expected_version,
            "current_version": current_version,
        },
        hint=hint,
    )


def state_unknown_project(
    *,
    project: str,
    known_projects: List[str],
    hint: str = "Cadastre o projeto antes de referenciá-lo.",
) -> HangarErrorPayload:
    return HangarErrorPayload(
        type=STATE_UNKNOWN_PROJECT,
        message="Projeto desconhecido",
        details={"project": project, "known_projects": known_projects},
        hint=hint,
    )
