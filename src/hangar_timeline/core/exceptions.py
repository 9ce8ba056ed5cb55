"""
Hangar Timeline - Canonical Exceptions (v1)

Exceções tipadas levantadas pelas camadas que fazem fronteira com o
mundo externo (importação, coordenador de estado).

Regras:
- O core de agendamento (propagação, geometria, janela) nunca levanta
  estas exceções: ele degrada e devolve payloads.
- Exceções carregam apenas dados estruturados (serializáveis).
- `to_payload()` mapeia deterministicamente para `HangarErrorPayload`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import HangarErrorPayload


@dataclass(frozen=True)
class HangarException(Exception):
    """Base class para exceções internas do Hangar Timeline.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    error_type = "HANGAR_ERROR"

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_payload(self) -> HangarErrorPayload:
        return HangarErrorPayload(
            type=self.error_type,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Importação
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ImportProjectRequiredError(HangarException):
    """Importação solicitada sem projeto específico selecionado."""

    error_type = "IMPORT_PROJECT_REQUIRED"


@dataclass(frozen=True)
class ImportHeaderNotFoundError(HangarException):
    """Arquivo CSV não contém a linha de cabeçalho esperada."""

    error_type = "IMPORT_HEADER_NOT_FOUND"


# ---------------------------------------------------------------------------
# Estado / snapshots
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StaleSnapshotError(HangarException):
    """Escrita baseada em uma versão de snapshot que já foi substituída."""

    error_type = "STATE_STALE_SNAPSHOT"


@dataclass(frozen=True)
class UnknownProjectError(HangarException):
    """Operação referencia um projeto inexistente no snapshot."""

    error_type = "STATE_UNKNOWN_PROJECT"
