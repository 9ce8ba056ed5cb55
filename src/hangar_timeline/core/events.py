# src/hangar_timeline/core/events.py
"""
EventLog - log estruturado em memória do Hangar Timeline.

Componentes do core (propagação, coordenador de snapshots, importação)
registram aqui eventos estruturados em vez de escrever em arquivos ou
consoles. Quem consome o log (UI, relatórios, testes) decide o que exibir.

Princípios fundamentais:
- Nenhum I/O: o log vive apenas na memória do processo
- Todo evento carrega `component`, `level`, `message` e timestamp UTC
- Warnings não fatais são agrupados por componente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


LEVELS = ("debug", "info", "warning", "error")


@dataclass
class EventLog:
    """
    Log estruturado de eventos.

    Campos canônicos:
    - events: eventos na ordem de registro
    - warnings: mensagens de warning por componente
    """

    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    def log(self, *, component: str, level: str, message: str, **extra: Any) -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        event = {
            "component": component,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)
        if level == "warning":
            self.add_warning(component=component, message=message)

    def add_warning(self, *, component: str, message: str) -> None:
        if component not in self.warnings:
            self.warnings[component] = []
        self.warnings[component].append(message)

    def by_component(self, component: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("component") == component]

    def clear(self) -> None:
        self.events.clear()
        self.warnings.clear()
