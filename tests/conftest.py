# tests/conftest.py
"""
Fixtures compartilhados para testes do Hangar Timeline.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas (YAML como string)
- tarefas e projetos canônicos para propagação e janela de visualização
- snapshot de demonstração com data fixa
- log estruturado isolado por teste

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados
    - Nenhuma fixture depende do relógio do sistema

Invariantes:
    - Nenhuma fixture realiza I/O
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

from datetime import date, datetime

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def timeline_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) semelhante ao uso real.

    Representa o conteúdo típico de um `config.defaults.yaml` de um
    deployment, base sobre a qual overrides locais são aplicados.

    Returns:
        str: Conteúdo YAML com as seções timeline/propagation/ingest.
    """
    return """\
timeline:
  day_width: 60
  row_height: 48
  header_height: 56
  buffer: 5
propagation:
  max_passes: 100
  strategy: relaxation
ingest:
  default_start_hour: 8
"""


@pytest.fixture
def timeline_local_yaml() -> str:
    """YAML de override local: apenas as chaves que mudam."""
    return """\
timeline:
  day_width: 40
propagation:
  strategy: topological
"""


# =====================================================
# Schedule fixtures
# =====================================================

@pytest.fixture
def task_a():
    """Tarefa A: dia 0 às 07h, 5 dias (término no instante 127)."""
    from hangar_timeline.core.schedule.types import Task

    return Task(id="A", title="A", start=0, start_hour=7, duration=5, duration_hours=0, project="P1")


@pytest.fixture
def make_task():
    """
    Factory de tarefas com defaults neutros.

    Returns:
        callable: `make_task(id, **campos)` → Task.
    """
    from hangar_timeline.core.schedule.types import Task

    def _make(task_id: str, **fields):
        fields.setdefault("title", task_id)
        fields.setdefault("project", "P1")
        return Task(id=task_id, **fields)

    return _make


@pytest.fixture
def reversed_chain(make_task):
    """
    150 tarefas de 1 dia em ordem inversa à das dependências.

    A tarefa `k` depende de `k-1`; o array vai de 150 até 1 e todas
    começam no dia 0. Cada elo exige um adiamento de 1 dia.
    """
    tasks = []
    for k in range(150, 0, -1):
        deps = (f"T{k - 1}",) if k > 1 else ()
        tasks.append(make_task(f"T{k}", start=0, start_hour=0, duration=1, dependencies=deps))
    return tasks


# =====================================================
# State fixtures
# =====================================================

@pytest.fixture
def fixed_today() -> date:
    return date(2024, 1, 1)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 3, 12, 0, 0)


@pytest.fixture
def seed_snapshot(fixed_today):
    """Snapshot de demonstração (UNIT-A22) com início em 2024-01-01."""
    from hangar_timeline.core.state.seed import seed_state

    return seed_state(fixed_today)


@pytest.fixture
def event_log():
    from hangar_timeline.core.events import EventLog

    return EventLog()
