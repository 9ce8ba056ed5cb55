"""
Estado do cronograma: snapshots versionados e o seu único escritor.

Componentes principais:
    - snapshot    → ScheduleSnapshot imutável (tarefas, projetos, projeto ativo)
    - coordinator → SnapshotCoordinator (propaga uma vez por edição e publica)
    - views       → filtros de visualização e data de início da visão
    - seed        → estado de demonstração

Limites explícitos:
    - Não persiste registros
    - Não depende de UI
"""

from .snapshot import ALL_PROJECTS, ScheduleSnapshot  # noqa: F401
from .coordinator import SnapshotCoordinator  # noqa: F401
from .views import ViewFilter, current_project, filter_tasks, view_start_date  # noqa: F401
from .seed import SEED_PROJECT, seed_state  # noqa: F401
