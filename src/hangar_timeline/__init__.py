# src/hangar_timeline/__init__.py
"""
Hangar Timeline - cronograma de manutenção de aeronaves.

Princípios centrais:
    - Uma tarefa nunca começa antes do fim de todas as suas dependências
    - A propagação é determinística e o seu resultado é explícito
    - A linha do tempo renderiza apenas a janela visível de tarefas

Arquitetura em alto nível:
    - core.schedule → registros, deduplicação e propagação
    - core.timeline → geometria, janela virtualizada e paleta
    - core.state    → snapshots versionados e o coordenador de escrita
    - ingest        → importação de planilhas CSV
    - report/export → relatório Markdown e PDF
    - ui            → renderização HTML da janela visível

Limites explícitos:
    - Não realiza persistência local ou remota
    - Não implementa formulários de edição
"""
# src/hangar_timeline/__init__.py
from .core.schedule import Project, Task, TaskType, propagate
from .core.state import ScheduleSnapshot, SnapshotCoordinator
from .ui import RenderResult, render_window

__all__ = [
    "Project",
    "Task",
    "TaskType",
    "propagate",
    "ScheduleSnapshot",
    "SnapshotCoordinator",
    "RenderResult",
    "render_window",
]
