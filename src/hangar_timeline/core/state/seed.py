# src/hangar_timeline/core/state/seed.py
"""Estado inicial de demonstração: um projeto com três tarefas encadeadas."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..schedule.types import Project, Task, TaskType
from .snapshot import ScheduleSnapshot


SEED_PROJECT = "UNIT-A22"


def seed_state(today: Optional[date] = None) -> ScheduleSnapshot:
    start = today if today is not None else date.today()
    project = Project(
        name=SEED_PROJECT,
        customer="X-TREME AVIATION",
        ac="B737-800",
        wo="WO-9988",
        start_date=start,
        interval_days=30,
    )
    tasks = (
        Task(
            id="1",
            title="INSPECCIÓN ESTRUCTURAL FUSELAJE",
            description="REVISIÓN COMPLETA DE REMACHES Y PANELES DE ACCESO SEGÚN MANUAL DE MANTENIMIENTO.",
            type=TaskType.AIRFRAME,
            start=0,
            start_hour=7,
            duration=5,
            progress=100,
            project=SEED_PROJECT,
        ),
        Task(
            id="2",
            title="DESMONTAJE DE INTERIORES",
            description="RETIRO DE ASIENTOS, ALFOMBRAS Y PANELES LATERALES PARA ACCESO A CABLEADO.",
            type=TaskType.INTERIOR,
            start=5,
            start_hour=8,
            duration=3,
            duration_hours=4,
            progress=60,
            project=SEED_PROJECT,
            dependencies=("1",),
        ),
        Task(
            id="3",
            title="UPGRADE AVIONICS G1000",
            description="INSTALACIÓN DE NUEVOS DISPLAYS Y CONFIGURACIÓN DE SISTEMA DE NAVEGACIÓN TÁCTICA.",
            type=TaskType.AVIONICS,
            start=8,
            start_hour=9,
            duration=10,
            progress=10,
            project=SEED_PROJECT,
            dependencies=("2",),
        ),
    )
    return ScheduleSnapshot(version=0, tasks=tasks, projects={SEED_PROJECT: project}, active_project=SEED_PROJECT)
