# tests/core/schedule/test_propagation.py
"""
Testes do motor de propagação de datas por dependência.

Este módulo valida o comportamento de `propagate`, responsável por
garantir que nenhuma tarefa comece antes do término de todas as suas
dependências resolvíveis.

Os testes asseguram que:
- tarefas sem dependências não se movem
- uma tarefa já válida não é alterada
- uma tarefa adiantada é adiada exatamente para o término da dependência
- a propagação é idempotente
- a deduplicação segue "valor da última ocorrência, posição da primeira"
- o limite de passes é reprodutível e sinalizado explicitamente
- a estratégia topológica converge cadeias em ordem adversa

Decisões arquiteturais:
    - Entradas nunca são mutadas; o resultado é um conjunto novo
    - Atingir o limite de passes produz status PARTIAL, nunca silêncio
    - Dependências ausentes são informativas, não são erro

Invariantes:
    - Nenhum instante de início diminui
    - O resultado contém cada id exatamente uma vez

Limites explícitos:
    - Não valida a janela de visualização
    - Não valida publicação de snapshots
"""

import pytest

try:
    from hangar_timeline.core.schedule.propagation import (
        PropagationStatus,
        detect_cycles,
        propagate,
        propagate_tasks,
    )
    from hangar_timeline.core.schedule.store import ScheduleGraphStore
    from hangar_timeline.core.schedule.types import end_instant, start_instant
    from hangar_timeline.core.errors import PROPAGATION_CYCLE_DETECTED, PROPAGATION_PARTIAL
except Exception as e:  # noqa: BLE001
    propagate = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o motor de propagação esteja disponível para os testes.

    Falha imediatamente, com mensagem explícita, quando o módulo de
    propagação ou seus tipos não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing propagation engine. Implement:\n"
            "- src/hangar_timeline/core/schedule/propagation.py (propagate)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _by_id(tasks):
    return {t.id: t for t in tasks}


def test_tasks_without_dependencies_keep_their_start(make_task):
    """
    Verifica que tarefas sem dependências mantêm `start` e `start_hour`.

    Invariantes:
        - Tarefas independentes nunca são movidas, mesmo quando outras são
    """
    _require_imports()

    a = make_task("A", start=3, start_hour=14, duration=2)
    b = make_task("B", start=0, start_hour=0, duration=1, dependencies=("A",))
    c = make_task("C", start=9, start_hour=5, duration=1)

    out = _by_id(propagate([a, b, c]).tasks)

    assert (out["A"].start, out["A"].start_hour) == (3, 14)
    assert (out["C"].start, out["C"].start_hour) == (9, 5)


def test_valid_dependency_is_a_no_op(task_a, make_task):
    """
    Verifica que uma tarefa que já começa após a dependência não muda.

    A termina no instante 127 e B começa no instante 128.
    """
    _require_imports()

    b = make_task("B", start=5, start_hour=8, duration=3, duration_hours=4, dependencies=("A",))
    result = propagate([task_a, b])

    out = _by_id(result.tasks)
    assert (out["B"].start, out["B"].start_hour) == (5, 8)
    assert result.status is PropagationStatus.CONVERGED
    assert result.shifted_ids == []


def test_forced_shift_moves_task_to_dependency_end(task_a, make_task):
    """
    Verifica o adiamento forçado: B começa em 72 (< 127) e vai para 5d 07h.

    Invariantes:
        - start = floor(127 / 24) = 5
        - start_hour = 127 % 24 = 7
    """
    _require_imports()

    b = make_task("B", start=3, start_hour=0, duration=3, duration_hours=4, dependencies=("A",))
    result = propagate([task_a, b])

    out = _by_id(result.tasks)
    assert end_instant(task_a) == 127
    assert (out["B"].start, out["B"].start_hour) == (5, 7)
    assert result.shifted_ids == ["B"]
    assert result.converged


def test_input_tasks_are_not_mutated(task_a, make_task):
    _require_imports()

    b = make_task("B", start=3, start_hour=0, duration=1, dependencies=("A",))
    propagate([task_a, b])

    assert (b.start, b.start_hour) == (3, 0)


def test_propagation_is_idempotent(make_task):
    """
    Verifica que propagar o resultado de uma propagação não altera nada.
    """
    _require_imports()

    tasks = [
        make_task("C", start=0, duration=2, dependencies=("B",)),
        make_task("A", start=0, start_hour=6, duration=1, duration_hours=20),
        make_task("B", start=1, duration=3, dependencies=("A", "missing")),
        make_task("D", start=0, duration=1, dependencies=("A", "C")),
    ]

    once = propagate_tasks(tasks)
    twice = propagate_tasks(once)

    assert twice == once


def test_duplicates_keep_last_value_at_first_position(make_task):
    """
    Verifica a política de deduplicação por id.

    Entradas "x" nas posições 0 e 2: o resultado tem um único "x", com o
    valor da posição 2, ocupando a posição 0.
    """
    _require_imports()

    tasks = [
        make_task("x", title="first"),
        make_task("y"),
        make_task("x", title="second"),
    ]

    result = propagate(tasks)

    assert [t.id for t in result.tasks] == ["x", "y"]
    assert result.tasks[0].title == "second"
    assert result.duplicates == ["x"]


def test_missing_dependencies_are_ignored_and_reported(make_task):
    _require_imports()

    a = make_task("A", start=2, duration=1, dependencies=("ghost",))
    result = propagate([a])

    assert (result.tasks[0].start, result.tasks[0].start_hour) == (2, 0)
    assert result.missing_dependencies == {"A": ["ghost"]}
    assert result.converged


def test_unresolvable_dependencies_do_not_clamp_negative_start(make_task):
    _require_imports()

    a = make_task("A", start=-2, start_hour=5, duration=1, dependencies=("ghost",))
    result = propagate([a])

    assert (result.tasks[0].start, result.tasks[0].start_hour) == (-2, 5)
    assert result.shifted_ids == []


def test_reversed_chain_hits_pass_cap_and_reports_partial(reversed_chain):
    """
    Verifica o limite de 100 passes sobre uma cadeia de 149 elos em ordem adversa.

    Após k passes, a tarefa T{i} está no dia min(i-1, k); com 100 passes a
    tarefa T150 fica no dia 100, antes do término de T149.

    Decisões arquiteturais:
        - O limite é um teto de custo, não critério de sucesso
        - O resultado parcial é sinalizado por status e payload
    """
    _require_imports()

    result = propagate(reversed_chain)
    out = _by_id(result.tasks)

    assert result.passes == 100
    assert result.status is PropagationStatus.PARTIAL
    assert result.issue is not None
    assert result.issue.type == PROPAGATION_PARTIAL

    assert out["T150"].start == 100
    assert start_instant(out["T150"]) < end_instant(out["T149"])
    assert "T150" in result.unresolved_ids
    assert out["T101"].start == 100
    assert "T101" not in result.unresolved_ids


def test_reversed_chain_converges_with_topological_strategy(reversed_chain):
    _require_imports()

    result = propagate(reversed_chain, strategy="topological")
    out = _by_id(result.tasks)

    assert result.converged
    assert result.passes == 1
    assert out["T150"].start == 149
    assert result.unresolved_ids == []


def test_relaxation_stops_after_a_pass_without_changes(task_a, make_task):
    _require_imports()

    b = make_task("B", start=0, duration=1, dependencies=("A",))
    result = propagate([task_a, b])

    # passe 1 move B, passe 2 confirma o ponto fixo
    assert result.passes == 2


def test_cycle_is_reported_as_cyclic(make_task):
    """
    Verifica que um ciclo entre dependências resolvíveis é sinalizado.

    A ↔ B se empurram mutuamente a cada passe: o laço só para no limite.
    """
    _require_imports()

    tasks = [
        make_task("A", start=0, duration=1, dependencies=("B",)),
        make_task("B", start=0, duration=1, dependencies=("A",)),
        make_task("C", start=0, duration=1),
    ]

    result = propagate(tasks, max_passes=10)

    assert result.status is PropagationStatus.CYCLIC
    assert result.passes == 10
    assert set(result.cyclic_ids) == {"A", "B"}
    assert result.issue.type == PROPAGATION_CYCLE_DETECTED
    assert detect_cycles(ScheduleGraphStore.build(tasks)) == ["A", "B"]


def test_cap_truncation_beside_a_satisfied_cycle_is_partial(make_task, reversed_chain):
    """
    Verifica que um ciclo já satisfeito não rotula a cadeia truncada como ciclo.

    C1 ↔ C2 têm duração zero e nunca se movem; apenas a cadeia invertida
    fica pendente ao atingir o limite de passes.
    """
    _require_imports()

    cycle = [
        make_task("C1", start=0, duration=0, dependencies=("C2",)),
        make_task("C2", start=0, duration=0, dependencies=("C1",)),
    ]

    result = propagate(cycle + reversed_chain)

    assert set(result.cyclic_ids) == {"C1", "C2"}
    assert "T150" in result.unresolved_ids
    assert not set(result.unresolved_ids) & set(result.cyclic_ids)
    assert result.status is PropagationStatus.PARTIAL
    assert result.issue.type == PROPAGATION_PARTIAL


def test_zero_passes_returns_input_values(task_a, make_task):
    _require_imports()

    b = make_task("B", start=0, duration=1, dependencies=("A",))
    result = propagate([task_a, b], max_passes=0)

    assert result.passes == 0
    assert result.tasks == [task_a, b]
    assert result.status is PropagationStatus.PARTIAL


def test_invalid_arguments_raise(task_a):
    _require_imports()

    with pytest.raises(ValueError):
        propagate([task_a], max_passes=-1)
    with pytest.raises(ValueError):
        propagate([task_a], strategy="random")


def test_cross_project_links_are_resolved_and_listed(make_task):
    _require_imports()

    a = make_task("A", start=0, duration=2, project="P1")
    b = make_task("B", start=0, duration=1, project="P2", dependencies=("A",))

    result = propagate([a, b])

    assert _by_id(result.tasks)["B"].start == 2
    assert result.cross_project_links == [("B", "A")]


def test_events_are_logged(event_log, reversed_chain):
    _require_imports()

    propagate(reversed_chain, events=event_log)

    entries = event_log.by_component("schedule.propagation")
    assert entries[0]["level"] == "info"
    assert entries[0]["status"] == "partial"
    assert entries[0]["rows_before"] == 150
    assert event_log.warnings["schedule.propagation"]
