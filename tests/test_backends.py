# -*- coding: utf-8 -*-

import pytest

from conftest import FakeBackend
from wave_picking.backend import _REGISTRY, BackendStatus, available_backends, create_backend, register_backend
from wave_picking.config import SolverConfig
from wave_picking.errors import BackendUnavailableError, FailureKind
from wave_picking.model import Solution
from wave_picking.solver import SolutionSource, WaveSolver, solve_instance


def test_registry_lists_both_engines():
    assert available_backends() == ["gurobi", "ortools"]


def test_unknown_engine_is_unavailable():
    with pytest.raises(BackendUnavailableError):
        create_backend("cplex-fantasma")


def test_ortools_small_model():
    backend = create_backend("ortools")
    x = backend.add_bool_var("x")
    y = backend.add_int_var(0, 5, "y")
    backend.add_linear_constraint([(x, 3), (y, 1)], -float("inf"), 5, "cap")
    # termos repetidos são somados: 2x + 2x == 4x, e então x=1, y=2 vale 6 > 5
    backend.set_objective([(x, 2), (x, 2), (y, 1)], maximize=True)
    backend.set_time_limit(10)
    assert backend.solve() is BackendStatus.OPTIMAL
    assert backend.value(x) == pytest.approx(1)
    assert backend.value(y) == pytest.approx(2)


@pytest.mark.parametrize("engine", ["ortools", "gurobi"])
def test_exact_path_selects_both_orders_and_aisles(example_instance, engine):
    result = WaveSolver(example_instance, config=SolverConfig(backend=engine, time_limit_sec=30)).solve()
    assert result.source is SolutionSource.EXACT
    assert result.solution == Solution(orders={0, 1}, aisles={0, 1})
    assert result.objective == pytest.approx(4.5)
    assert result.backend_status is BackendStatus.OPTIMAL


def test_unsupplied_item_makes_model_infeasible(unsupplied_instance):
    result = WaveSolver(unsupplied_instance, config=SolverConfig(backend="ortools", time_limit_sec=30)).solve()
    assert result.failures == (FailureKind.SOLVER_INFEASIBLE_DOMAIN, FailureKind.FALLBACK_EXHAUSTED)
    assert result.solution is None


def test_registered_backend_is_created_by_name(example_instance):
    register_backend("fake", "conftest:FakeBackend")
    try:
        backend = create_backend("fake")
        assert isinstance(backend, FakeBackend)
        # o motor falso não devolve valores: a resposta é rejeitada e o fallback assume
        result = solve_instance(example_instance, SolverConfig(backend="fake"))
        assert result.failures == (FailureKind.SOLVER_RESULT_REJECTED,)
        assert result.source is SolutionSource.FALLBACK
    finally:
        _REGISTRY.pop("fake", None)


@pytest.mark.parametrize("status_name, sol_count, expected", [
    ("OPTIMAL", 1, BackendStatus.OPTIMAL),
    ("INFEASIBLE", 0, BackendStatus.INFEASIBLE),
    ("INF_OR_UNBD", 0, BackendStatus.INFEASIBLE),
    ("TIME_LIMIT", 2, BackendStatus.FEASIBLE),
    ("TIME_LIMIT", 0, BackendStatus.OTHER),
])
def test_gurobi_status_mapping(status_name, sol_count, expected):
    gurobi_backend = pytest.importorskip("wave_picking.gurobi_backend")
    status = getattr(gurobi_backend.GRB, status_name)
    assert gurobi_backend.map_gurobi_status(status, sol_count) is expected
