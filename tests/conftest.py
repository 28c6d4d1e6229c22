# -*- coding: utf-8 -*-

import itertools
from typing import Dict, List, Optional

import pytest

from wave_picking.backend import BackendStatus, MipBackend
from wave_picking.evaluation import compute_objective, is_solution_feasible
from wave_picking.model import Instance, Solution


class FakeVar:
    def __init__(self, name, kind, lb, ub):
        self.name = name
        self.kind = kind
        self.lb = lb
        self.ub = ub

    def __repr__(self):
        return f"FakeVar({self.name})"


class FakeBackend(MipBackend):
    """
    Motor falso: registra o modelo construído e devolve o status e os valores
    configurados no teste.
    """
    name = "fake"

    def __init__(self, status=BackendStatus.OPTIMAL, values: Optional[Dict[str, float]] = None, verbose=False,
                 solve_error: Optional[Exception] = None):
        self.status = status
        self.values = values or {}
        self.solve_error = solve_error
        self.vars: Dict[str, FakeVar] = {}
        self.constraints: Dict[str, tuple] = {}
        self.objective = None
        self.maximize = None
        self.time_limit = None
        self.solve_calls = 0

    def _add(self, name, kind, lb, ub):
        var = FakeVar(name, kind, lb, ub)
        self.vars[name] = var
        return var

    def add_bool_var(self, name):
        return self._add(name, "bool", 0, 1)

    def add_int_var(self, lb, ub, name):
        return self._add(name, "int", lb, ub)

    def add_linear_constraint(self, terms, lb, ub, name=""):
        self.constraints[name] = ([(var.name, coef) for var, coef in terms], lb, ub)

    def set_objective(self, terms, maximize=True):
        self.objective = [(var.name, coef) for var, coef in terms]
        self.maximize = maximize

    def set_time_limit(self, seconds):
        self.time_limit = seconds

    def solve(self):
        self.solve_calls += 1
        if self.solve_error is not None:
            raise self.solve_error
        return self.status

    def value(self, var):
        return self.values.get(var.name, 0.0)


def all_selected(instance: Instance) -> Dict[str, float]:
    values = {f"order_{o.id}": 1.0 for o in instance.orders}
    values.update({f"aisle_{a.id}": 1.0 for a in instance.aisles})
    return values


def brute_force_waves(instance: Instance, order_pool: List[int]):
    """Todas as waves viáveis formadas com pedidos de `order_pool` (só para instâncias pequenas)."""
    aisle_ids = range(instance.num_aisles)
    for r in range(1, len(order_pool) + 1):
        for orders in itertools.combinations(order_pool, r):
            for s in range(1, instance.num_aisles + 1):
                for aisles in itertools.combinations(aisle_ids, s):
                    solution = Solution(orders=orders, aisles=aisles)
                    if is_solution_feasible(instance, solution):
                        yield solution, compute_objective(instance, solution)


@pytest.fixture
def example_instance():
    """Dois pedidos que juntos somam 9 unidades, cada um servido por um corredor."""
    return Instance.from_mappings(
        orders=[{0: 3, 1: 2}, {2: 4}],
        aisles=[{0: 3, 1: 2}, {2: 4}],
        num_items=3,
        min_wave_size=5,
        max_wave_size=10,
    )


@pytest.fixture
def unsupplied_instance():
    """O pedido 0 pede um item sem estoque; o pedido 1 sozinho não atinge LB."""
    return Instance.from_mappings(
        orders=[{0: 5}, {1: 2}],
        aisles=[{1: 3}],
        num_items=2,
        min_wave_size=5,
        max_wave_size=10,
    )


@pytest.fixture
def coverage_gap_instance():
    """Os corredores elegíveis do pedido existem, mas não têm estoque suficiente do item 0."""
    return Instance.from_mappings(
        orders=[{0: 5, 1: 1}],
        aisles=[{0: 2}, {1: 1}],
        num_items=2,
        min_wave_size=5,
        max_wave_size=10,
    )


@pytest.fixture
def fake_backend():
    return FakeBackend()
