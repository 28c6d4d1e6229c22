# -*- coding: utf-8 -*-
# ARQUIVO: ortools_backend.py

import logging
import math

from ortools.linear_solver import pywraplp

from .backend import BackendStatus, LinearTerms, MipBackend
from .errors import BackendUnavailableError

logger = logging.getLogger(__name__)

_STATUS_NAMES = {
    pywraplp.Solver.OPTIMAL: "OPTIMAL",
    pywraplp.Solver.FEASIBLE: "FEASIBLE",
    pywraplp.Solver.INFEASIBLE: "INFEASIBLE",
    pywraplp.Solver.UNBOUNDED: "UNBOUNDED",
    pywraplp.Solver.ABNORMAL: "ABNORMAL",
    pywraplp.Solver.NOT_SOLVED: "NOT SOLVED",
}


class OrToolsBackend(MipBackend):
    """
    Motor MILP sobre o wrapper linear do OR-Tools, usando o SCIP.
    """
    name = "ortools"

    def __init__(self, verbose: bool = False, engine: str = "SCIP"):
        self.solver = pywraplp.Solver.CreateSolver(engine)
        if not self.solver:
            raise BackendUnavailableError(f"Não foi possível criar o solver {engine} do OR-Tools.")
        if verbose:
            self.solver.EnableOutput()
        self.engine = engine

    def describe(self) -> str:
        return f"{self.name}/{self.engine}"

    def _bound(self, value: float) -> float:
        if math.isinf(value):
            return self.solver.infinity() if value > 0 else -self.solver.infinity()
        return value

    @staticmethod
    def _merge(terms: LinearTerms):
        # SetCoefficient sobrescreve; termos repetidos precisam ser somados antes.
        merged = {}
        for var, coef in terms:
            index = var.index()
            if index in merged:
                merged[index] = (var, merged[index][1] + coef)
            else:
                merged[index] = (var, coef)
        return merged.values()

    def add_bool_var(self, name: str):
        return self.solver.BoolVar(name)

    def add_int_var(self, lb: float, ub: float, name: str):
        return self.solver.IntVar(self._bound(lb), self._bound(ub), name)

    def add_linear_constraint(self, terms: LinearTerms, lb: float, ub: float, name: str = ""):
        constraint = self.solver.Constraint(self._bound(lb), self._bound(ub), name)
        for var, coef in self._merge(terms):
            constraint.SetCoefficient(var, coef)
        return constraint

    def set_objective(self, terms: LinearTerms, maximize: bool = True):
        objective = self.solver.Objective()
        objective.Clear()
        for var, coef in self._merge(terms):
            objective.SetCoefficient(var, coef)
        if maximize:
            objective.SetMaximization()
        else:
            objective.SetMinimization()

    def set_time_limit(self, seconds: float):
        # 0 ms é interpretado pelo MPSolver como "sem limite"
        self.solver.set_time_limit(max(1, int(seconds * 1000)))

    def solve(self) -> BackendStatus:
        status = self.solver.Solve()
        logger.debug("Status do OR-Tools: %s", _STATUS_NAMES.get(status, f"UNKNOWN ({status})"))
        if status == pywraplp.Solver.OPTIMAL:
            return BackendStatus.OPTIMAL
        if status == pywraplp.Solver.FEASIBLE:
            return BackendStatus.FEASIBLE
        if status == pywraplp.Solver.INFEASIBLE:
            return BackendStatus.INFEASIBLE
        return BackendStatus.OTHER

    def value(self, var) -> float:
        return var.solution_value()
