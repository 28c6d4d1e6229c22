# -*- coding: utf-8 -*-
# ARQUIVO: gurobi_backend.py

import logging
import math

import gurobipy as gp
from gurobipy import GRB

from .backend import BackendStatus, LinearTerms, MipBackend
from .errors import BackendError, BackendUnavailableError

logger = logging.getLogger(__name__)


def _linear_expr(terms: LinearTerms) -> gp.LinExpr:
    return gp.LinExpr([coef for _, coef in terms], [var for var, _ in terms])


def map_gurobi_status(status: int, sol_count: int) -> BackendStatus:
    """Traduz o status do Gurobi; INF_OR_UNBD conta como inviável (o modelo é limitado)."""
    if status == GRB.OPTIMAL:
        return BackendStatus.OPTIMAL
    if status in (GRB.INFEASIBLE, GRB.INF_OR_UNBD):
        return BackendStatus.INFEASIBLE
    if sol_count > 0:
        return BackendStatus.FEASIBLE
    return BackendStatus.OTHER


class GurobiBackend(MipBackend):
    """
    Motor MILP sobre o Gurobi. Cada instância encapsula um gp.Model próprio.
    """
    name = "gurobi"

    def __init__(self, verbose: bool = False, model_name: str = "Optimal_Order_Selection"):
        try:
            self.model = gp.Model(model_name)
            self.model.setParam('OutputFlag', 1 if verbose else 0)
        except gp.GurobiError as e:
            raise BackendUnavailableError(f"ERRO DO GUROBI ao criar o modelo: {e}") from e

    def add_bool_var(self, name: str):
        return self.model.addVar(vtype=GRB.BINARY, name=name)

    def add_int_var(self, lb: float, ub: float, name: str):
        return self.model.addVar(lb=lb, ub=ub, vtype=GRB.INTEGER, name=name)

    def add_linear_constraint(self, terms: LinearTerms, lb: float, ub: float, name: str = ""):
        expr = _linear_expr(terms)
        try:
            if lb == ub:
                return self.model.addLConstr(expr, GRB.EQUAL, lb, name)
            if math.isinf(ub) and math.isinf(lb):
                return None
            if math.isinf(ub):
                return self.model.addLConstr(expr, GRB.GREATER_EQUAL, lb, name)
            if math.isinf(lb):
                return self.model.addLConstr(expr, GRB.LESS_EQUAL, ub, name)
            return self.model.addRange(expr, lb, ub, name)
        except gp.GurobiError as e:
            raise BackendError(f"Falha ao adicionar a restrição '{name}': {e}") from e

    def set_objective(self, terms: LinearTerms, maximize: bool = True):
        self.model.setObjective(_linear_expr(terms), GRB.MAXIMIZE if maximize else GRB.MINIMIZE)

    def set_time_limit(self, seconds: float):
        self.model.setParam('TimeLimit', max(0.0, seconds))

    def solve(self) -> BackendStatus:
        try:
            self.model.optimize()
        except gp.GurobiError as e:
            raise BackendError(f"ERRO DO GUROBI durante a otimização: {e}") from e

        status = self.model.Status
        logger.debug("Status do Gurobi: %s (2=Ótima, 3=Inviável, 9=Limite de Tempo, etc.)", status)
        return map_gurobi_status(status, self.model.SolCount)

    def value(self, var) -> float:
        return var.X
