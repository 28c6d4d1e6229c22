# -*- coding: utf-8 -*-
"""
Seleção de waves de picking: escolhe pedidos e corredores de forma que o total
de unidades fique em [LB, UB], o estoque dos corredores visitados cubra a
demanda item a item e a razão unidades / corredores seja a maior possível.
"""

from .config import SolverConfig
from .errors import FailureKind
from .evaluation import check_solution, compute_objective, is_solution_feasible
from .model import Aisle, Instance, Order, Solution
from .solver import SolutionSource, WaveResult, WaveSolver, solve_instance

__all__ = [
    'Aisle',
    'FailureKind',
    'Instance',
    'Order',
    'Solution',
    'SolutionSource',
    'SolverConfig',
    'WaveResult',
    'WaveSolver',
    'check_solution',
    'compute_objective',
    'is_solution_feasible',
    'solve_instance',
]
