# -*- coding: utf-8 -*-
# ARQUIVO: backend.py

import importlib
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Sequence, Tuple

from .errors import BackendUnavailableError

INF = math.inf

# Lista de pares (variável, coeficiente) de uma expressão linear.
LinearTerms = Sequence[Tuple[Any, float]]


class BackendStatus(Enum):
    OPTIMAL = "optimal"
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    OTHER = "other"  # limite de tempo sem solução, ilimitado, erro do motor...

    @property
    def has_solution(self) -> bool:
        return self in (BackendStatus.OPTIMAL, BackendStatus.FEASIBLE)


class MipBackend(ABC):
    """
    Capacidade mínima de programação linear inteira mista usada pelo ModelBuilder.
    Qualquer motor que implemente estes métodos pode ser trocado pelo outro,
    inclusive um falso nos testes.

    Restrições são sempre da forma lb <= expr <= ub; use INF / -INF para lados abertos.
    """
    name = "abstract"

    @abstractmethod
    def add_bool_var(self, name: str) -> Any:
        ...

    @abstractmethod
    def add_int_var(self, lb: float, ub: float, name: str) -> Any:
        ...

    @abstractmethod
    def add_linear_constraint(self, terms: LinearTerms, lb: float, ub: float, name: str = "") -> Any:
        ...

    @abstractmethod
    def set_objective(self, terms: LinearTerms, maximize: bool = True):
        ...

    @abstractmethod
    def set_time_limit(self, seconds: float):
        ...

    @abstractmethod
    def solve(self) -> BackendStatus:
        ...

    @abstractmethod
    def value(self, var: Any) -> float:
        """Valor atribuído à variável pela última chamada de solve()."""

    def describe(self) -> str:
        return self.name


# nome -> "módulo:classe", importado só quando o motor é pedido
_REGISTRY: Dict[str, str] = {
    "gurobi": "wave_picking.gurobi_backend:GurobiBackend",
    "ortools": "wave_picking.ortools_backend:OrToolsBackend",
}


def register_backend(name: str, target: str):
    _REGISTRY[name] = target


def available_backends():
    return sorted(_REGISTRY)


def create_backend(name: str, verbose: bool = False) -> MipBackend:
    """
    Cria uma nova instância do motor registrado com esse nome.

    Raises:
        BackendUnavailableError: nome desconhecido, biblioteca ausente ou
            motor que não pôde ser criado.
    """
    if name not in _REGISTRY:
        raise BackendUnavailableError(
            f"Motor desconhecido '{name}'. Disponíveis: {', '.join(available_backends())}.")
    module_name, class_name = _REGISTRY[name].split(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise BackendUnavailableError(f"Biblioteca do motor '{name}' não pôde ser importada: {e}") from e
    return getattr(module, class_name)(verbose=verbose)
