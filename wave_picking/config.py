# -*- coding: utf-8 -*-
# ARQUIVO: config.py

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError

DEFAULT_TIME_LIMIT_SEC = 600  # 10 minutos, o limite do desafio


@dataclass(frozen=True)
class SolverConfig:
    """
    Parâmetros de uma execução do WaveSolver.

    Attributes:
        backend (str): Nome do motor MILP registrado ("gurobi" ou "ortools").
        aisle_penalty (Optional[float]): Peso explícito de cada corredor no objetivo.
            Quando None, usa aisle_penalty_factor * num_items.
        aisle_penalty_factor (float): Multiplicador de num_items para o peso do corredor.
        real_upper_bound (Optional[int]): Teto de unidades usado pela heurística gulosa.
            None significa o próprio limite superior da wave.
        dominance_max_orders (int): Acima desse número de pedidos a poda por
            dominância não é executada.
        strict_fallback_coverage (bool): Se a heurística deve garantir cobertura
            item a item escolhendo corredores concretos.
        time_limit_sec (float): Orçamento total de tempo da execução, em segundos.
        backend_verbose (bool): Repassa o log do próprio motor.
    """
    backend: str = "gurobi"
    aisle_penalty: Optional[float] = None
    aisle_penalty_factor: float = 1.1
    real_upper_bound: Optional[int] = None
    dominance_max_orders: int = 5000
    strict_fallback_coverage: bool = True
    time_limit_sec: float = DEFAULT_TIME_LIMIT_SEC
    backend_verbose: bool = False

    def __post_init__(self):
        if self.aisle_penalty is not None and self.aisle_penalty < 0:
            raise ConfigError(f"aisle_penalty deve ser não negativo, recebido {self.aisle_penalty}.")
        if self.aisle_penalty_factor < 0:
            raise ConfigError(f"aisle_penalty_factor deve ser não negativo, recebido {self.aisle_penalty_factor}.")
        if self.real_upper_bound is not None and self.real_upper_bound < 0:
            raise ConfigError(f"real_upper_bound deve ser não negativo, recebido {self.real_upper_bound}.")
        if self.dominance_max_orders < 0:
            raise ConfigError(f"dominance_max_orders deve ser não negativo, recebido {self.dominance_max_orders}.")
        if self.time_limit_sec < 0:
            raise ConfigError(f"time_limit_sec deve ser não negativo, recebido {self.time_limit_sec}.")

    def penalty_for(self, num_items: int) -> float:
        """Peso por corredor visitado no objetivo linearizado."""
        if self.aisle_penalty is not None:
            return float(self.aisle_penalty)
        return num_items * self.aisle_penalty_factor

    def upper_bound_for(self, max_wave_size: int) -> int:
        """Teto efetivo da heurística gulosa, nunca acima do limite da wave."""
        if self.real_upper_bound is None:
            return max_wave_size
        return min(self.real_upper_bound, max_wave_size)
