# -*- coding: utf-8 -*-
# ARQUIVO: solver.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .backend import BackendStatus, MipBackend, create_backend
from .config import SolverConfig
from .errors import FailureKind
from .evaluation import check_solution, compute_objective
from .greedy import GreedyFallback
from .model import Instance, Solution
from .model_builder import ModelBuilder, extract_solution
from .preprocessing import PreprocessResult, preprocess
from .time_budget import TimeBudget

logger = logging.getLogger(__name__)

_STATUS_FAILURES = {
    BackendStatus.INFEASIBLE: FailureKind.SOLVER_INFEASIBLE_DOMAIN,
    BackendStatus.OTHER: FailureKind.SOLVER_TIMEOUT_NO_INCUMBENT,
}


class SolutionSource(Enum):
    EXACT = "exact"
    FALLBACK = "fallback"
    NONE = "none"


@dataclass(frozen=True)
class WaveResult:
    """
    Resultado de uma execução. `solution` é None exatamente quando `source` é NONE.

    Attributes:
        failures: motivos, em ordem, pelos quais cada caminho anterior falhou.
        objective: unidades / corredores da wave retornada (0 sem wave).
        feasible: resultado do verificador independente sobre a wave retornada.
        backend_status: último status informado pelo motor, se ele chegou a resolver.
    """
    solution: Optional[Solution]
    source: SolutionSource
    failures: Tuple[FailureKind, ...] = ()
    objective: float = 0.0
    feasible: bool = False
    backend_status: Optional[BackendStatus] = None

    @property
    def found(self) -> bool:
        return self.solution is not None


class WaveSolver:
    """
    Orquestra uma execução: pré-processamento, modelo exato, verificação
    independente e, se necessário, a heurística gulosa.
    Nunca propaga exceções do motor; as falhas ficam registradas no WaveResult.
    """

    def __init__(self, instance: Instance, config: Optional[SolverConfig] = None,
                 budget: Optional[TimeBudget] = None,
                 backend_factory: Optional[Callable[[], MipBackend]] = None):
        self.instance = instance
        self.config = config or SolverConfig()
        self.budget = budget or TimeBudget(self.config.time_limit_sec)
        self.backend_factory = backend_factory or self._default_backend

    def _default_backend(self) -> MipBackend:
        return create_backend(self.config.backend, verbose=self.config.backend_verbose)

    def solve(self) -> WaveResult:
        instance = self.instance
        logger.info("Resolvendo instância: %d pedidos, %d corredores, %d itens, wave em [%d, %d].",
                    instance.num_orders, instance.num_aisles, instance.num_items,
                    instance.min_wave_size, instance.max_wave_size)

        failures: List[FailureKind] = []
        try:
            preprocessed = preprocess(instance, self.config.dominance_max_orders)
        except Exception:
            # sem as estruturas derivadas nem o modelo nem a heurística podem rodar
            logger.exception("Erro no pré-processamento da instância.")
            failures.extend((FailureKind.SOLVER_UNAVAILABLE, FailureKind.FALLBACK_EXHAUSTED))
            return WaveResult(solution=None, source=SolutionSource.NONE, failures=tuple(failures))

        solution, status = self._solve_exact(preprocessed, failures)
        if solution is not None:
            return self._finish(solution, SolutionSource.EXACT, failures, status, feasible=True)

        return self._solve_fallback(preprocessed, failures, status)

    def _solve_exact(self, preprocessed: PreprocessResult,
                     failures: List[FailureKind]) -> Tuple[Optional[Solution], Optional[BackendStatus]]:
        status = None
        try:
            backend = self.backend_factory()
            penalty = self.config.penalty_for(self.instance.num_items)
            wave_model = ModelBuilder(self.instance, preprocessed, penalty).build(backend)

            time_limit = self.budget.remaining()
            if time_limit <= 0:
                logger.warning("Orçamento de tempo esgotado antes da otimização.")
                failures.append(FailureKind.SOLVER_TIMEOUT_NO_INCUMBENT)
                return None, None

            logger.info("Iniciando otimização (%s) com limite de tempo de %.1f segundos...",
                        backend.describe(), time_limit)
            backend.set_time_limit(time_limit)
            status = backend.solve()
            logger.info("Status da solução: %s", status.name)

            if not status.has_solution:
                failures.append(_STATUS_FAILURES[status])
                logger.warning("Motor terminou sem solução utilizável (%s), usando fallback guloso.",
                               _STATUS_FAILURES[status].value)
                return None, status

            candidate = extract_solution(wave_model)
        except Exception:
            logger.exception("Erro durante a resolução com o motor, usando fallback guloso.")
            failures.append(FailureKind.SOLVER_UNAVAILABLE)
            return None, status

        report = check_solution(self.instance, candidate)
        if not report.feasible:
            logger.warning("Motor retornou %s, mas a solução foi rejeitada: %s", status.name, report.reason)
            failures.append(FailureKind.SOLVER_RESULT_REJECTED)
            return None, status
        return candidate, status

    def _solve_fallback(self, preprocessed: PreprocessResult, failures: List[FailureKind],
                        status: Optional[BackendStatus]) -> WaveResult:
        try:
            greedy = GreedyFallback(
                self.instance,
                preprocessed,
                real_upper_bound=self.config.upper_bound_for(self.instance.max_wave_size),
                strict_coverage=self.config.strict_fallback_coverage,
            )
            solution = greedy.run()
        except Exception:
            logger.exception("Erro durante o fallback guloso.")
            solution = None
        if solution is None:
            failures.append(FailureKind.FALLBACK_EXHAUSTED)
            logger.error("Nenhuma wave viável foi encontrada.")
            return WaveResult(solution=None, source=SolutionSource.NONE,
                              failures=tuple(failures), backend_status=status)

        report = check_solution(self.instance, solution)
        if not report.feasible:
            logger.warning("Wave do fallback não cobre a demanda item a item: %s", report.reason)
        return self._finish(solution, SolutionSource.FALLBACK, failures, status, feasible=report.feasible)

    def _finish(self, solution: Solution, source: SolutionSource, failures: List[FailureKind],
                status: Optional[BackendStatus], feasible: bool) -> WaveResult:
        objective = compute_objective(self.instance, solution)
        logger.info("--- Solução Encontrada (%s) ---", source.value)
        logger.info("Total de Pedidos na Wave: %d", len(solution.orders))
        logger.info("Total de Corredores Visitados: %d", len(solution.aisles))
        logger.info("Valor da Função Objetivo (Densidade): %.4f", objective)
        return WaveResult(
            solution=solution,
            source=source,
            failures=tuple(failures),
            objective=objective,
            feasible=feasible,
            backend_status=status,
        )


def solve_instance(instance: Instance, config: Optional[SolverConfig] = None,
                   budget: Optional[TimeBudget] = None) -> WaveResult:
    return WaveSolver(instance, config=config, budget=budget).solve()
