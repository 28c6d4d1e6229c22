# -*- coding: utf-8 -*-
# ARQUIVO: evaluation.py

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from .model import Instance, Solution


@dataclass(frozen=True)
class FeasibilityReport:
    """Resultado da verificação; `reason` descreve a primeira regra violada."""
    feasible: bool
    reason: Optional[str] = None
    total_units: int = 0


def total_units_picked(instance: Instance, order_ids: Iterable[int]) -> int:
    return sum(instance.orders[o].total_units for o in order_ids)


def _units_per_item(quantities_by_id) -> Dict[int, int]:
    totals: Dict[int, int] = {}
    for quantities in quantities_by_id:
        for item_id, quantity in quantities.items():
            totals[item_id] = totals.get(item_id, 0) + quantity
    return totals


def check_solution(instance: Instance, solution: Solution) -> FeasibilityReport:
    """
    Verifica uma solução contra as restrições do problema, sem depender do solver.

    1. Conjuntos de pedidos e de corredores não podem ser vazios.
    2. Os ids precisam existir na instância.
    3. O total de unidades fica em [LB, UB].
    4. Para cada item, o que é coletado não excede o disponível nos corredores visitados.
    """
    if solution is None or solution.is_empty():
        return FeasibilityReport(False, "Conjunto de pedidos ou de corredores vazio.")

    bad_orders = [o for o in solution.orders if not 0 <= o < instance.num_orders]
    if bad_orders:
        return FeasibilityReport(False, f"Pedidos inexistentes: {sorted(bad_orders)}.")
    bad_aisles = [a for a in solution.aisles if not 0 <= a < instance.num_aisles]
    if bad_aisles:
        return FeasibilityReport(False, f"Corredores inexistentes: {sorted(bad_aisles)}.")

    total_units = total_units_picked(instance, solution.orders)
    if total_units < instance.min_wave_size:
        return FeasibilityReport(
            False, f"Quantidade total {total_units} < limite inferior {instance.min_wave_size}.", total_units)
    if total_units > instance.max_wave_size:
        return FeasibilityReport(
            False, f"Quantidade total {total_units} > limite superior {instance.max_wave_size}.", total_units)

    picked = _units_per_item(instance.orders[o].items for o in solution.orders)
    available = _units_per_item(instance.aisles[a].inventory for a in solution.aisles)
    for item_id in sorted(picked):
        if picked[item_id] > available.get(item_id, 0):
            return FeasibilityReport(
                False,
                f"Item {item_id}: demanda {picked[item_id]} > capacidade {available.get(item_id, 0)}.",
                total_units)

    return FeasibilityReport(True, None, total_units)


def is_solution_feasible(instance: Instance, solution: Solution) -> bool:
    return check_solution(instance, solution).feasible


def compute_objective(instance: Instance, solution: Solution) -> float:
    """Unidades coletadas / corredores visitados; 0 se algum dos conjuntos for vazio."""
    if solution is None or solution.is_empty():
        return 0.0
    return total_units_picked(instance, solution.orders) / len(solution.aisles)
