# -*- coding: utf-8 -*-
# ARQUIVO: model_builder.py

import logging
from dataclasses import dataclass
from typing import Any, List

from .backend import INF, MipBackend
from .model import Instance, Solution
from .preprocessing import PreprocessResult

logger = logging.getLogger(__name__)

SELECTION_THRESHOLD = 0.5


@dataclass
class WaveModel:
    """Referências às variáveis criadas no motor para um modelo de wave."""
    backend: MipBackend
    order_vars: List[Any]
    aisle_vars: List[Any]
    total_units: Any
    total_aisles: Any
    aisle_penalty: float
    num_constraints: int = 0


class ModelBuilder:
    """
    Traduz uma instância no programa linear inteiro da wave:

        max  total_units - w * total_aisles
        s.a. total_units  = sum(unidades[o] * x[o])
             LB <= total_units <= UB
             sum(estoque[a][i] * y[a]) - sum(demanda[o][i] * x[o]) >= 0   para cada item i
             total_aisles = sum(y[a]),  1 <= total_aisles <= num_aisles

    A razão unidades / corredores não é linear; o peso w por corredor é o
    substituto linear que penaliza corredores além do necessário.
    """

    def __init__(self, instance: Instance, preprocessed: PreprocessResult, aisle_penalty: float):
        self.instance = instance
        self.preprocessed = preprocessed
        self.aisle_penalty = aisle_penalty

    def build(self, backend: MipBackend) -> WaveModel:
        instance = self.instance
        logger.info("Iniciando a construção do modelo matemático...")

        # --- 1. VARIÁVEIS DE DECISÃO ---
        order_vars = [backend.add_bool_var(f"order_{order.id}") for order in instance.orders]
        aisle_vars = [backend.add_bool_var(f"aisle_{aisle.id}") for aisle in instance.aisles]
        total_units = backend.add_int_var(0, instance.max_wave_size, "total_units")
        total_aisles = backend.add_int_var(1, instance.num_aisles, "total_aisles")

        # --- 2. RESTRIÇÕES ---
        num_constraints = 0

        # total_units - sum(unidades * x) == 0
        terms = [(total_units, 1)]
        terms.extend((order_vars[order.id], -order.total_units) for order in instance.orders)
        backend.add_linear_constraint(terms, 0, 0, "total_units_definition")

        backend.add_linear_constraint([(total_units, 1)], instance.min_wave_size, INF, "min_wave_size")
        backend.add_linear_constraint([(total_units, 1)], 0, instance.max_wave_size, "max_wave_size")
        num_constraints += 3

        # Suficiência de inventário, só para itens que algum pedido solicita.
        for item_id in sorted(self.preprocessed.orders_by_item):
            terms = [(aisle_vars[a_id], instance.aisles[a_id].inventory[item_id])
                     for a_id in sorted(self.preprocessed.aisles_for_item(item_id))]
            terms.extend((order_vars[o_id], -instance.orders[o_id].items[item_id])
                         for o_id in self.preprocessed.orders_by_item[item_id])
            backend.add_linear_constraint(terms, 0, INF, f"inventory_sufficiency_{item_id}")
            num_constraints += 1

        # total_aisles - sum(y) == 0
        terms = [(total_aisles, 1)]
        terms.extend((var, -1) for var in aisle_vars)
        backend.add_linear_constraint(terms, 0, 0, "total_aisles_definition")
        num_constraints += 1

        # --- 3. FUNÇÃO OBJETIVO ---
        backend.set_objective([(total_units, 1), (total_aisles, -self.aisle_penalty)], maximize=True)
        logger.info("Modelo construído: %d variáveis, %d restrições, peso por corredor %.4f.",
                    len(order_vars) + len(aisle_vars) + 2, num_constraints, self.aisle_penalty)

        return WaveModel(
            backend=backend,
            order_vars=order_vars,
            aisle_vars=aisle_vars,
            total_units=total_units,
            total_aisles=total_aisles,
            aisle_penalty=self.aisle_penalty,
            num_constraints=num_constraints,
        )


def extract_solution(wave_model: WaveModel) -> Solution:
    """Lê os valores das variáveis binárias e monta a wave candidata."""
    backend = wave_model.backend
    selected_orders = [o for o, var in enumerate(wave_model.order_vars)
                       if backend.value(var) > SELECTION_THRESHOLD]
    visited_aisles = [a for a, var in enumerate(wave_model.aisle_vars)
                      if backend.value(var) > SELECTION_THRESHOLD]
    return Solution(orders=selected_orders, aisles=visited_aisles)
