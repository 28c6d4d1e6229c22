# -*- coding: utf-8 -*-
# ARQUIVO: greedy.py

import logging
from typing import Dict, List, Optional, Set, Tuple

from .model import Instance, Order, Solution
from .preprocessing import PreprocessResult

logger = logging.getLogger(__name__)


class GreedyFallback:
    """
    Heurística gulosa usada quando o caminho exato falha.

    1. Calcula uma "pontuação de densidade" para cada pedido válido:
       unidades / max(1, corredores elegíveis).
    2. Ordena pela maior pontuação; empates pelo menor id.
    3. Adiciona pedidos enquanto o teto de unidades não for ultrapassado e
       para assim que o limite inferior da wave é atingido.
       Pedidos com algum item sem estoque em nenhum corredor nunca entram.

    Sem `strict_coverage`, os corredores da wave são a união dos corredores
    elegíveis dos pedidos aceitos e apenas os limites agregados são garantidos;
    a cobertura item a item pode falhar. Com `strict_coverage`, cada pedido
    aceito compromete corredores concretos até cobrir a demanda acumulada de
    cada item, e pedidos impossíveis de cobrir são pulados.
    """

    def __init__(self, instance: Instance, preprocessed: PreprocessResult,
                 real_upper_bound: Optional[int] = None, strict_coverage: bool = False):
        self.instance = instance
        self.preprocessed = preprocessed
        if real_upper_bound is None:
            real_upper_bound = instance.max_wave_size
        self.real_upper_bound = min(real_upper_bound, instance.max_wave_size)
        self.strict_coverage = strict_coverage

    def efficiency(self, order_id: int) -> float:
        order = self.instance.orders[order_id]
        return order.total_units / max(1, len(self.preprocessed.eligible_aisles(order_id)))

    def rank_orders(self) -> List[int]:
        return sorted(self.preprocessed.valid_orders, key=lambda o: (-self.efficiency(o), o))

    def is_supplied(self, order: Order) -> bool:
        """Todo item do pedido tem estoque em pelo menos um corredor."""
        return all(self.preprocessed.aisles_for_item(item_id) for item_id in order.items)

    def _cover(self, order: Order, picked: Dict[int, int], available: Dict[int, int],
               visited: Set[int]) -> Optional[Tuple[List[int], Dict[int, int]]]:
        """
        Escolhe corredores ainda não visitados que cobrem a demanda acumulada
        de cada item do pedido. Retorna (novos corredores, estoque acrescentado)
        ou None se algum item não pode ser coberto. Não altera o estado recebido.
        """
        aisles = self.instance.aisles
        new_aisles: List[int] = []
        added: Dict[int, int] = {}
        for item_id, quantity in sorted(order.items.items()):
            need = picked.get(item_id, 0) + quantity - available.get(item_id, 0) - added.get(item_id, 0)
            if need <= 0:
                continue
            candidates = sorted(
                (a for a in self.preprocessed.aisles_for_item(item_id) if a not in visited and a not in new_aisles),
                key=lambda a: (-aisles[a].inventory[item_id], a))
            for a_id in candidates:
                new_aisles.append(a_id)
                for other_item, supply in aisles[a_id].inventory.items():
                    added[other_item] = added.get(other_item, 0) + supply
                need -= aisles[a_id].inventory[item_id]
                if need <= 0:
                    break
            if need > 0:
                return None
        return new_aisles, added

    def run(self) -> Optional[Solution]:
        """
        Constrói a wave. Retorna None se o limite inferior não foi atingido
        (ou se nenhum pedido/corredor pôde ser selecionado).
        """
        instance = self.instance
        selected_orders: List[int] = []
        visited_aisles: Set[int] = set()
        picked: Dict[int, int] = {}
        available: Dict[int, int] = {}
        total_units = 0

        logger.info("Usando solução gulosa de fallback (%d pedidos válidos, teto %d, cobertura %s)...",
                    len(self.preprocessed.valid_orders), self.real_upper_bound,
                    "estrita" if self.strict_coverage else "por elegibilidade")

        for order_id in self.rank_orders():
            order = instance.orders[order_id]
            if total_units + order.total_units > self.real_upper_bound:
                continue
            if not self.is_supplied(order):
                logger.debug("Pedido %d pulado: item sem estoque em nenhum corredor.", order_id)
                continue

            if self.strict_coverage:
                cover = self._cover(order, picked, available, visited_aisles)
                if cover is None:
                    logger.debug("Pedido %d pulado: estoque insuficiente para cobri-lo.", order_id)
                    continue
                new_aisles, added = cover
                visited_aisles.update(new_aisles)
                for item_id, supply in added.items():
                    available[item_id] = available.get(item_id, 0) + supply
                for item_id, quantity in order.items.items():
                    picked[item_id] = picked.get(item_id, 0) + quantity
            else:
                visited_aisles.update(self.preprocessed.eligible_aisles(order_id))

            selected_orders.append(order_id)
            total_units += order.total_units
            if total_units >= instance.min_wave_size:
                break

        if not selected_orders or not visited_aisles:
            logger.info("Fallback guloso não selecionou pedidos e corredores.")
            return None
        if instance.min_wave_size <= total_units <= instance.max_wave_size:
            logger.info("Fallback guloso: %d pedidos, %d corredores, %d unidades.",
                        len(selected_orders), len(visited_aisles), total_units)
            return Solution(orders=selected_orders, aisles=visited_aisles)

        logger.info("Fallback guloso não atingiu o tamanho mínimo da wave (%d < %d).",
                    total_units, instance.min_wave_size)
        return None
