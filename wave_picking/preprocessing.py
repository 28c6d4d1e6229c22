# -*- coding: utf-8 -*-
# ARQUIVO: preprocessing.py

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

from .model import Instance, Order

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreprocessResult:
    """
    Estruturas derivadas de uma instância, calculadas uma única vez por execução.

    Attributes:
        item_to_aisles: item -> corredores com estoque positivo do item.
        orders_by_item: item -> pedidos que solicitam o item.
        order_to_eligible_aisles: pedido -> união dos corredores de cada item do pedido.
            É um limite superior dos corredores que podem ajudar o pedido,
            não uma atribuição.
        valid_orders: pedidos que sobreviveram à poda por dominância, em ordem crescente.
        dominance_skipped: True se a poda não foi executada por causa do tamanho.
    """
    item_to_aisles: Dict[int, FrozenSet[int]]
    orders_by_item: Dict[int, Tuple[int, ...]]
    order_to_eligible_aisles: Dict[int, FrozenSet[int]]
    valid_orders: Tuple[int, ...]
    dominance_skipped: bool = False

    def eligible_aisles(self, order_id: int) -> FrozenSet[int]:
        return self.order_to_eligible_aisles.get(order_id, frozenset())

    def aisles_for_item(self, item_id: int) -> FrozenSet[int]:
        return self.item_to_aisles.get(item_id, frozenset())


def build_item_to_aisles(instance: Instance) -> Dict[int, FrozenSet[int]]:
    """
    Constrói o mapeamento reverso de itens para corredores.
    Itens sem estoque em nenhum corredor ficam com conjunto vazio.
    """
    locations: Dict[int, set] = {item_id: set() for item_id in range(instance.num_items)}
    for aisle in instance.aisles:
        for item_id, quantity in aisle.inventory.items():
            if quantity > 0:
                locations[item_id].add(aisle.id)
    return {item_id: frozenset(aisles) for item_id, aisles in locations.items()}


def build_orders_by_item(instance: Instance) -> Dict[int, Tuple[int, ...]]:
    """
    Constrói o mapeamento reverso de itens para pedidos que os contêm.
    """
    orders_by_item: Dict[int, List[int]] = {}
    for order in instance.orders:
        for item_id in order.items:
            orders_by_item.setdefault(item_id, []).append(order.id)
    return {item_id: tuple(order_ids) for item_id, order_ids in orders_by_item.items()}


def build_order_to_eligible_aisles(instance: Instance,
                                   item_to_aisles: Dict[int, FrozenSet[int]]) -> Dict[int, FrozenSet[int]]:
    eligible = {}
    for order in instance.orders:
        aisles = set()
        for item_id in order.items:
            aisles.update(item_to_aisles.get(item_id, ()))
        eligible[order.id] = frozenset(aisles)
    return eligible


def dominates(other: Order, order: Order, eligible: Dict[int, FrozenSet[int]]) -> bool:
    """
    `other` domina `order` se tem pelo menos as mesmas unidades, no máximo o mesmo
    número de corredores elegíveis e pede pelo menos a mesma quantidade de cada
    item de `order`.
    """
    if other.id == order.id:
        return False
    if other.total_units < order.total_units:
        return False
    if len(eligible[other.id]) > len(eligible[order.id]):
        return False
    for item_id, quantity in order.items.items():
        if other.items.get(item_id, 0) < quantity:
            return False
    return True


def _dominance_candidates(instance: Instance, order: Order,
                          orders_by_item: Dict[int, Tuple[int, ...]]) -> List[int]:
    # Só pedidos que contêm todos os itens de `order` podem dominá-lo.
    if not order.items:
        return [o.id for o in instance.orders if o.id != order.id]
    item_lists = sorted((orders_by_item[item_id] for item_id in order.items), key=len)
    candidates = set(item_lists[0])
    for order_ids in item_lists[1:]:
        candidates.intersection_update(order_ids)
        if len(candidates) <= 1:
            break
    candidates.discard(order.id)
    return sorted(candidates)


def is_order_dominated(instance: Instance, order_id: int, eligible: Dict[int, FrozenSet[int]],
                       orders_by_item: Dict[int, Tuple[int, ...]]) -> bool:
    """
    Verifica se um pedido é dominado por outro. Entre pedidos que se dominam
    mutuamente (idênticos), apenas o de menor id é mantido.
    """
    order = instance.orders[order_id]
    for other_id in _dominance_candidates(instance, order, orders_by_item):
        other = instance.orders[other_id]
        if not dominates(other, order, eligible):
            continue
        if other_id < order_id or not dominates(order, other, eligible):
            return True
    return False


def preprocess(instance: Instance, dominance_max_orders: Optional[int] = None) -> PreprocessResult:
    """
    Calcula os mapeamentos derivados e a lista de pedidos válidos após a poda.

    A poda é quadrática no número de pedidos; acima de `dominance_max_orders`
    ela é pulada e todos os pedidos são considerados válidos.
    """
    item_to_aisles = build_item_to_aisles(instance)
    orders_by_item = build_orders_by_item(instance)
    eligible = build_order_to_eligible_aisles(instance, item_to_aisles)

    skipped = dominance_max_orders is not None and instance.num_orders > dominance_max_orders
    if skipped:
        logger.warning("Poda por dominância pulada: %d pedidos > limite de %d.",
                       instance.num_orders, dominance_max_orders)
        valid_orders = tuple(range(instance.num_orders))
    else:
        valid_orders = tuple(o for o in range(instance.num_orders)
                             if not is_order_dominated(instance, o, eligible, orders_by_item))

    logger.info("Pedidos válidos após o pré-processamento: %d/%d", len(valid_orders), instance.num_orders)
    return PreprocessResult(
        item_to_aisles=item_to_aisles,
        orders_by_item=orders_by_item,
        order_to_eligible_aisles=eligible,
        valid_orders=valid_orders,
        dominance_skipped=skipped,
    )
