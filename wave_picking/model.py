# -*- coding: utf-8 -*-
# ARQUIVO: model.py

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterable, List, Mapping, Tuple

from .errors import InstanceFormatError


@dataclass(frozen=True)
class Order:
    """
    Representa um único pedido. Contém a estrutura de dados pura.

    Attributes:
        id (int): Índice do pedido na instância.
        items (Mapping[int, int]): Mapeia ID do item para a quantidade solicitada (somente leitura).
        total_units (int): Soma das quantidades, calculada na criação.
    """
    id: int
    items: Mapping[int, int] = field(hash=False)
    total_units: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "items", MappingProxyType(dict(self.items)))
        object.__setattr__(self, "total_units", sum(self.items.values()))


@dataclass(frozen=True)
class Aisle:
    """
    Representa um corredor no armazém. O estoque é somente leitura.
    """
    id: int
    inventory: Mapping[int, int] = field(hash=False)

    def __post_init__(self):
        object.__setattr__(self, "inventory", MappingProxyType(dict(self.inventory)))


@dataclass(frozen=True)
class Instance:
    """
    Todos os dados de uma instância do problema. Construída uma vez e nunca
    alterada; os mapeamentos derivados ficam no pré-processamento.
    """
    orders: Tuple[Order, ...]
    aisles: Tuple[Aisle, ...]
    num_items: int
    min_wave_size: int
    max_wave_size: int

    def __post_init__(self):
        object.__setattr__(self, "orders", tuple(self.orders))
        object.__setattr__(self, "aisles", tuple(self.aisles))

        if self.num_items < 0:
            raise InstanceFormatError(f"Número de itens negativo: {self.num_items}.")
        if self.min_wave_size < 0 or self.max_wave_size < self.min_wave_size:
            raise InstanceFormatError(
                f"Limites da wave inválidos: LB={self.min_wave_size}, UB={self.max_wave_size}.")

        for position, order in enumerate(self.orders):
            if order.id != position:
                raise InstanceFormatError(f"Pedido na posição {position} tem id {order.id}.")
            self._check_quantities(f"pedido {order.id}", order.items)
        for position, aisle in enumerate(self.aisles):
            if aisle.id != position:
                raise InstanceFormatError(f"Corredor na posição {position} tem id {aisle.id}.")
            self._check_quantities(f"corredor {aisle.id}", aisle.inventory)

    def _check_quantities(self, owner: str, quantities: Mapping[int, int]):
        for item_id, quantity in quantities.items():
            if not 0 <= item_id < self.num_items:
                raise InstanceFormatError(
                    f"Item {item_id} do {owner} fora do intervalo [0, {self.num_items}).")
            if quantity <= 0:
                raise InstanceFormatError(f"Quantidade não positiva ({quantity}) para o item {item_id} do {owner}.")

    @property
    def num_orders(self) -> int:
        return len(self.orders)

    @property
    def num_aisles(self) -> int:
        return len(self.aisles)

    @classmethod
    def from_mappings(cls, orders: Iterable[Mapping[int, int]], aisles: Iterable[Mapping[int, int]],
                      num_items: int, min_wave_size: int, max_wave_size: int) -> "Instance":
        """
        Monta uma instância a partir de listas de dicionários item -> quantidade,
        usando a posição de cada dicionário como id.
        """
        return cls(
            orders=tuple(Order(id=o, items=dict(items)) for o, items in enumerate(orders)),
            aisles=tuple(Aisle(id=a, inventory=dict(inventory)) for a, inventory in enumerate(aisles)),
            num_items=num_items,
            min_wave_size=min_wave_size,
            max_wave_size=max_wave_size,
        )


@dataclass(frozen=True)
class Solution:
    """
    Uma wave candidata: pedidos selecionados e corredores visitados.
    Os dois conjuntos são independentes; só a verificação de viabilidade os relaciona.
    """
    orders: FrozenSet[int]
    aisles: FrozenSet[int]

    def __post_init__(self):
        object.__setattr__(self, "orders", frozenset(self.orders))
        object.__setattr__(self, "aisles", frozenset(self.aisles))

    def sorted_orders(self) -> List[int]:
        return sorted(self.orders)

    def sorted_aisles(self) -> List[int]:
        return sorted(self.aisles)

    def is_empty(self) -> bool:
        return not self.orders or not self.aisles
