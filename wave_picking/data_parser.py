# -*- coding: utf-8 -*-
# ARQUIVO: data_parser.py

import logging
from typing import Dict, List

from .errors import InstanceFormatError
from .model import Aisle, Instance, Order, Solution

logger = logging.getLogger(__name__)


def _parse_pairs(parts: List[int], what: str, line_number: int) -> Dict[int, int]:
    """Converte 'k item qtd item qtd ...' em um dicionário item -> quantidade."""
    if not parts:
        raise InstanceFormatError(f"Linha {line_number} vazia ao ler {what}.")
    k = parts[0]
    data = parts[1:]
    if len(data) != 2 * k:
        raise InstanceFormatError(f"Formato incorreto para {what} na linha {line_number}.")
    return {data[2 * i]: data[2 * i + 1] for i in range(k)}


class InstanceParser:
    """
    Responsável por ler um arquivo de instância e carregar seus dados
    em um objeto `Instance`.
    """

    @staticmethod
    def parse(file_path: str) -> Instance:
        """
        Lê um arquivo de instância e retorna um objeto Instance populado.

        Raises:
            FileNotFoundError: Se o caminho do arquivo não for encontrado.
            InstanceFormatError: Se o arquivo tiver um formato inesperado.
        """
        logger.info("Iniciando o parsing do arquivo: %s", file_path)
        with open(file_path, 'r') as f:
            lines = [line for line in f.read().splitlines() if line.strip()]
        return InstanceParser.parse_lines(lines)

    @staticmethod
    def parse_lines(lines: List[str]) -> Instance:
        try:
            rows = [list(map(int, line.split())) for line in lines]
        except ValueError as e:
            raise InstanceFormatError(f"Valor não inteiro no arquivo. Detalhes: {e}")

        # 1. Cabeçalho
        if not rows or len(rows[0]) != 3:
            raise InstanceFormatError("Cabeçalho ausente ou sem o formato 'pedidos itens corredores'.")
        num_orders, num_items, num_aisles = rows[0]
        logger.info("Cabeçalho lido: %d pedidos, %d itens, %d corredores.", num_orders, num_items, num_aisles)

        expected_rows = 1 + num_orders + num_aisles + 1
        if len(rows) < expected_rows:
            raise InstanceFormatError(
                f"Arquivo terminou inesperadamente: esperadas {expected_rows} linhas, lidas {len(rows)}.")

        # 2. Pedidos
        current_line_index = 1
        orders = []
        for order_id in range(num_orders):
            items = _parse_pairs(rows[current_line_index], f"o pedido {order_id}", current_line_index + 1)
            orders.append(Order(id=order_id, items=items))
            current_line_index += 1

        # 3. Corredores
        aisles = []
        for aisle_id in range(num_aisles):
            inventory = _parse_pairs(rows[current_line_index], f"o corredor {aisle_id}", current_line_index + 1)
            aisles.append(Aisle(id=aisle_id, inventory=inventory))
            current_line_index += 1
        logger.info("%d pedidos e %d corredores lidos.", len(orders), len(aisles))

        # 4. Limites da wave
        limits = rows[current_line_index]
        if len(limits) != 2:
            raise InstanceFormatError(
                f"A última linha '{' '.join(map(str, limits))}' não tem o formato de limites (LB UB).")
        min_wave_size, max_wave_size = limits
        logger.info("Limites da wave lidos: LB=%d, UB=%d.", min_wave_size, max_wave_size)

        return Instance(
            orders=tuple(orders),
            aisles=tuple(aisles),
            num_items=num_items,
            min_wave_size=min_wave_size,
            max_wave_size=max_wave_size,
        )


def write_solution(solution: Solution, output_path: str):
    """
    Escreve a solução no formato do desafio: quantidade de pedidos, um pedido
    por linha, quantidade de corredores, um corredor por linha.
    """
    logger.info("Salvando solução em '%s'...", output_path)
    with open(output_path, 'w') as f:
        f.write(f"{len(solution.orders)}\n")
        for order_id in solution.sorted_orders():
            f.write(f"{order_id}\n")
        f.write(f"{len(solution.aisles)}\n")
        for aisle_id in solution.sorted_aisles():
            f.write(f"{aisle_id}\n")
