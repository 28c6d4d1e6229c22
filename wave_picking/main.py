# -*- coding: utf-8 -*-
# ARQUIVO: main.py

import logging
import sys
from contextlib import redirect_stdout
from typing import List, Optional

from .backend import available_backends
from .config import DEFAULT_TIME_LIMIT_SEC, SolverConfig
from .data_parser import InstanceParser, write_solution
from .errors import ConfigError, InstanceFormatError
from .solver import WaveSolver
from .time_budget import TimeBudget

logger = logging.getLogger(__name__)

LOG_FILE = 'wave_picking.log'
USAGE = ("Uso: wave-picking <arquivo_de_entrada> <arquivo_de_saida> "
         "[limite_de_tempo_seg] [motor: " + "|".join(available_backends()) + "]")


class StreamToLogger:
    """
    Redireciona um fluxo (como sys.stdout) para um logger.
    Usado para capturar o que o motor imprime durante a otimização.
    """

    def __init__(self, logger, level):
        self.logger = logger
        self.level = level

    def write(self, buf):
        for line in buf.rstrip().splitlines():
            self.logger.log(self.level, line.rstrip())

    def flush(self):
        pass


def setup_logging(log_file: Optional[str] = LOG_FILE, level: int = logging.INFO):
    """
    Configura o logger principal: arquivo (sobrescrito a cada execução) e console.
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        filename=log_file,
        filemode='w',
    )
    if log_file:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
        logging.getLogger().addHandler(console_handler)


def run_challenge(input_file: str, output_file: str, time_limit: float = DEFAULT_TIME_LIMIT_SEC,
                  backend: str = "gurobi") -> int:
    """
    Função principal que orquestra a execução do desafio.

    1. Faz o parsing da instância.
    2. Resolve (modelo exato ou fallback guloso).
    3. Salva a solução.

    Retorna o código de saída: 0 com solução salva, 1 sem solução, 2 em erro de entrada.
    """
    logger.info("--- INICIANDO DESAFIO DE OTIMIZAÇÃO DE WAVE ---")
    # O relógio começa antes do parsing: o limite vale para a execução inteira.
    budget = TimeBudget(time_limit)
    try:
        config = SolverConfig(backend=backend, time_limit_sec=time_limit)
        instance = InstanceParser.parse(input_file)
    except (FileNotFoundError, InstanceFormatError, ConfigError) as e:
        logger.error("ERRO DE ARQUIVO/DADOS: %s", e)
        return 2

    with redirect_stdout(StreamToLogger(logging.getLogger('STDOUT'), logging.INFO)):
        result = WaveSolver(instance, config=config, budget=budget).solve()

    if result.failures:
        logger.info("Falhas registradas: %s", ", ".join(f.value for f in result.failures))
    if not result.found:
        logger.error("Nenhuma solução encontrada.")
        return 1

    write_solution(result.solution, output_file)
    logger.info("--- EXECUÇÃO FINALIZADA (ratio %.4f, %.1fs) ---", result.objective, budget.elapsed())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 2:
        print(USAGE, file=sys.stderr)
        return 2

    input_file, output_file = argv[0], argv[1]
    try:
        time_limit = float(argv[2]) if len(argv) > 2 else DEFAULT_TIME_LIMIT_SEC
    except ValueError:
        print(f"Limite de tempo inválido: {argv[2]}\n{USAGE}", file=sys.stderr)
        return 2
    backend = argv[3] if len(argv) > 3 else "gurobi"

    setup_logging()
    return run_challenge(input_file, output_file, time_limit=time_limit, backend=backend)


if __name__ == '__main__':
    sys.exit(main())
