# -*- coding: utf-8 -*-
# ARQUIVO: time_budget.py

import time
from typing import Callable


class TimeBudget:
    """
    Relógio de parede compartilhado por todas as fases de uma execução.
    Começa a contar na construção.
    """

    def __init__(self, total_seconds: float, clock: Callable[[], float] = time.time):
        self.total_seconds = total_seconds
        self._clock = clock
        self._start = clock()

    def elapsed(self) -> float:
        return self._clock() - self._start

    def remaining(self) -> float:
        """Segundos restantes do orçamento global, nunca negativo."""
        return max(0.0, self.total_seconds - self.elapsed())

    def expired(self) -> bool:
        return self.remaining() <= 0.0
