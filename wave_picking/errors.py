# -*- coding: utf-8 -*-
# ARQUIVO: errors.py

from enum import Enum


class WavePickingError(Exception):
    """Base de todos os erros levantados pelo pacote."""


class InstanceFormatError(WavePickingError, ValueError):
    """
    O arquivo (ou os dados) da instância não têm o formato esperado.
    Herda de ValueError para quem já capturava os erros do parser assim.
    """


class ConfigError(WavePickingError, ValueError):
    """Valor de configuração inválido."""


class BackendUnavailableError(WavePickingError):
    """O motor de programação matemática não pôde ser criado."""


class BackendError(WavePickingError):
    """Falha interna do motor durante a construção ou a resolução do modelo."""


class FailureKind(Enum):
    """
    Motivos pelos quais um caminho de resolução não produziu a wave final.
    O orquestrador registra esses valores no resultado em vez de propagar exceções.
    """
    SOLVER_UNAVAILABLE = "solver_unavailable"
    SOLVER_TIMEOUT_NO_INCUMBENT = "solver_timeout_no_incumbent"
    SOLVER_INFEASIBLE_DOMAIN = "solver_infeasible_domain"
    SOLVER_RESULT_REJECTED = "solver_result_rejected"
    FALLBACK_EXHAUSTED = "fallback_exhausted"
