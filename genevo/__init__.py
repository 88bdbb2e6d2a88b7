"""
genevo - 通用演化最佳化引擎

給定一群能自行計算適應度的個體，反覆執行自然選擇、交配與變異，
直到呼叫者提供的停止條件成立。
"""

from .exceptions import GenevoError, ConfigurationError, ModelContractError
from .evolution import (
    EvolutionEngine,
    EvolutionaryIndividual,
    EvolutionOptions,
    EvolutionResult,
    Generation,
    GeneField,
    GeneKind,
    GeneSchema,
    MutationType,
    NaturalSelectionType,
    Population,
    EarlyStopping,
    create_evolution_engine,
    load_options,
)

__version__ = "0.1.0"

__all__ = [
    'EvolutionEngine',
    'EvolutionaryIndividual',
    'EvolutionOptions',
    'EvolutionResult',
    'Generation',
    'GeneField',
    'GeneKind',
    'GeneSchema',
    'MutationType',
    'NaturalSelectionType',
    'Population',
    'EarlyStopping',
    'create_evolution_engine',
    'load_options',
    'GenevoError',
    'ConfigurationError',
    'ModelContractError',
]
