"""
組件化演化計算框架

將演化過程中的各個策略 (初始化、選擇、繁殖、變異) 抽象成可插拔的組件，
由配置中的列舉值選擇具體實作。
"""

import enum
import logging
from typing import Any, Dict, Union

from ...exceptions import ConfigurationError
from .individual import EvolutionaryIndividual, GeneField, GeneKind, GeneSchema
from .options import EvolutionOptions, MutationType, NaturalSelectionType, load_options
from .generation import Generation, Population
from .result import EvolutionResult
from .engine import EvolutionEngine
from . import strategies

logger = logging.getLogger(__name__)

# 策略名稱到類名的映射
STRATEGY_MAPPINGS = {
    'initialization': {
        'random': 'RandomInitialization',
    },
    'selection': {
        NaturalSelectionType.ELITE.value: 'EliteSelection',
        NaturalSelectionType.PROPORTIONAL_SELECTION.value: 'ProportionalSelection',
    },
    'reproduction': {
        'uniform': 'UniformCrossoverBreeder',
    },
    'mutation': {
        MutationType.RANDOM.value: 'RandomMutation',
        MutationType.ADDITION.value: 'AdditionMutation',
    },
}


def create_strategy(strategy_type: str, strategy_name: Union[str, enum.Enum]) -> strategies.EvolutionStrategy:
    """
    根據名稱創建演化策略

    Args:
        strategy_type: 策略類型 ('initialization', 'selection', 'reproduction', 'mutation')
        strategy_name: 策略名稱或對應的列舉值 (如 'elite', MutationType.ADDITION)

    Returns:
        創建的策略實例

    Raises:
        ConfigurationError: 如果策略不存在
    """
    if strategy_type not in STRATEGY_MAPPINGS:
        raise ConfigurationError(f"不支持的策略類型: {strategy_type}")

    if isinstance(strategy_name, enum.Enum):
        strategy_name = strategy_name.value

    if strategy_name not in STRATEGY_MAPPINGS[strategy_type]:
        available = list(STRATEGY_MAPPINGS[strategy_type].keys())
        raise ConfigurationError(f"不支持的{strategy_type}策略: {strategy_name}。可用策略: {available}")

    class_name = STRATEGY_MAPPINGS[strategy_type][strategy_name]
    strategy_class = getattr(strategies, class_name)
    logger.debug(f"已建立 {strategy_type} 策略: {class_name}")
    return strategy_class()


def create_evolution_engine(
    individual_type: type,
    config: Union[EvolutionOptions, Dict[str, Any], None] = None,
    random_state=None,
) -> EvolutionEngine:
    """
    工廠函數：根據配置創建演化引擎

    Args:
        individual_type: 個體類別
        config: EvolutionOptions 或配置字典 (扁平或分段格式)
        random_state: 亂數種子或 numpy Generator

    Returns:
        配置好的演化引擎實例

    Raises:
        ConfigurationError: 如果配置參數無效
    """
    if config is None or isinstance(config, EvolutionOptions):
        options = config
    elif isinstance(config, dict):
        options = EvolutionOptions.from_dict(config)
    else:
        raise ConfigurationError(f"不支持的配置型別: {type(config)}")

    return EvolutionEngine(individual_type, options, random_state=random_state)


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
    'STRATEGY_MAPPINGS',
    'create_strategy',
    'create_evolution_engine',
    'load_options',
]
