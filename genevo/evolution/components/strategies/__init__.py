"""
演化策略模組

包含所有演化策略的實現：
- 初始化策略
- 選擇策略
- 繁殖 (交配) 策略
- 變異策略
"""

from .base import EvolutionStrategy
from .initialization import InitializationStrategy, RandomInitialization, random_gene_value, random_gene_values
from .selection import SelectionStrategy, EliteSelection, ProportionalSelection
from .reproduction import Breeder, UniformCrossoverBreeder
from .mutation import MutationStrategy, RandomMutation, AdditionMutation

__all__ = [
    'EvolutionStrategy',
    # 初始化策略
    'InitializationStrategy', 'RandomInitialization', 'random_gene_value', 'random_gene_values',
    # 選擇策略
    'SelectionStrategy', 'EliteSelection', 'ProportionalSelection',
    # 繁殖策略
    'Breeder', 'UniformCrossoverBreeder',
    # 變異策略
    'MutationStrategy', 'RandomMutation', 'AdditionMutation',
]
