"""
初始化策略模組

依基因結構在上下界內均勻隨機產生基因值。變異策略重新抽取基因值時
也使用同一個產生器。
"""

from typing import Optional
import logging

import numpy as np

from .base import EvolutionStrategy
from ..generation import Population
from ..individual import GeneField, GeneSchema, resolve_schema, set_gene

logger = logging.getLogger(__name__)


def random_gene_values(gene_field: GeneField, rng: np.random.Generator, size: int) -> np.ndarray:
    """
    在基因值域內均勻抽取 size 個值

    Args:
        gene_field: 已補齊上下界的基因描述
        rng: 亂數來源
        size: 抽取數量

    Returns:
        dtype 與基因相符的 numpy 陣列
    """
    if gene_field.dtype is bool:
        return rng.integers(0, 2, size=size).astype(np.bool_)
    if gene_field.dtype is int:
        # 上界包含在內
        return rng.integers(gene_field.low, gene_field.high + 1, size=size, dtype=np.int64)
    return rng.uniform(gene_field.low, gene_field.high, size=size)


def random_gene_value(gene_field: GeneField, rng: np.random.Generator):
    """產生一個完整的隨機基因值 (純量或陣列)"""
    if gene_field.is_array:
        return random_gene_values(gene_field, rng, gene_field.length)
    return gene_field.dtype(random_gene_values(gene_field, rng, 1)[0])


class InitializationStrategy(EvolutionStrategy):
    """
    初始化策略基類
    """

    def __init__(self):
        super().__init__()
        self.name = "initialization_strategy"

    def initialize(self, individual_type: type, options, rng: np.random.Generator,
                   schema: Optional[GeneSchema] = None) -> Population:
        """
        初始化族群

        Args:
            individual_type: 個體類別
            options: EvolutionOptions
            rng: 亂數來源
            schema: 已補齊的基因結構，None 時由個體類別解析

        Returns:
            大小為 population_size 的族群
        """
        raise NotImplementedError("子類必須實現 initialize 方法")


class RandomInitialization(InitializationStrategy):
    """
    均勻隨機初始化
    """

    def __init__(self):
        super().__init__()
        self.name = "random"

    def initialize(self, individual_type: type, options, rng: np.random.Generator,
                   schema: Optional[GeneSchema] = None) -> Population:
        if schema is None:
            schema = resolve_schema(individual_type, options)

        individuals = [self.create_individual(individual_type, schema, rng)
                       for _ in range(options.population_size)]

        logger.debug(f"   隨機初始化 {len(individuals)} 個 {individual_type.__name__} 個體")
        return Population(individuals)

    def create_individual(self, individual_type: type, schema: GeneSchema, rng: np.random.Generator):
        """創建單個隨機個體"""
        individual = individual_type()
        for gene_field in schema:
            set_gene(individual, gene_field, random_gene_value(gene_field, rng))
        return individual
