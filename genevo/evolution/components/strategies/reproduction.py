"""
繁殖策略模組

由存活者以均勻交配產生子代，把族群補回 population_size。
"""

import logging

import numpy as np

from .base import EvolutionStrategy
from ..generation import Population
from ..individual import EvolutionaryIndividual, get_gene, set_gene

logger = logging.getLogger(__name__)


class Breeder(EvolutionStrategy):
    """
    繁殖策略基類
    """

    def __init__(self):
        super().__init__()
        self.name = "breeder"

    def breed(self, survivors: Population, options, rng: np.random.Generator) -> Population:
        """
        產生新族群

        Args:
            survivors: 自然選擇後的存活者
            options: EvolutionOptions
            rng: 亂數來源

        Returns:
            大小為 population_size 的子代族群 (尚未計算適應度)
        """
        raise NotImplementedError("子類必須實現 breed 方法")


class UniformCrossoverBreeder(Breeder):
    """
    均勻交配繁殖

    每個子代隨機 (可重複) 挑選兩個父母；純量基因以 50% 機率各自取自
    父母之一，陣列基因則對每個元素獨立擲硬幣。只有一個存活者時與自己繁殖。
    """

    def __init__(self):
        super().__init__()
        self.name = "uniform_crossover"

    def breed(self, survivors: Population, options, rng: np.random.Generator) -> Population:
        if len(survivors) == 0:
            raise ValueError("沒有存活者可以繁殖")

        offspring = []
        while len(offspring) < options.population_size:
            index_a, index_b = rng.integers(0, len(survivors), size=2)
            offspring.append(self.crossover(survivors[index_a], survivors[index_b], options, rng))

        logger.debug(f"   由 {len(survivors)} 個存活者繁殖 {len(offspring)} 個子代")
        return Population(offspring)

    def crossover(self, parent_a: EvolutionaryIndividual, parent_b: EvolutionaryIndividual,
                  options, rng: np.random.Generator) -> EvolutionaryIndividual:
        """
        以兩個父母產生一個新個體

        子代是新建的實例，不會呼叫 calculate_fitness。
        """
        individual_type = type(parent_a)
        schema = self._schema_for(individual_type, options)
        child = individual_type()

        for gene_field in schema:
            value_a = get_gene(parent_a, gene_field)
            value_b = get_gene(parent_b, gene_field)
            if gene_field.is_array:
                mask = rng.random(gene_field.length) < 0.5
                value = np.where(mask, value_a, value_b)
            else:
                value = value_a if rng.random() < 0.5 else value_b
            set_gene(child, gene_field, value)

        return child
