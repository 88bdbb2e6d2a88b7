"""
選擇策略模組

實現自然選擇：把族群縮減為用於繁殖的存活者。
"""

import logging

import numpy as np
from deap import tools

from .base import EvolutionStrategy
from ..generation import Population

logger = logging.getLogger(__name__)


class SelectionStrategy(EvolutionStrategy):
    """
    選擇策略基類
    """

    def __init__(self):
        super().__init__()
        self.name = "selection_strategy"

    def select(self, population: Population, options, rng: np.random.Generator) -> Population:
        """
        選擇存活者

        Args:
            population: 已計算適應度的族群
            options: EvolutionOptions
            rng: 亂數來源

        Returns:
            存活者族群 (大小為 options.survivor_count)
        """
        raise NotImplementedError("子類必須實現 select 方法")


class EliteSelection(SelectionStrategy):
    """
    菁英選擇策略 (確定性)

    依適應度降序取前 survivor_count 個個體，平手時保持原族群順序。
    """

    def __init__(self):
        super().__init__()
        self.name = "elite"

    def select(self, population: Population, options, rng: np.random.Generator) -> Population:
        if not population:
            return Population()

        k = min(options.survivor_count, len(population))
        # selBest 以 reverse=True 排序，Python 的排序在平手時保持原順序
        chosen = tools.selBest(population.to_list(), k, fit_attr='fitness')

        logger.debug(f"   菁英選擇: {len(population)} -> {len(chosen)} 個存活者")
        return Population(chosen)


class ProportionalSelection(SelectionStrategy):
    """
    適應度比例選擇 (輪盤賭)

    以與適應度成正比的機率抽取 survivor_count 次 (可重複抽中同一個體)。
    總適應度為 0 時退化為均勻抽取。
    """

    def __init__(self):
        super().__init__()
        self.name = "proportional"

    def select(self, population: Population, options, rng: np.random.Generator) -> Population:
        if not population:
            return Population()

        k = options.survivor_count
        weights = np.clip(population.fitness_values(), 0.0, None)
        total = weights.sum()

        if total > 0:
            probabilities = weights / total
        else:
            logger.warning("總適應度為 0，回退到均勻隨機選擇")
            probabilities = None

        indices = rng.choice(len(population), size=k, replace=True, p=probabilities)
        chosen = [population[i] for i in indices]

        logger.debug(f"   比例選擇: 抽取 {len(chosen)} 個存活者 (不重複 {len(set(indices.tolist()))} 個)")
        return Population(chosen)
