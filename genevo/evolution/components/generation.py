"""
族群與世代

Population 是單一世代的有序個體集合；Generation 把世代編號與族群配對。
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from .individual import EvolutionaryIndividual


class Population(Sequence):
    """
    族群

    不可變的有序個體序列。順序在語義上不重要，但選擇時的平手順序
    必須依此順序保持穩定。
    """

    def __init__(self, individuals: Iterable[EvolutionaryIndividual] = ()):
        self._individuals = tuple(individuals)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Population(self._individuals[index])
        return self._individuals[index]

    def __len__(self) -> int:
        return len(self._individuals)

    def __eq__(self, other) -> bool:
        if isinstance(other, Population):
            return self._individuals == other._individuals
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._individuals)

    def to_list(self) -> List[EvolutionaryIndividual]:
        return list(self._individuals)

    def fitness_values(self) -> np.ndarray:
        """所有個體的適應度"""
        return np.array([ind.fitness for ind in self._individuals], dtype=float)

    def best(self) -> Optional[EvolutionaryIndividual]:
        """適應度最高的個體，平手時取第一個出現者"""
        if not self._individuals:
            return None
        # max() 在平手時保留第一個
        return max(self._individuals, key=lambda ind: ind.fitness)

    def __repr__(self) -> str:
        return f"Population(size={len(self)})"


@dataclass(frozen=True)
class Generation:
    """世代：編號 (從 1 開始) 與族群"""

    number: int
    population: Population

    def __post_init__(self):
        if self.number < 1:
            raise ValueError(f"世代編號必須 >= 1: {self.number}")

    @classmethod
    def generate_randomly(cls, individual_type: type, options, rng: np.random.Generator,
                          schema=None) -> 'Generation':
        """
        建立隨機初始化的第一代

        Args:
            individual_type: 個體類別
            options: EvolutionOptions
            rng: 亂數來源
            schema: 已補齊的基因結構 (可選)
        """
        from .strategies.initialization import RandomInitialization

        initialization = RandomInitialization()
        population = initialization.initialize(individual_type, options, rng, schema=schema)
        return cls(1, population)
