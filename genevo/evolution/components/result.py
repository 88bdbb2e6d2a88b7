"""
演化結果類

封裝單一世代的唯讀快照，包括最佳個體與完整族群。
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from .generation import Generation, Population
from .individual import EvolutionaryIndividual


@dataclass(frozen=True)
class EvolutionResult:
    """
    演化結果封裝類

    描述一個已計算適應度的世代，由 ``EvolutionEngine.evolve()`` 在該世代
    被下一代取代時回傳。
    """

    generation: Generation

    @property
    def number(self) -> int:
        """世代編號"""
        return self.generation.number

    @property
    def population(self) -> Population:
        return self.generation.population

    @property
    def best_individual(self) -> Optional[EvolutionaryIndividual]:
        """適應度最高的個體，平手時取族群中第一個出現者"""
        return self.population.best()

    @property
    def best_fitness(self) -> float:
        """最佳適應度值"""
        best = self.best_individual
        return best.fitness if best is not None else 0.0

    def get_fitness_statistics(self) -> Dict[str, float]:
        """獲取適應度統計信息"""
        values = self.population.fitness_values()
        if values.size == 0:
            return {}

        return {
            'best_fitness': float(values.max()),
            'avg_fitness': float(values.mean()),
            'worst_fitness': float(values.min()),
            'std_fitness': float(np.std(values)),
        }

    def to_dict(self) -> Dict[str, Any]:
        """轉換為字典格式"""
        best = self.best_individual
        return {
            'generation': self.number,
            'population_size': len(self.population),
            'best_fitness': self.best_fitness,
            'best_genes': best.genes() if best is not None else None,
            'fitness_statistics': self.get_fitness_statistics(),
        }

    def __repr__(self) -> str:
        return f"EvolutionResult(generation={self.number}, best_fitness={self.best_fitness:.4f})"
