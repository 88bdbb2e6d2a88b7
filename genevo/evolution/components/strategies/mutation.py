"""
變異策略模組

對每個基因 (陣列則每個元素) 以 mutation_rate 的機率進行變異。
"""

import logging

import numpy as np

from .base import EvolutionStrategy
from .initialization import random_gene_values
from ..generation import Population
from ..individual import EvolutionaryIndividual, GeneField, get_gene, set_gene

logger = logging.getLogger(__name__)


class MutationStrategy(EvolutionStrategy):
    """
    變異策略基類

    子類只需實作 ``_mutate_values``：給定被選中的基因值，回傳替換值。
    """

    def __init__(self):
        super().__init__()
        self.name = "mutation_strategy"
        self.mutation_stats = {
            'total_genes': 0,
            'mutated_genes': 0,
        }

    def mutate(self, population: Population, options, rng: np.random.Generator) -> Population:
        """
        執行變異操作

        Args:
            population: 子代族群
            options: EvolutionOptions
            rng: 亂數來源

        Returns:
            同樣大小的新族群；每個個體都是副本，輸入不會被修改
        """
        mutated = [self.mutate_individual(individual, options, rng) for individual in population]
        return Population(mutated)

    def mutate_individual(self, individual: EvolutionaryIndividual, options,
                          rng: np.random.Generator) -> EvolutionaryIndividual:
        """複製個體並對其基因進行變異"""
        schema = self._schema_for(type(individual), options)
        mutant = individual.clone()

        for gene_field in schema:
            value = get_gene(mutant, gene_field)
            if gene_field.is_array:
                mask = rng.random(gene_field.length) < options.mutation_rate
                count = int(mask.sum())
                self.mutation_stats['total_genes'] += gene_field.length
                if count:
                    value = np.array(value, copy=True)
                    value[mask] = self._mutate_values(gene_field, value[mask], options, rng)
                    set_gene(mutant, gene_field, value)
            else:
                self.mutation_stats['total_genes'] += 1
                count = 0
                if rng.random() < options.mutation_rate:
                    count = 1
                    new_value = self._mutate_values(gene_field, np.array([value]), options, rng)[0]
                    set_gene(mutant, gene_field, new_value)
            self.mutation_stats['mutated_genes'] += count

        return mutant

    def _mutate_values(self, gene_field: GeneField, values: np.ndarray, options,
                       rng: np.random.Generator) -> np.ndarray:
        """
        計算替換值

        Args:
            gene_field: 已補齊的基因描述
            values: 被選中變異的目前值
            options: EvolutionOptions
            rng: 亂數來源

        Returns:
            與 values 等長的新值
        """
        raise NotImplementedError("子類必須實現 _mutate_values 方法")

    def get_stats(self) -> dict:
        """獲取變異統計信息"""
        total = self.mutation_stats['total_genes']
        return {
            'total_genes': total,
            'mutated_genes': self.mutation_stats['mutated_genes'],
            'mutation_ratio': self.mutation_stats['mutated_genes'] / total if total else 0.0,
        }


class RandomMutation(MutationStrategy):
    """
    隨機變異

    以值域內新的均勻隨機值取代，與初始化使用同一個產生器。
    """

    def __init__(self):
        super().__init__()
        self.name = "random"

    def _mutate_values(self, gene_field: GeneField, values: np.ndarray, options,
                       rng: np.random.Generator) -> np.ndarray:
        return random_gene_values(gene_field, rng, len(values))


class AdditionMutation(MutationStrategy):
    """
    加法變異

    數值基因加上一個非零的隨機步幅並夾在 [low, high] 內：
    整數步幅為 [1, delta] 的隨機整數並帶隨機正負號，
    浮點步幅為 [-delta, delta] 的均勻值。布林基因直接翻轉。

    delta 取 mutation_delta；未設定時為基因值域寬度 (high - low)，
    讓任何值都能一步到達值域內的每個點。
    代價是大步幅常被夾到邊界：例如值域 [32, 126] 中的 80 在預設步幅下，
    約一半的變異會落在 32 或 126 上。需要局部微調時請設定較小的 mutation_delta。
    """

    def __init__(self):
        super().__init__()
        self.name = "addition"

    def _mutate_values(self, gene_field: GeneField, values: np.ndarray, options,
                       rng: np.random.Generator) -> np.ndarray:
        size = len(values)
        if gene_field.dtype is bool:
            return ~values.astype(np.bool_)

        delta = options.mutation_delta
        if delta is None:
            delta = gene_field.high - gene_field.low

        if gene_field.dtype is int:
            max_step = max(1, int(delta))
            steps = rng.integers(1, max_step + 1, size=size)
            signs = rng.choice(np.array([-1, 1]), size=size)
            deltas = steps * signs
        else:
            deltas = rng.uniform(-delta, delta, size=size)

        return np.clip(values + deltas, gene_field.low, gene_field.high)
