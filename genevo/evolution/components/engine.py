"""
演化引擎核心類

這個模組實現了演化引擎的核心邏輯，負責協調選擇、繁殖與變異策略，
逐代執行演化並保留世代歷史。
"""

from typing import Callable, List, Optional, Tuple, Union
import logging
import uuid

import numpy as np
import pandas as pd
from deap import tools

from ...exceptions import GenevoError
from .generation import Generation, Population
from .options import EvolutionOptions
from .individual import resolve_schema
from .result import EvolutionResult
from .strategies.base import EvolutionStrategy
from .strategies.selection import SelectionStrategy
from .strategies.reproduction import Breeder
from .strategies.mutation import MutationStrategy

logger = logging.getLogger(__name__)

RandomState = Union[None, int, np.random.Generator]
ResultPredicate = Callable[[EvolutionResult], bool]


class EvolutionEngine:
    """
    演化引擎

    這個類是演化計算的核心，負責：
    1. 依配置建立第一代隨機族群
    2. 每一步依序執行 選擇 -> 繁殖 -> 變異 -> 前進
    3. 保留只增不減的世代歷史與適應度統計
    4. 反覆演化直到停止條件成立

    亂數來源是顯式注入的 ``numpy.random.Generator``，相同種子與配置的
    兩個引擎會產生完全相同的世代序列。
    """

    def __init__(
        self,
        individual_type: type,
        options: Optional[EvolutionOptions] = None,
        random_state: RandomState = None,
        selection: Optional[SelectionStrategy] = None,
        breeder: Optional[Breeder] = None,
        mutator: Optional[MutationStrategy] = None,
    ):
        """
        初始化演化引擎

        Args:
            individual_type: 個體類別 (繼承 EvolutionaryIndividual 並註冊 gene_schema)
            options: 演化配置，None 時使用預設值
            random_state: 亂數種子或 numpy Generator
            selection: 自訂選擇策略，None 時依 options.natural_selection_type 建立
            breeder: 自訂繁殖策略，None 時使用均勻交配
            mutator: 自訂變異策略，None 時依 options.mutation 建立

        Raises:
            ConfigurationError: 配置與基因結構不相容
            ModelContractError: 個體類別無法被通用處理
        """
        from . import create_strategy

        self.options = options if options is not None else EvolutionOptions()
        self.individual_type = individual_type
        self.rng = np.random.default_rng(random_state)
        self.engine_id = str(uuid.uuid4())[:8]

        # 建立時就驗證，避免演化中途失敗
        self.schema = resolve_schema(individual_type, self.options)

        if round(self.options.population_size * self.options.natural_selection_rate) < 1:
            logger.warning(
                f"natural_selection_rate={self.options.natural_selection_rate} 不足一個存活者，調整為 1"
            )

        # 組件
        self.selection = selection or create_strategy('selection', self.options.natural_selection_type)
        self.breeder = breeder or create_strategy('reproduction', 'uniform')
        self.mutator = mutator or create_strategy('mutation', self.options.mutation)
        for strategy in (self.selection, self.breeder, self.mutator):
            if not isinstance(strategy, EvolutionStrategy):
                raise TypeError(f"策略必須繼承自 EvolutionStrategy: {type(strategy)}")
            strategy.set_engine(self)

        # 統計
        self.stats = tools.Statistics(lambda ind: ind.fitness)
        self.stats.register("avg", np.mean)
        self.stats.register("std", np.std)
        self.stats.register("min", np.min)
        self.stats.register("max", np.max)
        self.logbook = tools.Logbook()
        self.logbook.header = ['gen', 'nevals'] + self.stats.fields
        self.hall_of_fame = tools.HallOfFame(1)

        # 世代
        self._generations: List[Generation] = []
        self.next_generation: Optional[Generation] = None
        self.current_generation: Generation = Generation.generate_randomly(
            individual_type, self.options, self.rng, schema=self.schema
        )
        self._generations.append(self.current_generation)

        logger.info(f"演化引擎已創建 (ID: {self.engine_id})")
        logger.info(
            f"配置: 族群={self.options.population_size}, "
            f"選擇={self.options.natural_selection_type.value}({self.options.natural_selection_rate}), "
            f"變異={self.options.mutation.value}({self.options.mutation_rate})"
        )

    @property
    def generations(self) -> Tuple[Generation, ...]:
        """已成為目前世代的所有世代 (依序)"""
        return tuple(self._generations)

    def evolve(self) -> EvolutionResult:
        """
        執行一次世代轉換

        Returns:
            被取代的世代 (也就是本次計算適應度的世代) 的結果
        """
        self._switch_generations()

        population = self.current_generation.population

        # 演化
        survivors = self._select(population)
        offspring = self.breeder.breed(survivors, self.options, self.rng)
        next_population = self.mutator.mutate(offspring, self.options, self.rng)

        if len(next_population) != self.options.population_size:
            raise GenevoError(
                f"下一代族群大小 {len(next_population)} 不等於 population_size {self.options.population_size}"
            )

        # 準備下一代
        self.next_generation = Generation(self.current_generation.number + 1, next_population)

        result = EvolutionResult(self.current_generation)
        logger.info(f"🔄 第 {result.number} 世代 📊 最佳適應度: {result.best_fitness:.6f}")
        return result

    def evolve_until(
        self,
        stop_condition: ResultPredicate,
        on_generation_processed: Optional[ResultPredicate] = None,
    ) -> List[EvolutionResult]:
        """
        反覆演化直到停止條件成立

        每一代之後先呼叫 ``on_generation_processed`` (若有)，回傳 False 時
        立即停止，不再檢查該世代的停止條件；否則當 ``stop_condition``
        回傳 True 時停止。沒有內建的世代上限。

        Args:
            stop_condition: 停止條件
            on_generation_processed: 每代處理完成的回調，回傳是否繼續

        Returns:
            每個世代的結果 (依序)
        """
        all_results: List[EvolutionResult] = []

        while True:
            result = self.evolve()
            all_results.append(result)

            if on_generation_processed is not None and not on_generation_processed(result):
                logger.info(f"⏹️ 演化在第 {result.number} 世代由回調停止")
                break

            if stop_condition(result):
                logger.info(f"✅ 第 {result.number} 世代達成停止條件")
                break

        return all_results

    def statistics_frame(self) -> pd.DataFrame:
        """以 DataFrame 回傳每代的適應度統計"""
        return pd.DataFrame(list(self.logbook), columns=self.logbook.header)

    def get_status(self) -> dict:
        """獲取引擎狀態"""
        best = self.hall_of_fame[0] if len(self.hall_of_fame) else None
        return {
            'engine_id': self.engine_id,
            'current_generation': self.current_generation.number,
            'generations': len(self._generations),
            'population_size': self.options.population_size,
            'best_fitness': best.fitness if best is not None else None,
        }

    # privates
    def _select(self, population: Population) -> Population:
        # 在任何選擇決策之前，整個族群都必須完成適應度計算
        for individual in population:
            individual.calculate_fitness()

        self._record_generation_stats(population)
        return self.selection.select(population, self.options, self.rng)

    def _record_generation_stats(self, population: Population):
        individuals = population.to_list()
        record = self.stats.compile(individuals)
        self.logbook.record(gen=self.current_generation.number, nevals=len(individuals), **record)
        self.hall_of_fame.update(individuals)
        logger.debug(f"   {self.logbook.stream}")

    def _switch_generations(self):
        if self.next_generation is None:
            return

        self.current_generation = self.next_generation
        self._generations.append(self.current_generation)
        self.next_generation = None
