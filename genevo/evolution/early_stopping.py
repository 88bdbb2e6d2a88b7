"""
Early Stopping for Evolution

最佳適應度連續 patience 代沒有改進時要求停止。實例本身可呼叫，
可直接作為 ``EvolutionEngine.evolve_until`` 的停止條件。
"""

import logging
from typing import Any, Dict, List, Optional

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class EarlyStopping:
    """
    早停條件

    Example:
        >>> early_stopping = EarlyStopping(patience=10, min_delta=0.5)
        >>> results = engine.evolve_until(early_stopping)
        >>> early_stopping.best_generation
    """

    MODES = ('max', 'min')

    def __init__(self, patience: int = 10, min_delta: float = 0.0, mode: str = 'max'):
        """
        Args:
            patience: 容許連續無改進的世代數
            min_delta: 改進必須嚴格大於此值才算數
            mode: 'max' 表示適應度越大越好，'min' 反之

        Raises:
            ConfigurationError: patience < 1、min_delta < 0 或未知的 mode
        """
        if patience < 1:
            raise ConfigurationError(f"patience must be >= 1, got {patience}")
        if min_delta < 0:
            raise ConfigurationError(f"min_delta must be >= 0, got {min_delta}")
        if mode not in self.MODES:
            raise ConfigurationError(f"mode must be 'max' or 'min', got {mode}")

        self.patience = patience
        self.min_delta = min_delta
        self.mode = mode
        self.reset()

    def reset(self):
        """清除所有觀察過的世代"""
        self.counter = 0
        self.best_fitness: Optional[float] = None
        self.best_generation: Optional[int] = None
        self.should_stop = False
        self.generation = 0
        self.history: List[float] = []

    def __call__(self, result) -> bool:
        """以 EvolutionResult 觀察一個世代"""
        return self.step(result.best_fitness, generation_number=result.number)

    def _improvement(self, fitness: float) -> float:
        if self.mode == 'max':
            return fitness - self.best_fitness
        return self.best_fitness - fitness

    def step(self, current_fitness: float, generation_number: Optional[int] = None) -> bool:
        """
        觀察一個世代的最佳適應度

        Args:
            current_fitness: 該世代的最佳適應度
            generation_number: 世代編號；省略時以觀察次數代替

        Returns:
            True 表示應該停止
        """
        self.generation += 1
        number = generation_number if generation_number is not None else self.generation
        self.history.append(current_fitness)

        if self.best_fitness is None or self._improvement(current_fitness) > self.min_delta:
            self.best_fitness = current_fitness
            self.best_generation = number
            self.counter = 0
        else:
            self.counter += 1

        if self.counter >= self.patience and not self.should_stop:
            self.should_stop = True
            logger.info(
                f"早停觸發: 連續 {self.counter} 代無改進，"
                f"最佳適應度 {self.best_fitness} (第 {self.best_generation} 代)"
            )

        return self.should_stop

    def get_status(self) -> Dict[str, Any]:
        """目前的早停狀態"""
        return {
            'counter': self.counter,
            'best_fitness': self.best_fitness,
            'best_generation': self.best_generation,
            'should_stop': self.should_stop,
            'generation': self.generation,
            'patience': self.patience,
            'min_delta': self.min_delta,
            'mode': self.mode,
        }

    def __repr__(self) -> str:
        return (f"EarlyStopping(patience={self.patience}, min_delta={self.min_delta}, "
                f"mode='{self.mode}', counter={self.counter}, generation={self.generation})")
