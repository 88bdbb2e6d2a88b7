"""
演化策略基類

定義所有演化策略的統一接口。
"""

from abc import ABC
from typing import Dict
import logging

from ..individual import GeneSchema, resolve_schema

logger = logging.getLogger(__name__)


class EvolutionStrategy(ABC):
    """
    演化策略基類

    所有演化策略都必須繼承此類並實現相應的方法。策略不持有亂數狀態，
    亂數來源由引擎在每次呼叫時傳入；策略也不修改傳入的族群。
    """

    def __init__(self):
        self.engine = None
        self.name = "base_strategy"
        self._schemas: Dict[tuple, GeneSchema] = {}

    def set_engine(self, engine):
        """設置演化引擎引用"""
        self.engine = engine

    def _schema_for(self, individual_type: type, options) -> GeneSchema:
        """取得個體類別補齊後的基因結構，依 (類別, 配置) 快取"""
        key = (individual_type, options)
        if key not in self._schemas:
            self._schemas[key] = resolve_schema(individual_type, options)
        return self._schemas[key]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
