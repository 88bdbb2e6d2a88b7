"""
演化配置

不可變的演化參數，所有策略都只讀取它。支援以字典或 JSON 配置文件建立。
"""

import enum
import json
import logging
import numbers
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class NaturalSelectionType(enum.Enum):
    """自然選擇方法"""

    ELITE = "elite"
    PROPORTIONAL_SELECTION = "proportional"


class MutationType(enum.Enum):
    """變異方法"""

    RANDOM = "random"
    ADDITION = "addition"


def _coerce_enum(enum_type, value, option_name: str):
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        key = value.strip()
        for member in enum_type:
            if key.lower() in (member.value, member.name.lower()):
                return member
    available = [member.value for member in enum_type]
    raise ConfigurationError(f"不支持的 {option_name}: {value!r}。可用選項: {available}")


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class EvolutionOptions:
    """
    演化參數

    Attributes:
        population_size: 每個世代的個體數
        natural_selection_type: 自然選擇方法
        natural_selection_rate: 存活者比例 (0, 1]
        mutation: 變異方法
        mutation_rate: 每個基因 (陣列則每個元素) 的變異機率 [0, 1]
        collection_size: 陣列基因的長度
        collection_types_sizes: 未指定長度的陣列基因的備用長度
        min_number_value: 數值基因的下界
        max_number_value: 數值基因的上界
        mutation_delta: 加法變異的最大步幅，None 表示基因值域寬度
    """

    population_size: int = 100
    natural_selection_type: NaturalSelectionType = NaturalSelectionType.ELITE
    natural_selection_rate: float = 0.5
    mutation: MutationType = MutationType.RANDOM
    mutation_rate: float = 0.01
    collection_size: Optional[int] = None
    collection_types_sizes: Optional[int] = None
    min_number_value: Optional[float] = None
    max_number_value: Optional[float] = None
    mutation_delta: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(
            self, 'natural_selection_type',
            _coerce_enum(NaturalSelectionType, self.natural_selection_type, 'natural_selection_type'),
        )
        object.__setattr__(self, 'mutation', _coerce_enum(MutationType, self.mutation, 'mutation'))
        self.validate()

    def validate(self):
        """
        驗證參數範圍

        Raises:
            ConfigurationError: 任一參數超出合約範圍
        """
        if isinstance(self.population_size, bool) or not isinstance(self.population_size, int):
            raise ConfigurationError(f"population_size 必須是整數: {self.population_size!r}")
        if self.population_size <= 0:
            raise ConfigurationError(f"population_size 必須大於 0: {self.population_size}")

        for name in ('natural_selection_rate', 'mutation_rate'):
            if not _is_real(getattr(self, name)):
                raise ConfigurationError(f"{name} 必須是數值: {getattr(self, name)!r}")
        for name in ('min_number_value', 'max_number_value', 'mutation_delta'):
            value = getattr(self, name)
            if value is not None and not _is_real(value):
                raise ConfigurationError(f"{name} 必須是數值: {value!r}")

        if not 0 < self.natural_selection_rate <= 1:
            raise ConfigurationError(
                f"natural_selection_rate 必須介於 (0, 1]: {self.natural_selection_rate}"
            )
        if not 0 <= self.mutation_rate <= 1:
            raise ConfigurationError(f"mutation_rate 必須介於 [0, 1]: {self.mutation_rate}")

        for name in ('collection_size', 'collection_types_sizes'):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value <= 0):
                raise ConfigurationError(f"{name} 必須是正整數: {value!r}")

        if (self.min_number_value is not None and self.max_number_value is not None
                and self.min_number_value > self.max_number_value):
            raise ConfigurationError(
                f"min_number_value ({self.min_number_value}) 大於 max_number_value ({self.max_number_value})"
            )
        if self.mutation_delta is not None and self.mutation_delta <= 0:
            raise ConfigurationError(f"mutation_delta 必須大於 0: {self.mutation_delta}")

    @property
    def survivor_count(self) -> int:
        """自然選擇後的存活者數量，至少為 1"""
        return max(1, round(self.population_size * self.natural_selection_rate))

    def to_dict(self) -> Dict[str, Any]:
        """轉換為扁平字典 (列舉值轉為字串)"""
        data = asdict(self)
        data['natural_selection_type'] = self.natural_selection_type.value
        data['mutation'] = self.mutation.value
        return data

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'EvolutionOptions':
        """
        從配置字典建立

        同時接受扁平欄位名稱，以及分段格式::

            {
                "evolution": {"population_size": 300},
                "selection": {"method": "elite", "rate": 0.5},
                "mutation": {"strategy": "addition", "rate": 0.01, "delta": 1},
                "genes": {"collection_size": 34, "min_number_value": 32, "max_number_value": 126}
            }

        Raises:
            ConfigurationError: 未知欄位或參數無效
        """
        known = {f.name for f in fields(cls)}
        params: Dict[str, Any] = {}

        for key, value in config.items():
            if key == 'evolution':
                params.update(value)
            elif key == 'selection':
                if 'method' in value:
                    params['natural_selection_type'] = value['method']
                if 'rate' in value:
                    params['natural_selection_rate'] = value['rate']
            elif key == 'mutation' and isinstance(value, dict):
                if 'strategy' in value:
                    params['mutation'] = value['strategy']
                if 'rate' in value:
                    params['mutation_rate'] = value['rate']
                if 'delta' in value:
                    params['mutation_delta'] = value['delta']
            elif key == 'genes':
                params.update(value)
            else:
                params[key] = value

        unknown = set(params) - known
        if unknown:
            raise ConfigurationError(f"未知的配置參數: {sorted(unknown)}")

        return cls(**params)


def load_options(config_path: Union[str, Path]) -> EvolutionOptions:
    """
    載入 JSON 配置文件

    Args:
        config_path: 配置文件路徑

    Returns:
        EvolutionOptions
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"配置文件不存在: {config_path}")

    with open(config_file, 'r', encoding='utf-8') as f:
        config = json.load(f)

    options = EvolutionOptions.from_dict(config)
    logger.info(f"配置載入成功: {config_file.name}")
    return options
