"""
演化個體合約

定義任何候選解必須提供的能力，以及描述個體基因的顯式結構
(GeneSchema)。交配與變異策略只透過基因結構存取基因，不依賴執行期反射。
"""

import copy
import enum
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, Optional, Tuple

import numpy as np

from ...exceptions import ConfigurationError, ModelContractError

SUPPORTED_DTYPES = (bool, int, float)

NUMPY_DTYPES = {
    bool: np.bool_,
    int: np.int64,
    float: np.float64,
}

# 未指定上下界時的型別預設值
DEFAULT_BOUNDS = {
    int: (0, 100),
    float: (0.0, 1.0),
}


class GeneKind(enum.Enum):
    """基因成員的形狀"""

    SCALAR = "scalar"
    ARRAY = "array"


@dataclass(frozen=True)
class GeneField:
    """
    單一基因成員的描述

    Attributes:
        name: 個體上的屬性名稱
        dtype: 基因值型別 (bool, int, float)
        kind: 純量或固定長度陣列
        length: 陣列長度，None 表示由配置決定
        low: 數值下界，None 表示由配置決定
        high: 數值上界，None 表示由配置決定
    """

    name: str
    dtype: type
    kind: GeneKind = GeneKind.SCALAR
    length: Optional[int] = None
    low: Optional[float] = None
    high: Optional[float] = None

    @property
    def is_array(self) -> bool:
        return self.kind is GeneKind.ARRAY

    @property
    def numpy_dtype(self):
        return NUMPY_DTYPES[self.dtype]

    def resolve(self, options) -> 'GeneField':
        """
        根據演化配置補齊長度與上下界

        Args:
            options: EvolutionOptions

        Returns:
            所有欄位都已確定的 GeneField

        Raises:
            ModelContractError: 不支援的基因型別
            ConfigurationError: 陣列長度無法決定或上下界無效
        """
        if self.dtype not in SUPPORTED_DTYPES:
            raise ModelContractError(
                f"基因 '{self.name}' 的型別 {self.dtype!r} 不受支援，可用型別: bool, int, float"
            )

        length = self.length
        if self.is_array:
            if length is None:
                length = options.collection_size
            if length is None:
                length = options.collection_types_sizes
            if length is None:
                raise ConfigurationError(
                    f"陣列基因 '{self.name}' 未指定長度，請設定 collection_size 或 collection_types_sizes"
                )
            if length <= 0:
                raise ConfigurationError(f"陣列基因 '{self.name}' 的長度必須為正數: {length}")

        low, high = self.low, self.high
        if self.dtype is bool:
            low, high = 0, 1
        else:
            default_low, default_high = DEFAULT_BOUNDS[self.dtype]
            if low is None:
                low = options.min_number_value if options.min_number_value is not None else default_low
            if high is None:
                high = options.max_number_value if options.max_number_value is not None else default_high
            if low > high:
                raise ConfigurationError(f"基因 '{self.name}' 的下界 {low} 大於上界 {high}")
            if self.dtype is int:
                # 向內取整，產生的整數不會超出配置的上下界
                int_low, int_high = math.ceil(low), math.floor(high)
                if int_low > int_high:
                    raise ConfigurationError(f"整數基因 '{self.name}' 的上下界 [{low}, {high}] 之間沒有整數")
                low, high = int_low, int_high
            else:
                low, high = float(low), float(high)

        return replace(self, length=length, low=low, high=high)


class GeneSchema:
    """
    個體基因結構

    有序且不可變的 GeneField 集合，由個體類別透過 ``gene_schema``
    類別屬性註冊。
    """

    def __init__(self, *fields: GeneField):
        names = [f.name for f in fields]
        if len(names) != len(set(names)):
            raise ModelContractError(f"基因名稱重複: {names}")
        self._fields: Tuple[GeneField, ...] = tuple(fields)

    @property
    def fields(self) -> Tuple[GeneField, ...]:
        return self._fields

    def __iter__(self) -> Iterator[GeneField]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, name: str) -> GeneField:
        for gene_field in self._fields:
            if gene_field.name == name:
                return gene_field
        raise KeyError(name)

    def __eq__(self, other) -> bool:
        return isinstance(other, GeneSchema) and self._fields == other._fields

    def __hash__(self) -> int:
        return hash(self._fields)

    def resolve(self, options) -> 'GeneSchema':
        """回傳依配置補齊所有長度與上下界的基因結構"""
        return GeneSchema(*(gene_field.resolve(options) for gene_field in self._fields))

    def __repr__(self) -> str:
        return f"GeneSchema({', '.join(f.name for f in self._fields)})"


def resolve_schema(individual_type: type, options) -> GeneSchema:
    """
    取得個體類別註冊的基因結構並依配置補齊

    Raises:
        ModelContractError: 個體類別沒有有效的 ``gene_schema``
    """
    if not isinstance(individual_type, type) or not issubclass(individual_type, EvolutionaryIndividual):
        raise ModelContractError(f"個體類別必須繼承自 EvolutionaryIndividual: {individual_type!r}")

    schema = getattr(individual_type, 'gene_schema', None)
    if not isinstance(schema, GeneSchema) or len(schema) == 0:
        raise ModelContractError(f"{individual_type.__name__} 沒有註冊 gene_schema")

    return schema.resolve(options)


def get_gene(individual, gene_field: GeneField) -> Any:
    """讀取個體的基因值"""
    try:
        value = getattr(individual, gene_field.name)
    except AttributeError:
        raise ModelContractError(
            f"{type(individual).__name__} 沒有基因屬性 '{gene_field.name}'"
        ) from None

    if gene_field.is_array:
        value = np.asarray(value)
        if value.ndim != 1 or len(value) != gene_field.length:
            raise ModelContractError(
                f"基因 '{gene_field.name}' 的長度應為 {gene_field.length}，實際為 {value.shape}"
            )
    return value


def set_gene(individual, gene_field: GeneField, value: Any):
    """寫入個體的基因值，陣列會轉成對應 dtype 的 numpy 陣列"""
    if gene_field.is_array:
        value = np.asarray(value, dtype=gene_field.numpy_dtype)
        if value.ndim != 1 or len(value) != gene_field.length:
            raise ModelContractError(
                f"基因 '{gene_field.name}' 的長度應為 {gene_field.length}，實際為 {value.shape}"
            )
        value = value.copy()
    else:
        value = gene_field.dtype(value)

    try:
        setattr(individual, gene_field.name, value)
    except AttributeError as e:
        raise ModelContractError(
            f"無法設定 {type(individual).__name__} 的基因 '{gene_field.name}': {e}"
        ) from e


class EvolutionaryIndividual(ABC):
    """
    演化個體基類

    使用者模型繼承此類別，並且：

    1. 可以不帶參數建立
    2. 以 ``gene_schema`` 類別屬性宣告基因結構，基因值存放在同名屬性上
    3. 實作 ``calculate_fitness()``，由目前的基因寫入 ``self._fitness``

    ``calculate_fitness()`` 可以是累加式的 (``self._fitness += ...``)，
    引擎保證每個世代對每個個體只呼叫一次，並且在任何依適應度的決策之前。
    新繁殖或複製出的個體適應度都從 0 開始。
    """

    gene_schema: GeneSchema = GeneSchema()

    def __init__(self):
        self._fitness = 0.0

    @property
    def fitness(self) -> float:
        """適應度 (越高越好)"""
        return getattr(self, '_fitness', 0.0)

    @abstractmethod
    def calculate_fitness(self) -> None:
        """由目前的基因計算適應度"""

    def genes(self) -> Dict[str, Any]:
        """基因名稱到目前值的字典 (副本)"""
        values = {}
        for gene_field in type(self).gene_schema:
            value = getattr(self, gene_field.name, None)
            values[gene_field.name] = value.copy() if isinstance(value, np.ndarray) else value
        return values

    def clone(self) -> 'EvolutionaryIndividual':
        """創建個體的深拷貝，適應度歸零"""
        cloned = copy.deepcopy(self)
        cloned._fitness = 0.0
        return cloned

    def __repr__(self) -> str:
        genes = ", ".join(f"{name}={value!r}" for name, value in self.genes().items())
        return f"{type(self).__name__}(fitness={self.fitness:.4f}, {genes})"
