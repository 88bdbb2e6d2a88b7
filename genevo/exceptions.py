"""
例外類別

演化引擎使用的錯誤分類。
"""


class GenevoError(Exception):
    """所有 genevo 例外的基類"""

    pass


class ConfigurationError(GenevoError, ValueError):
    """
    配置錯誤

    演化參數超出合約範圍時，在建立配置或引擎時拋出，不會開始演化。
    """

    pass


class ModelContractError(GenevoError, TypeError):
    """
    個體模型合約錯誤

    個體類別無法被通用的交配/變異處理時拋出 (缺少基因結構、
    不支援的基因型別、基因屬性不存在或陣列長度不符)。
    """

    pass
