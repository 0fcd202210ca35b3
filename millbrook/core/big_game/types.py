"""
大赛（Big Game）类型定义
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

__all__ = ['BigGameRow']


@dataclass(frozen=True)
class BigGameRow:
    """大赛单洞记录：两个最低净杆及其和"""
    hole: int
    best_net: Tuple[float, float]
    subtotal: float

    def __post_init__(self):
        """验证记录的有效性"""
        if self.hole < 1:
            raise ValueError("hole必须从1开始")
        if len(self.best_net) != 2:
            raise ValueError("best_net必须恰好包含两个净杆")

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            'hole': self.hole,
            'best_net': list(self.best_net),
            'subtotal': self.subtotal
        }
