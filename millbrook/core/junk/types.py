"""
杂项（Junk）类型定义

定义杂项事件类型、击球标记和事件记录。
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict

__all__ = ['JunkType', 'JunkFlags', 'JunkEvent']


class JunkType(Enum):
    """杂项事件类型"""
    BIRDIE = "Birdie"     # 小鸟球
    SANDIE = "Sandie"     # 沙坑救球保帕
    GREENIE = "Greenie"   # 三杆洞开球上果岭且最近
    PENALTY = "Penalty"   # 开球上果岭后三推
    LD10 = "LD10"         # 第17洞最远开球，固定10美元

    @property
    def is_penalty(self) -> bool:
        """是否为罚分事件"""
        return self is JunkType.PENALTY


@dataclass(frozen=True)
class JunkFlags:
    """单个玩家单洞的击球标记"""
    had_bunker_shot: bool = False
    is_on_green_from_tee: bool = False
    is_closest_on_green: bool = False
    had_three_putts: bool = False
    is_long_drive: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JunkFlags':
        """从字典创建，忽略未知字段"""
        known = {name: bool(data[name]) for name in cls.__dataclass_fields__ if name in data}
        return cls(**known)


@dataclass(frozen=True)
class JunkEvent:
    """杂项事件"""
    hole: int
    player_id: str
    type: JunkType
    value: float

    def __post_init__(self):
        """验证事件的有效性"""
        if self.hole < 1:
            raise ValueError("hole必须从1开始")
        if not self.player_id:
            raise ValueError("player_id不能为空")
        if self.value < 0:
            raise ValueError("value不能为负数")

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            'hole': self.hole,
            'player_id': self.player_id,
            'type': self.type.value,
            'value': self.value
        }
