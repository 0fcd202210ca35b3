"""
结算类型定义
"""

from dataclasses import dataclass

__all__ = ['PayoutResult', 'PlayerPayout']


@dataclass(frozen=True)
class PayoutResult:
    """单洞队伍结算结果"""
    payout: float      # 本洞移交的队伍金额
    new_carry: float   # 结算后的结转金额

    def __post_init__(self):
        """验证结算结果的有效性"""
        if self.payout < 0:
            raise ValueError("payout不能为负数")
        if self.new_carry < 0:
            raise ValueError("new_carry不能为负数")


@dataclass(frozen=True)
class PlayerPayout:
    """单个玩家本洞的带符号金额变化"""
    player_id: str
    delta: float

    def __post_init__(self):
        """验证玩家结算的有效性"""
        if not self.player_id:
            raise ValueError("player_id不能为空")
