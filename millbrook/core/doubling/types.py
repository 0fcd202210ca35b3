"""
加倍状态类型定义

定义贯穿18洞的底分/加倍/结转状态快照。
"""

from dataclasses import dataclass

from millbrook.core.rules.types import LeadingTeam, coerce_leading_team

__all__ = ['DoublingState']


@dataclass(frozen=True)
class DoublingState:
    """
    加倍状态快照

    每洞一个不可变快照，由request_double/advance返回新实例。

    Attributes:
        current_hole: 当前洞号（1起）
        base: 当前洞底分，始终由(current_hole, doubles)推导
        doubles: 比赛开始以来被接受的加倍次数
        carry: 平洞累积的结转金额
        leading_team: 领先队伍，决定谁有加倍权
        double_used_this_hole: 本洞是否已加倍
    """
    current_hole: int = 1
    base: int = 1
    doubles: int = 0
    carry: float = 0
    leading_team: LeadingTeam = LeadingTeam.TIED
    double_used_this_hole: bool = False

    def __post_init__(self):
        """验证状态的有效性"""
        if self.current_hole < 1:
            raise ValueError("current_hole必须从1开始")
        if self.doubles < 0:
            raise ValueError("doubles不能为负数")
        if self.carry < 0:
            raise ValueError("carry不能为负数")
        if not isinstance(self.leading_team, LeadingTeam):
            object.__setattr__(self, 'leading_team', coerce_leading_team(self.leading_team))

    def to_dict(self) -> dict:
        """转换为字典格式"""
        return {
            'current_hole': self.current_hole,
            'base': self.base,
            'doubles': self.doubles,
            'carry': self.carry,
            'leading_team': self.leading_team.value,
            'double_used_this_hole': self.double_used_this_hole
        }
