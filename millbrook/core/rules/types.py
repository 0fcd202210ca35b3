"""
核心规则类型定义

定义队伍、洞结果以及Millbrook赛制的固定规则常量。
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Union

__all__ = [
    'Team',
    'LeadingTeam',
    'HoleWinner',
    'MillbrookRules',
    'DEFAULT_RULES',
    'coerce_team',
    'coerce_optional_team',
    'coerce_leading_team',
    'coerce_winner'
]


class Team(Enum):
    """队伍"""
    RED = "Red"
    BLUE = "Blue"

    @property
    def opponent(self) -> 'Team':
        """对手队伍"""
        return Team.BLUE if self is Team.RED else Team.RED


class LeadingTeam(Enum):
    """领先队伍（可为平局）"""
    RED = "Red"
    BLUE = "Blue"
    TIED = "Tied"


class HoleWinner(Enum):
    """单洞结果"""
    RED = "Red"
    BLUE = "Blue"
    PUSH = "Push"    # 平洞

    @property
    def is_decisive(self) -> bool:
        """是否分出胜负"""
        return self is not HoleWinner.PUSH

    def to_team(self) -> Team:
        """转换为获胜队伍"""
        if self is HoleWinner.PUSH:
            raise ValueError("平洞没有获胜队伍")
        return Team(self.value)


@dataclass(frozen=True)
class MillbrookRules:
    """赛制固定常量"""
    holes_per_round: int = 18
    long_drive_hole: int = 17
    long_drive_value: int = 10
    greenie_par: int = 3

    def __post_init__(self):
        """验证规则常量的有效性"""
        if self.holes_per_round <= 0:
            raise ValueError("holes_per_round必须大于0")
        if not 1 <= self.long_drive_hole <= self.holes_per_round:
            raise ValueError(f"long_drive_hole必须在1-{self.holes_per_round}之间")
        if self.long_drive_value < 0:
            raise ValueError("long_drive_value不能为负数")
        if self.greenie_par <= 0:
            raise ValueError("greenie_par必须大于0")


DEFAULT_RULES = MillbrookRules()


def _coerce(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, Enum):
        value = value.value
    for member in enum_cls:
        if member.value == value:
            return member
    raise ValueError(f"无效的{label}: {value!r}")


def coerce_team(value: Union[Team, str]) -> Team:
    """将 'Red'/'Blue' 字符串转换为Team"""
    return _coerce(Team, value, "队伍")


def coerce_optional_team(value: Union[Team, str, None]) -> Optional[Team]:
    """同coerce_team，但允许未分配（None）"""
    if value is None:
        return None
    return coerce_team(value)


def coerce_leading_team(value: Union[LeadingTeam, Team, str]) -> LeadingTeam:
    """将 'Red'/'Blue'/'Tied' 转换为LeadingTeam"""
    return _coerce(LeadingTeam, value, "领先队伍")


def coerce_winner(value: Union[HoleWinner, Team, str]) -> HoleWinner:
    """将 'Red'/'Blue'/'Push' 转换为HoleWinner"""
    return _coerce(HoleWinner, value, "洞结果")
