"""
Rules Module - 游戏规则

该模块定义Millbrook赛制的队伍、洞结果和固定常量，包括：
- 队伍与洞结果枚举
- 赛制常量（18洞、第17洞最远开球、三杆洞Greenie）
- 队伍净杆与胜负判定
"""

from .types import (
    Team,
    LeadingTeam,
    HoleWinner,
    MillbrookRules,
    DEFAULT_RULES,
    coerce_team,
    coerce_optional_team,
    coerce_leading_team,
    coerce_winner
)
from .hole_rules import (
    TeamNets,
    compute_team_nets,
    determine_hole_winner,
    compute_team_totals,
    find_trailing_team,
    find_leading_team
)

__all__ = [
    'Team',
    'LeadingTeam',
    'HoleWinner',
    'MillbrookRules',
    'DEFAULT_RULES',
    'coerce_team',
    'coerce_optional_team',
    'coerce_leading_team',
    'coerce_winner',
    'TeamNets',
    'compute_team_nets',
    'determine_hole_winner',
    'compute_team_totals',
    'find_trailing_team',
    'find_leading_team'
]
