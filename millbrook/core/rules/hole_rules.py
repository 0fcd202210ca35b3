"""
洞结果规则

由净杆决定队伍净杆和本洞胜负，并根据累计总额判断落后队伍。
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

from .types import Team, LeadingTeam, HoleWinner, coerce_optional_team

__all__ = [
    'TeamNets',
    'compute_team_nets',
    'determine_hole_winner',
    'compute_team_totals',
    'find_trailing_team',
    'find_leading_team'
]

TeamAssignment = Union[Team, str, None]


@dataclass(frozen=True)
class TeamNets:
    """双方队伍本洞净杆（各队最低净杆）"""
    red: float
    blue: float


def _check_lengths(values: Sequence, assignments: Sequence, label: str) -> None:
    if len(values) != len(assignments):
        raise ValueError(f"{label}数量与队伍分配数量不一致: {len(values)} != {len(assignments)}")


def compute_team_nets(net_scores: Sequence[float], player_team_assignments: Sequence[TeamAssignment]) -> TeamNets:
    """
    计算各队本洞净杆

    Raises:
        ValueError: 长度不一致或某队没有玩家时
    """
    _check_lengths(net_scores, player_team_assignments, "净杆")
    teams = [coerce_optional_team(t) for t in player_team_assignments]

    red_scores = [score for score, team in zip(net_scores, teams) if team is Team.RED]
    blue_scores = [score for score, team in zip(net_scores, teams) if team is Team.BLUE]
    if not red_scores or not blue_scores:
        raise ValueError("红蓝两队都必须至少有一名玩家")

    return TeamNets(red=min(red_scores), blue=min(blue_scores))


def determine_hole_winner(team_nets: TeamNets) -> HoleWinner:
    """净杆低者赢洞，相同则平洞"""
    if team_nets.red < team_nets.blue:
        return HoleWinner.RED
    if team_nets.blue < team_nets.red:
        return HoleWinner.BLUE
    return HoleWinner.PUSH


def compute_team_totals(running_totals: Sequence[float],
                        player_team_assignments: Sequence[TeamAssignment]) -> Dict[Team, float]:
    """按队伍汇总玩家累计总额"""
    _check_lengths(running_totals, player_team_assignments, "累计总额")
    totals: Dict[Team, float] = {Team.RED: 0, Team.BLUE: 0}
    for total, assignment in zip(running_totals, player_team_assignments):
        team = coerce_optional_team(assignment)
        if team is not None:
            totals[team] += total
    return totals


def find_trailing_team(running_totals: Sequence[float],
                       player_team_assignments: Sequence[TeamAssignment]) -> Optional[Team]:
    """
    根据人均累计总额判断落后队伍

    Returns:
        落后的队伍；持平或某队没有玩家时返回None
    """
    totals = compute_team_totals(running_totals, player_team_assignments)
    teams = [coerce_optional_team(t) for t in player_team_assignments]
    red_count = sum(1 for t in teams if t is Team.RED)
    blue_count = sum(1 for t in teams if t is Team.BLUE)
    if red_count == 0 or blue_count == 0:
        return None

    red_average = totals[Team.RED] / red_count
    blue_average = totals[Team.BLUE] / blue_count
    if red_average < blue_average:
        return Team.RED
    if blue_average < red_average:
        return Team.BLUE
    return None


def find_leading_team(running_totals: Sequence[float],
                      player_team_assignments: Sequence[TeamAssignment]) -> LeadingTeam:
    """按累计总额判断领先队伍，落后队伍的对手即领先方"""
    trailing = find_trailing_team(running_totals, player_team_assignments)
    if trailing is None:
        return LeadingTeam.TIED
    return LeadingTeam(trailing.opponent.value)
