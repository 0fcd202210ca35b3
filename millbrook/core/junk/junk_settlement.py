"""
杂项队伍结算

把本洞所有杂项事件按队伍汇总，再以零和方式分摊到每个玩家。
奖励类事件计入玩家所在队伍，Penalty从所在队伍扣除。
早期记分程序把Penalty也计入本队，这里有意改为扣除。
"""

import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Union

from millbrook.core.rules.types import Team, coerce_team, coerce_optional_team
from .types import JunkEvent

__all__ = ['compute_team_junk', 'allocate_junk_payouts']

logger = logging.getLogger(__name__)


def compute_team_junk(events: Iterable[JunkEvent],
                      player_teams: Mapping[str, Union[Team, str, None]]) -> Dict[Team, float]:
    """
    汇总各队伍本洞的杂项净值

    Args:
        events: 本洞的杂项事件
        player_teams: 玩家ID到队伍的映射

    Returns:
        {Team.RED: 红队净值, Team.BLUE: 蓝队净值}
    """
    totals: Dict[Team, float] = {Team.RED: 0, Team.BLUE: 0}
    for event in events:
        team = coerce_optional_team(player_teams.get(event.player_id))
        if team is None:
            logger.debug(f"[杂项] 玩家 {event.player_id} 未分配队伍，忽略 {event.type.value}")
            continue
        signed_value = -event.value if event.type.is_penalty else event.value
        totals[team] += signed_value
    return totals


def allocate_junk_payouts(team_junk: Mapping[Union[Team, str], float],
                          player_team_assignments: Sequence[Union[Team, str, None]]) -> List[float]:
    """
    将杂项净差额零和分摊到玩家

    红队每人得到 (红 - 蓝) / 红队人数，蓝队每人得到 -(红 - 蓝) / 蓝队人数。

    Raises:
        ValueError: 存在杂项净差额但某一方没有玩家时
    """
    junk = {coerce_team(team): value for team, value in team_junk.items()}
    net_to_red = junk.get(Team.RED, 0) - junk.get(Team.BLUE, 0)
    teams = [coerce_optional_team(t) for t in player_team_assignments]

    if net_to_red == 0:
        return [0 for _ in teams]

    red_count = sum(1 for t in teams if t is Team.RED)
    blue_count = sum(1 for t in teams if t is Team.BLUE)
    if red_count == 0 or blue_count == 0:
        raise ValueError(f"杂项结算需要双方都有玩家: 红队{red_count}人, 蓝队{blue_count}人")

    logger.debug(f"[杂项] 红队净赢 {net_to_red} (红{red_count}人, 蓝{blue_count}人)")

    deltas: List[float] = []
    for team in teams:
        if team is Team.RED:
            deltas.append(net_to_red / red_count)
        elif team is Team.BLUE:
            deltas.append(-net_to_red / blue_count)
        else:
            deltas.append(0)
    return deltas
