"""
玩家结算分配器

将队伍结算金额拆分到每个玩家，并维护按座位对齐的累计总额。
"""

import math
from typing import List, Optional, Sequence, Union

from millbrook.core.rules.types import HoleWinner, Team, coerce_winner, coerce_optional_team
from .types import PlayerPayout

__all__ = [
    'PayoutDistributor',
    'allocate_player_payouts',
    'update_running_totals'
]

TeamAssignment = Union[Team, str, None]


class PayoutDistributor:
    """
    玩家结算分配器

    提供玩家结算分配的静态方法和辅助功能。
    """

    @staticmethod
    def allocate_player_payouts(winner: Union[HoleWinner, str], team_payout: float,
                                player_team_assignments: Sequence[TeamAssignment]) -> List[float]:
        """
        按队伍拆分单洞结算

        获胜队伍平分 +team_payout，失败队伍平分 -team_payout，人数不等时
        允许出现小数份额。未分配队伍的玩家得到0。

        前置条件：分出胜负时红蓝双方都至少有一名玩家，否则没有付款方或收款方。

        Args:
            winner: 本洞结果
            team_payout: 队伍移交金额
            player_team_assignments: 每个座位的队伍（可为None）

        Returns:
            与座位对齐的带符号金额列表，总和为0

        Raises:
            ValueError: 分出胜负但某一方没有玩家时
        """
        outcome = coerce_winner(winner)
        teams = [coerce_optional_team(t) for t in player_team_assignments]

        if outcome is HoleWinner.PUSH:
            return [0 for _ in teams]

        winning_team = outcome.to_team()
        winner_count = sum(1 for t in teams if t is winning_team)
        loser_count = sum(1 for t in teams if t is winning_team.opponent)
        if winner_count == 0 or loser_count == 0:
            raise ValueError(
                f"分出胜负时双方都必须有玩家: 获胜方{winner_count}人, 失败方{loser_count}人"
            )

        win_share = team_payout / winner_count
        lose_share = -team_payout / loser_count

        deltas: List[float] = []
        for team in teams:
            if team is None:
                deltas.append(0)
            elif team is winning_team:
                deltas.append(win_share)
            else:
                deltas.append(lose_share)
        return deltas

    @staticmethod
    def update_running_totals(current_totals: Sequence[float], hole_deltas: Sequence[float]) -> List[float]:
        """
        按座位累加本洞金额

        Raises:
            ValueError: 两个序列长度不一致时（上游名单错误）
        """
        if len(current_totals) != len(hole_deltas):
            raise ValueError(
                f"累计总额与本洞结算的玩家数量必须一致: "
                f"{len(current_totals)} != {len(hole_deltas)}"
            )
        return [total + delta for total, delta in zip(current_totals, hole_deltas)]

    @staticmethod
    def build_player_payouts(player_ids: Sequence[str], deltas: Sequence[float]) -> List[PlayerPayout]:
        """将座位对齐的金额转换为PlayerPayout列表"""
        if len(player_ids) != len(deltas):
            raise ValueError(f"玩家数量与结算数量不一致: {len(player_ids)} != {len(deltas)}")
        return [PlayerPayout(player_id=pid, delta=delta) for pid, delta in zip(player_ids, deltas)]

    @staticmethod
    def is_zero_sum(deltas: Sequence[float], tolerance: Optional[float] = 1e-9) -> bool:
        """验证结算总和是否为0"""
        return math.isclose(math.fsum(deltas), 0.0, abs_tol=tolerance or 0.0)


allocate_player_payouts = PayoutDistributor.allocate_player_payouts
update_running_totals = PayoutDistributor.update_running_totals
