"""
结算模块

提供单洞队伍结算、玩家分配和累计总额功能。
"""

from .types import PayoutResult, PlayerPayout
from .payout_calculator import compute_hole_payout
from .payout_distributor import PayoutDistributor, allocate_player_payouts, update_running_totals

__all__ = [
    'PayoutResult',
    'PlayerPayout',
    'PayoutDistributor',
    'compute_hole_payout',
    'allocate_player_payouts',
    'update_running_totals'
]
