"""
单洞结算计算器

- 平洞: payout = 0, carry += base
- 分出胜负: payout = carry + base + base（赢洞奖励等于底分）, carry = 0
"""

import logging
from typing import Union

from millbrook.core.rules.types import HoleWinner, coerce_winner
from .types import PayoutResult

__all__ = ['compute_hole_payout']

logger = logging.getLogger(__name__)


def compute_hole_payout(winner: Union[HoleWinner, str], base: float, carry: float = 0) -> PayoutResult:
    """
    计算单洞的队伍结算

    Args:
        winner: 本洞结果（Red/Blue/Push）
        base: 本洞底分
        carry: 进入本洞时的结转金额

    Returns:
        PayoutResult，包含移交金额和新的结转金额

    Raises:
        ValueError: 当底分或结转为负数时
    """
    outcome = coerce_winner(winner)
    if base < 0:
        raise ValueError(f"底分不能为负数: {base}")
    if carry < 0:
        raise ValueError(f"结转不能为负数: {carry}")

    if outcome is HoleWinner.PUSH:
        result = PayoutResult(payout=0, new_carry=carry + base)
        logger.debug(f"[结算] 平洞: payout=0, 新结转={result.new_carry}")
        return result

    result = PayoutResult(payout=carry + base + base, new_carry=0)
    logger.debug(
        f"[结算] {outcome.value}赢洞: payout={result.payout} "
        f"(结转{carry} + 底分{base} + 赢洞奖励{base})"
    )
    return result
