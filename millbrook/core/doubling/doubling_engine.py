"""
底分与加倍状态机

实现Millbrook赛制的底分推进、加倍和平洞结转：
- 第1洞底分固定为1
- 第2洞底分为2（加倍后为 2 × 2^(doubles-1) × 2）
- 第3洞起底分为 2 × 2^doubles

所有函数均为纯函数，状态通过DoublingState显式传递。
"""

import logging
from dataclasses import replace
from typing import Union

from millbrook.core.rules.types import (
    Team, LeadingTeam, HoleWinner, coerce_team, coerce_winner
)
from .types import DoublingState

__all__ = [
    'initialize',
    'compute_base',
    'can_request_double',
    'request_double',
    'advance'
]

logger = logging.getLogger(__name__)


def initialize() -> DoublingState:
    """
    创建比赛开始时的加倍状态

    Returns:
        第1洞、底分1、无加倍、无结转、平局的状态
    """
    return DoublingState(
        current_hole=1,
        base=1,
        doubles=0,
        carry=0,
        leading_team=LeadingTeam.TIED,
        double_used_this_hole=False
    )


def compute_base(hole_number: int, doubles_count: int) -> int:
    """
    计算某洞的底分

    Args:
        hole_number: 洞号（1-18）
        doubles_count: 截至目前被接受的加倍次数

    Returns:
        底分（美元）

    Raises:
        ValueError: 当洞号或加倍次数无效时
    """
    if hole_number < 1:
        raise ValueError(f"洞号必须从1开始: {hole_number}")
    if doubles_count < 0:
        raise ValueError(f"加倍次数不能为负数: {doubles_count}")

    # 第1洞固定为1，与加倍次数无关
    if hole_number == 1:
        base = 1
    elif hole_number == 2:
        base = 2 if doubles_count == 0 else 2 * 2 ** (doubles_count - 1) * 2
    else:
        base = 2 * 2 ** doubles_count

    logger.debug(f"[底分] 第{hole_number}洞, 加倍{doubles_count}次 -> 底分{base}")
    return base


def can_request_double(state: DoublingState, calling_team: Union[Team, str]) -> bool:
    """
    判断队伍当前能否加倍

    只有落后的队伍可以加倍，平局时任何一方都不能加倍，每洞最多一次。
    """
    team = coerce_team(calling_team)
    if state.double_used_this_hole:
        return False
    if state.leading_team is LeadingTeam.TIED:
        return False
    return state.leading_team.value != team.value


def request_double(state: DoublingState, calling_team: Union[Team, str]) -> DoublingState:
    """
    落后队伍请求加倍

    不允许的加倍（领先方、平局、本洞已加倍）不是错误，直接返回原状态。

    Args:
        state: 当前加倍状态
        calling_team: 请求加倍的队伍

    Returns:
        新的加倍状态；被拒绝时返回同一个state对象
    """
    if not can_request_double(state, calling_team):
        logger.debug(
            f"[加倍] 第{state.current_hole}洞 {coerce_team(calling_team).value} 加倍被忽略 "
            f"(领先: {state.leading_team.value}, 本洞已加倍: {state.double_used_this_hole})"
        )
        return state

    new_doubles = state.doubles + 1
    new_state = replace(
        state,
        doubles=new_doubles,
        base=compute_base(state.current_hole, new_doubles),
        double_used_this_hole=True
    )
    logger.debug(f"[加倍] 第{state.current_hole}洞加倍, 底分 {state.base} -> {new_state.base}")
    return new_state


def advance(state: DoublingState, winner: Union[HoleWinner, str], additional_carry: float = 0) -> DoublingState:
    """
    根据本洞结果进入下一洞

    Args:
        state: 本洞最终的加倍状态
        winner: 本洞结果（Red/Blue/Push）
        additional_carry: 平洞时额外结转的金额

    Returns:
        下一洞的加倍状态
    """
    outcome = coerce_winner(winner)
    if additional_carry < 0:
        raise ValueError(f"额外结转不能为负数: {additional_carry}")

    next_hole = state.current_hole + 1

    if outcome is HoleWinner.PUSH:
        new_carry = state.base + state.carry + additional_carry
        new_leading_team = state.leading_team
    else:
        new_carry = 0
        new_leading_team = LeadingTeam(outcome.value)

    new_state = DoublingState(
        current_hole=next_hole,
        base=compute_base(next_hole, state.doubles),
        doubles=state.doubles,
        carry=new_carry,
        leading_team=new_leading_team,
        double_used_this_hole=False
    )
    logger.debug(
        f"[底分] 第{state.current_hole}洞结果 {outcome.value} -> 第{next_hole}洞 "
        f"底分{new_state.base} 结转{new_carry} 领先{new_leading_team.value}"
    )
    return new_state
