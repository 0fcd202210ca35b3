"""
杂项事件评估器

按单个玩家、单个洞检测杂项事件：
- Birdie: 总杆 == 标准杆 - 1
- Sandie: 打过沙坑且总杆 == 标准杆
- Greenie: 三杆洞开球上果岭且离洞最近
- Penalty: 开球上果岭后三推
- LD10: 第17洞最远开球（固定10美元，不随底分变化）

评估器只看单个玩家的标记，"每洞只有一个最近上果岭"这类跨玩家约束由调用方保证。
"""

import logging
from typing import List, Optional

from millbrook.core.rules.types import MillbrookRules, DEFAULT_RULES
from .types import JunkType, JunkFlags, JunkEvent

__all__ = [
    'detect_birdie',
    'detect_sandie',
    'detect_greenie',
    'detect_penalty',
    'detect_ld10',
    'evaluate_junk_events'
]

logger = logging.getLogger(__name__)


def detect_birdie(hole: int, player_id: str, gross_score: int, par: int, base: float) -> Optional[JunkEvent]:
    """检测小鸟球"""
    if gross_score == par - 1:
        return JunkEvent(hole=hole, player_id=player_id, type=JunkType.BIRDIE, value=base)
    return None


def detect_sandie(hole: int, player_id: str, gross_score: int, par: int,
                  flags: JunkFlags, base: float) -> Optional[JunkEvent]:
    """检测沙坑救球保帕"""
    if flags.had_bunker_shot and gross_score == par:
        return JunkEvent(hole=hole, player_id=player_id, type=JunkType.SANDIE, value=base)
    return None


def detect_greenie(hole: int, player_id: str, par: int, flags: JunkFlags, base: float,
                   rules: MillbrookRules = DEFAULT_RULES) -> Optional[JunkEvent]:
    """检测Greenie（仅限三杆洞）"""
    if par == rules.greenie_par and flags.is_on_green_from_tee and flags.is_closest_on_green:
        return JunkEvent(hole=hole, player_id=player_id, type=JunkType.GREENIE, value=base)
    return None


def detect_penalty(hole: int, player_id: str, flags: JunkFlags, base: float) -> Optional[JunkEvent]:
    """检测开球上果岭后三推的罚分"""
    if flags.is_on_green_from_tee and flags.had_three_putts:
        return JunkEvent(hole=hole, player_id=player_id, type=JunkType.PENALTY, value=base)
    return None


def detect_ld10(hole: int, player_id: str, flags: JunkFlags,
                rules: MillbrookRules = DEFAULT_RULES) -> Optional[JunkEvent]:
    """检测第17洞最远开球"""
    if hole == rules.long_drive_hole and flags.is_long_drive:
        return JunkEvent(hole=hole, player_id=player_id, type=JunkType.LD10, value=rules.long_drive_value)
    return None


def evaluate_junk_events(hole: int, player_id: str, gross_score: int, par: int,
                         flags: JunkFlags, base: float,
                         rules: MillbrookRules = DEFAULT_RULES) -> List[JunkEvent]:
    """
    评估单个玩家本洞的所有杂项事件

    Args:
        hole: 洞号
        player_id: 玩家ID
        gross_score: 总杆数
        par: 本洞标准杆
        flags: 击球标记
        base: 本洞底分
        rules: 赛制常量

    Returns:
        按 Birdie, Sandie, Greenie, Penalty, LD10 顺序排列的事件列表（可能为空）
    """
    if hole < 1:
        raise ValueError(f"洞号必须从1开始: {hole}")
    if not player_id:
        raise ValueError("player_id不能为空")

    candidates = [
        detect_birdie(hole, player_id, gross_score, par, base),
        detect_sandie(hole, player_id, gross_score, par, flags, base),
        detect_greenie(hole, player_id, par, flags, base, rules),
        detect_penalty(hole, player_id, flags, base),
        detect_ld10(hole, player_id, flags, rules),
    ]
    events = [event for event in candidates if event is not None]

    if events:
        logger.debug(
            f"[杂项] 第{hole}洞 {player_id}: "
            + ", ".join(f"{e.type.value}=${e.value}" for e in events)
        )
    return events
