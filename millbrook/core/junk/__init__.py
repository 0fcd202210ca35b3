"""
杂项模块

提供杂项事件检测和队伍零和结算功能。
"""

from .types import JunkType, JunkFlags, JunkEvent
from .junk_evaluator import (
    detect_birdie,
    detect_sandie,
    detect_greenie,
    detect_penalty,
    detect_ld10,
    evaluate_junk_events
)
from .junk_settlement import compute_team_junk, allocate_junk_payouts

__all__ = [
    'JunkType',
    'JunkFlags',
    'JunkEvent',
    'detect_birdie',
    'detect_sandie',
    'detect_greenie',
    'detect_penalty',
    'detect_ld10',
    'evaluate_junk_events',
    'compute_team_junk',
    'allocate_junk_payouts'
]
