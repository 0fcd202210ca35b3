"""
大赛模块

提供两最佳净杆的单洞记录与全场合计。
"""

from .types import BigGameRow
from .big_game_calculator import (
    compute_big_game_row,
    compute_big_game_total,
    find_best_score_indexes
)

__all__ = [
    'BigGameRow',
    'compute_big_game_row',
    'compute_big_game_total',
    'find_best_score_indexes'
]
