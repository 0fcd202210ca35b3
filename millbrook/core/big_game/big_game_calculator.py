"""
大赛计算器

每洞取有资格玩家中最低的两个净杆求和，全场合计为各洞小计之和。
计算单洞记录和查找最佳座位共用同一个选取函数，结果始终一致。
"""

import logging
import math
import numbers
from typing import Iterable, List, Sequence, Tuple

from .types import BigGameRow

__all__ = [
    'compute_big_game_row',
    'compute_big_game_total',
    'find_best_score_indexes'
]

logger = logging.getLogger(__name__)


def _validate_net_scores(net_scores: Sequence[float]) -> None:
    if len(net_scores) < 2:
        raise ValueError(f"大赛计算至少需要2个净杆，当前: {len(net_scores)}")
    for index, score in enumerate(net_scores):
        if isinstance(score, bool) or not isinstance(score, numbers.Real) or math.isnan(score):
            raise ValueError(f"第{index}个净杆不是有效数字: {score!r}")


def _select_best_two(net_scores: Sequence[float]) -> List[Tuple[int, float]]:
    """按净杆升序稳定排序后取前两个 (座位, 净杆)"""
    _validate_net_scores(net_scores)
    ranked = sorted(enumerate(net_scores), key=lambda item: item[1])
    return ranked[:2]


def compute_big_game_row(hole_number: int, net_scores: Sequence[float]) -> BigGameRow:
    """
    计算大赛单洞记录

    Args:
        hole_number: 洞号
        net_scores: 有资格玩家的净杆

    Returns:
        BigGameRow

    Raises:
        ValueError: 净杆少于2个、含非数字、或小计不是有效数字时
    """
    best = _select_best_two(net_scores)
    best_net = (best[0][1], best[1][1])
    subtotal = best_net[0] + best_net[1]
    if not math.isfinite(subtotal):
        raise ValueError(f"第{hole_number}洞大赛小计不是有效数字: {subtotal}")

    logger.debug(f"[大赛] 第{hole_number}洞 最佳净杆{list(best_net)} 小计{subtotal}")
    return BigGameRow(hole=hole_number, best_net=best_net, subtotal=subtotal)


def compute_big_game_total(rows: Iterable[BigGameRow]) -> float:
    """全场大赛合计"""
    return sum(row.subtotal for row in rows)


def find_best_score_indexes(net_scores: Sequence[float]) -> List[int]:
    """返回被选中的两个净杆的原始座位"""
    return [index for index, _ in _select_best_two(net_scores)]
