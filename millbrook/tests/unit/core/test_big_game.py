"""
大赛计算器单元测试
"""

import math

import pytest

from millbrook.core.big_game import (
    BigGameRow, compute_big_game_row, compute_big_game_total, find_best_score_indexes
)
from millbrook.tests.anti_cheat.core_usage_checker import CoreUsageChecker


class TestComputeBigGameRow:
    """单洞记录测试"""

    def test_two_lowest_nets(self):
        """取两个最低净杆求和"""
        row = compute_big_game_row(1, [3, 4, 5, 6])
        CoreUsageChecker.verify_real_objects(row, "BigGameRow")
        assert row.hole == 1
        assert row.best_net == (3, 4)
        assert row.subtotal == 7

    def test_order_independent(self):
        """输入顺序不影响结果"""
        row = compute_big_game_row(2, [6, 4, 5, 3])
        assert row.best_net == (3, 4)
        assert row.subtotal == 7

    def test_two_players(self):
        """恰好两名玩家"""
        assert compute_big_game_row(3, [5, 4]).subtotal == 9

    def test_fractional_nets(self):
        """净杆可以是小数"""
        row = compute_big_game_row(4, [4.5, 3.5, 6])
        assert row.subtotal == 8

    @pytest.mark.parametrize("scores", [[], [4]])
    def test_too_few_scores(self, scores):
        """少于2个净杆"""
        with pytest.raises(ValueError):
            compute_big_game_row(1, scores)

    @pytest.mark.parametrize("scores", [
        [3, "4", 5],
        [3, None, 5],
        [3, True, 5],
        [3, math.nan, 5],
    ])
    def test_non_numeric_scores(self, scores):
        """非数字净杆被拒绝"""
        with pytest.raises(ValueError):
            compute_big_game_row(1, scores)

    def test_infinite_subtotal(self):
        """小计不是有限数时报错"""
        with pytest.raises(ValueError):
            compute_big_game_row(1, [math.inf, math.inf, math.inf])

    def test_to_dict(self):
        """字典格式"""
        assert compute_big_game_row(5, [4, 3]).to_dict() == {
            'hole': 5, 'best_net': [3, 4], 'subtotal': 7
        }


class TestBigGameTotal:
    """全场合计测试"""

    def test_sum_of_subtotals(self):
        """合计等于各洞小计之和"""
        rows = [compute_big_game_row(h, scores) for h, scores in
                enumerate([[3, 4, 5, 6], [4, 4, 5, 5], [2, 6, 7, 3]], start=1)]
        assert compute_big_game_total(rows) == 7 + 8 + 5

    def test_empty(self):
        """没有记录时为0"""
        assert compute_big_game_total([]) == 0


class TestFindBestScoreIndexes:
    """最佳座位测试"""

    def test_indexes(self):
        """返回原始座位"""
        assert find_best_score_indexes([6, 3, 5, 4]) == [1, 3]

    def test_ties_keep_seat_order(self):
        """并列时按座位顺序选取"""
        assert find_best_score_indexes([4, 4, 4, 4]) == [0, 1]
        assert find_best_score_indexes([5, 3, 4, 3]) == [1, 3]

    def test_consistent_with_row(self):
        """与单洞记录选中的净杆一致"""
        scores = [5, 2, 7, 2, 3]
        row = compute_big_game_row(1, scores)
        indexes = find_best_score_indexes(scores)
        assert tuple(scores[i] for i in indexes) == row.best_net


class TestBigGameRowValidation:
    """记录自身验证"""

    def test_invalid_row(self):
        """无效洞号或净杆数量"""
        with pytest.raises(ValueError):
            BigGameRow(hole=0, best_net=(3, 4), subtotal=7)
        with pytest.raises(ValueError):
            BigGameRow(hole=1, best_net=(3,), subtotal=3)
