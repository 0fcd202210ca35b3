"""
加倍状态机单元测试

测试底分公式、加倍权限和逐洞推进。
"""

import pytest

from millbrook.core.doubling import (
    DoublingState, initialize, compute_base, can_request_double, request_double, advance
)
from millbrook.core.rules import Team, LeadingTeam
from millbrook.tests.anti_cheat.core_usage_checker import CoreUsageChecker


class TestComputeBase:
    """底分公式测试"""

    def test_hole_one_is_always_one(self):
        """第1洞底分与加倍次数无关"""
        for doubles in range(0, 6):
            assert compute_base(1, doubles) == 1

    def test_hole_two(self):
        """第2洞：无加倍为2，加倍后为 2 × 2^(d-1) × 2"""
        assert compute_base(2, 0) == 2
        assert compute_base(2, 1) == 4
        assert compute_base(2, 2) == 8
        assert compute_base(2, 3) == 16

    def test_hole_three_and_later(self):
        """第3洞起为 2 × 2^doubles，与洞号无关"""
        assert compute_base(3, 0) == 2
        assert compute_base(3, 1) == 4
        assert compute_base(3, 2) == 8
        assert compute_base(3, 3) == 16
        assert compute_base(4, 2) == 8
        assert compute_base(10, 2) == 8
        assert compute_base(18, 2) == 8

    def test_invalid_arguments(self):
        """无效洞号或加倍次数"""
        with pytest.raises(ValueError):
            compute_base(0, 0)
        with pytest.raises(ValueError):
            compute_base(3, -1)


class TestInitialize:
    """初始状态测试"""

    def test_initial_state(self):
        """第1洞、底分1、无加倍、无结转、平局"""
        state = initialize()
        CoreUsageChecker.verify_real_objects(state, "DoublingState")

        assert state.current_hole == 1
        assert state.base == 1
        assert state.doubles == 0
        assert state.carry == 0
        assert state.leading_team is LeadingTeam.TIED
        assert state.double_used_this_hole is False


class TestRequestDouble:
    """加倍请求测试"""

    def _state(self, leading, **overrides):
        values = dict(current_hole=3, base=2, doubles=0, carry=0,
                      leading_team=leading, double_used_this_hole=False)
        values.update(overrides)
        return DoublingState(**values)

    def test_only_trailing_team_can_double(self):
        """领先方不能加倍，落后方可以"""
        state = self._state(LeadingTeam.RED)

        assert request_double(state, Team.RED) is state

        doubled = request_double(state, Team.BLUE)
        assert doubled.doubles == 1
        assert doubled.base == 4
        assert doubled.double_used_this_hole is True
        assert doubled.current_hole == 3

    def test_only_once_per_hole(self):
        """每洞只能加倍一次"""
        state = self._state(LeadingTeam.BLUE)
        doubled = request_double(state, "Red")
        assert doubled.doubles == 1

        assert request_double(doubled, "Red") is doubled

    def test_tied_blocks_doubling(self):
        """平局时双方都不能加倍"""
        state = self._state(LeadingTeam.TIED)
        assert request_double(state, Team.RED) is state
        assert request_double(state, Team.BLUE) is state
        assert can_request_double(state, Team.RED) is False

    def test_initial_state_cannot_double(self):
        """比赛开始时平局，不能加倍"""
        state = initialize()
        assert request_double(state, Team.RED) == state
        assert request_double(state, Team.BLUE) == state

    def test_double_on_hole_two(self):
        """第2洞加倍使用第2洞公式"""
        state = self._state(LeadingTeam.RED, current_hole=2, base=2)
        doubled = request_double(state, Team.BLUE)
        assert doubled.base == 4

    def test_unknown_team_is_rejected(self):
        """无效队伍名是输入错误"""
        with pytest.raises(ValueError):
            request_double(self._state(LeadingTeam.RED), "Green")


class TestAdvance:
    """逐洞推进测试"""

    def test_base_sequence_with_double_on_hole_six(self):
        """第6洞加倍后的底分序列为 1,2,2,2,2,2,4,4"""
        state = initialize()
        bases = [state.base]

        state = advance(state, "Red")
        bases.append(state.base)
        for _ in range(3, 7):
            state = advance(state, "Blue")
            bases.append(state.base)

        assert state.current_hole == 6
        state = request_double(state, Team.RED)
        assert state.base == 4
        assert state.doubles == 1

        state = advance(state, "Blue")
        bases.append(state.base)
        assert state.current_hole == 7

        assert bases == [1, 2, 2, 2, 2, 2, 4]

        state = advance(state, "Blue")
        bases.append(state.base)
        assert state.current_hole == 8
        assert bases == [1, 2, 2, 2, 2, 2, 4, 4]

    def test_push_carries_forward(self):
        """平洞累积结转，分出胜负后清零"""
        state = DoublingState(current_hole=5, base=2, doubles=0, carry=0,
                              leading_team=LeadingTeam.BLUE)

        after_push = advance(state, "Push")
        assert after_push.current_hole == 6
        assert after_push.carry == 2
        assert after_push.base == 2
        assert after_push.leading_team is LeadingTeam.BLUE

        after_second_push = advance(after_push, "Push")
        assert after_second_push.current_hole == 7
        assert after_second_push.carry == 4

        after_win = advance(after_second_push, "Red")
        assert after_win.current_hole == 8
        assert after_win.carry == 0
        assert after_win.leading_team is LeadingTeam.RED

    def test_additional_carry_on_push(self):
        """平洞时额外结转一并计入"""
        state = DoublingState(current_hole=9, base=4, doubles=1, carry=2,
                              leading_team=LeadingTeam.RED)
        assert advance(state, "Push", 3).carry == 9

    def test_additional_carry_ignored_on_win(self):
        """分出胜负时结转清零"""
        state = DoublingState(current_hole=9, base=4, doubles=1, carry=2,
                              leading_team=LeadingTeam.RED)
        assert advance(state, "Blue", 3).carry == 0

    def test_double_flag_resets(self):
        """进入下一洞后重置本洞加倍标记"""
        state = DoublingState(current_hole=4, base=2, doubles=0, carry=0,
                              leading_team=LeadingTeam.RED)
        doubled = request_double(state, Team.BLUE)
        nxt = advance(doubled, "Push")
        assert nxt.double_used_this_hole is False
        assert nxt.doubles == 1
        assert nxt.base == 4
        assert nxt.carry == 4

    def test_negative_additional_carry(self):
        """额外结转不能为负数"""
        with pytest.raises(ValueError):
            advance(initialize(), "Push", -1)

    def test_unknown_winner(self):
        """无效洞结果"""
        with pytest.raises(ValueError):
            advance(initialize(), "Draw")
