"""
结算不变量检查器

- 零和: 每洞主注和杂项的玩家金额总和为0
- 底分推导: 底分始终等于compute_base(洞号, 加倍次数)
- 结转一致: 单洞结算给出的结转与状态机推进后的结转一致
"""

import math

from millbrook.core.doubling.doubling_engine import compute_base
from .base_checker import BaseInvariantChecker
from .types import InvariantType, HoleSettlementSnapshot

__all__ = ['ZeroSumChecker', 'BaseDerivationChecker', 'CarryConsistencyChecker']


class ZeroSumChecker(BaseInvariantChecker):
    """玩家金额零和检查器"""

    def __init__(self, tolerance: float = 1e-9):
        super().__init__(InvariantType.ZERO_SUM)
        self.tolerance = tolerance

    def _find_violations(self, snapshot: HoleSettlementSnapshot):
        for label, deltas in (('主注', snapshot.player_deltas), ('杂项', snapshot.junk_deltas)):
            total = math.fsum(deltas)
            if not math.isclose(total, 0.0, abs_tol=self.tolerance):
                yield self._violation(
                    snapshot,
                    f"第{snapshot.hole}洞{label}金额不是零和: 总和{total}",
                    context={'deltas': list(deltas), 'total': total}
                )


class BaseDerivationChecker(BaseInvariantChecker):
    """底分推导检查器"""

    def __init__(self):
        super().__init__(InvariantType.BASE_DERIVATION)

    def _find_violations(self, snapshot: HoleSettlementSnapshot):
        for state in (snapshot.state_before, snapshot.state_after):
            expected = compute_base(state.current_hole, state.doubles)
            if state.base != expected:
                yield self._violation(
                    snapshot,
                    f"第{state.current_hole}洞底分{state.base}与加倍次数{state.doubles}不符, 期望{expected}",
                    context={'state': state.to_dict(), 'expected_base': expected}
                )


class CarryConsistencyChecker(BaseInvariantChecker):
    """结转一致性检查器"""

    def __init__(self, tolerance: float = 1e-9):
        super().__init__(InvariantType.CARRY_CONSISTENCY)
        self.tolerance = tolerance

    def _find_violations(self, snapshot: HoleSettlementSnapshot):
        expected_carry = snapshot.payout_result.new_carry
        if not snapshot.winner.is_decisive:
            expected_carry += snapshot.additional_carry

        actual_carry = snapshot.state_after.carry
        if not math.isclose(actual_carry, expected_carry, abs_tol=self.tolerance):
            yield self._violation(
                snapshot,
                f"第{snapshot.hole}洞结转不一致: 结算{expected_carry}, 状态机{actual_carry}",
                context={'expected': expected_carry, 'actual': actual_carry}
            )
