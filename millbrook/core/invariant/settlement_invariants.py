"""
结算不变量检查器

整合所有结算不变量检查器，提供统一的检查接口。
"""

import logging
from typing import Dict, List

from .types import InvariantType, InvariantCheckResult, InvariantError, InvariantViolation, HoleSettlementSnapshot
from .settlement_checkers import ZeroSumChecker, BaseDerivationChecker, CarryConsistencyChecker

__all__ = ['SettlementInvariants']

logger = logging.getLogger(__name__)


class SettlementInvariants:
    """结算不变量检查器

    整合零和、底分推导和结转一致性检查，支持批量检查和违反即抛出。
    """

    def __init__(self, tolerance: float = 1e-9):
        """初始化结算不变量检查器

        Args:
            tolerance: 浮点金额比较的容差
        """
        self._checkers = {
            InvariantType.ZERO_SUM: ZeroSumChecker(tolerance),
            InvariantType.BASE_DERIVATION: BaseDerivationChecker(),
            InvariantType.CARRY_CONSISTENCY: CarryConsistencyChecker(tolerance)
        }

    def check_hole(self, snapshot: HoleSettlementSnapshot) -> Dict[InvariantType, InvariantCheckResult]:
        """检查单洞结算的所有不变量"""
        return {
            invariant_type: checker.check(snapshot)
            for invariant_type, checker in self._checkers.items()
        }

    def get_violations(self, snapshot: HoleSettlementSnapshot) -> List[InvariantViolation]:
        """获取所有违反记录"""
        violations: List[InvariantViolation] = []
        for result in self.check_hole(snapshot).values():
            violations.extend(result.violations)
        return violations

    def is_valid(self, snapshot: HoleSettlementSnapshot) -> bool:
        """单洞结算是否满足所有不变量"""
        return not self.get_violations(snapshot)

    def validate_or_raise(self, snapshot: HoleSettlementSnapshot) -> None:
        """
        验证单洞结算

        Raises:
            InvariantError: 存在严重违反时
        """
        violations = self.get_violations(snapshot)
        critical = [v for v in violations if v.is_critical]
        if critical:
            for violation in critical:
                logger.error(f"[不变量] {violation.description}")
            raise InvariantError(f"第{snapshot.hole}洞发现{len(critical)}个严重不变量违反", violations)
