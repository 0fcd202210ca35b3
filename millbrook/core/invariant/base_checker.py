"""
不变量检查器基类
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from .types import (
    InvariantType, InvariantViolation, InvariantCheckResult,
    ViolationSeverity, HoleSettlementSnapshot
)

__all__ = ['BaseInvariantChecker']


class BaseInvariantChecker(ABC):
    """
    单洞结算不变量检查器

    子类在_find_violations中逐条产出违反记录，check负责收集成结果。
    """

    def __init__(self, invariant_type: InvariantType):
        self.invariant_type = invariant_type

    @abstractmethod
    def _find_violations(self, snapshot: HoleSettlementSnapshot) -> Iterable[InvariantViolation]:
        """产出快照中违反本不变量的记录"""

    def check(self, snapshot: HoleSettlementSnapshot) -> InvariantCheckResult:
        """
        检查单洞快照

        检查过程中抛出的计算异常记为一条CRITICAL违反，不向外传播。
        """
        try:
            violations = list(self._find_violations(snapshot))
        except (ValueError, TypeError, ArithmeticError) as e:
            violations = [self._violation(
                snapshot,
                f"第{snapshot.hole}洞检查{self.invariant_type.value}时发生异常: {e}",
                context={'exception_type': type(e).__name__}
            )]
        return InvariantCheckResult(self.invariant_type, snapshot.hole, violations)

    def _violation(self, snapshot: HoleSettlementSnapshot, description: str,
                   context: Optional[Dict[str, Any]] = None,
                   severity: ViolationSeverity = ViolationSeverity.CRITICAL) -> InvariantViolation:
        return InvariantViolation(
            invariant_type=self.invariant_type,
            hole=snapshot.hole,
            description=description,
            severity=severity,
            context=context or {}
        )
