"""
结算不变量类型

单洞结算快照，以及检查它时产生的违反记录和检查结果。
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from millbrook.core.rules.types import HoleWinner
from millbrook.core.doubling.types import DoublingState
from millbrook.core.payout.types import PayoutResult

__all__ = [
    'InvariantType',
    'ViolationSeverity',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError',
    'HoleSettlementSnapshot'
]


class InvariantType(Enum):
    """结算不变量"""
    ZERO_SUM = "zero_sum"                    # 玩家金额零和
    BASE_DERIVATION = "base_derivation"      # 底分可由(洞号, 加倍次数)推导
    CARRY_CONSISTENCY = "carry_consistency"  # 结算结转与状态机结转一致


class ViolationSeverity(Enum):
    """违反严重程度"""
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"


@dataclass(frozen=True)
class InvariantViolation:
    """某一洞的一条不变量违反"""
    invariant_type: InvariantType
    hole: int
    description: str
    severity: ViolationSeverity = ViolationSeverity.CRITICAL
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_critical(self) -> bool:
        return self.severity is ViolationSeverity.CRITICAL


@dataclass(frozen=True)
class InvariantCheckResult:
    """单个不变量对单洞的检查结果，没有违反即通过"""
    invariant_type: InvariantType
    hole: int
    violations: List[InvariantViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations


class InvariantError(Exception):
    """结算违反不变量，本洞结算不能写回"""

    def __init__(self, message: str, violations: List[InvariantViolation]):
        super().__init__(message)
        self.violations = violations

    def get_critical_violations(self) -> List[InvariantViolation]:
        """严重违反"""
        return [v for v in self.violations if v.is_critical]


@dataclass(frozen=True)
class HoleSettlementSnapshot:
    """
    单洞结算快照，供不变量检查使用

    Attributes:
        hole: 洞号
        winner: 本洞结果
        state_before: 本洞结算时的加倍状态（已包含本洞加倍）
        state_after: advance之后的下一洞状态
        payout_result: 队伍结算结果
        player_deltas: 主注玩家金额
        junk_deltas: 杂项玩家金额
        additional_carry: 传给advance的额外结转
    """
    hole: int
    winner: HoleWinner
    state_before: DoublingState
    state_after: DoublingState
    payout_result: PayoutResult
    player_deltas: Sequence[float]
    junk_deltas: Sequence[float] = field(default_factory=list)
    additional_carry: float = 0
