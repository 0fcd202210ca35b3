"""
Invariant Module - 结算不变量

该模块实现单洞结算的不变量检查，包括：
- 玩家金额零和验证
- 底分推导验证
- 结转一致性验证

Classes:
    SettlementInvariants: 结算不变量检查器
    ZeroSumChecker: 零和检查器
    BaseDerivationChecker: 底分推导检查器
    CarryConsistencyChecker: 结转一致性检查器
    BaseInvariantChecker: 不变量检查器基类
"""

from .types import (
    InvariantType,
    ViolationSeverity,
    InvariantViolation,
    InvariantCheckResult,
    InvariantError,
    HoleSettlementSnapshot
)
from .base_checker import BaseInvariantChecker
from .settlement_checkers import ZeroSumChecker, BaseDerivationChecker, CarryConsistencyChecker
from .settlement_invariants import SettlementInvariants

__all__ = [
    # 主要接口
    'SettlementInvariants',

    # 具体检查器
    'ZeroSumChecker',
    'BaseDerivationChecker',
    'CarryConsistencyChecker',
    'BaseInvariantChecker',

    # 类型定义
    'InvariantType',
    'ViolationSeverity',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError',
    'HoleSettlementSnapshot'
]
