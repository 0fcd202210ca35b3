"""
Core Module - 纯领域逻辑层

该模块包含Millbrook赛制的逐洞结算逻辑，遵循DDD原则。
核心模块只能依赖其他核心模块，不能依赖应用层。

Modules:
    rules: 队伍、洞结果与赛制常量
    doubling: 底分与加倍状态机
    payout: 单洞结算与玩家分配
    junk: 杂项事件检测与队伍结算
    big_game: 两最佳净杆大赛
    invariant: 结算不变量检查
"""

__version__ = "1.0.0"
__author__ = "Millbrook Game Team"

__all__ = [
    'rules',
    'doubling',
    'payout',
    'junk',
    'big_game',
    'invariant'
]
