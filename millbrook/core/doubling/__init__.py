"""
加倍模块

提供底分计算、加倍请求和逐洞推进功能。
"""

from .types import DoublingState
from .doubling_engine import (
    initialize,
    compute_base,
    can_request_double,
    request_double,
    advance
)

__all__ = [
    'DoublingState',
    'initialize',
    'compute_base',
    'can_request_double',
    'request_double',
    'advance'
]
