"""
Application Layer Types - 应用层类型定义

定义应用服务层使用的基础类型，包括命令结果、查询结果和逐洞输入。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Generic, TypeVar
from enum import Enum, auto

from ..core.junk.types import JunkFlags

T = TypeVar('T')


class ResultStatus(Enum):
    """操作结果状态"""
    SUCCESS = auto()
    FAILURE = auto()
    VALIDATION_ERROR = auto()
    BUSINESS_RULE_VIOLATION = auto()


class MatchStatus(Enum):
    """比赛状态"""
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass(frozen=True)
class CommandResult:
    """命令执行结果"""
    success: bool
    status: ResultStatus
    message: str = ""
    error_code: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, message: str = "操作成功", data: Optional[Dict[str, Any]] = None) -> 'CommandResult':
        """创建成功结果"""
        return cls(
            success=True,
            status=ResultStatus.SUCCESS,
            message=message,
            data=data
        )

    @classmethod
    def failure_result(cls, message: str, error_code: Optional[str] = None,
                       status: ResultStatus = ResultStatus.FAILURE) -> 'CommandResult':
        """创建失败结果"""
        return cls(
            success=False,
            status=status,
            message=message,
            error_code=error_code
        )

    @classmethod
    def validation_error(cls, message: str, error_code: Optional[str] = None) -> 'CommandResult':
        """创建验证错误结果"""
        return cls.failure_result(message, error_code, ResultStatus.VALIDATION_ERROR)

    @classmethod
    def business_rule_violation(cls, message: str, error_code: Optional[str] = None) -> 'CommandResult':
        """创建业务规则违反结果"""
        return cls.failure_result(message, error_code, ResultStatus.BUSINESS_RULE_VIOLATION)


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """查询结果"""
    success: bool
    status: ResultStatus
    data: Optional[T] = None
    message: str = ""
    error_code: Optional[str] = None

    @classmethod
    def success_result(cls, data: T, message: str = "查询成功") -> 'QueryResult[T]':
        """创建成功结果"""
        return cls(
            success=True,
            status=ResultStatus.SUCCESS,
            data=data,
            message=message
        )

    @classmethod
    def failure_result(cls, message: str, error_code: Optional[str] = None,
                       status: ResultStatus = ResultStatus.FAILURE) -> 'QueryResult[T]':
        """创建失败结果"""
        return cls(
            success=False,
            status=status,
            message=message,
            error_code=error_code
        )


@dataclass(frozen=True)
class HoleInput:
    """
    单洞输入

    净杆由上游（让杆分配）计算好后传入。

    Attributes:
        hole: 洞号
        par: 本洞标准杆
        gross_scores: 每个座位的总杆
        net_scores: 每个座位的净杆
        junk_flags: 每个座位的击球标记，缺省为全False
    """
    hole: int
    par: int
    gross_scores: List[int]
    net_scores: List[float]
    junk_flags: List[JunkFlags] = field(default_factory=list)

    def __post_init__(self):
        """验证输入的有效性"""
        if self.hole < 1:
            raise ValueError("hole必须从1开始")
        if self.par <= 0:
            raise ValueError("par必须大于0")
        if len(self.gross_scores) != len(self.net_scores):
            raise ValueError(
                f"总杆与净杆数量不一致: {len(self.gross_scores)} != {len(self.net_scores)}"
            )
        if self.junk_flags and len(self.junk_flags) != len(self.gross_scores):
            raise ValueError(
                f"击球标记与总杆数量不一致: {len(self.junk_flags)} != {len(self.gross_scores)}"
            )

    def flags_for(self, seat: int) -> JunkFlags:
        """获取某座位的击球标记"""
        if not self.junk_flags:
            return JunkFlags()
        return self.junk_flags[seat]


class ApplicationError(Exception):
    """应用层异常基类"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ValidationError(ApplicationError):
    """验证错误"""
    pass


class BusinessRuleViolationError(ApplicationError):
    """业务规则违反错误"""
    pass
