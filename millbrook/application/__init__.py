"""
Application Layer - 应用服务层

该层实现CQRS模式，包含比赛命令服务和查询服务。
应用层可以访问核心层，但不能被核心层访问。

Services:
    MatchCommandService: 比赛命令服务（状态变更操作）
    MatchQueryService: 比赛查询服务（只读操作）
    ConfigService: 配置管理服务
"""

from .types import (
    ResultStatus,
    MatchStatus,
    CommandResult,
    QueryResult,
    HoleInput,
    ApplicationError,
    ValidationError,
    BusinessRuleViolationError,
)
from .config_service import (
    ConfigType,
    ConfigService,
    GameRulesConfig,
    LoggingConfig,
    InvariantConfig,
    configure_logging,
    get_config_service,
)
from .match_command_service import MatchCommandService, MatchSession, HoleSettlement, LedgerRow
from .match_query_service import MatchQueryService, MatchSnapshot

__version__ = "1.0.0"

__all__ = [
    # 类型
    "ResultStatus",
    "MatchStatus",
    "CommandResult",
    "QueryResult",
    "HoleInput",
    "ApplicationError",
    "ValidationError",
    "BusinessRuleViolationError",

    # 配置
    "ConfigType",
    "ConfigService",
    "GameRulesConfig",
    "LoggingConfig",
    "InvariantConfig",
    "configure_logging",
    "get_config_service",

    # 服务
    "MatchCommandService",
    "MatchQueryService",

    # 数据类
    "MatchSession",
    "HoleSettlement",
    "LedgerRow",
    "MatchSnapshot",
]
