#!/usr/bin/env python3
"""
ConfigService - 配置管理服务

负责集中化管理所有比赛配置，包括：
- 赛制规则配置
- 日志配置
- 不变量检查配置

为Application层提供统一的配置管理接口。
"""

import logging
import logging.handlers
from dataclasses import dataclass, field, asdict, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional, List

from .types import QueryResult
from ..core.rules.types import MillbrookRules


class ConfigType(Enum):
    """配置类型枚举"""
    GAME_RULES = "game_rules"
    LOGGING = "logging"
    INVARIANT = "invariant"


@dataclass
class GameRulesConfig:
    """赛制规则配置"""
    rules: MillbrookRules = field(default_factory=MillbrookRules)
    min_players: int = 2
    max_players: int = 6
    big_game_enabled: bool = False

    def __post_init__(self):
        """验证玩家人数范围"""
        if self.min_players < 2:
            raise ValueError(f"min_players至少为2，当前为: {self.min_players}")
        if self.max_players < self.min_players:
            raise ValueError(f"max_players不能小于min_players: {self.max_players} < {self.min_players}")


@dataclass
class LoggingConfig:
    """日志配置"""
    log_level: str = 'INFO'
    enable_file_logging: bool = False
    log_file_path: str = "logs/millbrook.log"
    enable_console_logging: bool = True
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    max_log_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class InvariantConfig:
    """不变量检查配置"""
    enable_invariant_checks: bool = True
    tolerance: float = 1e-9


class ConfigService:
    """配置管理服务"""

    def __init__(self):
        """初始化配置服务"""
        self.logger = logging.getLogger(__name__)
        self._configs: Dict[ConfigType, Dict[str, Any]] = {}
        self._load_default_configs()

    def _load_default_configs(self):
        """加载默认配置"""
        self._configs[ConfigType.GAME_RULES] = {
            'default': GameRulesConfig(),
            'big_game': GameRulesConfig(big_game_enabled=True)
        }

        self._configs[ConfigType.LOGGING] = {
            'default': LoggingConfig(),
            'debug': LoggingConfig(
                log_level='DEBUG',
                enable_file_logging=True
            ),
            'quiet': LoggingConfig(
                log_level='WARNING',
                enable_console_logging=False
            )
        }

        self._configs[ConfigType.INVARIANT] = {
            'default': InvariantConfig(),
            'strict': InvariantConfig(tolerance=1e-12),
            'disabled': InvariantConfig(enable_invariant_checks=False)
        }

        self.logger.debug("默认配置加载完成")

    def _get_profile(self, config_type: ConfigType, profile: str, fallback: Any) -> Any:
        config_profiles = self._configs.get(config_type, {})
        if profile not in config_profiles:
            self.logger.warning(f"未找到{config_type.value}配置 '{profile}'，使用默认配置")
            profile = "default"
        return config_profiles.get(profile, fallback)

    def get_game_rules_config(self, profile: str = "default") -> QueryResult[GameRulesConfig]:
        """
        获取赛制规则配置

        Args:
            profile: 配置文件名 (default, big_game)

        Returns:
            查询结果，包含赛制规则配置
        """
        return QueryResult.success_result(
            self._get_profile(ConfigType.GAME_RULES, profile, GameRulesConfig())
        )

    def get_logging_config(self, profile: str = "default") -> QueryResult[LoggingConfig]:
        """获取日志配置"""
        return QueryResult.success_result(
            self._get_profile(ConfigType.LOGGING, profile, LoggingConfig())
        )

    def get_invariant_config(self, profile: str = "default") -> QueryResult[InvariantConfig]:
        """获取不变量检查配置"""
        return QueryResult.success_result(
            self._get_profile(ConfigType.INVARIANT, profile, InvariantConfig())
        )

    def get_merged_config(self, config_type: ConfigType, profile: str = "default") -> QueryResult[Dict[str, Any]]:
        """
        获取配置字典

        Args:
            config_type: 配置类型
            profile: 配置文件名

        Returns:
            查询结果，包含配置字典
        """
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"不支持的配置类型: {config_type}",
                error_code="UNSUPPORTED_CONFIG_TYPE"
            )
        config = self._get_profile(config_type, profile, None)
        return QueryResult.success_result(asdict(config))

    def update_config(self, config_type: ConfigType, profile: str, updates: Dict[str, Any]) -> QueryResult[bool]:
        """
        更新配置

        Args:
            config_type: 配置类型
            profile: 配置文件名
            updates: 更新的配置项

        Returns:
            查询结果，包含更新是否成功
        """
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"配置类型 {config_type} 不存在",
                error_code="CONFIG_TYPE_NOT_FOUND"
            )

        config_profiles = self._configs[config_type]
        if profile not in config_profiles:
            return QueryResult.failure_result(
                f"配置文件 {profile} 不存在",
                error_code="CONFIG_PROFILE_NOT_FOUND"
            )

        current_config = config_profiles[profile]
        known_updates = {}
        for key, value in updates.items():
            if hasattr(current_config, key):
                known_updates[key] = value
            else:
                self.logger.warning(f"配置项 {key} 不存在于 {config_type.value}.{profile} 中")

        try:
            config_profiles[profile] = replace(current_config, **known_updates)
        except (TypeError, ValueError) as e:
            return QueryResult.failure_result(
                f"更新配置失败: {e}",
                error_code="UPDATE_CONFIG_FAILED"
            )

        self.logger.info(f"配置 {config_type.value}.{profile} 更新成功")
        return QueryResult.success_result(True)

    def list_available_profiles(self, config_type: ConfigType) -> QueryResult[List[str]]:
        """列出可用的配置文件"""
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"配置类型 {config_type} 不存在",
                error_code="CONFIG_TYPE_NOT_FOUND"
            )
        return QueryResult.success_result(list(self._configs[config_type].keys()))


def configure_logging(config: LoggingConfig, logger_name: str = "millbrook") -> logging.Logger:
    """
    按LoggingConfig配置millbrook包的日志

    只配置包自己的logger，不调用basicConfig。重复调用会替换之前安装的处理器。
    """
    package_logger = logging.getLogger(logger_name)
    package_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    for handler in list(package_logger.handlers):
        if getattr(handler, '_millbrook_handler', False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(config.log_format)
    handlers: List[logging.Handler] = []

    if config.enable_console_logging:
        handlers.append(logging.StreamHandler())

    if config.enable_file_logging:
        log_path = Path(config.log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=config.max_log_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding='utf-8'
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._millbrook_handler = True
        package_logger.addHandler(handler)

    return package_logger


# 全局单例
_config_service_instance: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """
    获取配置服务的全局单例

    Returns:
        ConfigService: 配置服务实例
    """
    global _config_service_instance
    if _config_service_instance is None:
        _config_service_instance = ConfigService()
    return _config_service_instance
