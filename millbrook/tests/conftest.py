"""
Millbrook Test Configuration - pytest配置文件

该文件提供测试的基础设施，包括：
- 通用的测试fixture（标准四人名单、比赛服务）
- 测试标记注册

所有测试都会自动加载这些配置。
"""

import pytest

from millbrook.application import (
    ConfigService, MatchCommandService, MatchQueryService, HoleInput
)
from millbrook.core.junk import JunkFlags
from millbrook.core.rules import Team


PLAYER_IDS = ["alice", "bob", "carol", "dave"]
PLAYER_TEAMS = [Team.RED, Team.BLUE, Team.RED, Team.BLUE]


@pytest.fixture
def player_ids():
    """标准四人名单"""
    return list(PLAYER_IDS)


@pytest.fixture
def player_teams():
    """红蓝交替的队伍分配"""
    return list(PLAYER_TEAMS)


@pytest.fixture
def config_service():
    """独立的配置服务，避免测试间共享全局单例"""
    return ConfigService()


@pytest.fixture
def command_service(config_service):
    """比赛命令服务"""
    return MatchCommandService(config_service=config_service)


@pytest.fixture
def query_service(command_service):
    """比赛查询服务"""
    return MatchQueryService(command_service)


@pytest.fixture
def match_id(command_service, player_ids, player_teams):
    """已创建的标准比赛"""
    result = command_service.create_match(player_ids, player_teams, match_id="test_match")
    assert result.success, result.message
    return result.data['match_id']


@pytest.fixture
def make_hole_input():
    """构造单洞输入，净杆默认等于总杆"""
    def _make(hole, gross, net=None, par=4, flags=None):
        return HoleInput(
            hole=hole,
            par=par,
            gross_scores=list(gross),
            net_scores=list(net if net is not None else gross),
            junk_flags=list(flags) if flags is not None else [JunkFlags() for _ in gross]
        )
    return _make


# 测试标记定义
def pytest_configure(config):
    """pytest配置"""
    config.addinivalue_line(
        "markers", "anti_cheat: 标记需要反作弊检查的测试"
    )
    config.addinivalue_line(
        "markers", "property_test: 标记基于属性的测试"
    )
    config.addinivalue_line(
        "markers", "integration: 标记集成测试"
    )
