"""
Match Query Service - 比赛查询服务

处理所有比赛只读操作，遵循CQRS模式。
查询服务负责：
- 获取比赛快照
- 查询账本、杂项和大赛记录
- 判断加倍权和落后队伍
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Union

from .types import QueryResult, MatchStatus
from .match_command_service import MatchCommandService, MatchSession, LedgerRow
from ..core.rules import Team, coerce_team, find_trailing_team
from ..core.doubling import can_request_double
from ..core.junk import JunkEvent
from ..core.big_game import BigGameRow

__all__ = ['MatchSnapshot', 'MatchQueryService']


@dataclass(frozen=True)
class MatchSnapshot:
    """比赛状态快照"""
    match_id: str
    status: str
    current_hole: int
    holes_played: int
    base: int
    carry: float
    doubles: int
    leading_team: str
    double_used_this_hole: bool
    player_ids: List[str]
    player_teams: List[str]
    running_totals: List[float]
    big_game: bool
    big_game_total: float

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return asdict(self)


class MatchQueryService:
    """比赛查询服务"""

    def __init__(self, command_service: MatchCommandService):
        """
        初始化查询服务

        Args:
            command_service: 命令服务实例，用于访问比赛会话
        """
        self._command_service = command_service

    def _find(self, match_id: str) -> Optional[MatchSession]:
        return self._command_service.get_session(match_id)

    @staticmethod
    def _not_found(match_id: str) -> QueryResult:
        return QueryResult.failure_result(f"比赛 {match_id} 不存在", error_code="MATCH_NOT_FOUND")

    def get_match_snapshot(self, match_id: str) -> QueryResult[MatchSnapshot]:
        """获取比赛快照"""
        session = self._find(match_id)
        if session is None:
            return self._not_found(match_id)

        state = session.doubling_state
        snapshot = MatchSnapshot(
            match_id=session.match_id,
            status=session.status.value,
            current_hole=state.current_hole,
            holes_played=session.holes_played,
            base=state.base,
            carry=state.carry,
            doubles=state.doubles,
            leading_team=state.leading_team.value,
            double_used_this_hole=state.double_used_this_hole,
            player_ids=list(session.player_ids),
            player_teams=[team.value for team in session.player_teams],
            running_totals=list(session.running_totals),
            big_game=session.big_game,
            big_game_total=session.big_game_total
        )
        return QueryResult.success_result(snapshot)

    def get_ledger(self, match_id: str) -> QueryResult[List[LedgerRow]]:
        """获取账本"""
        session = self._find(match_id)
        if session is None:
            return self._not_found(match_id)
        return QueryResult.success_result(list(session.ledger))

    def get_junk_events(self, match_id: str, hole: Optional[int] = None) -> QueryResult[List[JunkEvent]]:
        """获取杂项事件，可按洞过滤"""
        session = self._find(match_id)
        if session is None:
            return self._not_found(match_id)
        events = [e for e in session.junk_events if hole is None or e.hole == hole]
        return QueryResult.success_result(events)

    def get_big_game_rows(self, match_id: str) -> QueryResult[List[BigGameRow]]:
        """获取大赛记录"""
        session = self._find(match_id)
        if session is None:
            return self._not_found(match_id)
        return QueryResult.success_result(list(session.big_game_rows))

    def is_double_available(self, match_id: str, team: Union[Team, str]) -> QueryResult[bool]:
        """队伍当前能否加倍（只有累计落后的队伍可以）"""
        session = self._find(match_id)
        if session is None:
            return self._not_found(match_id)
        if session.status is MatchStatus.FINISHED:
            return QueryResult.success_result(False)
        try:
            available = can_request_double(session.doubling_rights_state(), coerce_team(team))
        except ValueError as e:
            return QueryResult.failure_result(str(e), error_code="INVALID_TEAM")
        return QueryResult.success_result(available)

    def get_trailing_team(self, match_id: str) -> QueryResult[Optional[Team]]:
        """根据累计总额判断落后队伍，持平时为None"""
        session = self._find(match_id)
        if session is None:
            return self._not_found(match_id)
        if not session.ledger:
            return QueryResult.success_result(None)
        return QueryResult.success_result(find_trailing_team(session.running_totals, session.player_teams))
