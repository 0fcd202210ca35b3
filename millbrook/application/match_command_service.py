"""
Match Command Service - 比赛命令服务

处理所有比赛状态变更操作，遵循CQRS模式。
命令服务负责：
- 创建比赛并校验名单
- 转发加倍请求
- 逐洞结算（胜负、主注、杂项、大赛、加倍状态推进）
- 验证结算不变量

会话只保存在内存中，持久化由调用方负责。
"""

import logging
import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Union

from .types import (
    CommandResult, HoleInput, MatchStatus,
    ApplicationError, ValidationError, BusinessRuleViolationError
)
from .config_service import ConfigService, GameRulesConfig, InvariantConfig, get_config_service
from ..core.rules import (
    Team, HoleWinner, LeadingTeam, TeamNets, coerce_team,
    compute_team_nets, determine_hole_winner, find_leading_team
)
from ..core.doubling import DoublingState, initialize, request_double, advance
from ..core.payout import (
    PayoutResult, PlayerPayout, PayoutDistributor,
    compute_hole_payout, allocate_player_payouts, update_running_totals
)
from ..core.junk import JunkEvent, evaluate_junk_events, compute_team_junk, allocate_junk_payouts
from ..core.big_game import BigGameRow, compute_big_game_row, compute_big_game_total
from ..core.invariant import SettlementInvariants, InvariantError, HoleSettlementSnapshot

__all__ = ['LedgerRow', 'HoleSettlement', 'MatchSession', 'MatchCommandService']


@dataclass(frozen=True)
class LedgerRow:
    """账本行：单洞结算后的累计状态"""
    hole: int
    winner: HoleWinner
    base: int
    doubles: int
    payout: float
    carry_after: float
    running_totals: List[float]


@dataclass(frozen=True)
class HoleSettlement:
    """单洞结算结果"""
    hole: int
    winner: HoleWinner
    team_nets: TeamNets
    payout_result: PayoutResult
    player_payouts: List[PlayerPayout]
    junk_events: List[JunkEvent]
    junk_payouts: List[PlayerPayout]
    ledger_row: LedgerRow
    big_game_row: Optional[BigGameRow]
    next_state: DoublingState


@dataclass
class MatchSession:
    """比赛会话"""
    match_id: str
    player_ids: List[str]
    player_teams: List[Team]
    game_rules: GameRulesConfig
    big_game: bool
    doubling_state: DoublingState
    running_totals: List[float]
    ledger: List[LedgerRow] = field(default_factory=list)
    junk_events: List[JunkEvent] = field(default_factory=list)
    big_game_rows: List[BigGameRow] = field(default_factory=list)
    status: MatchStatus = MatchStatus.ACTIVE
    created_at: float = field(default_factory=time.time)
    last_updated: float = field(default_factory=time.time)

    @property
    def player_team_map(self) -> Dict[str, Team]:
        """玩家ID到队伍的映射"""
        return dict(zip(self.player_ids, self.player_teams))

    @property
    def holes_played(self) -> int:
        """已结算洞数"""
        return len(self.ledger)

    @property
    def big_game_total(self) -> float:
        """大赛合计"""
        return compute_big_game_total(self.big_game_rows)

    def doubling_rights_state(self) -> DoublingState:
        """
        用于判断加倍权的状态

        加倍权属于累计总额落后的队伍，与上一洞的胜方无关；第一洞之前双方持平。
        """
        leading = find_leading_team(self.running_totals, self.player_teams) if self.ledger else LeadingTeam.TIED
        return replace(self.doubling_state, leading_team=leading)

    def update_timestamp(self) -> None:
        """更新最后修改时间"""
        self.last_updated = time.time()


class MatchCommandService:
    """比赛命令服务"""

    def __init__(self, config_service: Optional[ConfigService] = None,
                 invariant_profile: str = "default"):
        """
        初始化命令服务

        Args:
            config_service: 配置服务，如果为None则使用全局单例
            invariant_profile: 不变量检查配置文件名
        """
        self.logger = logging.getLogger(__name__)
        self._config_service = config_service or get_config_service()
        self._sessions: Dict[str, MatchSession] = {}

        invariant_config: InvariantConfig = self._config_service.get_invariant_config(invariant_profile).data
        self._enable_invariant_checks = invariant_config.enable_invariant_checks
        self._invariants = SettlementInvariants(invariant_config.tolerance)

    # ------------------------------------------------------------------
    # 会话访问
    # ------------------------------------------------------------------

    def get_session(self, match_id: str) -> Optional[MatchSession]:
        """获取比赛会话"""
        return self._sessions.get(match_id)

    def get_active_matches(self) -> List[str]:
        """获取进行中的比赛ID列表"""
        return [mid for mid, s in self._sessions.items() if s.status is MatchStatus.ACTIVE]

    def _require_session(self, match_id: str) -> MatchSession:
        session = self._sessions.get(match_id)
        if session is None:
            raise ValidationError(f"比赛 {match_id} 不存在", error_code="MATCH_NOT_FOUND")
        return session

    def _require_active(self, match_id: str) -> MatchSession:
        session = self._require_session(match_id)
        if session.status is MatchStatus.FINISHED:
            raise BusinessRuleViolationError(f"比赛 {match_id} 已结束", error_code="MATCH_FINISHED")
        return session

    # ------------------------------------------------------------------
    # 命令
    # ------------------------------------------------------------------

    def create_match(self, player_ids: Sequence[str], player_teams: Sequence[Union[Team, str]],
                     match_id: Optional[str] = None, big_game: Optional[bool] = None,
                     rules_profile: str = "default") -> CommandResult:
        """
        创建新比赛

        Args:
            player_ids: 座位顺序的玩家ID
            player_teams: 与座位对齐的队伍分配
            match_id: 比赛ID，如果为None则自动生成
            big_game: 是否开启大赛，None表示使用配置
            rules_profile: 赛制配置文件名

        Returns:
            命令执行结果，data包含match_id和初始加倍状态
        """
        try:
            if match_id is None:
                match_id = f"match_{uuid.uuid4().hex[:8]}"
            if match_id in self._sessions:
                raise ValidationError(f"比赛 {match_id} 已存在", error_code="MATCH_ALREADY_EXISTS")

            game_rules: GameRulesConfig = self._config_service.get_game_rules_config(rules_profile).data
            teams = self._validate_roster(player_ids, player_teams, game_rules)

            session = MatchSession(
                match_id=match_id,
                player_ids=list(player_ids),
                player_teams=teams,
                game_rules=game_rules,
                big_game=game_rules.big_game_enabled if big_game is None else big_game,
                doubling_state=initialize(),
                running_totals=[0 for _ in player_ids]
            )
            self._sessions[match_id] = session

            self.logger.info(
                f"[比赛] 创建比赛 {match_id}: "
                + ", ".join(f"{pid}({team.value})" for pid, team in zip(player_ids, teams))
                + f", 大赛={'开' if session.big_game else '关'}"
            )
            return CommandResult.success_result(
                f"比赛 {match_id} 创建成功",
                data={
                    'match_id': match_id,
                    'player_count': len(player_ids),
                    'state': session.doubling_state
                }
            )
        except ApplicationError as e:
            return CommandResult.validation_error(e.message, e.error_code)

    def request_double(self, match_id: str, calling_team: Union[Team, str]) -> CommandResult:
        """
        请求加倍

        被拒绝的加倍不是失败：返回成功结果，data['accepted']为False。
        """
        try:
            session = self._require_active(match_id)
            team = coerce_team(calling_team)
        except ApplicationError as e:
            return self._application_error_result(e)
        except ValueError as e:
            return CommandResult.validation_error(str(e), "INVALID_TEAM")

        before = session.doubling_state
        rights_state = session.doubling_rights_state()
        after = request_double(rights_state, team)
        accepted = after is not rights_state

        if accepted:
            session.doubling_state = replace(after, leading_team=before.leading_team)
            session.update_timestamp()
            self.logger.info(f"[加倍] {match_id} 第{after.current_hole}洞 {team.value} 加倍, 底分 {before.base} -> {after.base}")
            message = f"{team.value} 加倍成功"
        else:
            self.logger.info(f"[加倍] {match_id} 第{before.current_hole}洞 {team.value} 加倍未生效")
            message = f"{team.value} 当前不能加倍"

        return CommandResult.success_result(message, data={'accepted': accepted, 'state': session.doubling_state})

    def enter_hole_scores(self, match_id: str, hole_input: HoleInput) -> CommandResult:
        """
        录入并结算单洞成绩

        全部计算完成并通过不变量检查后才写回会话，失败时会话保持不变。

        Returns:
            命令执行结果，data['settlement']为HoleSettlement
        """
        try:
            session = self._require_active(match_id)
            settlement = self._settle_hole(session, hole_input)
        except ApplicationError as e:
            return self._application_error_result(e)
        except InvariantError as e:
            self.logger.error(f"[结算] {match_id} 第{hole_input.hole}洞不变量检查失败: {e}")
            return CommandResult.failure_result(str(e), error_code="INVARIANT_VIOLATION")
        except (ValueError, TypeError) as e:
            return CommandResult.validation_error(str(e), "INVALID_HOLE_INPUT")

        self._commit(session, settlement)
        return CommandResult.success_result(
            f"第{settlement.hole}洞结算完成: {settlement.winner.value}",
            data={'settlement': settlement}
        )

    def end_match(self, match_id: str) -> CommandResult:
        """提前结束比赛"""
        try:
            session = self._require_active(match_id)
        except ApplicationError as e:
            return self._application_error_result(e)

        session.status = MatchStatus.FINISHED
        session.update_timestamp()
        self.logger.info(f"[比赛] {match_id} 在{session.holes_played}洞后结束")
        return CommandResult.success_result(
            f"比赛 {match_id} 已结束",
            data={'holes_played': session.holes_played, 'running_totals': list(session.running_totals)}
        )

    # ------------------------------------------------------------------
    # 内部实现
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_roster(player_ids: Sequence[str], player_teams: Sequence[Union[Team, str]],
                         game_rules: GameRulesConfig) -> List[Team]:
        if not game_rules.min_players <= len(player_ids) <= game_rules.max_players:
            raise ValidationError(
                f"玩家数量必须在{game_rules.min_players}-{game_rules.max_players}之间，当前: {len(player_ids)}",
                error_code="INVALID_PLAYER_COUNT"
            )
        if any(not pid for pid in player_ids):
            raise ValidationError("player_id不能为空", error_code="INVALID_PLAYER_ID")
        if len(set(player_ids)) != len(player_ids):
            raise ValidationError("玩家ID不能重复", error_code="DUPLICATE_PLAYER_ID")
        if len(player_teams) != len(player_ids):
            raise ValidationError(
                f"队伍分配数量与玩家数量不一致: {len(player_teams)} != {len(player_ids)}",
                error_code="INVALID_TEAM_ASSIGNMENT"
            )

        try:
            teams = [coerce_team(t) for t in player_teams]
        except ValueError as e:
            raise ValidationError(str(e), error_code="INVALID_TEAM_ASSIGNMENT") from e

        if Team.RED not in teams or Team.BLUE not in teams:
            raise ValidationError("红蓝两队都必须至少有一名玩家", error_code="INVALID_TEAM_ASSIGNMENT")
        return teams

    def _settle_hole(self, session: MatchSession, hole_input: HoleInput) -> HoleSettlement:
        rules = session.game_rules.rules
        state = session.doubling_state
        hole = hole_input.hole

        if hole != state.current_hole:
            raise ValidationError(
                f"应录入第{state.current_hole}洞，收到第{hole}洞",
                error_code="HOLE_OUT_OF_ORDER"
            )
        if hole > rules.holes_per_round:
            raise BusinessRuleViolationError(
                f"每轮只有{rules.holes_per_round}洞", error_code="HOLE_OUT_OF_RANGE"
            )
        if len(hole_input.gross_scores) != len(session.player_ids):
            raise ValidationError(
                f"成绩数量与玩家数量不一致: {len(hole_input.gross_scores)} != {len(session.player_ids)}",
                error_code="SCORE_COUNT_MISMATCH"
            )

        # 1. 胜负与主注
        team_nets = compute_team_nets(hole_input.net_scores, session.player_teams)
        winner = determine_hole_winner(team_nets)
        payout_result = compute_hole_payout(winner, state.base, state.carry)
        main_deltas = allocate_player_payouts(winner, payout_result.payout, session.player_teams)

        # 2. 杂项（使用本洞加倍后的底分）
        junk_events: List[JunkEvent] = []
        for seat, player_id in enumerate(session.player_ids):
            junk_events.extend(evaluate_junk_events(
                hole, player_id, hole_input.gross_scores[seat], hole_input.par,
                hole_input.flags_for(seat), state.base, rules
            ))
        team_junk = compute_team_junk(junk_events, session.player_team_map)
        junk_deltas = allocate_junk_payouts(team_junk, session.player_teams)

        # 3. 累计总额与账本
        totals = update_running_totals(session.running_totals, main_deltas)
        totals = update_running_totals(totals, junk_deltas)
        ledger_row = LedgerRow(
            hole=hole,
            winner=winner,
            base=state.base,
            doubles=state.doubles,
            payout=payout_result.payout,
            carry_after=payout_result.new_carry,
            running_totals=totals
        )

        # 4. 大赛
        big_game_row = compute_big_game_row(hole, hole_input.net_scores) if session.big_game else None

        # 5. 推进加倍状态
        next_state = advance(state, winner)

        if self._enable_invariant_checks:
            self._invariants.validate_or_raise(HoleSettlementSnapshot(
                hole=hole,
                winner=winner,
                state_before=state,
                state_after=next_state,
                payout_result=payout_result,
                player_deltas=main_deltas,
                junk_deltas=junk_deltas
            ))

        return HoleSettlement(
            hole=hole,
            winner=winner,
            team_nets=team_nets,
            payout_result=payout_result,
            player_payouts=PayoutDistributor.build_player_payouts(session.player_ids, main_deltas),
            junk_events=junk_events,
            junk_payouts=PayoutDistributor.build_player_payouts(session.player_ids, junk_deltas),
            ledger_row=ledger_row,
            big_game_row=big_game_row,
            next_state=next_state
        )

    def _commit(self, session: MatchSession, settlement: HoleSettlement) -> None:
        session.doubling_state = settlement.next_state
        session.running_totals = list(settlement.ledger_row.running_totals)
        session.ledger.append(settlement.ledger_row)
        session.junk_events.extend(settlement.junk_events)
        if settlement.big_game_row is not None:
            session.big_game_rows.append(settlement.big_game_row)
        session.update_timestamp()

        self.logger.info(
            f"[结算] {session.match_id} 第{settlement.hole}洞 {settlement.winner.value}: "
            f"payout={settlement.payout_result.payout}, 结转={settlement.payout_result.new_carry}, "
            f"杂项{len(settlement.junk_events)}个, 累计={session.running_totals}"
        )

        if settlement.hole >= session.game_rules.rules.holes_per_round:
            session.status = MatchStatus.FINISHED
            self.logger.info(f"[比赛] {session.match_id} 全部{settlement.hole}洞结算完成")

    @staticmethod
    def _application_error_result(error: ApplicationError) -> CommandResult:
        if isinstance(error, BusinessRuleViolationError):
            return CommandResult.business_rule_violation(error.message, error.error_code)
        return CommandResult.validation_error(error.message, error.error_code)
