"""
完整18洞比赛集成测试

通过应用层服务打完一整轮，验证账本、加倍、杂项、大赛和比赛结束状态。
"""

import logging

import pytest

from millbrook.application import (
    ConfigService, MatchCommandService, MatchQueryService, HoleInput, ResultStatus
)
from millbrook.core.junk import JunkFlags, JunkType
from millbrook.core.rules import Team, HoleWinner
from millbrook.tests.anti_cheat.core_usage_checker import CoreUsageChecker


PLAYERS = ["alice", "bob", "carol", "dave"]
TEAMS = [Team.RED, Team.BLUE, Team.RED, Team.BLUE]
PARS = [4, 4, 3, 5, 4, 4, 3, 4, 5, 4, 4, 3, 5, 4, 4, 3, 4, 5]

NO_FLAGS = JunkFlags()
LONG_DRIVE = JunkFlags(is_long_drive=True)
GREENIE = JunkFlags(is_on_green_from_tee=True, is_closest_on_green=True)


def _gross_for(hole: int, par: int):
    """按洞号生成固定的成绩：奇数洞红队赢，偶数洞平洞，每6洞蓝队赢"""
    if hole % 6 == 0:
        return [par + 1, par, par + 1, par + 1]
    if hole % 2 == 0:
        return [par, par, par, par]
    return [par, par + 1, par + 1, par + 1]


@pytest.mark.integration
class TestFullRound:
    """完整比赛测试"""

    def setup_method(self):
        """测试前设置"""
        self.command_service = MatchCommandService(config_service=ConfigService())
        self.query_service = MatchQueryService(self.command_service)
        result = self.command_service.create_match(PLAYERS, TEAMS, match_id="round", big_game=True)
        assert result.success

    def _play_round(self, double_on=None):
        double_on = double_on or {}
        results = []
        for hole, par in enumerate(PARS, start=1):
            if hole in double_on:
                self.command_service.request_double("round", double_on[hole])

            flags = [NO_FLAGS] * 4
            if hole == 17:
                flags = [NO_FLAGS, LONG_DRIVE, NO_FLAGS, NO_FLAGS]
            elif hole == 3:
                flags = [GREENIE, NO_FLAGS, NO_FLAGS, NO_FLAGS]

            gross = _gross_for(hole, par)
            result = self.command_service.enter_hole_scores(
                "round", HoleInput(hole=hole, par=par, gross_scores=gross, net_scores=gross, junk_flags=flags)
            )
            assert result.success, result.message
            results.append(result.data['settlement'])
        return results

    def test_full_round(self, caplog):
        """18洞打完后比赛结束，总额零和"""
        CoreUsageChecker.verify_real_objects(self.command_service, "MatchCommandService")

        with caplog.at_level(logging.INFO, logger="millbrook"):
            settlements = self._play_round(double_on={6: Team.BLUE, 7: Team.RED})

        assert "[比赛] round 全部18洞结算完成" in caplog.text

        snapshot = self.query_service.get_match_snapshot("round").data
        assert snapshot.status == "finished"
        assert snapshot.holes_played == 18
        assert snapshot.current_hole == 19
        CoreUsageChecker.verify_zero_sum(snapshot.running_totals)

        ledger = self.query_service.get_ledger("round").data
        assert len(ledger) == 18
        assert ledger[-1].running_totals == snapshot.running_totals
        for row, settlement in zip(ledger, settlements):
            assert row == settlement.ledger_row
            CoreUsageChecker.verify_zero_sum([p.delta for p in settlement.player_payouts])
            CoreUsageChecker.verify_zero_sum([p.delta for p in settlement.junk_payouts])

        # 第6洞蓝队累计落后，加倍生效；第7洞红队累计领先，加倍无效
        assert ledger[4].doubles == 0
        assert ledger[5].doubles == 1
        assert ledger[5].base == 4
        assert ledger[6].doubles == 1

        events = self.query_service.get_junk_events("round").data
        assert [(e.hole, e.player_id, e.type, e.value) for e in events] == [
            (3, "alice", JunkType.GREENIE, 2),
            (17, "bob", JunkType.LD10, 10),
        ]

        rows = self.query_service.get_big_game_rows("round").data
        assert len(rows) == 18
        assert snapshot.big_game_total == sum(row.subtotal for row in rows)

    def test_carry_accumulates_across_pushes(self):
        """平洞结转在下一次分出胜负时被拿走"""
        settlements = self._play_round()

        assert settlements[0].winner is HoleWinner.RED
        assert settlements[0].payout_result.payout == 2

        # 第2洞平洞，结转底分2，第3洞红队赢得 2 + 2×2
        assert settlements[1].winner is HoleWinner.PUSH
        assert settlements[1].payout_result.new_carry == 2
        assert settlements[2].winner is HoleWinner.RED
        assert settlements[2].payout_result.payout == 6

        # 第6洞蓝队赢
        assert settlements[5].winner is HoleWinner.BLUE

    def test_no_commands_after_round(self):
        """全部18洞结束后拒绝继续录入"""
        self._play_round()

        result = self.command_service.enter_hole_scores(
            "round", HoleInput(hole=19, par=4, gross_scores=[4] * 4, net_scores=[4] * 4)
        )
        assert result.status == ResultStatus.BUSINESS_RULE_VIOLATION
        assert result.error_code == "MATCH_FINISHED"
        assert "round" not in self.command_service.get_active_matches()
