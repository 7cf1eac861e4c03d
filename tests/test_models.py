"""
Tests for typed records built from API payloads
"""
import pytest

from robostats.models import Event, Program, Ranking, RecordError, SkillsRecord, Team
from tests.fakes import event, ranking, skill, team


class TestProgram:

    @pytest.mark.parametrize("code", ["VRC", "vrc", "Viqc", "RADC", "VEXU"])
    def test_supported(self, code):
        assert Program.parse(code) is Program(code.upper())

    @pytest.mark.parametrize("code", ["FRC", "", None])
    def test_unsupported(self, code):
        assert Program.parse(code) is None


def test_team_from_api():
    assert Team.from_api(team(10, "8768A", "VRC")) == Team(id=10, number="8768A", program="VRC")


def test_event_defaults_to_single_division():
    raw = event(7, "RE-1", "VIQC")
    raw["divisions"] = []
    parsed = Event.from_api(raw)
    assert parsed.divisions == [1]
    assert parsed.program is Program.VIQC
    assert parsed.info() == {"sku": "RE-1", "name": "Test Event", "program": "VIQC"}


def test_ranking_from_api():
    r = Ranking.from_api(ranking(2, "1A", wins=3, losses=1, ties=2, wp=9))
    assert r.matches == 6
    assert r.record == "3-1-2"
    assert r.team == "1A"


def test_ranking_null_numbers_default_to_zero():
    raw = ranking(1, "1A")
    raw["average_points"] = None
    assert Ranking.from_api(raw).average_points == 0


def test_ranking_requires_rank():
    raw = ranking(1, "1A")
    del raw["rank"]
    with pytest.raises(RecordError):
        Ranking.from_api(raw)


def test_skills_requires_team_name():
    raw = skill(1, "1A", "driver", 10)
    raw["team"] = {}
    with pytest.raises(RecordError):
        SkillsRecord.from_api(raw)
