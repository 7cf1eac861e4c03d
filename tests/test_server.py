"""
Tests for HTTP routing and response serialisation
"""
import json

import pytest
from fastapi.testclient import TestClient

from robostats.server import create_app
from tests.fakes import event, ranking, skill, team

SKU = "RE-VRC-23-0001"


@pytest.fixture
def loaded(fake):
    fake.teams.append(team(10, "8768A", "VRC"))
    fake.team_rankings_by_id[10] = [
        ranking(3, "8768A", wins=3, losses=1, ties=0, wp=8, ap=4),
        ranking(7, "8768A", wins=2, losses=2, ties=1, wp=5, ap=3),
    ]
    fake.events.append(event(7, SKU, "VRC", "Spring Open"))
    fake.rankings_by_division[(7, 1)] = [
        ranking(r, f"{r}A", wins=2, wp=4, ap=2, sp=10) for r in range(1, 9)
    ]
    fake.skills_by_event[7] = [
        skill(1, "1A", "programming", 60),
        skill(1, "1A", "driver", 90),
    ]
    return fake


@pytest.fixture
def client(loaded):
    return TestClient(create_app(client=loaded))


class TestTeamRoute:

    def test_team_stats(self, client):
        response = client.get("/team/vrc/8768A")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert json.loads(response.text) == {
            "awp_rate": "22%", "avg_ap": 0.8, "record": "5-3-1"
        }

    def test_unsupported_program_is_200(self, client):
        response = client.get("/team/frc/254")
        assert response.status_code == 200
        assert response.text == '{"error":"Program not supported."}'

    def test_team_not_found_is_200(self, client):
        response = client.get("/team/VRC/0000Z")
        assert response.status_code == 200
        assert json.loads(response.text) == {"error": "Team not found"}


class TestRankingsRoute:

    @pytest.mark.parametrize("prefix", ["rank", "rankings"])
    def test_json_variant(self, client, prefix):
        response = client.get(f"/{prefix}/{SKU}")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        body = response.json()
        assert body["event"]["name"] == "Spring Open"
        assert [r["Rank"] for r in body["rankings"]] == [1, 2, 3, 4, 5]

    def test_text_variant(self, client):
        response = client.get(f"/rankings/{SKU}/text")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        text = json.loads(response.text)["text"]
        assert text.startswith("Top 5 ranked teams for Spring Open: 1. 1A ")
        assert text.endswith(f" | Full results: https://robotevents.com/{SKU}.html#results")

    def test_other_third_segment_falls_back_to_json(self, client):
        response = client.get(f"/rank/{SKU}/table")
        assert response.headers["content-type"].startswith("application/json")
        assert "rankings" in response.json()

    def test_limit_query(self, client):
        body = client.get(f"/rankings/{SKU}?limit=2").json()
        assert len(body["rankings"]) == 2

    def test_limit_out_of_range(self, client):
        assert client.get(f"/rankings/{SKU}?limit=0").status_code == 422

    def test_unknown_event(self, client):
        response = client.get("/rankings/RE-NOPE")
        assert response.status_code == 200
        assert response.json() == {"error": "Event not found"}


class TestSkillsRoute:

    def test_json_variant(self, client):
        response = client.get(f"/skills/{SKU}")
        assert response.headers["content-type"].startswith("application/json")
        assert response.json()["skills"][0]["Score"] == 150

    def test_text_variant(self, client):
        text = json.loads(client.get(f"/skills/{SKU}/text").text)["text"]
        assert text == (
            "Top 5 skills rankings for Spring Open: 1. 1A (150 pts.)"
            f" | Full results: https://robotevents.com/{SKU}.html#results"
        )


class TestNotFound:

    @pytest.mark.parametrize("path", ["/foo/bar", "/", "/team/vrc", "/skills"])
    def test_unmatched_path(self, client, path):
        response = client.get(path)
        assert response.status_code == 404
        assert response.text == "404 Not Found"
        assert response.headers["content-type"].startswith("text/plain")

    def test_wrong_method_keeps_405(self, client):
        assert client.post(f"/skills/{SKU}").status_code == 405


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "service": "robostats"}


def test_create_app_builds_client_from_settings():
    from robostats._config import Settings

    app = create_app(Settings(re_api_key="secret", base_url="https://example.test/api"))
    assert app.state.client.base_url == "https://example.test/api"
    assert app.state.client.session.headers["Authorization"] == "Bearer secret"


def test_non_ascii_names_are_not_escaped(fake):
    fake.events.append(event(8, "RE-VIQC-23-0002", "VIQC", "Montréal Open"))
    fake.rankings_by_division[(8, 1)] = [ranking(1, "1A", ties=2, average_points=12.5)]
    client = TestClient(create_app(client=fake))
    response = client.get("/rankings/RE-VIQC-23-0002")
    assert "Montréal Open" in response.text
    assert "\\u00e9" not in response.text
    assert response.json()["event"]["name"] == "Montréal Open"


class TestExtraSegments:

    @pytest.mark.parametrize("path", [
        "/team/vrc/8768A/x",
        f"/rank/{SKU}/text/x",
        f"/skills/{SKU}/text/x",
    ])
    def test_trailing_segments_are_unmatched(self, client, path):
        response = client.get(path)
        assert response.status_code == 404
        assert response.text == "404 Not Found"
