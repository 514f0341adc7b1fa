"""Integration tests for the scoring and recommendation endpoints."""

import pytest
from httpx import AsyncClient

PROFILES = "/api/v1/profiles"


@pytest.fixture
async def kai(client: AsyncClient) -> str:
    response = await client.post(
        PROFILES,
        json={
            "id": "kai",
            "surf_level": 6,
            "min_wave_size": 0.8,
            "max_wave_size": 2.5,
            "optimal_wave_size": 1.5,
            "boards": [{"id": "fish", "name": "Fish", "min_wave_size": 0.5, "max_wave_size": 1.8}],
            "blacklisted_spots": ["crowded-point"],
        },
    )
    assert response.status_code == 201
    return "kai"


def _candidate(spot_id: str, wave_height: float, wind_speed: float, distance_km: float = 5) -> dict:
    return {
        "spot_id": spot_id,
        "distance_km": distance_km,
        "conditions": {"wave_height": wave_height, "wind_speed": wind_speed},
    }


class TestScore:
    async def test_onshore_morning(self, client: AsyncClient, kai: str):
        response = await client.post(
            f"{PROFILES}/{kai}/score",
            json={"conditions": {"wave_height": 1.2, "wind_speed": 10}},
        )
        data = response.json()

        assert response.status_code == 200
        assert data["score"] == 1.1
        assert data["suitability"]["label"] == "not_recommended"
        assert data["recommended_board"]["id"] == "fish"
        assert data["data_completeness"] == 0.25

    async def test_score_for_unknown_user_uses_defaults(self, client: AsyncClient):
        response = await client.post(
            f"{PROFILES}/ghost/score",
            json={"conditions": {"wave_height": 1.0, "wind_speed": 0}},
        )

        assert response.status_code == 200
        assert 0 <= response.json()["score"] <= 5

    async def test_missing_wind_speed(self, client: AsyncClient, kai: str):
        response = await client.post(
            f"{PROFILES}/{kai}/score", json={"conditions": {"wave_height": 1.2}}
        )
        body = response.json()

        assert response.status_code == 422
        assert body["error_code"] == "SCORING_INPUT_INVALID"
        assert body["details"] == {"field": "conditions.wind_speed"}

    async def test_negative_wave_height_rejected(self, client: AsyncClient, kai: str):
        response = await client.post(
            f"{PROFILES}/{kai}/score",
            json={"conditions": {"wave_height": -1, "wind_speed": 5}},
        )

        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestRecommendations:
    async def test_ranked_best_first(self, client: AsyncClient, kai: str):
        response = await client.post(
            f"{PROFILES}/{kai}/recommendations",
            json={
                "candidates": [
                    _candidate("flat", 0.2, 5),
                    _candidate("far-perfect", 1.5, 0, distance_km=20),
                    _candidate("near-perfect", 1.5, 0, distance_km=3),
                ],
            },
        )
        data = response.json()

        assert response.status_code == 200
        assert [c["spot_id"] for c in data["top"]] == ["near-perfect", "far-perfect", "flat"]
        assert data["alternatives"] == []

    async def test_blacklisted_spot_excluded(self, client: AsyncClient, kai: str):
        data = (
            await client.post(
                f"{PROFILES}/{kai}/recommendations",
                json={"candidates": [_candidate("crowded-point", 1.5, 0), _candidate("beach", 1.0, 5)]},
            )
        ).json()

        assert [c["spot_id"] for c in data["top"]] == ["beach"]

    async def test_limit_and_alternatives(self, client: AsyncClient, kai: str):
        candidates = [_candidate(f"spot-{i}", 0.8 + i * 0.1, 5) for i in range(6)]

        data = (
            await client.post(
                f"{PROFILES}/{kai}/recommendations",
                json={"candidates": candidates, "limit": 2, "alternatives": 1},
            )
        ).json()

        assert len(data["top"]) == 2
        assert len(data["alternatives"]) == 1
        assert data["top"][0]["score"] >= data["top"][1]["score"] >= data["alternatives"][0]["score"]

    async def test_far_spot_is_flagged(self, client: AsyncClient, kai: str):
        data = (
            await client.post(
                f"{PROFILES}/{kai}/recommendations",
                json={"candidates": [_candidate("road-trip", 1.5, 0, distance_km=200)]},
            )
        ).json()

        assert data["top"][0]["beyond_travel_range"] is True

    async def test_unscorable_candidate(self, client: AsyncClient, kai: str):
        response = await client.post(
            f"{PROFILES}/{kai}/recommendations",
            json={"candidates": [{"spot_id": "a", "conditions": {"wind_speed": 5}}]},
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "SCORING_INPUT_INVALID"

    async def test_empty_candidates(self, client: AsyncClient, kai: str):
        data = (
            await client.post(f"{PROFILES}/{kai}/recommendations", json={"candidates": []})
        ).json()

        assert data == {"user_id": "kai", "top": [], "alternatives": []}
