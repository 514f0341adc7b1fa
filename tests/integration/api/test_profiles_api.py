"""Integration tests for the profile, session and progress endpoints."""

from httpx import AsyncClient

from domain.services.profile_repository import TieredProfileRepository
from infrastructure.memory.profile_store import InMemoryProfileStore

PROFILES = "/api/v1/profiles"


async def _create(client: AsyncClient, **body) -> dict:
    response = await client.post(PROFILES, json=body)
    assert response.status_code == 201
    return response.json()


class TestCreateProfile:
    async def test_create_with_defaults(self, client: AsyncClient):
        data = await _create(client, id="kai", name="Kai")

        assert data["id"] == "kai"
        assert data["personal"]["name"] == "Kai"
        assert data["surf_level"]["overall"] == 1
        assert data["surf_level"]["label"] == "beginner"
        assert data["preferences"]["wave_size"] == {"min": 0.3, "max": 2.0, "optimal": 1.15}
        assert data["preferences"]["crowd_tolerance"] == "medium"
        assert data["availability"]["preferred_times"] == ["morning", "evening"]

    async def test_create_generates_id(self, client: AsyncClient):
        data = await _create(client)

        assert data["id"]

    async def test_level_label_maps_to_number(self, client: AsyncClient):
        data = await _create(client, level="advanced")

        assert data["surf_level"]["overall"] == 7

    async def test_inverted_wave_range_rejected(self, client: AsyncClient):
        response = await client.post(PROFILES, json={"min_wave_size": 2.5, "max_wave_size": 0.8})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_inverted_board_range_rejected(self, client: AsyncClient):
        response = await client.post(
            PROFILES, json={"boards": [{"id": "gun", "min_wave_size": 4, "max_wave_size": 2}]}
        )

        assert response.status_code == 422

    async def test_equal_wave_bounds_accepted(self, client: AsyncClient):
        data = await _create(client, min_wave_size=1.0, max_wave_size=1.0)

        assert data["preferences"]["wave_size"] == {"min": 1.0, "max": 1.0, "optimal": 1.0}

    async def test_email_is_normalised(self, client: AsyncClient):
        data = await _create(client, email="  Kai@Example.COM ")

        assert data["personal"]["email"] == "kai@example.com"

    async def test_invalid_email(self, client: AsyncClient):
        response = await client.post(PROFILES, json={"email": "not-an-email"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_level_out_of_range(self, client: AsyncClient):
        response = await client.post(PROFILES, json={"surf_level": 11})
        body = response.json()

        assert response.status_code == 422
        assert body["details"][0]["field"] == "body.surf_level"


class TestGetProfile:
    async def test_get_created_profile(self, client: AsyncClient):
        await _create(client, id="kai", surf_level=6)

        response = await client.get(f"{PROFILES}/kai")

        assert response.status_code == 200
        assert response.json()["surf_level"]["overall"] == 6

    async def test_unknown_user_gets_default_profile(self, client: AsyncClient):
        response = await client.get(f"{PROFILES}/newcomer")
        data = response.json()

        assert response.status_code == 200
        assert data["id"] == "newcomer"
        assert data["personal"]["name"] == "SurfAI User"

    async def test_default_profile_is_persisted(self, client: AsyncClient):
        first = (await client.get(f"{PROFILES}/newcomer")).json()
        await client.delete("/api/v1/admin/cache")

        second = (await client.get(f"{PROFILES}/newcomer")).json()

        assert second["created_at"] == first["created_at"]


class TestUpdateProfile:
    async def test_partial_update_keeps_other_fields(self, client: AsyncClient):
        await _create(client, id="kai", name="Kai", min_wave_size=0.8, max_wave_size=2.5)

        response = await client.patch(
            f"{PROFILES}/kai",
            json={"preferences": {"wind_tolerance": {"onshore": 20}}},
        )
        data = response.json()

        assert response.status_code == 200
        assert data["preferences"]["wind_tolerance"] == {"onshore": 20, "offshore": 25, "sideshore": 20}
        assert data["preferences"]["wave_size"]["min"] == 0.8
        assert data["personal"]["name"] == "Kai"

    async def test_lists_are_replaced(self, client: AsyncClient):
        await _create(
            client,
            id="kai",
            boards=[{"id": "log", "name": "Log"}, {"id": "fish", "name": "Fish"}],
        )

        response = await client.patch(
            f"{PROFILES}/kai",
            json={"equipment": {"boards": [{"id": "gun", "name": "Gun", "min_wave_size": 2, "max_wave_size": 5}]}},
        )

        assert [b["id"] for b in response.json()["equipment"]["boards"]] == ["gun"]

    async def test_update_persists(self, client: AsyncClient):
        await _create(client, id="kai")
        await client.patch(f"{PROFILES}/kai", json={"spots": {"favorites": ["anglet"]}})
        await client.delete("/api/v1/admin/cache")

        data = (await client.get(f"{PROFILES}/kai")).json()

        assert data["spots"]["favorites"] == ["anglet"]

    async def test_update_advances_updated_at(self, client: AsyncClient):
        created = await _create(client, id="kai")

        updated = (await client.patch(f"{PROFILES}/kai", json={"personal": {"name": "Mana"}})).json()

        assert updated["created_at"] == created["created_at"]
        assert updated["updated_at"] >= created["updated_at"]

    async def test_inverted_wave_range_update_rejected(self, client: AsyncClient):
        await _create(client, id="kai", min_wave_size=0.8, max_wave_size=2.0)

        response = await client.patch(
            f"{PROFILES}/kai", json={"preferences": {"wave_size": {"min": 3.0, "max": 2.0}}}
        )
        stored = (await client.get(f"{PROFILES}/kai")).json()

        assert response.status_code == 422
        assert stored["preferences"]["wave_size"]["min"] == 0.8
        assert stored["preferences"]["wave_size"]["max"] == 2.0

    async def test_invalid_update(self, client: AsyncClient):
        response = await client.patch(
            f"{PROFILES}/kai", json={"preferences": {"crowd_tolerance": "packed"}}
        )

        assert response.status_code == 422


class TestSessions:
    async def test_add_session_updates_profile(self, client: AsyncClient):
        await _create(client, id="kai")

        response = await client.post(
            f"{PROFILES}/kai/sessions",
            json={
                "date": "2026-05-14T08:30:00Z",
                "spot_id": "anglet",
                "conditions": {"wave_height": 1.2, "wind_speed": 10},
                "rating": 8,
            },
        )
        profile = (await client.get(f"{PROFILES}/kai")).json()

        assert response.status_code == 201
        assert response.json()["rating"]["overall"] == 8
        assert response.json()["user_id"] == "kai"
        assert profile["surf_level"]["experience"]["sessions_count"] == 1
        assert profile["spots"]["history"] == ["anglet"]

    async def test_list_sessions_newest_first(self, client: AsyncClient):
        for date in ("2026-05-01T08:00:00Z", "2026-05-10T08:00:00Z", "2026-05-05T08:00:00Z"):
            await client.post(f"{PROFILES}/kai/sessions", json={"date": date})

        data = (await client.get(f"{PROFILES}/kai/sessions")).json()

        assert data["total"] == 3
        assert [s["date"][:10] for s in data["data"]] == ["2026-05-10", "2026-05-05", "2026-05-01"]

    async def test_invalid_rating(self, client: AsyncClient):
        response = await client.post(f"{PROFILES}/kai/sessions", json={"rating": 11})

        assert response.status_code == 422


class TestStatsAndProgress:
    async def test_stats(self, client: AsyncClient):
        await _create(client, id="kai", surf_level=6, favorite_spots=["a", "b"])
        for date, rating in (("2026-05-01T08:00:00Z", 6), ("2026-05-04T08:00:00Z", 8)):
            await client.post(f"{PROFILES}/kai/sessions", json={"date": date, "rating": rating})

        response = await client.get(f"{PROFILES}/kai/stats")
        data = response.json()

        assert response.status_code == 200
        assert data["total_sessions"] == 2
        assert data["average_rating"] == 7.0
        assert data["current_streak"] == 2
        assert data["favorite_spots"] == 2
        assert data["level"] == 6
        assert data["level_label"] == "advanced"
        assert data["last_session"].startswith("2026-05-04")

    async def test_stats_for_unknown_user(self, client: AsyncClient):
        data = (await client.get(f"{PROFILES}/ghost/stats")).json()

        assert data["total_sessions"] == 0
        assert data["average_rating"] == 0.0
        assert data["current_streak"] == 0
        assert data["last_session"] is None

    async def test_progress(self, client: AsyncClient):
        await _create(client, id="kai", surf_level=3)

        data = (await client.get(f"{PROFILES}/kai/progress")).json()

        assert data["next_level"]["level"] == 4
        assert data["next_level"]["sessions"] == 30
        assert data["next_level"]["skills"]
        assert 0 < data["profile_completeness"] <= 1
        assert data["average_condition_score"] is None
        assert set(data["progression"]) == {"paddling", "takeoff", "turning", "tube_riding"}

    async def test_progress_at_max_level(self, client: AsyncClient):
        await _create(client, id="pro", surf_level=10)

        data = (await client.get(f"{PROFILES}/pro/progress")).json()

        assert data["next_level"]["level"] == 10
        assert data["next_level"]["sessions"] is None
        assert data["next_level"]["message"] == "Maximum level reached"


class TestFallbackOnly:
    async def test_profiles_work_without_durable_store(self, fallback_only_client: AsyncClient):
        await fallback_only_client.post(PROFILES, json={"id": "kai", "surf_level": 4})
        await fallback_only_client.delete("/api/v1/admin/cache")

        data = (await fallback_only_client.get(f"{PROFILES}/kai")).json()

        assert data["surf_level"]["overall"] == 4

    async def test_writes_land_in_both_tiers(
        self,
        client: AsyncClient,
        app_repository: TieredProfileRepository,
        fallback_store: InMemoryProfileStore,
    ):
        await _create(client, id="kai")

        assert await app_repository.durable_store.get_by_id("kai") is not None
        assert await fallback_store.get_by_id("kai") is not None
