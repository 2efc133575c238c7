"""Tests for results API endpoints."""

import pytest

from marathon.models import PaymentStatus

from tests.fixtures.factories import create_registration


class TestResultsAPI:
    @pytest.mark.asyncio
    async def test_record_and_list(
        self, client, db_session, runner, runner_headers, organizer_headers, past_distance
    ):
        """Organizer records a result; the runner sees it formatted."""
        registration = create_registration(
            runner.id, past_distance.id, payment_status=PaymentStatus.PAID.value
        )
        db_session.add(registration)
        await db_session.flush()

        recorded = await client.post(
            f"/api/registrations/{registration.id}/result",
            json={"completionTime": "00:55:00", "overallRank": 1, "status": "Finished"},
            headers=organizer_headers,
        )
        assert recorded.status_code == 200
        assert recorded.json()["data"]["formattedTime"] == "00:55:00"

        response = await client.get("/api/results", headers=runner_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["totalCount"] == 1
        item = body["items"][0]
        assert item["formattedTime"] == "00:55:00"
        assert item["averagePace"] == "5:30"
        assert item["isTopThree"] is True
        assert item["medal"] == "gold"

    @pytest.mark.asyncio
    async def test_record_unknown_registration(self, client, organizer_headers):
        response = await client.post(
            "/api/registrations/99999/result",
            json={"status": "Finished"},
            headers=organizer_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_record_requires_privilege(
        self, client, db_session, runner, runner_headers, past_distance
    ):
        registration = create_registration(runner.id, past_distance.id)
        db_session.add(registration)
        await db_session.flush()

        response = await client.post(
            f"/api/registrations/{registration.id}/result",
            json={"status": "Finished"},
            headers=runner_headers,
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_record_rejects_bad_status(self, client, organizer_headers):
        response = await client.post(
            "/api/registrations/1/result",
            json={"status": "Winner"},
            headers=organizer_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_record_rejects_negative_time(
        self, client, db_session, runner, organizer_headers, past_distance
    ):
        registration = create_registration(runner.id, past_distance.id)
        db_session.add(registration)
        await db_session.flush()

        response = await client.post(
            f"/api/registrations/{registration.id}/result",
            json={"completionTime": -60, "status": "Finished"},
            headers=organizer_headers,
        )

        assert response.status_code == 422
