"""Tests for registrations API endpoints."""

import pytest

from marathon.models import PaymentStatus

from tests.fixtures.factories import create_registration


class TestRegisterAPI:
    """Tests for POST /api/registrations."""

    @pytest.mark.asyncio
    async def test_register(self, client, runner_headers, test_distance):
        """POST /api/registrations creates a pending registration."""
        response = await client.post(
            "/api/registrations",
            json={"raceDistanceId": test_distance.id},
            headers=runner_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["paymentStatus"] == "Pending"
        assert body["data"]["bibNumber"] is None
        assert body["data"]["raceDistanceId"] == test_distance.id
        assert body["data"]["displayStatus"] == "Pending Payment"

    @pytest.mark.asyncio
    async def test_register_requires_token(self, client, test_distance):
        response = await client.post(
            "/api/registrations", json={"raceDistanceId": test_distance.id}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_register_requires_runner_role(self, client, organizer_headers, test_distance):
        response = await client.post(
            "/api/registrations",
            json={"raceDistanceId": test_distance.id},
            headers=organizer_headers,
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_register_unknown_distance(self, client, runner_headers):
        response = await client.post(
            "/api/registrations", json={"raceDistanceId": 99999}, headers=runner_headers
        )

        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_register_pending_race(self, client, runner_headers, pending_distance):
        response = await client.post(
            "/api/registrations",
            json={"raceDistanceId": pending_distance.id},
            headers=runner_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_register_past_race(self, client, runner_headers, past_distance):
        response = await client.post(
            "/api/registrations",
            json={"raceDistanceId": past_distance.id},
            headers=runner_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_register_twice(self, client, runner_headers, test_distance):
        payload = {"raceDistanceId": test_distance.id}
        await client.post("/api/registrations", json=payload, headers=runner_headers)

        response = await client.post("/api/registrations", json=payload, headers=runner_headers)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_full_lifecycle(
        self, client, runner_headers, other_runner_headers, single_slot_distance
    ):
        """Full distance refuses, cancellation frees the slot for the next runner."""
        payload = {"raceDistanceId": single_slot_distance.id}
        first = await client.post("/api/registrations", json=payload, headers=runner_headers)
        assert first.status_code == 201

        refused = await client.post(
            "/api/registrations", json=payload, headers=other_runner_headers
        )
        assert refused.status_code == 400
        assert refused.json()["message"] == "This distance is full"

        registration_id = first.json()["data"]["id"]
        cancelled = await client.delete(
            f"/api/registrations/{registration_id}", headers=runner_headers
        )
        assert cancelled.status_code == 200
        assert cancelled.json()["success"] is True
        assert cancelled.json()["data"] is None

        second = await client.post(
            "/api/registrations", json=payload, headers=other_runner_headers
        )
        assert second.status_code == 201
        assert second.json()["data"]["paymentStatus"] == "Pending"


class TestPaymentAPI:
    """Tests for POST /api/registrations/{id}/pay."""

    @pytest.mark.asyncio
    async def test_pay(self, client, runner_headers, test_distance):
        created = await client.post(
            "/api/registrations",
            json={"raceDistanceId": test_distance.id},
            headers=runner_headers,
        )
        registration_id = created.json()["data"]["id"]

        response = await client.post(
            f"/api/registrations/{registration_id}/pay", headers=runner_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["paymentStatus"] == "Paid"
        assert data["displayStatus"] == "Confirmed"
        assert len(data["bibNumber"]) == 5

        again = await client.post(
            f"/api/registrations/{registration_id}/pay", headers=runner_headers
        )
        assert again.status_code == 409

    @pytest.mark.asyncio
    async def test_pay_not_owner(
        self, client, db_session, runner, other_runner_headers, test_distance
    ):
        registration = create_registration(runner.id, test_distance.id)
        db_session.add(registration)
        await db_session.flush()

        response = await client.post(
            f"/api/registrations/{registration.id}/pay", headers=other_runner_headers
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_pay_cancelled(self, client, db_session, runner, runner_headers, test_distance):
        registration = create_registration(
            runner.id, test_distance.id, payment_status=PaymentStatus.CANCELLED.value
        )
        db_session.add(registration)
        await db_session.flush()

        response = await client.post(
            f"/api/registrations/{registration.id}/pay", headers=runner_headers
        )

        assert response.status_code == 400


class TestCancelAPI:
    """Tests for DELETE /api/registrations/{id}."""

    @pytest.mark.asyncio
    async def test_cancel_twice(self, client, db_session, runner, runner_headers, test_distance):
        registration = create_registration(runner.id, test_distance.id)
        db_session.add(registration)
        await db_session.flush()

        first = await client.delete(f"/api/registrations/{registration.id}", headers=runner_headers)
        second = await client.delete(f"/api/registrations/{registration.id}", headers=runner_headers)

        assert first.status_code == 200
        assert second.status_code == 400

    @pytest.mark.asyncio
    async def test_cancel_past_race(self, client, db_session, runner, runner_headers, past_distance):
        registration = create_registration(runner.id, past_distance.id)
        db_session.add(registration)
        await db_session.flush()

        response = await client.delete(
            f"/api/registrations/{registration.id}", headers=runner_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_cancel_unknown(self, client, runner_headers):
        response = await client.delete("/api/registrations/99999", headers=runner_headers)

        assert response.status_code == 404


class TestListRegistrationsAPI:
    """Tests for GET /api/registrations."""

    @pytest.mark.asyncio
    async def test_list_page_envelope(
        self, client, db_session, runner, runner_headers, test_distance, past_distance
    ):
        db_session.add(create_registration(runner.id, test_distance.id))
        db_session.add(create_registration(runner.id, past_distance.id))
        await db_session.flush()

        response = await client.get(
            "/api/registrations", params={"page": 1, "pageSize": 1}, headers=runner_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["totalCount"] == 2
        assert body["pageNumber"] == 1
        assert body["pageSize"] == 1
        assert body["totalPages"] == 2
        assert len(body["items"]) == 1
        assert "canCancel" in body["items"][0]

    @pytest.mark.asyncio
    async def test_list_empty(self, client, runner_headers):
        response = await client.get("/api/registrations", headers=runner_headers)

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["pageSize"] == 10

    @pytest.mark.asyncio
    async def test_invalid_page_size(self, client, runner_headers):
        response = await client.get(
            "/api/registrations", params={"pageSize": 0}, headers=runner_headers
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_registration_detail(
        self, client, db_session, runner, runner_headers, test_distance
    ):
        registration = create_registration(runner.id, test_distance.id)
        db_session.add(registration)
        await db_session.flush()

        response = await client.get(
            f"/api/registrations/{registration.id}", headers=runner_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["runner"]["email"] == runner.email
        assert body["raceDistance"]["currentParticipants"] == 1
        assert body["race"]["id"] == test_distance.race_id
        assert body["result"] is None
