"""End-to-end tests for change notifications over /ws/surveys."""

import pytest
from fastapi.testclient import TestClient

from survey_crm.services import survey_events
from survey_crm.services.survey_events import SurveyEvent, build_event

NEW_SURVEY = {"customer_name": "A", "property_address": "1 Road"}


def test_build_event_envelope():
    event = build_event(SurveyEvent.CREATED, "abc", "New survey created")
    assert event == {
        "type": "survey_created",
        "data": {"id": "abc", "message": "New survey created"},
    }


def test_connected_client_receives_each_mutation(client: TestClient):
    with client.websocket_connect("/ws/surveys") as ws:
        survey_id = client.post("/api/surveys", json=NEW_SURVEY).json()["id"]
        assert ws.receive_json() == {
            "type": "survey_created",
            "data": {"id": survey_id, "message": "New survey created"},
        }

        client.put(f"/api/surveys/{survey_id}", json={**NEW_SURVEY, "status": "completed"})
        assert ws.receive_json() == {
            "type": "survey_updated",
            "data": {"id": survey_id, "message": "Survey updated"},
        }

        detail_id = client.post(
            f"/api/surveys/{survey_id}/details", json={"room_name": "Loft"}
        ).json()["id"]
        assert ws.receive_json() == {
            "type": "survey_detail_added",
            "data": {
                "id": detail_id,
                "message": "Survey detail added",
                "survey_id": survey_id,
            },
        }

        client.delete(f"/api/surveys/{survey_id}")
        assert ws.receive_json() == {
            "type": "survey_deleted",
            "data": {"id": survey_id, "message": "Survey deleted"},
        }


def test_all_connected_clients_receive_broadcast(client: TestClient):
    with client.websocket_connect("/ws/surveys") as first:
        with client.websocket_connect("/ws/surveys") as second:
            survey_id = client.post("/api/surveys", json=NEW_SURVEY).json()["id"]

            assert first.receive_json()["data"]["id"] == survey_id
            assert second.receive_json()["data"]["id"] == survey_id


def test_late_client_does_not_receive_earlier_events(client: TestClient):
    survey_id = client.post("/api/surveys", json=NEW_SURVEY).json()["id"]

    with client.websocket_connect("/ws/surveys") as ws:
        client.put(f"/api/surveys/{survey_id}", json={**NEW_SURVEY, "status": "in-progress"})

        # The first message is the update; the earlier create was never replayed
        message = ws.receive_json()
        assert message["type"] == "survey_updated"
        assert message["data"]["id"] == survey_id


def test_failed_mutation_does_not_broadcast(client: TestClient):
    with client.websocket_connect("/ws/surveys") as ws:
        response = client.delete("/api/surveys/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404

        survey_id = client.post("/api/surveys", json=NEW_SURVEY).json()["id"]
        message = ws.receive_json()
        assert message["type"] == "survey_created"
        assert message["data"]["id"] == survey_id


def test_ping_pong_heartbeat(client: TestClient):
    with client.websocket_connect("/ws/surveys") as ws:
        ws.send_text("ping")
        assert ws.receive_text() == "pong"


def test_broadcast_failure_does_not_fail_request(client: TestClient, app, monkeypatch):
    async def exploding_broadcast(_message):
        raise RuntimeError("fan-out failed")

    monkeypatch.setattr(app.state.ws_manager, "broadcast", exploding_broadcast)

    response = client.post("/api/surveys", json=NEW_SURVEY)

    assert response.status_code == 200
    assert client.get(f"/api/surveys/{response.json()['id']}").status_code == 200


@pytest.mark.asyncio
async def test_publish_swallows_errors():
    class ExplodingManager:
        async def broadcast(self, _message):
            raise RuntimeError("boom")

    await survey_events.publish(ExplodingManager(), {"type": "survey_deleted"})
