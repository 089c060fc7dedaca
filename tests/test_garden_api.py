from __future__ import annotations

import requests

from app.domain.exceptions import DiagnosisProviderError

HEADERS = {"X-User-Id": "api-user"}


def _diagnosis(**overrides):
    body = {
        "id": "scan-a",
        "timestamp": 1767225600000,
        "plantName": "Tomato",
        "diagnosis": "Early blight",
        "confidence": 0.9,
        "severity": "Moderate",
        "isPlant": True,
    }
    body.update(overrides)
    return body


def _save(client, headers=HEADERS, **payload):
    return client.post("/api/garden/scans", json=payload, headers=headers)


class TestDiagnose:
    def test_diagnose_returns_unsaved_record(self, client, fake_provider):
        resp = client.post("/api/garden/diagnose", json={"image": "QUJD", "language": "tl"}, headers=HEADERS)

        body = resp.get_json()
        assert resp.status_code == 200
        assert body["data"]["diagnosis"]["plantName"] == "Basil"
        assert body["data"]["recognized"] is True
        assert fake_provider.calls == [("QUJD", "tl")]
        assert client.get("/api/garden/scans", headers=HEADERS).get_json()["data"]["count"] == 0

    def test_severe_diagnosis_raises_error_alert(self, client, fake_provider):
        fake_provider.answer.update(severity="Severe", diagnosis="Root rot")

        data = client.post("/api/garden/diagnose", json={"image": "QUJD"}, headers=HEADERS).get_json()["data"]

        assert data["alert"]["title"] == "SmartGrow AI Alert!"
        alerts = client.get("/api/garden/alerts", headers=HEADERS).get_json()["data"]["alerts"]
        assert alerts[0]["title"] == "SmartGrow AI Alert!"
        assert alerts[0]["message"] == "Basil needs immediate attention! Root rot"
        assert alerts[0]["severity"] == "error"

    def test_unrecognized_image_raises_no_alert(self, client, fake_provider):
        fake_provider.answer = {"isPlant": False}

        data = client.post("/api/garden/diagnose", json={"image": "QUJD"}, headers=HEADERS).get_json()["data"]

        assert data["recognized"] is False
        assert data["alert"] is None
        assert client.get("/api/garden/alerts", headers=HEADERS).get_json()["data"]["count"] == 0

    def test_latest_environment_is_stamped_on_record(self, app, client, fake_provider):
        fake_provider.answer["environment"] = {"temperature": 99, "humidity": 1, "soilMoisture": 1, "light": 1}
        sampler = app.config["CONTAINER"].sampler
        sampler.tick()

        data = client.post("/api/garden/diagnose", json={"image": "QUJD"}, headers=HEADERS).get_json()["data"]

        assert data["diagnosis"]["environment"] == sampler.latest_sample.to_dict()

    def test_no_environment_before_first_sample(self, client):
        data = client.post("/api/garden/diagnose", json={"image": "QUJD"}, headers=HEADERS).get_json()["data"]
        assert data["diagnosis"].get("environment") is None

    def test_missing_image_is_400(self, client):
        resp = client.post("/api/garden/diagnose", json={}, headers=HEADERS)
        assert resp.status_code == 400

    def test_provider_failure_is_502_with_friendly_message(self, client, fake_provider):
        fake_provider.error = requests.Timeout("slow")

        resp = client.post("/api/garden/diagnose", json={"image": "QUJD"}, headers=HEADERS)

        assert resp.status_code == 502
        assert resp.get_json()["error"]["message"] == DiagnosisProviderError.DEFAULT_MESSAGE


class TestScans:
    def test_save_scan_with_monitoring(self, client):
        resp = _save(client, diagnosis=_diagnosis(), startMonitoring=True)

        data = resp.get_json()["data"]
        assert resp.status_code == 201
        assert data["saved"] is True
        assert data["xpAwarded"] == 80
        assert data["stats"]["scansCount"] == 1
        assert data["session"]["currentDay"] == 2
        assert data["session"]["status"] == "Active"

    def test_unrecognized_specimen_is_400(self, client):
        resp = _save(client, diagnosis=_diagnosis(isPlant=False))
        assert resp.status_code == 400

    def test_invalid_diagnosis_is_400(self, client):
        resp = _save(client, diagnosis={"plantName": "no id"})
        assert resp.status_code == 400
        assert resp.get_json()["error"]["details"]["errors"]

    def test_archive_filter_and_restore(self, client):
        _save(client, diagnosis=_diagnosis(id="a"))
        _save(client, diagnosis=_diagnosis(id="b"))

        assert client.post("/api/garden/scans/a/archive", headers=HEADERS).get_json()["data"]["scan"]["archived"]
        active = client.get("/api/garden/scans?archived=false", headers=HEADERS).get_json()["data"]
        assert [s["id"] for s in active["scans"]] == ["b"]

        client.post("/api/garden/scans/a/restore", headers=HEADERS)
        assert client.get("/api/garden/scans", headers=HEADERS).get_json()["data"]["count"] == 2

        assert client.post("/api/garden/scans/missing/archive", headers=HEADERS).status_code == 404

    def test_delete_requires_confirm(self, client):
        _save(client, diagnosis=_diagnosis(id="a"))

        assert client.delete("/api/garden/scans/a", headers=HEADERS).status_code == 400
        resp = client.delete("/api/garden/scans/a?confirm=true", headers=HEADERS)
        assert resp.get_json()["data"]["deleted"] is True

    def test_users_do_not_see_each_other(self, client):
        _save(client, diagnosis=_diagnosis())

        other = client.get("/api/garden/scans", headers={"X-User-Id": "someone-else"}).get_json()
        assert other["data"]["count"] == 0


class TestSessions:
    def _start(self, client):
        data = _save(client, diagnosis=_diagnosis(plantName="Fern"), startMonitoring=True).get_json()["data"]
        return data["session"]["id"]

    def test_follow_up_recovers_and_alerts(self, client):
        session_id = self._start(client)

        resp = _save(
            client,
            diagnosis=_diagnosis(id="f1", severity="Healthy", plantName="Fern"),
            monitoring={"sessionId": session_id, "day": 2},
        )

        data = resp.get_json()["data"]
        assert data["session"]["status"] == "Recovered"
        assert data["xpAwarded"] == 150
        alerts = client.get("/api/garden/alerts", headers=HEADERS).get_json()["data"]["alerts"]
        assert alerts[0]["title"] == "Recovery Success!"

    def test_pending_follow_up_across_requests(self, client):
        session_id = self._start(client)

        begin = client.post(f"/api/garden/sessions/{session_id}/follow-up", headers=HEADERS).get_json()["data"]
        assert begin == {"sessionId": session_id, "day": 2}

        _save(client, diagnosis=_diagnosis(id="f1", severity="Mild"))

        sessions = client.get("/api/garden/sessions", headers=HEADERS).get_json()["data"]["sessions"]
        assert [r["day"] for r in sessions[0]["dailyRecords"]] == [1, 2]

    def test_duplicate_day_is_409(self, client):
        session_id = self._start(client)
        follow_up = {"sessionId": session_id, "day": 2}
        _save(client, diagnosis=_diagnosis(id="f1"), monitoring=follow_up)

        assert _save(client, diagnosis=_diagnosis(id="f2"), monitoring=follow_up).status_code == 409

    def test_follow_up_on_closed_session_is_not_saved(self, client):
        session_id = self._start(client)
        client.post(f"/api/garden/sessions/{session_id}/archive", headers=HEADERS)

        resp = _save(client, diagnosis=_diagnosis(id="f1"), monitoring={"sessionId": session_id, "day": 2})

        assert resp.status_code == 200
        assert resp.get_json()["data"] == {"saved": False}

    def test_archive_twice_conflicts(self, client):
        session_id = self._start(client)

        assert client.post(f"/api/garden/sessions/{session_id}/archive", headers=HEADERS).status_code == 200
        assert client.post(f"/api/garden/sessions/{session_id}/archive", headers=HEADERS).status_code == 409
        assert client.post("/api/garden/sessions/missing/archive", headers=HEADERS).status_code == 404

    def test_status_filter(self, client):
        self._start(client)

        assert client.get("/api/garden/sessions?status=Archived", headers=HEADERS).get_json()["data"]["count"] == 0
        assert client.get("/api/garden/sessions?status=Bogus", headers=HEADERS).status_code == 400


class TestProfile:
    def test_stats_view(self, client):
        data = client.get("/api/garden/stats", headers=HEADERS).get_json()["data"]
        assert data["level"] == 1
        assert data["xpTarget"] == 1000
        assert data["displayName"] == "Botanist"

    def test_patch_profile(self, client):
        resp = client.patch(
            "/api/garden/profile",
            json={"username": "mara", "profileIcon": "Persona2", "themeColor": "rose"},
            headers=HEADERS,
        )

        data = resp.get_json()["data"]
        assert data["username"] == "mara"
        assert data["personaLabel"] == "The Plant Doc"
        assert data["themeColor"] == "rose"

    def test_unknown_persona_is_400(self, client):
        resp = client.patch("/api/garden/profile", json={"profileIcon": "Wizard"}, headers=HEADERS)
        assert resp.status_code == 400

    def test_welcome_uses_display_name(self, client):
        client.patch("/api/garden/profile", json={"fullName": "mara lopez"}, headers=HEADERS)

        resp = client.post("/api/garden/welcome", headers=HEADERS)

        assert resp.status_code == 201
        alerts = client.get("/api/garden/alerts", headers=HEADERS).get_json()["data"]["alerts"]
        assert alerts[0]["title"] == "Welcome aboard!"
        assert alerts[0]["message"] == "Hey Mara Lopez, we're ready to grow!"

    def test_activity_and_analytics(self, client):
        client.post("/api/garden/activity", json={"text": "Reviewed analytics"}, headers=HEADERS)
        _save(client, diagnosis=_diagnosis(severity="Healthy"))

        analytics = client.get("/api/garden/analytics", headers=HEADERS).get_json()["data"]
        assert analytics["totalScans"] == 1
        assert analytics["healthScore"] == 100
        assert len(analytics["scanTrend"]) == 7


class TestPlantGuide:
    def test_list_and_search(self, client):
        everything = client.get("/api/garden/plant-guide").get_json()["data"]
        assert everything["count"] == 8

        found = client.get("/api/garden/plant-guide?q=TOM").get_json()["data"]
        assert [p["id"] for p in found["plants"]] == ["tomato"]

    def test_entry_and_missing_entry(self, client):
        plant = client.get("/api/garden/plant-guide/basil").get_json()["data"]["plant"]
        assert plant["category"] == "Mint Family"
        assert "Tomato" in plant["companions"]
        assert plant["hybridInfo"].startswith("Different basils")

        assert client.get("/api/garden/plant-guide/cactus").status_code == 404


class TestMisc:
    def test_alerts_clear(self, client):
        client.delete("/api/garden/alerts", headers=HEADERS)
        assert client.get("/api/garden/alerts", headers=HEADERS).get_json()["data"]["count"] == 0

    def test_environment_before_sampling(self, client):
        data = client.get("/api/garden/environment").get_json()["data"]
        assert data == {"sample": None, "running": False}

    def test_unknown_route_uses_envelope(self, client):
        resp = client.get("/api/garden/nope")
        assert resp.status_code == 404
        assert resp.get_json()["ok"] is False
