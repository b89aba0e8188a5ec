from fastapi.testclient import TestClient

from app import rules
from app.main import app

plain_client = TestClient(app)


def test_health():
    r = plain_client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_intake_form():
    r = plain_client.get("/intake/form")
    assert r.status_code == 200

    data = r.json()
    assert [s["title"] for s in data["steps"]][0] == "Systems"
    assert data["steps"][-1] == {"index": 8, "title": "Review & Submit", "fields": []}
    assert data["defaults"]["contactCenter"] == "ringcentral"
    assert {"id": "stats.openDeals", "label": "Open deals count"} in data["contextFieldOptions"]


def test_validate_step(intake):
    intake["crm"] = "other"
    r = plain_client.post("/intake/validate?step=0", json=intake)
    assert r.status_code == 200
    assert r.json() == {"ok": False, "errors": {"otherCrmName": rules.OTHER_CRM_MESSAGE}}

    r = plain_client.post("/intake/validate?step=1", json=intake)
    assert r.json() == {"ok": True, "errors": {}}


def test_validate_step_out_of_range(intake):
    r = plain_client.post("/intake/validate?step=99", json=intake)
    assert r.status_code == 422


def test_preview(intake):
    r = plain_client.post("/intake/preview", json=intake)
    assert r.status_code == 200
    doc = r.json()
    assert doc["trigger"]["event"] == "ringcentral.interaction.accepted"
    assert doc["ownership"]["interactionIdField"] == "interaction_id"


def test_preview_rejects_invalid_intake(intake):
    intake["subjectTemplate"] = "abcd"
    r = plain_client.post("/intake/preview", json=intake)
    assert r.status_code == 422
    assert r.json() == {"detail": {"subjectTemplate": "Subject template is required"}}


def test_submit_stores_and_sends(client, store, sent, intake):
    r = client.post("/intake", json=intake)
    assert r.status_code == 200

    data = r.json()
    assert data["stored"] is True
    assert data["delivered"] is True
    assert data["message"] == rules.DELIVERY_OK_MESSAGE
    assert store.load(data["id"]) == data["blueprint"]
    assert len(sent) == 1
    assert '"event": "ringcentral.interaction.accepted"' in sent[0]["body"]["text"]


def test_submit_rejects_invalid_intake(client, sent, intake):
    intake.update(dataSensitivity="regulated", logging="mask_pii")
    r = client.post("/intake", json=intake)
    assert r.status_code == 422
    assert r.json()["detail"] == {"logging": rules.REGULATED_LOGGING_MESSAGE}
    assert sent == []


def test_submit_keeps_blueprint_when_delivery_fails(client, store, email_status, intake):
    email_status["code"] = 500
    r = client.post("/intake", json=intake)
    assert r.status_code == 200

    data = r.json()
    assert data["delivered"] is False
    assert data["stored"] is True
    assert data["message"] == rules.DELIVERY_FAILED_MESSAGE
    assert store.load(data["id"]) is not None


def test_submit_sends_even_when_store_fails(client, store, sent, intake):
    store.root.parent.mkdir(parents=True, exist_ok=True)
    store.root.write_text("occupied", encoding="utf-8")  # a file where the directory should be

    r = client.post("/intake", json=intake)
    assert r.status_code == 200
    data = r.json()
    assert data["stored"] is False
    assert data["delivered"] is True
    assert len(sent) == 1


def test_send_endpoint(client, sent):
    r = client.post("/intake/send", json={"crm": "salesforce"})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "message": rules.DELIVERY_OK_MESSAGE}
    assert "CRM: salesforce" in sent[0]["body"]["text"]


def test_send_endpoint_failure(client, email_status):
    email_status["code"] = 503
    r = client.post("/intake/send", json={})
    assert r.status_code == 500
    assert r.json() == {"ok": False, "error": rules.DELIVERY_FAILED_MESSAGE}


def test_view_stored_blueprint(client, intake):
    intake.update(matchingStrategy=["ani_phone_match", "external_id"], externalIdField="cust_id")
    blueprint_id = client.post("/intake", json=intake).json()["id"]

    r = client.get(f"/blueprint/{blueprint_id}")
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == blueprint_id
    assert data["blueprint"]["matching"]["externalIdField"] == "cust_id"
    summary = data["summary"]
    assert summary["customerMatching"]["strategy"] == (
        "Phone number and external customer ID -> CRM contact"
    )
    assert summary["connectedSystems"]["contactCenter"] == "ringcentral"
    assert "PII is masked in logs" in summary["operationalGuarantees"]

    latest = client.get("/blueprint/latest")
    assert latest.json() == {"id": blueprint_id}


def test_view_unknown_blueprint(client, store):
    r = client.get("/blueprint/00000000-0000-0000-0000-000000000000")
    assert r.status_code == 404
    assert r.json()["detail"] == rules.BLUEPRINT_NOT_FOUND_MESSAGE

    assert client.get("/blueprint/latest").status_code == 404


def test_view_undecodable_blueprint(client, store, intake):
    blueprint_id = client.post("/intake", json=intake).json()["id"]
    (store.root / f"micro_si_blueprint_{blueprint_id}.json").write_bytes(b"\xff\xfe{garbage")
    (store.root / "micro_si_last_blueprint_id.json").write_bytes(b"\xff\xfe")

    assert client.get(f"/blueprint/{blueprint_id}").status_code == 404
    assert client.get("/blueprint/latest").status_code == 404
