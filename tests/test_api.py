from conftest import ORG

BASE = f"/api/v1/orgs/{ORG}"


def seed(client):
    r = client.post(f"{BASE}/stages/seed")
    assert r.status_code == 200
    return r.json()


def create_order(client):
    r = client.post(f"{BASE}/orders/", json={"item_code": "LAM-001", "order_quantity": 1000, "priority_level": 3})
    assert r.status_code == 201
    return r.json()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_stage_endpoints(client):
    stages = seed(client)
    assert [s["sequence_order"] for s in stages] == [1, 2, 3, 4, 5]

    r = client.post(f"{BASE}/stages/", json={"stage_name": "Rework", "stage_type": "rework", "sequence_order": 3})
    assert r.status_code == 409
    assert r.json()["error"] == "duplicate_sequence"

    r = client.post(f"{BASE}/stages/", json={"stage_name": "Rework", "stage_type": "welding", "sequence_order": 6})
    assert r.status_code == 422
    assert r.json()["error"] == "validation_error"

    r = client.patch(f"{BASE}/stages/{stages[4]['id']}/active", json={"is_active": False})
    assert r.status_code == 200
    assert r.json()["is_active"] is False
    assert len(client.get(f"{BASE}/stages/").json()) == 4
    assert len(client.get(f"{BASE}/stages/", params={"include_inactive": True}).json()) == 5


def test_order_lifecycle_over_http(client):
    seed(client)
    order = create_order(client)
    assert order["status"] == "draft"
    assert order["uiorn"].startswith("UIORN")

    r = client.post(f"{BASE}/orders/{order['id']}/advance")
    assert r.status_code == 200
    assert r.json()["action"] == "started"

    progress = client.get(f"{BASE}/orders/{order['id']}/progress").json()
    first = progress[0]
    r = client.patch(f"{BASE}/progress/{first['id']}", json={"progress_percentage": 50})
    assert r.status_code == 200
    assert r.json()["progress_percentage"] == 50

    summary = client.get(f"{BASE}/orders/{order['id']}/summary").json()
    assert summary["current_stage"] == "Order Punching"
    assert summary["overall_percentage"] == 10.0
    assert summary["status"] == "in_production"

    r = client.post(f"{BASE}/orders/{order['id']}/advance")
    assert r.status_code == 409
    assert r.json()["error"] == "no_eligible_stage"

    r = client.post(f"{BASE}/progress/{first['id']}/transition", json={"target_status": "cancelled"})
    assert r.status_code == 409
    assert r.json()["current"] == "in_progress"

    r = client.post(f"{BASE}/progress/{first['id']}/transition", json={"target_status": "completed"})
    assert r.status_code == 200
    assert r.json()["completed_at"] is not None

    checkpoints = client.get(
        f"{BASE}/quality/checkpoints", params={"order_id": order["id"], "stage_id": first["stage_id"]}
    ).json()
    assert [c["check_type"] for c in checkpoints] == ["post_stage"]


def test_quality_gate_over_http(client):
    seed(client)
    order = create_order(client)
    first = client.get(f"{BASE}/orders/{order['id']}/progress").json()[0]

    r = client.post(f"{BASE}/quality/checkpoints", json={"order_id": order["id"], "stage_id": first["stage_id"]})
    assert r.status_code == 201
    cp = r.json()
    assert cp["result"] == "pending"

    r = client.post(f"{BASE}/progress/{first['id']}/transition", json={"target_status": "in_progress"})
    assert r.status_code == 409
    assert r.json() == {
        "error": "quality_checkpoint_required",
        "detail": "Pre-stage quality inspection is pending",
        "check_type": "pre_stage",
    }

    r = client.post(f"{BASE}/quality/checkpoints/{cp['id']}/result", json={"result": "passed", "remarks": "ok"})
    assert r.status_code == 200
    r = client.post(f"{BASE}/progress/{first['id']}/transition", json={"target_status": "in_progress"})
    assert r.status_code == 200

    r = client.get(f"{BASE}/quality/release", params={"order_id": order["id"], "stage_id": first["stage_id"]})
    assert r.json()["can_release"] is True


def test_bom_endpoints(client):
    payload = {
        "item_code": "LAM-001",
        "components": [
            {"component_item_code": "PET-12", "weight_percentage": 60},
            {"component_item_code": "ADH-1", "weight_percentage": 30},
        ],
    }
    r = client.post(f"{BASE}/boms/validate", json=payload)
    assert r.status_code == 200
    assert r.json() == {
        "valid": False,
        "total_weight_percentage": 90.0,
        "errors": ["Total weight percentage is 90.0%; 10.0% remaining to reach 100%"],
    }

    r = client.post(f"{BASE}/boms/", json=payload)
    assert r.status_code == 422
    assert len(r.json()["errors"]) == 1

    payload["components"][1]["weight_percentage"] = 40
    r = client.post(f"{BASE}/boms/", json=payload)
    assert r.status_code == 201
    bom = r.json()
    assert bom["bom_version"] == "1.0"
    assert [c["quantity_ratio"] for c in bom["components"]] == [0.6, 0.4]

    assert client.get(f"{BASE}/boms/items/LAM-001/active").status_code == 404
    assert client.post(f"{BASE}/boms/{bom['id']}/approve").json()["is_active"] is True

    r = client.post(f"{BASE}/boms/items/LAM-001/explode", json={"quantity": 500})
    assert r.status_code == 200
    assert [line["net_quantity"] for line in r.json()] == [300.0, 200.0]


def test_unknown_order_is_404(client):
    r = client.get(f"{BASE}/orders/12345")
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"
