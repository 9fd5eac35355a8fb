from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from compound_access.workers.scanner_worker import scanner_worker

NEW_RESIDENT = {
    "firstName": "Lena",
    "lastName": "Park",
    "email": "lena.park@email.com",
    "phone": "+1-555-0404",
    "unitNumber": "D-404",
    "building": "Building D",
    "emergencyContact": {"name": "Sam Park", "phone": "+1-555-0405", "relationship": "Brother"},
}


def test_list_residents(client) -> None:
    response = client.get("/api/residents")

    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == ["1", "2", "3"]


def test_list_residents_filtered_and_sorted(client) -> None:
    by_building = client.get("/api/residents", params={"building": "Building B"}).json()
    by_search = client.get("/api/residents", params={"search": "johnson"}).json()
    by_unit = client.get("/api/residents", params={"sortField": "unit", "sortDirection": "desc"}).json()

    assert [r["unitNumber"] for r in by_building] == ["B-205"]
    assert [r["lastName"] for r in by_search] == ["Johnson"]
    assert [r["unitNumber"] for r in by_unit] == ["C-312", "B-205", "A-101"]


def test_invalid_sort_field_is_rejected(client) -> None:
    assert client.get("/api/residents", params={"sortField": "phone"}).status_code == 422


def test_resident_lifecycle(client) -> None:
    created = client.post("/api/residents", json=NEW_RESIDENT)
    assert created.status_code == 201
    resident = created.json()
    assert resident["qrCode"].startswith("data:image/png;base64,")
    assert resident["isActive"] is True

    fetched = client.get(f"/api/residents/{resident['id']}")
    assert fetched.json()["email"] == "lena.park@email.com"

    patched = client.patch(f"/api/residents/{resident['id']}", json={"isActive": False})
    assert patched.status_code == 200
    assert patched.json()["isActive"] is False
    assert patched.json()["qrCode"] == resident["qrCode"]

    deleted = client.delete(f"/api/residents/{resident['id']}")
    assert deleted.json() == {"success": True, "message": "Resident deleted"}
    assert client.get(f"/api/residents/{resident['id']}").status_code == 404


def test_create_resident_requires_fields(client) -> None:
    payload = {k: v for k, v in NEW_RESIDENT.items() if k != "unitNumber"}

    assert client.post("/api/residents", json=payload).status_code == 422


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/residents/missing"),
        ("patch", "/api/residents/missing"),
        ("delete", "/api/residents/missing"),
        ("post", "/api/residents/missing/credential"),
    ],
)
def test_unknown_resident_is_404(client, method: str, path: str) -> None:
    kwargs = {"json": {"phone": "1"}} if method == "patch" else {}
    response = getattr(client, method)(path, **kwargs)

    assert response.status_code == 404
    assert response.json()["detail"] == "Resident not found"


def test_reissue_credential(client) -> None:
    before = client.get("/api/residents/1").json()

    response = client.post("/api/residents/1/credential")

    body = response.json()
    assert response.status_code == 200
    assert body["residentId"] == "1"
    assert body["qrCode"] != before["qrCode"]
    valid_until = datetime.fromisoformat(body["validUntil"].replace("Z", "+00:00"))
    assert valid_until > datetime.now(timezone.utc) + timedelta(days=29)


def test_access_logs_limit_and_append(client) -> None:
    assert len(client.get("/api/access-logs").json()) == 2
    assert len(client.get("/api/access-logs", params={"limit": 1}).json()) == 1
    assert client.get("/api/access-logs", params={"limit": 0}).status_code == 422

    created = client.post(
        "/api/access-logs",
        json={
            "residentId": "3",
            "residentName": "David Johnson",
            "unitNumber": "C-312",
            "accessType": "entry",
            "method": "manual",
            "notes": "Forgot phone",
        },
    )

    assert created.status_code == 201
    assert client.get("/api/access-logs", params={"limit": 1}).json()[0]["id"] == created.json()["id"]


def test_dashboard_stats(client) -> None:
    stats = client.get("/api/dashboard/stats").json()

    assert stats["totalResidents"] == 3
    assert stats["activeResidents"] == 3
    assert stats["todayEntries"] == 1
    assert len(stats["recentActivity"]) == 2


def test_demo_scan_grants_access(client) -> None:
    response = client.post("/api/scan/demo", params={"residentId": "2", "accessType": "exit"})

    body = response.json()
    assert response.status_code == 200
    assert body["result"] == "success"
    assert body["message"] == "Access granted - exit"
    assert body["log"]["residentName"] == "Maria Garcia"
    assert client.get("/api/access-logs", params={"limit": 1}).json()[0]["id"] == body["log"]["id"]


def test_demo_scan_unknown_resident(client) -> None:
    assert client.post("/api/scan/demo", params={"residentId": "42"}).status_code == 404


def test_scan_with_typed_credential(client) -> None:
    issued = datetime.now(timezone.utc).isoformat()
    raw = json.dumps({"residentId": "3", "unitNumber": "C-312", "timestamp": issued})

    response = client.post("/api/scan", json={"qrData": raw, "method": "manual"})

    assert response.status_code == 200
    assert response.json()["log"]["method"] == "manual"


@pytest.mark.parametrize(
    "raw, status, detail",
    [
        ("", 400, "Please enter QR code data"),
        ("not json", 403, "Invalid or expired QR code"),
        ('{"residentId": "77", "unitNumber": "X", "issuedAt": "2024-01-01T00:00:00Z"}', 403, "Resident not found"),
    ],
)
def test_scan_rejections(client, raw: str, status: int, detail: str) -> None:
    before = len(client.get("/api/access-logs").json())

    response = client.post("/api/scan", json={"qrData": raw})

    assert response.status_code == status
    assert response.json()["detail"] == detail
    assert len(client.get("/api/access-logs").json()) == before


def test_scan_inactive_resident(client) -> None:
    client.patch("/api/residents/1", json={"isActive": False})

    response = client.post("/api/scan/demo", params={"residentId": "1"})

    assert response.status_code == 403
    assert response.json()["detail"] == "Resident account is inactive"


def test_users(client) -> None:
    users = client.get("/api/users").json()
    current = client.get("/api/users/current").json()

    assert [u["username"] for u in users] == ["admin", "security1"]
    assert current["role"] == "admin"


def test_scanner_without_camera_reports_error(client, monkeypatch) -> None:
    monkeypatch.setattr(scanner_worker, "source", "")

    started = client.post("/api/scanner/start", json={"accessType": "exit"}).json()
    stopped = client.post("/api/scanner/stop").json()

    assert started["state"] == "error"
    assert started["error"] == "No camera source configured"
    assert started["accessType"] == "exit"
    assert stopped["state"] == "idle"
    assert stopped["error"] is None


def test_access_log_with_out_of_range_timestamp_is_rejected(client) -> None:
    response = client.post(
        "/api/access-logs",
        json={
            "residentId": "1",
            "residentName": "John Smith",
            "unitNumber": "A-101",
            "accessType": "entry",
            "timestamp": "9999-12-31T23:59:59-05:00",
        },
    )

    assert response.status_code == 422
    assert len(client.get("/api/access-logs").json()) == 2


@pytest.mark.parametrize(
    "raw",
    [
        json.dumps({
            "residentId": "1",
            "unitNumber": "A-101",
            "issuedAt": "2024-01-15T08:00:00Z",
            "validUntil": "9999-12-31T23:59:59-05:00",
        }),
        "[" * 200000,
    ],
)
def test_scan_of_unparseable_credential_is_denied(client, raw: str) -> None:
    response = client.post("/api/scan", json={"qrData": raw})

    assert response.status_code == 403
    assert response.json()["detail"] == "Invalid or expired QR code"
