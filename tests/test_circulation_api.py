from datetime import date, timedelta

from sqlalchemy.orm import Session

import circulation.services.item as item_service
import circulation.services.member as member_service


def test_checkout_and_return_flow(client, db: Session, notifier, item, regular_member):
    """Full checkout and return over HTTP updates persistent state."""
    today = date.today()

    response = client.post(
        "/api/v1/circulation/checkout",
        json={"code": item.code, "member_email": regular_member.email},
    )
    assert response.status_code == 200
    assert response.json()["message"] == (
        f"Item checked out successfully. Due date: {(today + timedelta(days=14)).isoformat()}"
    )

    response = client.get(f"/api/v1/items/{item.code}")
    data = response.json()
    assert data["state"] == "CHECKED_OUT"
    assert data["holder"] == regular_member.email
    assert data["due_date"] == (today + timedelta(days=14)).isoformat()

    response = client.get(f"/api/v1/members/{regular_member.email}")
    assert response.json()["checked_out_count"] == 1

    response = client.post("/api/v1/circulation/return", json={"code": item.code})
    assert response.status_code == 200
    assert response.json()["message"] == "Item returned successfully"

    response = client.get(f"/api/v1/items/{item.code}")
    data = response.json()
    assert data["state"] == "AVAILABLE"
    assert data["holder"] is None
    assert data["due_date"] is None
    assert client.get(f"/api/v1/members/{regular_member.email}").json()["checked_out_count"] == 0

    assert len(notifier.checkouts) == 1
    assert len(notifier.returns) == 1


def test_return_late_over_http(client, db: Session, item, regular_member):
    item_service.mark_checked_out(db, item, regular_member, date.today() - timedelta(days=2))
    member_service.increment_count(db, regular_member)

    response = client.post("/api/v1/circulation/return", json={"code": item.code})

    assert response.status_code == 200
    assert response.json()["message"] == "Item returned. Late fee: $1.00"


def test_checkout_unavailable_is_a_message(client, item, regular_member, premium_member):
    client.post(
        "/api/v1/circulation/checkout",
        json={"code": item.code, "member_email": regular_member.email},
    )

    response = client.post(
        "/api/v1/circulation/checkout",
        json={"code": item.code, "member_email": premium_member.email},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Item is not available"


def test_checkout_limit_is_a_message(client, make_item, regular_member):
    for _ in range(3):
        client.post(
            "/api/v1/circulation/checkout",
            json={"code": make_item().code, "member_email": regular_member.email},
        )

    response = client.post(
        "/api/v1/circulation/checkout",
        json={"code": make_item().code, "member_email": regular_member.email},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Member has reached checkout limit"


def test_checkout_unknown_member_is_404(client, item):
    response = client.post(
        "/api/v1/circulation/checkout",
        json={"code": item.code, "member_email": "ghost@example.com"},
    )
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_return_unknown_item_is_404(client):
    response = client.post("/api/v1/circulation/return", json={"code": "missing"})
    assert response.status_code == 404


def test_return_available_item_is_a_message(client, item):
    response = client.post("/api/v1/circulation/return", json={"code": item.code})
    assert response.status_code == 200
    assert response.json()["message"] == "Item is not checked out"


def test_checkout_requires_code(client, regular_member):
    response = client.post(
        "/api/v1/circulation/checkout", json={"member_email": regular_member.email}
    )
    assert response.status_code == 422


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
