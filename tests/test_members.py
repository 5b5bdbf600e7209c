import pytest
from datetime import date
from sqlalchemy.orm import Session

import circulation.services.member as member_service
from circulation.domain.enums import MembershipTier
from circulation.errors import DuplicateResourceError, NotFoundError


# ============================================================================
# SERVICE TESTS
# ============================================================================


def test_register_member_defaults(db: Session):
    member = member_service.register_member(db, email="new@example.com", name="New Reader")
    assert member.tier == MembershipTier.REGULAR
    assert member.checked_out_count == 0
    assert member.member_since == date.today()


def test_register_member_duplicate_email(db: Session, regular_member):
    with pytest.raises(DuplicateResourceError):
        member_service.register_member(db, email=regular_member.email, name="Again")


def test_get_by_email_missing(db: Session):
    with pytest.raises(NotFoundError, match="ghost@example.com"):
        member_service.get_by_email(db, "ghost@example.com")


def test_increment_count(db: Session, regular_member):
    member_service.increment_count(db, regular_member)
    member = member_service.increment_count(db, regular_member)
    assert member.checked_out_count == 2
    assert member_service.get_by_email(db, regular_member.email).checked_out_count == 2


def test_decrement_count(db: Session, regular_member):
    member_service.increment_count(db, regular_member)
    member = member_service.decrement_count(db, regular_member)
    assert member.checked_out_count == 0


def test_decrement_count_floors_at_zero(db: Session, regular_member):
    """Decrementing an empty count is not an error."""
    member = member_service.decrement_count(db, regular_member)
    member = member_service.decrement_count(db, member)
    assert member.checked_out_count == 0


def test_count_members(db: Session, regular_member, premium_member, student_member):
    assert member_service.count_members(db) == 3


# ============================================================================
# API TESTS
# ============================================================================


def test_register_member_endpoint(client):
    response = client.post(
        "/api/v1/members",
        json={"email": "student@uni.example.com", "name": "Sam", "tier": "STUDENT"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "student@uni.example.com"
    assert data["tier"] == "STUDENT"
    assert data["checked_out_count"] == 0


def test_register_member_invalid_email(client):
    response = client.post(
        "/api/v1/members", json={"email": "not-an-email", "name": "Sam"}
    )
    assert response.status_code == 422


def test_register_member_unknown_tier(client):
    response = client.post(
        "/api/v1/members",
        json={"email": "vip@example.com", "name": "Vip", "tier": "GOLD"},
    )
    assert response.status_code == 422


def test_register_member_duplicate_endpoint(client, regular_member):
    response = client.post(
        "/api/v1/members", json={"email": regular_member.email, "name": "Again"}
    )
    assert response.status_code == 409
    assert response.json()["code"] == "DUPLICATE_RESOURCE"


def test_get_member_endpoint(client, premium_member):
    response = client.get(f"/api/v1/members/{premium_member.email}")
    assert response.status_code == 200
    assert response.json()["tier"] == "PREMIUM"


def test_get_member_not_found(client):
    response = client.get("/api/v1/members/ghost@example.com")
    assert response.status_code == 404


def test_get_member_items(client, make_item, regular_member, check_out):
    first = check_out(make_item(), regular_member, date(2026, 3, 10))
    second = check_out(make_item(), regular_member, date(2026, 3, 5))
    make_item()

    response = client.get(f"/api/v1/members/{regular_member.email}/items")
    assert response.status_code == 200
    assert [i["code"] for i in response.json()] == [second.code, first.code]


def test_get_by_email_ignores_case(db: Session, regular_member):
    member = member_service.get_by_email(db, "REGULAR@Example.com")
    assert member.id == regular_member.id


def test_register_member_duplicate_email_different_case(db: Session, regular_member):
    with pytest.raises(DuplicateResourceError):
        member_service.register_member(db, email="Regular@EXAMPLE.com", name="Again")


def test_mixed_case_email_checks_out_as_registered(client, item):
    response = client.post(
        "/api/v1/members", json={"email": "Reader@Example.COM", "name": "Mixed Case"}
    )
    assert response.status_code == 201
    stored_email = response.json()["email"]

    response = client.post(
        "/api/v1/circulation/checkout",
        json={"code": item.code, "member_email": "Reader@Example.COM"},
    )
    assert response.status_code == 200
    assert response.json()["message"].startswith("Item checked out successfully")

    response = client.get("/api/v1/members/reader@example.com")
    assert response.status_code == 200
    assert response.json()["checked_out_count"] == 1

    response = client.get("/api/v1/members/READER@EXAMPLE.COM/items")
    assert [i["code"] for i in response.json()] == [item.code]
    assert response.json()[0]["holder"] == stored_email
