"""
Tests for profile settings.
"""

from barbershop.models import Account, User


def test_read_settings(client, customer, customer_headers):
    r = client.get("/settings", headers=customer_headers)
    assert r.status_code == 200
    assert r.json() == {
        "id": customer.id,
        "name": "Jane",
        "email": "jane@example.com",
        "role": "user",
        "image": None,
        "is_oauth": False,
    }


def test_settings_reports_linked_account(client, session, customer, customer_headers):
    session.add(Account(user_id=customer.id, provider="google", provider_account_id="g-1"))
    session.commit()

    assert client.get("/settings", headers=customer_headers).json()["is_oauth"] is True


def test_update_name_and_avatar(client, session, customer, customer_headers):
    r = client.patch(
        "/settings",
        json={"name": "Jane Doe", "image": "https://cdn.example.com/avatars/jane.png"},
        headers=customer_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"success": "Settings updated successfully!"}

    user = session.get(User, customer.id)
    assert user.name == "Jane Doe"
    assert user.image == "https://cdn.example.com/avatars/jane.png"

    # the session view reads the fresh row
    assert client.get("/auth/session", headers=customer_headers).json()["name"] == "Jane Doe"


def test_clearing_avatar(client, session, customer, customer_headers):
    client.patch("/settings", json={"name": "Jane", "image": "/a.png"}, headers=customer_headers)
    client.patch("/settings", json={"name": "Jane"}, headers=customer_headers)

    assert session.get(User, customer.id).image is None


def test_empty_name_rejected(client, customer_headers):
    r = client.patch("/settings", json={"name": ""}, headers=customer_headers)
    assert r.status_code == 422


def test_settings_require_session(client):
    assert client.get("/settings").status_code == 401
    assert client.patch("/settings", json={"name": "Ghost"}).status_code == 401
