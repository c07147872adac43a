"""
Tests for the service catalog and image galleries.
"""

from datetime import time

import pytest

from barbershop.config import settings
from barbershop.models import Booking, Service, ServiceImage


@pytest.fixture
def catalog(session):
    services = [
        Service(name="Classic Haircut", price=25, duration=30, category="haircut"),
        Service(name="Beard Trim", price=15, duration=15, category="beard"),
        Service(name="Cut & Beard", price=35, duration=45, category="combo"),
        Service(name="Retired Perm", price=60, duration=90, category="styling", is_active=False),
    ]
    for s in services:
        session.add(s)
    session.commit()
    for s in services:
        session.refresh(s)
    return services


def _add_images(session, service, urls):
    for i, url in enumerate(urls):
        session.add(ServiceImage(service_id=service.id, url=url, order=i))
    session.commit()


# =============================================================================
# Public catalog
# =============================================================================

def test_list_active_services_newest_first(client, catalog):
    r = client.get("/services")
    assert r.status_code == 200
    assert [s["name"] for s in r.json()] == ["Cut & Beard", "Beard Trim", "Classic Haircut"]


def test_list_includes_inactive_on_request(client, catalog):
    r = client.get("/services", params={"include_inactive": True})
    assert len(r.json()) == 4


def test_filter_by_category(client, catalog):
    r = client.get("/services", params={"category": "beard"})
    assert [s["name"] for s in r.json()] == ["Beard Trim"]


def test_categories(client, catalog):
    assert client.get("/services/categories").json() == ["beard", "combo", "haircut"]


def test_placeholder_image_without_gallery(client, catalog):
    r = client.get(f"/services/{catalog[0].id}")
    assert r.status_code == 200
    assert r.json()["image"] == settings.placeholder_image_url
    assert r.json()["images"] == []


def test_primary_image_is_first_in_order(client, session, catalog):
    service = catalog[0]
    session.add(ServiceImage(service_id=service.id, url="/b.jpg", order=1))
    session.add(ServiceImage(service_id=service.id, url="/a.jpg", order=0))
    session.commit()

    body = client.get(f"/services/{service.id}").json()
    assert body["image"] == "/a.jpg"
    assert [i["url"] for i in body["images"]] == ["/a.jpg", "/b.jpg"]


def test_missing_service(client):
    r = client.get("/services/42")
    assert r.status_code == 404
    assert r.json()["detail"] == "Service not found"


def test_related_services_exclude_self_and_inactive(client, catalog):
    r = client.get(f"/services/{catalog[0].id}/related")
    assert [s["name"] for s in r.json()] == ["Cut & Beard", "Beard Trim"]

    r = client.get(f"/services/{catalog[0].id}/related", params={"limit": 1})
    assert len(r.json()) == 1


# =============================================================================
# Admin management
# =============================================================================

def test_admin_creates_and_updates_service(client, admin_headers):
    payload = {"name": "Skin Fade", "price": 30, "duration": 40, "category": "haircut"}
    r = client.post("/services", json=payload, headers=admin_headers)
    assert r.status_code == 201, r.text
    service_id = r.json()["id"]
    assert r.json()["is_active"] is True

    r = client.put(
        f"/services/{service_id}",
        json={**payload, "price": 32.5, "is_active": False},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["price"] == 32.5
    assert r.json()["is_active"] is False


def test_service_validation(client, admin_headers):
    r = client.post("/services", json={"name": "Free", "price": -1, "duration": 30}, headers=admin_headers)
    assert r.status_code == 422
    r = client.post("/services", json={"name": "Instant", "price": 10, "duration": 0}, headers=admin_headers)
    assert r.status_code == 422


def test_customer_cannot_manage_services(client, customer_headers, catalog):
    payload = {"name": "Skin Fade", "price": 30, "duration": 40}
    assert client.post("/services", json=payload, headers=customer_headers).status_code == 403
    assert client.delete(f"/services/{catalog[0].id}", headers=customer_headers).status_code == 403


def test_delete_service_removes_images(client, session, admin_headers, catalog):
    service = catalog[1]
    _add_images(session, service, ["/x.jpg"])

    r = client.delete(f"/services/{service.id}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["success"] == "Service Beard Trim has been deleted"
    assert client.get(f"/services/{service.id}").status_code == 404
    assert session.get(ServiceImage, 1) is None


def test_booked_service_cannot_be_deleted(client, session, admin_headers, customer, catalog, next_week):
    service = catalog[0]
    session.add(Booking(
        customer_id=customer.id, service_id=service.id, appointment_date=next_week,
        start_time=time(9, 0), end_time=time(9, 30), total_price=25,
    ))
    session.commit()

    r = client.delete(f"/services/{service.id}", headers=admin_headers)
    assert r.status_code == 409


# =============================================================================
# Gallery
# =============================================================================

def test_add_images_appends_in_order(client, admin_headers, catalog):
    service_id = catalog[0].id
    for url in ["/one.jpg", "/two.jpg"]:
        r = client.post(
            f"/services/{service_id}/images",
            json={"url": url, "name": url.strip("/"), "size": 2048},
            headers=admin_headers,
        )
        assert r.status_code == 201

    r = client.get(f"/services/{service_id}/images")
    assert [(i["url"], i["order"]) for i in r.json()] == [("/one.jpg", 0), ("/two.jpg", 1)]


def test_reorder_images(client, session, admin_headers, catalog):
    service = catalog[0]
    _add_images(session, service, ["/a.jpg", "/b.jpg", "/c.jpg"])
    ids = [i["id"] for i in client.get(f"/services/{service.id}/images").json()]

    new_order = [ids[2], ids[0], ids[1]]
    r = client.put(f"/services/{service.id}/images/order", json={"image_ids": new_order}, headers=admin_headers)
    assert r.status_code == 200
    assert [i["url"] for i in r.json()] == ["/c.jpg", "/a.jpg", "/b.jpg"]
    assert client.get(f"/services/{service.id}").json()["image"] == "/c.jpg"


def test_reorder_must_be_a_permutation(client, session, admin_headers, catalog):
    service = catalog[0]
    _add_images(session, service, ["/a.jpg", "/b.jpg"])
    ids = [i["id"] for i in client.get(f"/services/{service.id}/images").json()]

    for bad in ([ids[0]], [ids[0], ids[0]], [ids[0], 999]):
        r = client.put(f"/services/{service.id}/images/order", json={"image_ids": bad}, headers=admin_headers)
        assert r.status_code == 422


def test_delete_image(client, session, admin_headers, catalog):
    first, second = catalog[0], catalog[1]
    _add_images(session, first, ["/a.jpg"])
    image_id = client.get(f"/services/{first.id}/images").json()[0]["id"]

    # image belongs to another service
    assert client.delete(f"/services/{second.id}/images/{image_id}", headers=admin_headers).status_code == 404

    assert client.delete(f"/services/{first.id}/images/{image_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/services/{first.id}/images").json() == []
