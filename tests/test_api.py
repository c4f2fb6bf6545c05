from datetime import time

import pytest

from conftest import (
    DOWNTOWN_RING,
    TUESDAY,
    add_circle_zone,
    add_polygon_zone,
    add_service,
    add_template,
    set_capacity,
)


@pytest.fixture()
def seeded(session_factory):
    db = session_factory()
    add_template(db, 2, [(time(9), time(12)), (time(14), time(17))])
    set_capacity(db, 1, 20)
    service = add_service(db, "89.00", "20.00")
    zone = add_circle_zone(db, 40.0, -3.7, 2000, pricing_type="fixed", fixed_price="15", name="Centro")
    db.commit()
    ids = {"service": service.id, "zone": zone.id}
    db.close()
    return ids


def booking_body(service_id, **kw):
    body = {
        "serviceId": service_id,
        "scheduledDate": TUESDAY.isoformat(),
        "scheduledTime": "14:00",
        "lat": 40.0,
        "lng": -3.7,
        "customerName": "Ana",
        "customerEmail": "Ana@Example.com",
    }
    body.update(kw)
    return body


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_and_fetch_booking(client, seeded):
    r = client.post("/api/v1/public/bookings", json=booking_body(seeded["service"]))
    assert r.status_code == 201
    data = r.json()
    assert data["totalAmount"] == "104.00"
    assert data["zoneId"] == seeded["zone"]
    assert data["bookingStatus"] == "pending"
    assert data["scheduledTime"] == "14:00"

    got = client.get(f"/api/v1/public/bookings/{data['id']}")
    assert got.status_code == 200
    assert got.json()["id"] == data["id"]

    history = client.get(f"/api/v1/public/bookings/{data['id']}/history").json()
    assert [h["statusChange"] for h in history["items"]] == ["created"]


def test_rejections_carry_reason(client, seeded):
    assert client.post("/api/v1/public/bookings", json=booking_body(seeded["service"])).status_code == 201

    full = client.post("/api/v1/public/bookings", json=booking_body(seeded["service"]))
    assert full.status_code == 409
    assert full.json()["reason"] == "SLOT_FULL"

    not_offered = client.post("/api/v1/public/bookings", json=booking_body(seeded["service"], scheduledTime="13:00"))
    assert not_offered.status_code == 409
    assert not_offered.json()["reason"] == "SLOT_NOT_OFFERED"

    missing = client.post("/api/v1/public/bookings", json=booking_body("nope"))
    assert missing.status_code == 404
    assert missing.json()["reason"] == "SERVICE_NOT_FOUND"


def test_unknown_booking_404(client, seeded):
    assert client.get("/api/v1/public/bookings/does-not-exist").status_code == 404


def test_month_availability(client, seeded):
    client.post("/api/v1/public/bookings", json=booking_body(seeded["service"]))
    r = client.get("/api/v1/public/availability", params={"year": 2030, "month": 1, "today": "2030-01-01"})
    assert r.status_code == 200
    data = r.json()
    assert (data["maxPerSlot"], data["maxPerDay"]) == (1, 20)
    assert len(data["days"]) == 31
    day = next(d for d in data["days"] if d["date"] == TUESDAY.isoformat())
    assert [(s["start"], s["booked"], s["available"]) for s in day["slots"]] == [
        ("09:00", 0, True),
        ("14:00", 1, False),
    ]
    assert client.get("/api/v1/public/availability", params={"year": 2030, "month": 13}).status_code == 422


def test_resolve_zone_and_quote(client, seeded, session_factory):
    db = session_factory()
    add_polygon_zone(db, DOWNTOWN_RING, multiplier="1.2", name="Downtown")
    db.commit()
    db.close()

    inside = client.get("/api/v1/public/zones/resolve", params={"lat": 40.0, "lng": -3.7}).json()
    assert inside["zone"]["name"] == "Downtown"
    outside = client.get("/api/v1/public/zones/resolve", params={"lat": 41.0, "lng": -3.7}).json()
    assert outside["zone"] is None

    q = client.post("/api/v1/public/price-quote", json={"serviceId": seeded["service"], "lat": 40.0, "lng": -3.7})
    assert q.status_code == 200
    assert q.json()["total"] == "106.80"
    assert q.json()["source"] == "percentage"
    assert q.json()["reservationPrice"] == "20.00"

    base = client.post("/api/v1/public/price-quote", json={"serviceId": seeded["service"], "lat": 41.0, "lng": -3.7})
    assert base.json()["total"] == "89.00"
    assert base.json()["zone"] is None

    assert client.post("/api/v1/public/price-quote", json={"serviceId": "nope", "lat": 0, "lng": 0}).status_code == 404
