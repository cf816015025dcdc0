def test_ping(vacation_client):
    assert vacation_client.get("/ping").json() == {"status": "ok"}


def test_destinations_use_camel_case(vacation_client):
    res = vacation_client.get("/api/destinations")
    assert res.status_code == 200
    first = res.json()[0]
    assert {"imageUrl", "packageCount", "priceFrom", "featured"} <= set(first)


def test_unknown_destination_is_404(vacation_client):
    res = vacation_client.get("/api/destinations/dest-atlantis")
    assert res.status_code == 404
    assert res.json()["detail"] == "Destination not found"


def test_package_filters_from_query(vacation_client):
    res = vacation_client.get(
        "/api/packages",
        params={"type": "Luxury", "duration": "1-3 days", "priceMax": 100000},
    )
    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == ["pkg-bali-wellness"]

    res = vacation_client.get("/api/packages", params={"destinationId": "dest-maldives"})
    assert {p["destinationId"] for p in res.json()} == {"dest-maldives"}
    assert len(res.json()) == 2


def test_bad_filter_values_are_400(vacation_client):
    assert vacation_client.get("/api/packages", params={"priceMin": "cheap"}).status_code == 400
    res = vacation_client.get("/api/packages", params={"duration": "forever"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid request data"


def test_search(vacation_client):
    res = vacation_client.get("/api/packages/search", params={"q": "Maldives"})
    assert res.status_code == 200
    assert sorted(p["id"] for p in res.json()) == ["pkg-maldives-dive", "pkg-maldives-villa"]


def test_search_needs_a_query(vacation_client):
    assert vacation_client.get("/api/packages/search").status_code == 400
    assert vacation_client.get("/api/packages/search", params={"q": "   "}).status_code == 400


def test_search_keeps_surrounding_spaces(vacation_client):
    # "Temples & Rice Terraces" ends the title with "Terraces"
    leading = vacation_client.get("/api/packages/search", params={"q": " Terraces"})
    assert [p["id"] for p in leading.json()] == ["pkg-bali-culture"]

    trailing = vacation_client.get("/api/packages/search", params={"q": "Terraces "})
    assert trailing.status_code == 200
    assert trailing.json() == []


def test_get_package(vacation_client):
    res = vacation_client.get("/api/packages/pkg-santorini-sunset")
    assert res.status_code == 200
    body = res.json()
    assert body["maxGuests"] == 2
    assert body["activities"] == ["Wine tasting", "Catamaran sailing"]

    assert vacation_client.get("/api/packages/pkg-missing").status_code == 404


def test_activities(vacation_client):
    res = vacation_client.get("/api/activities")
    assert res.status_code == 200
    assert len(res.json()) == 3


def test_booking_request(vacation_client):
    res = vacation_client.post(
        "/api/bookings",
        json={
            "packageId": "pkg-maldives-villa",
            "firstName": "Ana",
            "lastName": "Lima",
            "email": "ana@example.com",
            "phone": "+55 11 5555 0000",
            "travelDate": "2025-07-01",
            "travelers": 2,
        },
    )
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "pending"
    assert body["packageId"] == "pkg-maldives-villa"
    assert body["id"]
    assert body["createdAt"]


def test_invalid_booking_request_stores_nothing(vacation_client):
    storage = vacation_client.app.state.storage
    bad_bodies = [
        # no email
        {"packageId": "pkg-bali-culture", "firstName": "Ana", "lastName": "Lima", "phone": "1",
         "travelDate": "2025-07-01", "travelers": 2},
        # zero travelers
        {"packageId": "pkg-bali-culture", "firstName": "Ana", "lastName": "Lima", "email": "ana@example.com",
         "phone": "1", "travelDate": "2025-07-01", "travelers": 0},
        # malformed date
        {"packageId": "pkg-bali-culture", "firstName": "Ana", "lastName": "Lima", "email": "ana@example.com",
         "phone": "1", "travelDate": "July 1st", "travelers": 2},
    ]
    for body in bad_bodies:
        res = vacation_client.post("/api/bookings", json=body)
        assert res.status_code == 400
        assert res.json()["errors"]

    assert vacation_client.portal.call(storage.list_bookings) == []


def test_contact(vacation_client):
    res = vacation_client.post(
        "/api/contacts",
        json={"name": "Ana", "email": "ana@example.com", "destination": "Bali", "message": "Family rates?"},
    )
    assert res.status_code == 201
    assert res.json()["destination"] == "Bali"

    res = vacation_client.post("/api/contacts", json={"name": "Ana", "email": "not-an-email", "message": "hi"})
    assert res.status_code == 400


def test_room_routes_are_not_mounted(vacation_client):
    assert vacation_client.get("/api/conference-rooms").status_code == 404
