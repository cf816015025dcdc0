import pytest
from fastapi.testclient import TestClient

from bookinghub.main import create_app
from bookinghub.storage.memory import MemoryRoomStorage

from conftest import booking_payload, make_settings


@pytest.fixture
def busy_client(room_client):
    for body in (
        booking_payload(),
        booking_payload(attendeeCount=12, startTime="14:00", endTime="15:30"),
        booking_payload(roomId=2, attendeeCount=4, startDate="2025-03-11", endDate="2025-03-11",
                        startTime="09:30", endTime="10:30"),
        booking_payload(roomId=3, attendeeCount=5, startDate="2025-04-02", endDate="2025-04-02",
                        startTime="14:00", endTime="16:00"),
    ):
        assert room_client.post("/api/bookings", json=body).status_code == 201

    cancelled = room_client.post("/api/bookings", json=booking_payload(roomId=3, startTime="07:00", endTime="08:00"))
    room_client.delete(f"/api/bookings/{cancelled.json()['id']}")
    return room_client


def test_dashboard_totals_match_room_usage(busy_client):
    dashboard = busy_client.get("/api/analytics/dashboard").json()
    usage = busy_client.get("/api/analytics/room-usage").json()
    summary = dashboard["summary"]

    assert dashboard["roomStats"] == usage
    assert summary["totalBookings"] == sum(s["totalBookings"] for s in usage) == 4
    assert summary["totalHours"] == pytest.approx(sum(s["totalHours"] for s in usage)) == 6.5
    assert summary["totalRevenue"] == sum(s["totalRevenue"] for s in usage)
    assert summary["totalRevenue"] == busy_client.get("/api/analytics/revenue").json()["totalRevenue"]
    assert summary["averageOccupancyRate"] == busy_client.get("/api/analytics/occupancy").json()["occupancyRate"]
    assert dashboard["popularTimes"] == busy_client.get("/api/analytics/popular-times").json()


def test_dashboard_with_date_range(busy_client):
    dashboard = busy_client.get(
        "/api/analytics/dashboard", params={"startDate": "2025-03-01", "endDate": "2025-03-31"}
    ).json()
    assert dashboard["summary"]["totalBookings"] == 3
    # popular times ignore the range
    assert sum(s["bookingCount"] for s in dashboard["popularTimes"]) == 4


def test_room_usage_numbers(busy_client):
    usage = {s["roomName"]: s for s in busy_client.get("/api/analytics/room-usage").json()}

    boardroom = usage["Boardroom A"]
    assert boardroom["totalBookings"] == 2
    assert boardroom["totalHours"] == 3.5
    # 2h + 1.5h at 7500/h
    assert boardroom["totalRevenue"] == 26250
    assert boardroom["utilizationRate"] == 2
    assert boardroom["averageOccupancy"] == 75.0

    assert usage["Huddle Room"]["averageOccupancy"] == 100.0
    assert usage["Training Hall"]["totalBookings"] == 0


def test_revenue_and_occupancy_filters(busy_client):
    april = {"startDate": "2025-04-01", "endDate": "2025-04-30"}
    assert busy_client.get("/api/analytics/revenue", params=april).json() == {"totalRevenue": 20000}
    assert busy_client.get("/api/analytics/occupancy", params={"roomId": 3}).json() == {"occupancyRate": 25.0}
    assert busy_client.get("/api/analytics/occupancy", params={"roomId": 4}).json() == {"occupancyRate": 0.0}


def test_booking_trends(busy_client):
    res = busy_client.get("/api/analytics/booking-trends", params={"startDate": "2025-03-01", "endDate": "2025-03-31"})
    assert res.status_code == 200
    assert res.json() == [
        {"date": "2025-03-10", "bookingCount": 2, "revenue": 26250, "totalHours": 3.5},
        {"date": "2025-03-11", "bookingCount": 1, "revenue": 2500, "totalHours": 1.0},
    ]


def test_booking_trends_need_both_dates(busy_client):
    assert busy_client.get("/api/analytics/booking-trends").status_code == 400
    assert busy_client.get("/api/analytics/booking-trends", params={"startDate": "2025-03-01"}).status_code == 400


def test_popular_times(busy_client):
    slots = busy_client.get("/api/analytics/popular-times").json()
    assert slots == [
        {"hour": 9, "bookingCount": 2, "utilization": 50},
        {"hour": 14, "bookingCount": 2, "utilization": 50},
    ]


def test_half_range_is_rejected(busy_client):
    res = busy_client.get("/api/analytics/room-usage", params={"endDate": "2025-03-31"})
    assert res.status_code == 400


def test_empty_store_reports_zeros(room_client):
    dashboard = room_client.get("/api/analytics/dashboard").json()
    assert dashboard["summary"] == {
        "totalRevenue": 0,
        "totalBookings": 0,
        "totalHours": 0.0,
        "averageOccupancyRate": 0.0,
    }
    assert dashboard["popularTimes"] == []


class BrokenStorage(MemoryRoomStorage):
    async def get_popular_time_slots(self):
        raise RuntimeError("connection reset by peer")


def test_unexpected_errors_are_500_without_details():
    app = create_app(make_settings("rooms"), BrokenStorage(seed=True))
    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/api/analytics/popular-times")
    assert res.status_code == 500
    assert res.json() == {"detail": "Internal server error"}
