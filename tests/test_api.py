"""Tests for the HTTP API."""

from datetime import date

from fastapi.testclient import TestClient

from site_ledger.api.app import create_app
from site_ledger.config import Settings
from site_ledger.domain.attendance import AttendanceTimeRecord
from site_ledger.domain.summaries import AttendanceCostRow, TeaShopDayTotal
from site_ledger.domain.tea_shop import PresentLaborer
from site_ledger.domain.work_units import TimeEntry, TimeSpan
from tests.conftest import (
    InMemoryAttendanceRepository,
    InMemoryAuditRepository,
    InMemorySummaryRepository,
    InMemoryTeaShopRepository,
)

POOL = {
    "tea_total": 50,
    "snack_items": [{"name": "biscuit", "quantity": 3, "unit_rate": 10}],
}
CREW = [
    {"kind": "working", "id": "l1", "name": "Ravi"},
    {"kind": "working", "id": "l2", "name": "Suresh"},
    {"kind": "working", "id": "l3", "name": "Anil"},
    {"kind": "market", "count": 2},
]


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_distribute_tea_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/consumption/distribute",
        json={"target": "tea", "pool": POOL, "recipients": CREW},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["eligible_count"] == 5
    assert [item["tea_share"] for item in data["recipients"]] == [10, 10, 10, 20]
    assert data["recipients"][3]["kind"] == "market"
    assert data["reconciliation"]["unassigned_amount"] == 30


def test_distribute_snacks_then_reconcile(container) -> None:
    client = TestClient(create_app(container))

    tea = client.post(
        "/consumption/distribute",
        json={"target": "tea", "pool": POOL, "recipients": CREW},
    ).json()
    snacks = client.post(
        "/consumption/distribute",
        json={"target": "snacks", "pool": POOL, "recipients": tea["recipients"]},
    ).json()
    response = client.post(
        "/consumption/reconcile",
        json={"pool": POOL, "recipients": snacks["recipients"]},
    )

    assert snacks["recipients"][0]["snacks_breakdown"] == {"biscuit": 1}
    assert response.json() == {
        "assigned_total": 80.0,
        "unassigned_amount": 0.0,
        "is_balanced": True,
    }


def test_distribute_rejects_unknown_recipient_kind(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/consumption/distribute",
        json={"target": "tea", "pool": POOL, "recipients": [{"kind": "guest"}]},
    )

    assert response.status_code == 422


def test_tea_shop_entry_open_and_save(
    container, tea_shop_repository: InMemoryTeaShopRepository
) -> None:
    day = date(2024, 3, 5)
    tea_shop_repository.present[("site-a", day)] = [
        PresentLaborer(laborer_id="l1", name="Ravi")
    ]
    tea_shop_repository.market_counts[("site-a", day)] = 1
    client = TestClient(create_app(container))

    opened = client.get("/sites/site-a/tea-shop/2024-03-05")

    assert opened.status_code == 200
    state = opened.json()
    assert state["entry_id"] is None
    assert [item["kind"] for item in state["recipients"]] == ["working", "market"]

    saved = client.put(
        "/sites/site-a/tea-shop/2024-03-05",
        json={
            "pool": {"tea_total": 20},
            "recipients": [
                {"kind": "working", "id": "l1", "tea_share": 10},
                {"kind": "market", "count": 1, "tea_share": 5},
            ],
            "entered_by": "supervisor",
        },
    )

    assert saved.status_code == 200
    body = saved.json()
    assert body["reconciliation"]["unassigned_amount"] == 5.0
    assert len(body["warnings"]) == 1
    assert tea_shop_repository.entries[("site-a", day)].total_amount == 20.0


def test_unknown_site_is_rejected(container) -> None:
    container.settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        site_ids="site-a,site-b",
    )
    client = TestClient(create_app(container))

    assert client.get("/sites/site-z/tea-shop/2024-03-05").status_code == 404
    assert client.get("/sites/site-b/tea-shop/2024-03-05").status_code == 200


def test_work_unit_endpoints(container) -> None:
    client = TestClient(create_app(container))

    presets = client.get("/work-units").json()
    fallback = client.get("/work-units/0.75").json()
    hours = client.post(
        "/work-units/hours",
        json={"in_time": "22:00", "out_time": "06:00", "unit_value": 1},
    ).json()

    assert [preset["unit_value"] for preset in presets] == [0.5, 1.0, 1.5, 2.0]
    assert presets[0]["lunch_out"] is None
    assert fallback["label"] == "Full Day"
    assert hours == {
        "work_hours": 8.0,
        "break_hours": 0.0,
        "total_hours": 8.0,
        "alignment": "aligned",
    }


def test_hours_rejects_malformed_time(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/work-units/hours", json={"in_time": "9am"})

    assert response.status_code == 422


def test_attendance_endpoints(
    container,
    attendance_repository: InMemoryAttendanceRepository,
    audit_repository: InMemoryAuditRepository,
) -> None:
    attendance_repository.records["att-1"] = AttendanceTimeRecord(
        id="att-1",
        laborer_id="l1",
        date=date(2024, 3, 5),
        daily_rate=600,
        entry=TimeEntry(span=TimeSpan(), day_units=1.0),
    )
    client = TestClient(create_app(container))

    applied = client.post("/attendance/att-1/work-unit", json={"unit_value": 0.5})
    edited = client.put(
        "/attendance/att-1/times",
        json={"in_time": "09:00", "out_time": "11:00", "actor": "mgr"},
    )
    missing = client.post("/attendance/none/work-unit", json={"unit_value": 1})

    assert applied.status_code == 200
    assert applied.json()["daily_earnings"] == 300.0
    assert applied.json()["alignment"] == "aligned"
    assert edited.json()["day_units"] == 0.5
    assert edited.json()["work_hours"] == 2.0
    assert edited.json()["alignment"] == "underwork"
    assert missing.status_code == 404
    assert [event["event_type"] for event in audit_repository.events] == [
        "work_unit_applied",
        "times_updated",
    ]


def test_allocation_endpoints(container) -> None:
    client = TestClient(create_app(container))

    site_group = client.post(
        "/allocations/site-group",
        json={
            "total_cost": 1000,
            "sites": [
                {"site_id": "a", "total_units": 2},
                {"site_id": "b", "total_units": 1},
            ],
        },
    )
    bad_split = client.post(
        "/allocations/labor-groups",
        json={"total_cost": 100, "daily": 50, "contract": 30, "market": 30},
    )
    multi_site = client.post(
        "/allocations/multi-site", json={"total_cost": 500, "primary_percent": 40}
    )

    assert [row["amount"] for row in site_group.json()["allocations"]] == [667, 333]
    assert bad_split.status_code == 422
    assert multi_site.json() == {
        "primary_percent": 40,
        "primary_amount": 200,
        "secondary_amount": 300,
    }


def test_summary_endpoint(
    container, summary_repository: InMemorySummaryRepository
) -> None:
    day = date(2024, 3, 5)
    summary_repository.attendance.append(
        AttendanceCostRow(
            day=day, laborer_type="daily", earnings=600, snacks=20, is_paid=True
        )
    )
    summary_repository.tea_shop.append(
        TeaShopDayTotal(day=day, tea_total=50, snacks_total=30, total=80)
    )
    client = TestClient(create_app(container))

    response = client.get(
        "/sites/site-a/summary", params={"start": "2024-03-01", "end": "2024-03-31"}
    )
    inverted = client.get(
        "/sites/site-a/summary", params={"start": "2024-03-31", "end": "2024-03-01"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["days"][0]["day"] == "2024-03-05"
    assert data["days"][0]["total_expense"] == 620.0
    assert data["totals"]["total_expense"] == 680.0
    assert inverted.status_code == 422


def test_preferences_endpoints(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/preferences/u1").json() == {"show_holidays": True}

    updated = client.put("/preferences/u1", json={"show_holidays": False})

    assert updated.json() == {"show_holidays": False}
    assert client.get("/preferences/u1").json() == {"show_holidays": False}
