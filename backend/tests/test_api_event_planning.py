"""
API tests for event types, run-of-show tasks and milestones, event menus,
menu packages and staff assignments.
"""
from datetime import datetime, timedelta

import pytest

PARTY = {"title": "Backyard Hibachi", "client_name": "Miller Family", "adult_count": 20, "child_count": 5}


def _event(client, headers, **extra):
    response = client.post("/api/v1/events", headers=headers, json={**PARTY, **extra})
    assert response.status_code == 201
    return response.json()


def _dish(client, headers, name, price=10.0, **extra):
    response = client.post("/api/v1/menu", headers=headers, json={"name": name, "base_price_per_guest": price, **extra})
    assert response.status_code == 201
    return response.json()


class TestEventTypes:

    def test_crud_and_soft_delete(self, client, admin_headers):
        created = client.post("/api/v1/event-types", headers=admin_headers, json={"name": "Wedding", "base_price": 1500})
        assert created.status_code == 201
        client.post("/api/v1/event-types", headers=admin_headers, json={"name": "Corporate"})

        listing = client.get("/api/v1/event-types", headers=admin_headers).json()
        assert [t["name"] for t in listing["event_types"]] == ["Corporate", "Wedding"]

        type_id = created.json()["id"]
        assert client.delete(f"/api/v1/event-types/{type_id}", headers=admin_headers).status_code == 204
        assert client.get("/api/v1/event-types", headers=admin_headers).json()["total"] == 1
        assert client.get(f"/api/v1/event-types/{type_id}", headers=admin_headers).json()["is_active"] is False

    def test_event_uses_type(self, client, admin_headers):
        wedding = client.post("/api/v1/event-types", headers=admin_headers, json={"name": "Wedding"}).json()
        event = _event(client, admin_headers, event_type_id=wedding["id"])
        assert event["event_type_id"] == wedding["id"]

    def test_unknown_type_rejected(self, client, admin_headers):
        response = client.post("/api/v1/events", headers=admin_headers,
                               json={**PARTY, "event_type_id": "00000000-0000-0000-0000-000000000001"})
        assert response.status_code == 400

    def test_client_cannot_create(self, client, client_headers):
        assert client.post("/api/v1/event-types", headers=client_headers, json={"name": "X"}).status_code == 403


class TestTasksAndMilestones:

    def test_tasks_ordered_by_due_time(self, client, employee_headers):
        event = _event(client, employee_headers)
        url = f"/api/v1/events/{event['id']}/tasks"
        client.post(url, headers=employee_headers, json={"task_name": "Load truck", "due_time": "2024-06-01T15:00:00"})
        client.post(url, headers=employee_headers, json={"task_name": "Thank-you note"})
        client.post(url, headers=employee_headers, json={"task_name": "Marinate", "due_time": "2024-06-01T09:00:00", "priority": "high"})

        tasks = client.get(url, headers=employee_headers).json()
        assert [t["task_name"] for t in tasks] == ["Marinate", "Load truck", "Thank-you note"]
        assert tasks[0]["priority"] == "high"

    def test_complete_and_overdue(self, client, employee_headers):
        event = _event(client, employee_headers)
        url = f"/api/v1/events/{event['id']}/tasks"
        past = (datetime.utcnow() - timedelta(hours=2)).isoformat()
        late = client.post(url, headers=employee_headers, json={"task_name": "Order ice", "due_time": past}).json()
        done = client.post(url, headers=employee_headers, json={"task_name": "Book venue", "due_time": past}).json()

        completed = client.post(f"{url}/{done['id']}/complete", headers=employee_headers).json()
        assert completed["completed_at"] is not None
        again = client.post(f"{url}/{done['id']}/complete", headers=employee_headers).json()
        assert again["completed_at"] == completed["completed_at"]

        overdue = client.get(url, headers=employee_headers, params={"overdue": True}).json()
        assert [t["id"] for t in overdue] == [late["id"]]

    def test_task_staff_must_be_in_organization(self, client, admin_headers):
        event = _event(client, admin_headers)
        chef = client.post("/api/v1/staff", headers=admin_headers, json={"name": "Kenji", "position": "chef"}).json()
        url = f"/api/v1/events/{event['id']}/tasks"

        ok = client.post(url, headers=admin_headers, json={"task_name": "Sharpen knives", "assigned_staff_id": chef["id"]})
        assert ok.status_code == 201
        assert ok.json()["assigned_staff_name"] == "Kenji"

        bad = client.post(url, headers=admin_headers,
                          json={"task_name": "X", "assigned_staff_id": "00000000-0000-0000-0000-000000000001"})
        assert bad.status_code == 400

    def test_update_and_delete_task(self, client, employee_headers):
        event = _event(client, employee_headers)
        url = f"/api/v1/events/{event['id']}/tasks"
        task = client.post(url, headers=employee_headers, json={"task_name": "Prep"}).json()

        updated = client.patch(f"{url}/{task['id']}", headers=employee_headers, json={"task_category": "prep", "estimated_duration": 90})
        assert updated.json()["task_category"] == "prep"
        assert updated.json()["estimated_duration"] == 90

        assert client.delete(f"{url}/{task['id']}", headers=employee_headers).status_code == 204
        assert client.get(url, headers=employee_headers).json() == []

    def test_upcoming_milestones(self, client, employee_headers):
        event = _event(client, employee_headers)
        url = f"/api/v1/events/{event['id']}/milestones"
        soon = (datetime.utcnow() + timedelta(hours=3)).isoformat()
        later = (datetime.utcnow() + timedelta(days=3)).isoformat()
        client.post(url, headers=employee_headers, json={"milestone_name": "Doors open", "scheduled_time": soon})
        client.post(url, headers=employee_headers, json={"milestone_name": "Final count", "scheduled_time": later})

        assert len(client.get(url, headers=employee_headers).json()) == 2
        upcoming = client.get(url, headers=employee_headers, params={"upcoming_hours": 24}).json()
        assert [m["milestone_name"] for m in upcoming] == ["Doors open"]

        done = client.post(f"{url}/{upcoming[0]['id']}/complete", headers=employee_headers)
        assert done.status_code == 200
        assert client.get(url, headers=employee_headers, params={"upcoming_hours": 24}).json() == []

    def test_client_cannot_see_other_events_tasks(self, client, admin_headers, client_headers):
        event = _event(client, admin_headers)
        assert client.get(f"/api/v1/events/{event['id']}/tasks", headers=client_headers).status_code == 404


class TestEventMenu:

    def test_menu_lines_priced_by_guest_count(self, client, employee_headers):
        event = _event(client, employee_headers)
        steak = _dish(client, employee_headers, "Hibachi Steak", 20)
        rice = _dish(client, employee_headers, "Fried Rice", 4)
        url = f"/api/v1/events/{event['id']}/menu-items"

        client.post(url, headers=employee_headers, json={"menu_item_id": steak["id"]})
        line = client.post(url, headers=employee_headers, json={"menu_item_id": rice["id"], "quantity": 2}).json()
        assert line["name"] == "Fried Rice"
        assert line["total_price"] == pytest.approx(200.0)

        menu = client.get(url, headers=employee_headers).json()
        assert menu["guest_count"] == 25
        assert menu["menu_total"] == pytest.approx(700.0)

        override = client.patch(f"{url}/{line['id']}", headers=employee_headers, json={"per_guest_price": 3}).json()
        assert override["effective_price"] == 3
        assert override["total_price"] == pytest.approx(150.0)

        assert client.delete(f"{url}/{line['id']}", headers=employee_headers).status_code == 204
        assert client.get(url, headers=employee_headers).json()["menu_total"] == pytest.approx(500.0)

    def test_exactly_one_source(self, client, employee_headers):
        event = _event(client, employee_headers)
        response = client.post(f"/api/v1/events/{event['id']}/menu-items", headers=employee_headers, json={"quantity": 1})
        assert response.status_code == 422

    def test_minimum_guests_enforced(self, client, employee_headers):
        event = _event(client, employee_headers)
        buffet = _dish(client, employee_headers, "Sushi Bar", 30, min_guests=50)
        response = client.post(f"/api/v1/events/{event['id']}/menu-items", headers=employee_headers,
                               json={"menu_item_id": buffet["id"]})
        assert response.status_code == 400
        assert "50" in response.json()["detail"]

    def test_package_line(self, client, admin_headers):
        event = _event(client, admin_headers)
        package = client.post("/api/v1/packages", headers=admin_headers, json={"name": "Classic", "price_per_guest": 45}).json()
        line = client.post(f"/api/v1/events/{event['id']}/menu-items", headers=admin_headers,
                           json={"package_id": package["id"]}).json()
        assert line["name"] == "Classic"
        assert line["total_price"] == pytest.approx(1125.0)


class TestPackages:

    def test_items_and_dietary_filter(self, client, admin_headers):
        rice = _dish(client, admin_headers, "Vegetable Rice", is_vegetarian=True, is_vegan=True)
        tofu = _dish(client, admin_headers, "Hibachi Tofu", is_vegetarian=True)
        steak = _dish(client, admin_headers, "Hibachi Steak")

        green = client.post("/api/v1/packages", headers=admin_headers, json={"name": "Garden"}).json()
        meat = client.post("/api/v1/packages", headers=admin_headers, json={"name": "Grill"}).json()
        for pkg, dish in ((green, rice), (green, tofu), (meat, rice), (meat, steak)):
            response = client.post(f"/api/v1/packages/{pkg['id']}/items", headers=admin_headers, json={"menu_item_id": dish["id"]})
            assert response.status_code == 201

        vegetarian = client.get("/api/v1/packages", headers=admin_headers, params={"vegetarian": True}).json()
        assert [p["name"] for p in vegetarian["packages"]] == ["Garden"]
        assert client.get("/api/v1/packages", headers=admin_headers, params={"vegan": True}).json()["total"] == 0

        detail = client.get(f"/api/v1/packages/{green['id']}", headers=admin_headers).json()
        assert {i["menu_item"]["name"] for i in detail["items"]} == {"Vegetable Rice", "Hibachi Tofu"}

    def test_duplicate_dish_and_removal(self, client, admin_headers):
        rice = _dish(client, admin_headers, "Fried Rice")
        package = client.post("/api/v1/packages", headers=admin_headers, json={"name": "Basic"}).json()
        url = f"/api/v1/packages/{package['id']}/items"

        item = client.post(url, headers=admin_headers, json={"menu_item_id": rice["id"], "qty_per_guest": 2}).json()
        assert item["qty_per_guest"] == 2
        assert client.post(url, headers=admin_headers, json={"menu_item_id": rice["id"]}).status_code == 409

        assert client.delete(f"{url}/{item['id']}", headers=admin_headers).status_code == 204
        assert client.get(f"/api/v1/packages/{package['id']}", headers=admin_headers).json()["items"] == []

    def test_client_can_view_not_create(self, client, client_headers):
        assert client.get("/api/v1/packages", headers=client_headers).status_code == 200
        assert client.post("/api/v1/packages", headers=client_headers, json={"name": "X"}).status_code == 403


class TestStaffAssignments:

    def _chef(self, client, headers, rate=30):
        return client.post("/api/v1/staff", headers=headers, json={"name": "Kenji", "position": "chef", "hourly_rate": rate}).json()

    def test_assignment_labor_cost(self, client, admin_headers):
        event = _event(client, admin_headers)
        chef = self._chef(client, admin_headers)
        url = f"/api/v1/events/{event['id']}/staff"

        response = client.post(url, headers=admin_headers, json={
            "staff_id": chef["id"], "role_for_event": "lead chef",
            "start_time": "2024-06-01T15:00:00", "end_time": "2024-06-01T21:00:00",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["staff_name"] == "Kenji"
        assert body["effective_rate"] == 30
        assert body["hours"] == pytest.approx(6.0)
        assert body["labor_cost"] == pytest.approx(180.0)

        assert client.post(url, headers=admin_headers, json={"staff_id": chef["id"], "role_for_event": "chef"}).status_code == 409

    def test_rate_override_and_removal(self, client, admin_headers):
        event = _event(client, admin_headers)
        chef = self._chef(client, admin_headers)
        url = f"/api/v1/events/{event['id']}/staff"
        assignment = client.post(url, headers=admin_headers, json={
            "staff_id": chef["id"], "role_for_event": "chef", "hourly_rate": 45,
            "start_time": "2024-06-01T15:00:00", "end_time": "2024-06-01T17:00:00",
        }).json()
        assert assignment["labor_cost"] == pytest.approx(90.0)

        assert client.delete(f"{url}/{assignment['id']}", headers=admin_headers).status_code == 204
        assert client.get(url, headers=admin_headers).json() == []

    def test_inverted_shift_rejected(self, client, admin_headers):
        event = _event(client, admin_headers)
        chef = self._chef(client, admin_headers)
        response = client.post(f"/api/v1/events/{event['id']}/staff", headers=admin_headers, json={
            "staff_id": chef["id"], "role_for_event": "chef",
            "start_time": "2024-06-01T21:00:00", "end_time": "2024-06-01T15:00:00",
        })
        assert response.status_code == 400

    def test_employee_can_view_not_assign(self, client, admin_headers, employee_headers):
        event = _event(client, admin_headers)
        chef = self._chef(client, admin_headers)
        url = f"/api/v1/events/{event['id']}/staff"
        assert client.get(url, headers=employee_headers).status_code == 200
        assert client.post(url, headers=employee_headers, json={"staff_id": chef["id"], "role_for_event": "chef"}).status_code == 403
