import random
import unittest
import uuid

from fastapi.testclient import TestClient

from carwash.main import app


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        app.state.cache.set_online(True)
        app.state.cache.clear()
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()

    def _unique_year(self) -> int:
        # Reports read the whole table, so each test works in its own year.
        return random.randint(2100, 9000)

    def _create(self, path: str, payload: dict) -> dict:
        response = self.client.post(path, json=payload)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def _employee(self, name: str = "Sergei") -> dict:
        return self._create(
            "/api/users",
            {
                "email": f"emp_{uuid.uuid4().hex[:8]}@example.com",
                "name": name,
                "surname": "Kozlov",
                "role": "employee",
                "password": "secret123",
            },
        )

    def _client_with_vehicle(self) -> tuple:
        client = self._create(
            "/api/clients",
            {"name": "Alexey", "surname": "Smirnov", "phone": "+375 25 123-45-67"},
        )
        vehicle = self._create(
            "/api/vehicles",
            {
                "clientId": client["id"],
                "make": "Toyota",
                "model": "Camry",
                "year": 2020,
                "licensePlate": "1234 AB-7",
            },
        )
        return client, vehicle

    def _appointment(self, client, vehicle, date, status="completed", price=100.0, user_id=None) -> dict:
        return self._create(
            "/api/appointments",
            {
                "clientId": client["id"],
                "vehicleId": vehicle["id"],
                "userId": user_id,
                "date": date,
                "startTime": "10:00",
                "status": status,
                "totalPrice": price,
            },
        )


class HealthTests(ApiTestCase):
    def test_health_and_readiness_endpoints(self) -> None:
        health = self.client.get("/healthz")
        readiness = self.client.get("/readyz")
        self.assertEqual(health.status_code, 200)
        self.assertEqual(health.json().get("status"), "ok")
        self.assertEqual(readiness.status_code, 200)
        self.assertEqual(readiness.json().get("status"), "ready")

    def test_request_id_header_is_present(self) -> None:
        response = self.client.get("/healthz")
        self.assertIn("X-Request-ID", response.headers)

        echoed = self.client.get("/healthz", headers={"X-Request-ID": "abc-123"})
        self.assertEqual(echoed.headers.get("X-Request-ID"), "abc-123")


class UserApiTests(ApiTestCase):
    def test_passwords_never_leave_the_api(self) -> None:
        user = self._employee()
        self.assertNotIn("password", user)

        listed = self.client.get("/api/users").json()
        self.assertTrue(all("password" not in u for u in listed))
        single = self.client.get(f"/api/users/{user['id']}").json()
        self.assertNotIn("password", single)

    def test_duplicate_email_is_rejected(self) -> None:
        user = self._employee()
        response = self.client.post(
            "/api/users",
            json={
                "email": user["email"],
                "name": "Other",
                "surname": "Person",
                "password": "secret123",
            },
        )
        self.assertEqual(response.status_code, 409)

    def test_login_checks_hashed_password(self) -> None:
        user = self._employee()
        ok = self.client.post("/api/auth/login", json={"email": user["email"], "password": "secret123"})
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["user"]["id"], user["id"])
        self.assertNotIn("password", ok.json()["user"])

        bad = self.client.post("/api/auth/login", json={"email": user["email"], "password": "nope"})
        self.assertEqual(bad.status_code, 401)

    def test_invalid_body_returns_readable_400(self) -> None:
        response = self.client.post("/api/users", json={"email": "not-an-email", "name": "A"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("email", response.json()["detail"])


class CrudApiTests(ApiTestCase):
    def test_client_crud_round(self) -> None:
        client, _ = self._client_with_vehicle()

        replaced = self.client.put(
            f"/api/clients/{client['id']}",
            json={"name": "Alex", "surname": "Smirnov", "phone": "+375 25 000-00-00"},
        )
        self.assertEqual(replaced.status_code, 200)
        self.assertEqual(replaced.json()["name"], "Alex")
        self.assertIsNone(replaced.json()["email"])

        missing = self.client.get("/api/clients/999999")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["detail"], "Client not found")

    def test_deleting_client_does_not_cascade(self) -> None:
        client, vehicle = self._client_with_vehicle()
        appointment = self._appointment(client, vehicle, "2026-03-05", status="scheduled")

        deleted = self.client.delete(f"/api/clients/{client['id']}")
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json()["message"], "Client deleted")

        self.assertEqual(self.client.get(f"/api/clients/{client['id']}").status_code, 404)
        self.assertEqual(self.client.get(f"/api/vehicles/{vehicle['id']}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/appointments/{appointment['id']}").status_code, 200)
        orphans = self.client.get(f"/api/clients/{client['id']}/vehicles").json()
        self.assertEqual([v["id"] for v in orphans], [vehicle["id"]])

    def test_service_active_filter(self) -> None:
        active = self._create("/api/services", {"name": "Wash", "price": 900, "durationMinutes": 30})
        inactive = self._create(
            "/api/services",
            {"name": "Old polish", "price": 3500, "durationMinutes": 180, "active": False},
        )
        ids = [s["id"] for s in self.client.get("/api/services", params={"active": "true"}).json()]
        self.assertIn(active["id"], ids)
        self.assertNotIn(inactive["id"], ids)

    def test_shift_filters_and_lifecycle(self) -> None:
        employee = self._employee()
        date = f"{self._unique_year()}-04-10"
        shift = self._create(
            "/api/shifts",
            {
                "userId": employee["id"],
                "date": date,
                "startTime": "08:00",
                "endTime": "20:00",
                "earnings": 80,
            },
        )
        self.assertEqual(shift["status"], "scheduled")

        by_date = self.client.get("/api/shifts", params={"date": date}).json()
        self.assertEqual([s["id"] for s in by_date], [shift["id"]])

        body = dict(shift, status="completed")
        self.assertEqual(self.client.put(f"/api/shifts/{shift['id']}", json=body).status_code, 200)
        back = self.client.put(f"/api/shifts/{shift['id']}", json=dict(shift, status="active"))
        self.assertEqual(back.status_code, 409)


class AppointmentApiTests(ApiTestCase):
    def test_total_price_is_derived_from_booked_services(self) -> None:
        client, vehicle = self._client_with_vehicle()
        wash = self._create("/api/services", {"name": "Wash", "price": 900, "durationMinutes": 30})
        polish = self._create("/api/services", {"name": "Polish", "price": 3500, "durationMinutes": 180})

        appointment = self._create(
            "/api/appointments",
            {
                "clientId": client["id"],
                "vehicleId": vehicle["id"],
                "date": "2026-06-01",
                "startTime": "09:00",
                "serviceIds": [wash["id"], polish["id"]],
            },
        )
        self.assertEqual(appointment["totalPrice"], 4400)
        self.assertEqual(appointment["status"], "scheduled")

        booked = self.client.get(f"/api/appointments/{appointment['id']}/services").json()
        self.assertEqual(sorted(s["price"] for s in booked), [900, 3500])

    def test_explicit_total_price_wins(self) -> None:
        client, vehicle = self._client_with_vehicle()
        wash = self._create("/api/services", {"name": "Wash", "price": 900, "durationMinutes": 30})
        appointment = self._create(
            "/api/appointments",
            {
                "clientId": client["id"],
                "vehicleId": vehicle["id"],
                "date": "2026-06-02",
                "startTime": "09:00",
                "totalPrice": 750,
                "serviceIds": [wash["id"]],
            },
        )
        self.assertEqual(appointment["totalPrice"], 750)

    def test_unknown_service_is_not_found(self) -> None:
        client, vehicle = self._client_with_vehicle()
        response = self.client.post(
            "/api/appointments",
            json={
                "clientId": client["id"],
                "vehicleId": vehicle["id"],
                "date": "2026-06-03",
                "startTime": "09:00",
                "serviceIds": [999999],
            },
        )
        self.assertEqual(response.status_code, 404)

    def test_status_transitions_are_enforced(self) -> None:
        client, vehicle = self._client_with_vehicle()
        appointment = self._appointment(client, vehicle, "2026-06-04", status="scheduled")
        url = f"/api/appointments/{appointment['id']}"

        skipped = self.client.put(url, json=dict(appointment, status="completed"))
        self.assertEqual(skipped.status_code, 409)

        for status in ("confirmed", "in_progress", "completed"):
            response = self.client.put(url, json=dict(appointment, status=status))
            self.assertEqual(response.status_code, 200, response.text)
            self.assertEqual(response.json()["status"], status)

        reopened = self.client.put(url, json=dict(appointment, status="scheduled"))
        self.assertEqual(reopened.status_code, 409)

    def test_unknown_status_and_bad_date_are_400(self) -> None:
        client, vehicle = self._client_with_vehicle()
        payload = {
            "clientId": client["id"],
            "vehicleId": vehicle["id"],
            "date": "2026-06-05",
            "startTime": "09:00",
            "totalPrice": 10,
        }
        self.assertEqual(
            self.client.post("/api/appointments", json=dict(payload, status="done")).status_code,
            400,
        )
        self.assertEqual(
            self.client.post("/api/appointments", json=dict(payload, date="05.06.2026")).status_code,
            400,
        )

    def test_unpadded_dates_are_rejected(self) -> None:
        client, vehicle = self._client_with_vehicle()
        payload = {
            "clientId": client["id"],
            "vehicleId": vehicle["id"],
            "date": "2024-1-5",
            "startTime": "09:00",
            "status": "completed",
            "totalPrice": 100,
        }
        response = self.client.post("/api/appointments", json=payload)
        self.assertEqual(response.status_code, 400)
        self.assertIn("YYYY-MM-DD", response.json()["detail"])

        unpadded_time = self.client.post(
            "/api/appointments", json=dict(payload, date="2024-01-05", startTime="9:00")
        )
        self.assertEqual(unpadded_time.status_code, 400)

        for params in ({"date": "2024-1-5"}, {"startDate": "2024-1-1", "endDate": "2024-01-31"}):
            self.assertEqual(self.client.get("/api/appointments", params=params).status_code, 400)
            self.assertEqual(self.client.get("/api/shifts", params=params).status_code, 400)

    def test_list_filters(self) -> None:
        client, vehicle = self._client_with_vehicle()
        year = self._unique_year()
        inside = self._appointment(client, vehicle, f"{year}-01-02")
        outside = self._appointment(client, vehicle, f"{year}-02-02")

        ranged = self.client.get(
            "/api/appointments",
            params={"startDate": f"{year}-01-01", "endDate": f"{year}-01-31"},
        ).json()
        self.assertEqual([a["id"] for a in ranged], [inside["id"]])

        by_client = self.client.get("/api/appointments", params={"clientId": client["id"]}).json()
        self.assertEqual(sorted(a["id"] for a in by_client), sorted([inside["id"], outside["id"]]))


class NotificationApiTests(ApiTestCase):
    def test_mark_read_and_read_all(self) -> None:
        user = self._employee()
        first = self._create(
            "/api/notifications",
            {"userId": user["id"], "title": "New appointment", "message": "10:00 Toyota Camry"},
        )
        self._create(
            "/api/notifications",
            {"userId": user["id"], "title": "Shift", "message": "Shift starts at 08:00"},
        )
        self.assertFalse(first["read"])
        self.assertEqual(first["type"], "info")

        marked = self.client.put(f"/api/notifications/{first['id']}/read")
        self.assertEqual(marked.status_code, 200)
        self.assertTrue(marked.json()["read"])

        unread = self.client.get("/api/notifications", params={"userId": user["id"], "unread": "true"})
        self.assertEqual(len(unread.json()), 1)

        read_all = self.client.put("/api/notifications/read-all", json={"userId": user["id"]})
        self.assertEqual(read_all.status_code, 200)
        remaining = self.client.get(
            "/api/notifications", params={"userId": user["id"], "unread": "true"}
        ).json()
        self.assertEqual(remaining, [])

    def test_read_all_requires_user(self) -> None:
        response = self.client.put("/api/notifications/read-all", json={})
        self.assertEqual(response.status_code, 400)

    def test_unknown_notification_is_404(self) -> None:
        self.assertEqual(self.client.put("/api/notifications/999999/read").status_code, 404)


class ReportApiTests(ApiTestCase):
    def test_daily_report_counts_only_completed_revenue(self) -> None:
        employee = self._employee()
        client, vehicle = self._client_with_vehicle()
        date = f"{self._unique_year()}-05-05"
        self._appointment(client, vehicle, date, "completed", 900, user_id=employee["id"])
        self._appointment(client, vehicle, date, "cancelled", 5000, user_id=employee["id"])
        self._create(
            "/api/shifts",
            {
                "userId": employee["id"],
                "date": date,
                "startTime": "08:00",
                "endTime": "20:00",
                "status": "active",
                "earnings": 85,
            },
        )

        response = self.client.get("/api/reports/daily", params={"date": date})
        self.assertEqual(response.status_code, 200)
        report = response.json()
        self.assertEqual(report["totalAppointments"], 2)
        self.assertEqual(report["completedAppointments"], 1)
        self.assertEqual(report["totalRevenue"], 900)
        mine = [e for e in report["employees"] if e["userId"] == employee["id"]]
        self.assertEqual(len(mine), 1)
        self.assertEqual(mine[0]["earnings"], 85)
        self.assertEqual(mine[0]["totalAppointments"], 2)
        self.assertEqual(mine[0]["completedAppointments"], 1)

    def test_weekly_report_shape(self) -> None:
        client, vehicle = self._client_with_vehicle()
        year = self._unique_year()
        self._appointment(client, vehicle, f"{year}-01-01", "completed", 100)
        self._appointment(client, vehicle, f"{year}-01-07", "completed", 250)
        self._appointment(client, vehicle, f"{year}-01-08", "completed", 999)

        report = self.client.get("/api/reports/weekly", params={"startDate": f"{year}-01-01"}).json()
        self.assertEqual(report["endDate"], f"{year}-01-07")
        self.assertEqual(len(report["dailyReports"]), 7)
        self.assertEqual(report["totalRevenue"], 350)
        self.assertEqual(report["totalRevenue"], sum(d["totalRevenue"] for d in report["dailyReports"]))

    def test_monthly_report_for_leap_february(self) -> None:
        response = self.client.get("/api/reports/monthly", params={"month": 2, "year": 2024})
        self.assertEqual(response.status_code, 200)
        report = response.json()
        self.assertEqual(len(report["dailyReports"]), 29)
        self.assertEqual((report["month"], report["year"]), (2, 2024))

    def test_employee_report_without_shifts(self) -> None:
        employee = self._employee()
        year = self._unique_year()
        response = self.client.get(
            f"/api/reports/employee/{employee['id']}",
            params={"startDate": f"{year}-03-01", "endDate": f"{year}-03-03"},
        )
        self.assertEqual(response.status_code, 200)
        report = response.json()
        self.assertEqual(report["employee"]["id"], employee["id"])
        self.assertEqual(len(report["dailyData"]), 3)
        self.assertTrue(all(day["earnings"] == 0 for day in report["dailyData"]))
        self.assertEqual(report["totalEarnings"], 0)

    def test_missing_parameters_are_rejected(self) -> None:
        employee = self._employee()
        checks = [
            ("/api/reports/daily", {}),
            ("/api/reports/weekly", {}),
            ("/api/reports/monthly", {"month": 2}),
            ("/api/reports/monthly", {"month": 14, "year": 2024}),
            (f"/api/reports/employee/{employee['id']}", {"startDate": "2026-01-01"}),
        ]
        for path, params in checks:
            response = self.client.get(path, params=params)
            self.assertEqual(response.status_code, 400, path)
            self.assertTrue(response.json()["detail"])

    def test_unpadded_and_out_of_range_dates_are_400(self) -> None:
        checks = [
            ("/api/reports/daily", {"date": "2024-1-5"}),
            ("/api/reports/weekly", {"startDate": "2024-1-1"}),
            ("/api/reports/weekly", {"startDate": "9999-12-30"}),
        ]
        for path, params in checks:
            response = self.client.get(path, params=params)
            self.assertEqual(response.status_code, 400, params)
            self.assertTrue(response.json()["detail"])

    def test_unknown_employee_is_404(self) -> None:
        response = self.client.get(
            "/api/reports/employee/999999",
            params={"startDate": "2026-01-01", "endDate": "2026-01-02"},
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["detail"], "Employee not found")


class SyncApiTests(ApiTestCase):
    def tearDown(self) -> None:
        app.state.cache.set_online(True)
        super().tearDown()

    def test_offline_mode_and_reconnect(self) -> None:
        self.client.get("/api/clients")
        status = self.client.get("/api/sync/status").json()
        self.assertEqual(status["status"], "synced")
        self.assertIn("clients", status["keys"])

        offline = self.client.post("/api/sync/online", json={"online": False}).json()
        self.assertEqual(offline["status"], "offline")
        self.assertFalse(offline["online"])

        self.assertEqual(self.client.get("/api/clients").status_code, 200)
        blocked = self.client.post(
            "/api/clients",
            json={"name": "Maria", "surname": "Ivanova", "phone": "+375 33 987-65-43"},
        )
        self.assertEqual(blocked.status_code, 503)

        online = self.client.post("/api/sync/online", json={"online": True}).json()
        self.assertTrue(online["online"])
        self.assertEqual(online["status"], "synced")
        self.assertIn("clients", online["keys"])


if __name__ == "__main__":
    unittest.main()
