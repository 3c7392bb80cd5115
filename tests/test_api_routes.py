import unittest

import httpx
from mongo_case import MongoTestCase

from main import app
from garment_erp.core.auth.deps import get_current_user
from garment_erp.core.db import collections
from garment_erp.core.db.mongodb import get_database
from garment_erp.core.monitoring.prometheus_middleware import http_requests_total
from garment_erp.core.models.user import UserRole
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.user import CreateUserRequest
from garment_erp.core.setting import config
from garment_erp.modules.users.user_service import UserService


API = config.API_V1_STR

TARGET_BODY = {
    "line_no": "L-01",
    "style_no": "ST-100",
    "date": "2026-10-17",
    "in_time": "08:00",
    "out_time": "09:00",
    "line_target": 100,
    "hourly_production": 8,
}


class ApiTestCase(MongoTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        app.dependency_overrides[get_database] = lambda: self.db
        self.http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")

    async def asyncTearDown(self):
        await self.http.aclose()
        app.dependency_overrides.clear()
        await super().asyncTearDown()

    def login_as(self, role: UserRole):
        user = CurrentUser(id="u1", username=f"{role.value.lower()}_user", email="user@example.com", role=role)
        app.dependency_overrides[get_current_user] = lambda: user
        return user


class AuthRoutesTestCase(ApiTestCase):

    async def test_requests_without_session_are_401(self):
        response = await self.http.get(f"{API}/targets")
        self.assertEqual(response.status_code, 401)

    async def test_login_sets_session_cookie(self):
        await UserService.create_user(CreateUserRequest(
            username="karim", email="karim@example.com", password="secret-pass", role=UserRole.MANAGER
        ))

        response = await self.http.post(
            f"{API}/auth/login", data={"username": "karim@example.com", "password": "secret-pass"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn(config.SESSION_COOKIE_NAME, response.cookies)
        token = response.json()["access_token"]

        me = await self.http.get(f"{API}/auth/me")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["username"], "karim")
        self.assertIn("CREATE_TARGET", me.json()["permissions"])

        self.http.cookies.clear()
        bearer = await self.http.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(bearer.status_code, 200)

        await self.http.post(f"{API}/auth/logout")
        self.assertEqual((await self.http.get(f"{API}/auth/me")).status_code, 401)

    async def test_wrong_password_is_401(self):
        await UserService.create_user(CreateUserRequest(
            username="karim", email="karim@example.com", password="secret-pass"
        ))
        response = await self.http.post(f"{API}/auth/login", data={"username": "karim", "password": "nope-nope"})
        self.assertEqual(response.status_code, 401)

    async def test_disabled_account_is_403(self):
        user = await UserService.create_user(CreateUserRequest(
            username="karim", email="karim@example.com", password="secret-pass"
        ))
        user.is_active = False
        await user.save()
        response = await self.http.post(f"{API}/auth/login", data={"username": "karim", "password": "secret-pass"})
        self.assertEqual(response.status_code, 403)

    async def test_unauthenticated_request_is_counted_by_metrics_middleware(self):
        response = await self.http.get(f"{API}/profit-loss")
        self.assertEqual(response.status_code, 401)

        statuses = [
            sample.labels["status"]
            for metric in http_requests_total.collect()
            for sample in metric.samples
            if sample.name == "http_requests_total" and sample.labels["method"] == "GET"
        ]
        self.assertIn("401", statuses)


class TargetRoutesTestCase(ApiTestCase):

    async def test_create_target_builds_report(self):
        self.login_as(UserRole.PRODUCTION_MANAGER)
        await self.add_style(style_no="ST-100", price=2.5, percentage=20)

        response = await self.http.post(f"{API}/targets", json=TARGET_BODY)
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()["id"])

        reports = await self.http.get(f"{API}/daily-production", params={"date": "2026-10-17"})
        self.assertEqual(reports.status_code, 200)
        self.assertEqual(len(reports.json()), 1)
        self.assertEqual(reports.json()[0]["production_qty"], 8)
        self.assertEqual(reports.json()[0]["net_amount"], 480.0)

    async def test_target_saved_when_reconciliation_fails(self):
        self.login_as(UserRole.PRODUCTION_MANAGER)
        # Style ST-100 is not on the production list
        response = await self.http.post(f"{API}/targets", json=TARGET_BODY)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(await self.db[collections.TARGETS].count_documents({}), 1)
        self.assertEqual(await self.db[collections.DAILY_PRODUCTION_REPORTS].count_documents({}), 0)

    async def test_missing_fields_are_400(self):
        self.login_as(UserRole.PRODUCTION_MANAGER)
        body = {k: v for k, v in TARGET_BODY.items() if k != "line_no"}
        response = await self.http.post(f"{API}/targets", json=body)
        self.assertEqual(response.status_code, 400)
        self.assertIn("line_no", response.json()["detail"])

    async def test_invalid_numbers_are_400(self):
        self.login_as(UserRole.PRODUCTION_MANAGER)
        response = await self.http.post(f"{API}/targets", json={**TARGET_BODY, "line_target": 0})
        self.assertEqual(response.status_code, 400)
        response = await self.http.post(f"{API}/targets", json={**TARGET_BODY, "hourly_production": -1})
        self.assertEqual(response.status_code, 400)

    async def test_role_without_permission_is_403(self):
        self.login_as(UserRole.CASHBOOK_MANAGER)
        response = await self.http.post(f"{API}/targets", json=TARGET_BODY)
        self.assertEqual(response.status_code, 403)

    async def test_production_manager_cannot_delete(self):
        self.login_as(UserRole.PRODUCTION_MANAGER)
        created = await self.http.post(f"{API}/targets", json=TARGET_BODY)
        response = await self.http.delete(f"{API}/targets/{created.json()['id']}")
        self.assertEqual(response.status_code, 403)

    async def test_delete_unknown_target_is_404(self):
        self.login_as(UserRole.ADMIN)
        response = await self.http.delete(f"{API}/targets/652f00000000000000000000")
        self.assertEqual(response.status_code, 404)

    async def test_resync_requires_manage_system(self):
        self.login_as(UserRole.ADMIN)
        response = await self.http.post(f"{API}/daily-production/resync", json={"date": "2026-10-17"})
        self.assertEqual(response.status_code, 403)

        self.login_as(UserRole.SUPER_ADMIN)
        response = await self.http.post(f"{API}/daily-production/resync", json={"date": "2026-10-17"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["keys_processed"], 0)


class ResourceRoutesTestCase(ApiTestCase):

    async def test_duplicate_style_is_409(self):
        self.login_as(UserRole.ADMIN)
        body = {"style_no": "ST-1", "buyer": "Zara", "item": "Tee", "total_qty": 100, "price": 1.5, "percentage": 10}
        self.assertEqual((await self.http.post(f"{API}/production-list", json=body)).status_code, 201)
        self.assertEqual((await self.http.post(f"{API}/production-list", json=body)).status_code, 409)

        listing = await self.http.get(f"{API}/production-list")
        self.assertEqual(listing.status_code, 200)
        self.assertEqual([i["style_no"] for i in listing.json()], ["ST-1"])

    async def test_line_can_only_hold_one_open_assignment(self):
        self.login_as(UserRole.ADMIN)
        await self.add_style(style_no="ST-1")
        await self.add_style(style_no="ST-2")
        await self.http.post(f"{API}/lines", json={"code": "L-01", "name": "Line 1"})

        first = await self.http.post(
            f"{API}/line-assignments", json={"line_code": "L-01", "style_no": "ST-1", "start_date": "2026-10-01"}
        )
        self.assertEqual(first.status_code, 201)

        second = await self.http.post(
            f"{API}/line-assignments", json={"line_code": "L-01", "style_no": "ST-2", "start_date": "2026-10-05"}
        )
        self.assertEqual(second.status_code, 409)

        closed = await self.http.post(
            f"{API}/line-assignments/{first.json()['id']}/close", json={"end_date": "2026-10-04"}
        )
        self.assertEqual(closed.status_code, 200)

        third = await self.http.post(
            f"{API}/line-assignments", json={"line_code": "L-01", "style_no": "ST-2", "start_date": "2026-10-05"}
        )
        self.assertEqual(third.status_code, 201)

    async def test_profit_loss_endpoint(self):
        self.login_as(UserRole.REPORT_VIEWER)
        await self.db[collections.DAILY_PRODUCTION_REPORTS].insert_one(
            {"date": "2026-09-05", "style_no": "A", "line_no": "L-01", "net_amount": 1000}
        )
        await self.db[collections.DAILY_SALARIES].insert_one({"date": "2026-09-05", "section": "Sewing", "total_amount": 200})
        await self.db[collections.CASHBOOK_ENTRIES].insert_one(
            {"date": "2026-09-05", "type": "DEBIT", "category": "Daily Expense", "amount": 100}
        )
        await self.db[collections.MONTHLY_EXPENSES].insert_one({"year": 2026, "month": 9, "category": "Rent", "amount": 900})

        response = await self.http.get(f"{API}/profit-loss", params={"month": "2026-09"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["summary"]["net_profit"], 670)

        bad = await self.http.get(f"{API}/profit-loss", params={"month": "2026-13"})
        self.assertEqual(bad.status_code, 400)

        half = await self.http.get(f"{API}/profit-loss", params={"start_date": "2026-09-01"})
        self.assertEqual(half.status_code, 400)

    async def test_plain_user_cannot_read_cashbook(self):
        self.login_as(UserRole.USER)
        self.assertEqual((await self.http.get(f"{API}/cashbook")).status_code, 403)

    async def test_super_admin_cannot_be_deleted(self):
        self.login_as(UserRole.SUPER_ADMIN)
        admin = await UserService.create_user(CreateUserRequest(
            username="root", email="root@example.com", password="secret-pass", role=UserRole.SUPER_ADMIN
        ))
        response = await self.http.delete(f"{API}/admin/users/{admin.id}")
        self.assertEqual(response.status_code, 403)


if __name__ == "__main__":
    unittest.main()
