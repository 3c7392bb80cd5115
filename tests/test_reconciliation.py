import unittest
from unittest.mock import patch

from mongo_case import MongoTestCase

from garment_erp.core.db import collections
from garment_erp.core.models.target import Target
from garment_erp.core.schemas.target import TargetCreate, TargetUpdate
from garment_erp.modules.daily_production.daily_production_calculator import TargetAction
from garment_erp.modules.daily_production.daily_production_service import (
    StyleNotFoundError,
    reconcile_safely,
    reconcile_target_production,
    resync_daily_production,
    get_daily_production_summary,
    get_production_trends,
)
from garment_erp.modules.target.target_service import TargetService


KEY = {"date": "2026-10-17", "style_no": "ST-100", "line_no": "L-01"}


def target_payload(hourly_production, line_target=100, in_time="08:00", out_time="09:00", **overrides):
    data = {
        **KEY,
        "in_time": in_time,
        "out_time": out_time,
        "line_target": line_target,
        "hourly_production": hourly_production,
    }
    data.update(overrides)
    return TargetCreate(**data)


class ReconcilerTestCase(MongoTestCase):

    async def report(self, key=KEY):
        return await self.db[collections.DAILY_PRODUCTION_REPORTS].find_one(key)

    async def report_count(self, key=KEY):
        return await self.db[collections.DAILY_PRODUCTION_REPORTS].count_documents(key)

    async def test_create_create_delete_delete_sequence(self):
        await self.add_style(price=2.5, percentage=20)

        target_a = await TargetService.create_target(self.db, target_payload(8))
        self.assertEqual((await self.report())["production_qty"], 8)

        target_b = await TargetService.create_target(
            self.db, target_payload(5, line_target=120, in_time="09:00", out_time="10:00")
        )
        report = await self.report()
        self.assertEqual(report["production_qty"], 13)
        self.assertEqual(report["target_qty"], 120)
        self.assertEqual(report["total_amount"], 32.5)
        self.assertEqual(report["net_amount"], 780.0)

        await TargetService.delete_target(self.db, str(target_a.id))
        report = await self.report()
        self.assertEqual(report["production_qty"], 5)
        self.assertEqual(report["target_qty"], 120)

        await TargetService.delete_target(self.db, str(target_b.id))
        self.assertIsNone(await self.report())
        self.assertEqual(await self.report_count(), 0)

    async def test_zero_production_never_creates_a_row(self):
        await self.add_style()
        await TargetService.create_target(self.db, target_payload(0))
        self.assertEqual(await self.report_count(), 0)

    async def test_update_to_zero_removes_row(self):
        await self.add_style()
        target = await TargetService.create_target(self.db, target_payload(12))
        self.assertEqual((await self.report())["production_qty"], 12)

        await TargetService.update_target(self.db, str(target.id), TargetUpdate(hourly_production=0))
        self.assertIsNone(await self.report())

    async def test_update_resums_instead_of_adding(self):
        await self.add_style()
        target = await TargetService.create_target(self.db, target_payload(10))
        await TargetService.update_target(self.db, str(target.id), TargetUpdate(hourly_production=4))
        await TargetService.update_target(self.db, str(target.id), TargetUpdate(hourly_production=7))
        self.assertEqual((await self.report())["production_qty"], 7)

    async def test_moving_target_to_another_line_reconciles_both_keys(self):
        await self.add_style()
        staying = await TargetService.create_target(self.db, target_payload(6))
        moving = await TargetService.create_target(
            self.db, target_payload(4, in_time="09:00", out_time="10:00")
        )
        self.assertEqual((await self.report())["production_qty"], 10)

        await TargetService.update_target(self.db, str(moving.id), TargetUpdate(line_no="L-02"))

        self.assertEqual((await self.report())["production_qty"], 6)
        new_key = {**KEY, "line_no": "L-02"}
        self.assertEqual((await self.report(new_key))["production_qty"], 4)

        await TargetService.update_target(self.db, str(staying.id), TargetUpdate(line_no="L-02"))
        self.assertIsNone(await self.report())
        self.assertEqual((await self.report(new_key))["production_qty"], 10)

    async def test_missing_style_raises_for_positive_production(self):
        await Target(**target_payload(9).model_dump()).insert()
        with self.assertRaises(StyleNotFoundError):
            await reconcile_target_production(self.db, TargetAction.CREATE, KEY)
        self.assertEqual(await self.report_count(), 0)

    async def test_missing_style_is_ignored_when_production_is_zero(self):
        result = await reconcile_target_production(self.db, TargetAction.DELETE, KEY)
        self.assertIsNone(result)

    async def test_reconcile_safely_swallows_and_logs(self):
        await Target(**target_payload(9).model_dump()).insert()
        with self.assertLogs(
            "garment_erp.modules.daily_production.daily_production_service", level="ERROR"
        ) as logs:
            result = await reconcile_safely(self.db, TargetAction.CREATE, KEY)
        self.assertIsNone(result)
        self.assertTrue(any("Error reconciling" in line for line in logs.output))

    async def test_target_write_survives_reconciliation_failure(self):
        # No style on the production list: the target is still saved
        target = await TargetService.create_target(self.db, target_payload(9))
        self.assertIsNotNone(await Target.get(target.id))
        self.assertEqual(await self.report_count(), 0)

    async def test_unexpected_reconciliation_error_does_not_fail_target_write(self):
        await self.add_style()
        with patch(
            "garment_erp.modules.daily_production.daily_production_service.reconcile_target_production",
            side_effect=RuntimeError("database hiccup"),
        ):
            target = await TargetService.create_target(self.db, target_payload(9))
        self.assertIsNotNone(await Target.get(target.id))

    async def test_bulk_delete_reconciles_each_key_once(self):
        await self.add_style()
        a = await TargetService.create_target(self.db, target_payload(3))
        b = await TargetService.create_target(self.db, target_payload(4, in_time="09:00", out_time="10:00"))
        c = await TargetService.create_target(self.db, target_payload(5, line_no="L-02"))

        result = await TargetService.bulk_delete_targets(self.db, [str(a.id), str(b.id), "not-an-id"])
        self.assertEqual(result["deleted_count"], 2)
        self.assertEqual(result["not_found"], ["not-an-id"])

        self.assertIsNone(await self.report())
        self.assertEqual((await self.report({**KEY, "line_no": "L-02"}))["production_qty"], 5)
        self.assertIsNotNone(await Target.get(c.id))

    async def test_resync_rebuilds_and_removes_rows(self):
        await self.add_style()
        # Targets written behind the reconciler's back
        await Target(**target_payload(8).model_dump()).insert()
        await Target(**target_payload(2, in_time="09:00", out_time="10:00").model_dump()).insert()
        stale_key = {**KEY, "line_no": "L-09"}
        await self.db[collections.DAILY_PRODUCTION_REPORTS].insert_one(
            {**stale_key, "production_qty": 50, "target_qty": 60}
        )

        result = await resync_daily_production(self.db, KEY["date"])

        self.assertEqual(result["keys_processed"], 2)
        self.assertEqual(result["upserted"], 1)
        self.assertEqual(result["removed"], 1)
        self.assertEqual(result["failed"], [])
        self.assertEqual((await self.report())["production_qty"], 10)
        self.assertIsNone(await self.report(stale_key))

    async def test_resync_reports_missing_styles(self):
        await Target(**target_payload(8).model_dump()).insert()
        result = await resync_daily_production(self.db, KEY["date"])
        self.assertEqual(len(result["failed"]), 1)
        self.assertEqual(result["failed"][0]["style_no"], "ST-100")

    async def test_daily_summary_and_trends(self):
        await self.add_style(price=2.0, percentage=10)
        await TargetService.create_target(self.db, target_payload(50, line_target=100))
        await TargetService.create_target(self.db, target_payload(30, line_target=30, date="2026-10-18"))

        daily = await get_daily_production_summary(self.db, KEY["date"])
        self.assertEqual(len(daily["reports"]), 1)
        self.assertEqual(daily["reports"][0]["buyer"], "H&M")
        self.assertEqual(daily["reports"][0]["efficiency"], 50.0)
        self.assertEqual(daily["summary"]["total_production_qty"], 50)
        self.assertEqual(daily["summary"]["total_net_amount"], 1200.0)

        trends = await get_production_trends(self.db, "2026-10-01", "2026-10-31")
        self.assertEqual([t["date"] for t in trends], ["2026-10-17", "2026-10-18"])
        self.assertEqual(trends[1]["total_production"], 30)


if __name__ == "__main__":
    unittest.main()
