import unittest

from mongo_case import MongoTestCase

from garment_erp.core.db import collections
from garment_erp.modules.profit_loss.profit_loss_calculator import ProfitLossCalculator
from garment_erp.modules.profit_loss.profit_loss_service import (
    calculate_profit_loss,
    calculate_monthly_profit_loss,
)


class ProfitLossCalculatorTestCase(unittest.TestCase):
    def test_monthly_example_nets_670(self):
        summary = ProfitLossCalculator.calculate_summary(
            production=[{"net_amount": 600}, {"net_amount": 400}],
            salaries=[{"total_amount": 200}],
            cash_expenses=[{"amount": 60}, {"amount": 40}],
            monthly_expenses=[{"amount": 500}, {"amount": 400}],
        )
        self.assertEqual(summary["total_earnings"], 1000)
        self.assertEqual(summary["breakdown"]["daily_equivalent_monthly_expenses"], 30)
        self.assertEqual(summary["total_expenses"], 330)
        self.assertEqual(summary["net_profit"], 670)
        self.assertEqual(summary["profit_margin"], 67.0)

    def test_no_earnings_has_zero_margin(self):
        summary = ProfitLossCalculator.calculate_summary([], [{"total_amount": 50}], [], [])
        self.assertEqual(summary["net_profit"], -50)
        self.assertEqual(summary["profit_margin"], 0.0)

    def test_daily_breakdown_merges_ledgers_by_date(self):
        rows = ProfitLossCalculator.daily_breakdown(
            production=[
                {"date": "2026-10-02", "net_amount": 300},
                {"date": "2026-10-01", "net_amount": 100},
                {"date": "2026-10-02", "net_amount": 200},
            ],
            salaries=[{"date": "2026-10-01", "total_amount": 40}],
            cash_expenses=[{"date": "2026-10-03", "amount": 15}],
            monthly_expenses_total=300,
        )
        self.assertEqual([r["date"] for r in rows], ["2026-10-01", "2026-10-02", "2026-10-03"])

        day1, day2, day3 = rows
        self.assertEqual(day1["net_profit"], 100 - 10 - 40)
        self.assertEqual(day2["earnings"], 500)
        self.assertEqual(day2["production_count"], 2)
        self.assertEqual(day2["net_profit"], 490)
        self.assertEqual(day3["cash_expense_count"], 1)
        self.assertEqual(day3["net_profit"], -25)

    def test_line_breakdown_sorted_by_net_profit(self):
        lines = ProfitLossCalculator.line_breakdown(
            production=[
                {"line_no": "L-01", "net_amount": 100},
                {"line_no": "L-02", "net_amount": 500},
                {"line_no": None, "net_amount": 50},
                {"line_no": "L-01", "net_amount": 100},
            ],
            monthly_expenses_total=600,
        )
        self.assertEqual([l["section_name"] for l in lines], ["L-02", "L-01", "General"])
        self.assertEqual(lines[0]["net_profit"], 480)
        self.assertEqual(lines[1]["production_count"], 2)

        top, worst = ProfitLossCalculator.rank_lines(lines, limit=2)
        self.assertEqual([l["section_id"] for l in top], ["L-02", "L-01"])
        self.assertEqual([l["section_id"] for l in worst], ["General", "L-01"])


class ProfitLossServiceTestCase(MongoTestCase):

    async def seed_month(self):
        await self.db[collections.DAILY_PRODUCTION_REPORTS].insert_many([
            {"date": "2026-09-05", "style_no": "A", "line_no": "L-01", "net_amount": 700},
            {"date": "2026-09-06", "style_no": "B", "line_no": "L-02", "net_amount": 300},
            # Outside the month
            {"date": "2026-10-01", "style_no": "A", "line_no": "L-01", "net_amount": 9999},
        ])
        await self.db[collections.DAILY_SALARIES].insert_many([
            {"date": "2026-09-05", "section": "Sewing", "total_amount": 120},
            {"date": "2026-09-06", "section": "Finishing", "total_amount": 80},
        ])
        await self.db[collections.CASHBOOK_ENTRIES].insert_many([
            {"date": "2026-09-05", "type": "DEBIT", "category": "Daily Expense", "amount": 100},
            # Not a daily cash expense
            {"date": "2026-09-05", "type": "DEBIT", "category": "Loan Repayment", "amount": 5000},
            {"date": "2026-09-06", "type": "CREDIT", "category": "Daily Expense", "amount": 700},
        ])
        await self.db[collections.MONTHLY_EXPENSES].insert_many([
            {"year": 2026, "month": 9, "category": "Rent", "amount": 600},
            {"year": 2026, "month": 9, "category": "Electricity", "amount": 300},
            {"year": 2026, "month": 8, "category": "Rent", "amount": 600},
        ])

    async def test_month_statement(self):
        await self.seed_month()
        result = await calculate_monthly_profit_loss(self.db, "2026-09")

        self.assertEqual(result["period"], {
            "month": "September 2026",
            "start_date": "2026-09-01",
            "end_date": "2026-09-30",
        })
        summary = result["summary"]
        self.assertEqual(summary["total_earnings"], 1000)
        self.assertEqual(summary["breakdown"]["daily_salary"], 200)
        self.assertEqual(summary["breakdown"]["daily_cash_expenses"], 100)
        self.assertEqual(summary["breakdown"]["monthly_expenses"], 900)
        self.assertEqual(summary["net_profit"], 670)

        self.assertEqual([d["date"] for d in result["daily_breakdown"]], ["2026-09-05", "2026-09-06"])
        self.assertEqual(result["line_breakdown"][0]["section_id"], "L-01")
        self.assertEqual(result["top_performing_lines"][0]["section_id"], "L-01")
        self.assertEqual(result["worst_performing_lines"][0]["section_id"], "L-02")

    async def test_breakdowns_share_unrounded_monthly_total(self):
        await self.db[collections.DAILY_PRODUCTION_REPORTS].insert_one(
            {"date": "2026-09-05", "style_no": "A", "line_no": "L-01", "net_amount": 100}
        )
        # 3.7503 / 30 rounds to 0.13; the rounded 3.75 / 30 would give 0.12
        await self.db[collections.MONTHLY_EXPENSES].insert_one(
            {"year": 2026, "month": 9, "category": "Water", "amount": 3.7503}
        )

        result = await calculate_profit_loss(self.db, "2026-09-01", "2026-09-30")

        self.assertEqual(result["summary"]["breakdown"]["daily_equivalent_monthly_expenses"], 0.13)
        self.assertEqual(result["daily_breakdown"][0]["monthly_expenses"], 0.13)
        self.assertEqual(result["line_breakdown"][0]["monthly_expenses"], 0.13)

    async def test_empty_period(self):
        result = await calculate_profit_loss(self.db, "2026-01-01", "2026-01-31")
        self.assertEqual(result["summary"]["net_profit"], 0)
        self.assertEqual(result["daily_breakdown"], [])
        self.assertEqual(result["line_breakdown"], [])

    async def test_rejects_reversed_range(self):
        with self.assertRaises(ValueError):
            await calculate_profit_loss(self.db, "2026-02-01", "2026-01-01")


if __name__ == "__main__":
    unittest.main()
