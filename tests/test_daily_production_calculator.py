import unittest

from garment_erp.modules.daily_production.daily_production_calculator import (
    DailyProductionCalculator,
    NET_AMOUNT_CONVERSION_RATE,
)


class SummarizeTargetsTestCase(unittest.TestCase):
    def test_sums_production_and_takes_max_target(self):
        targets = [
            {"hourly_production": 8, "line_target": 100},
            {"hourly_production": 5, "line_target": 120},
            {"hourly_production": 0, "line_target": 90},
        ]
        self.assertEqual(DailyProductionCalculator.summarize_targets(targets), (13, 120))

    def test_empty_key_is_zero(self):
        self.assertEqual(DailyProductionCalculator.summarize_targets([]), (0, 0))

    def test_missing_values_count_as_zero(self):
        targets = [{"hourly_production": None, "line_target": 50}, {}]
        self.assertEqual(DailyProductionCalculator.summarize_targets(targets), (0, 50))


class AmountsTestCase(unittest.TestCase):
    def test_total_and_net_amount(self):
        amounts = DailyProductionCalculator.calculate_amounts(100, 2.5, 20)
        self.assertEqual(amounts["unit_price"], 2.5)
        self.assertEqual(amounts["total_amount"], 250.0)
        # 250 × 20% × 120
        self.assertEqual(amounts["net_amount"], 6000.0)

    def test_conversion_rate_constant(self):
        self.assertEqual(NET_AMOUNT_CONVERSION_RATE, 120)

    def test_zero_percentage_has_no_net_amount(self):
        amounts = DailyProductionCalculator.calculate_amounts(40, 3.0, 0)
        self.assertEqual(amounts["total_amount"], 120.0)
        self.assertEqual(amounts["net_amount"], 0.0)


class EfficiencyAndSummaryTestCase(unittest.TestCase):
    def test_efficiency(self):
        self.assertEqual(DailyProductionCalculator.calculate_efficiency(90, 120), 75.0)
        self.assertEqual(DailyProductionCalculator.calculate_efficiency(10, 0), 0.0)

    def test_summarize_day(self):
        reports = [
            {"target_qty": 100, "production_qty": 80, "total_amount": 200, "net_amount": 4800},
            {"target_qty": 50, "production_qty": 50, "total_amount": 100.5, "net_amount": 1206},
        ]
        summary = DailyProductionCalculator.summarize_day(reports)
        self.assertEqual(summary["total_styles"], 2)
        self.assertEqual(summary["total_target_qty"], 150)
        self.assertEqual(summary["total_production_qty"], 130)
        self.assertEqual(summary["total_amount"], 300.5)
        self.assertEqual(summary["total_net_amount"], 6006.0)
        self.assertEqual(summary["overall_efficiency"], 90.0)

    def test_summarize_empty_day(self):
        summary = DailyProductionCalculator.summarize_day([])
        self.assertEqual(summary["total_styles"], 0)
        self.assertEqual(summary["overall_efficiency"], 0.0)

    def test_group_trends_orders_by_date(self):
        reports = [
            {"date": "2026-10-02", "style_no": "A", "line_no": "L1", "target_qty": 10,
             "production_qty": 5, "total_amount": 10, "net_amount": 100},
            {"date": "2026-10-01", "style_no": "A", "line_no": "L1", "target_qty": 10,
             "production_qty": 10, "total_amount": 20, "net_amount": 200},
            {"date": "2026-10-02", "style_no": "B", "line_no": "L2", "target_qty": 20,
             "production_qty": 15, "total_amount": 30, "net_amount": 300},
        ]
        trends = DailyProductionCalculator.group_trends(reports)
        self.assertEqual([t["date"] for t in trends], ["2026-10-01", "2026-10-02"])
        self.assertEqual(trends[1]["total_production"], 20)
        self.assertEqual(trends[1]["total_net_amount"], 400.0)
        self.assertEqual(len(trends[1]["styles"]), 2)
        self.assertEqual(trends[1]["styles"][0]["efficiency"], 50.0)


if __name__ == "__main__":
    unittest.main()
