from collections import defaultdict
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Tuple


# USD -> BDT rate baked into the factory's net-value rule
NET_AMOUNT_CONVERSION_RATE = 120


class TargetAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class DailyProductionCalculator:
    """
    Arithmetic for the daily production rollup.

    Handles:
    - Summing hourly production across the targets of one (date, style, line)
    - Production value (total and net amount)
    - Efficiency and day/trend summaries over report rows
    """

    @staticmethod
    def report_key(record: Mapping[str, Any]) -> Dict[str, str]:
        """The (date, style_no, line_no) triple a target or report belongs to."""
        return {
            "date": record["date"],
            "style_no": record["style_no"],
            "line_no": record["line_no"],
        }

    @staticmethod
    def summarize_targets(targets: Iterable[Mapping[str, Any]]) -> Tuple[int, int]:
        """
        Roll a key's targets into (production_qty, target_qty).

        production_qty is the sum of hourly_production; target_qty is the
        largest line_target. An empty set yields (0, 0).

        Examples:
            >>> summarize_targets([{"hourly_production": 8, "line_target": 100},
            ...                    {"hourly_production": 5, "line_target": 120}])
            (13, 120)
        """
        production_qty = 0
        target_qty = 0
        for t in targets:
            production_qty += int(t.get("hourly_production") or 0)
            target_qty = max(target_qty, int(t.get("line_target") or 0))
        return production_qty, target_qty

    @staticmethod
    def calculate_amounts(
        production_qty: int,
        unit_price: float,
        percentage: float,
        conversion_rate: float = NET_AMOUNT_CONVERSION_RATE,
    ) -> Dict[str, float]:
        """
        total_amount = production_qty × unit_price
        net_amount   = total_amount × (percentage / 100) × conversion_rate
        """
        total_amount = production_qty * float(unit_price or 0)
        net_amount = total_amount * (float(percentage or 0) / 100) * conversion_rate
        return {
            "unit_price": float(unit_price or 0),
            "total_amount": round(total_amount, 4),
            "net_amount": round(net_amount, 4),
        }

    @staticmethod
    def calculate_efficiency(production_qty: int, target_qty: int) -> float:
        """Production as a percentage of target; 0 when there is no target."""
        if not target_qty or target_qty <= 0:
            return 0.0
        return round(production_qty / target_qty * 100, 2)

    @staticmethod
    def summarize_day(reports: List[Mapping[str, Any]]) -> Dict[str, Any]:
        """Totals and mean efficiency across one day's report rows."""
        efficiencies = [
            DailyProductionCalculator.calculate_efficiency(
                r.get("production_qty") or 0, r.get("target_qty") or 0
            )
            for r in reports
        ]
        return {
            "total_styles": len(reports),
            "total_target_qty": sum(r.get("target_qty") or 0 for r in reports),
            "total_production_qty": sum(r.get("production_qty") or 0 for r in reports),
            "total_amount": round(sum(float(r.get("total_amount") or 0) for r in reports), 2),
            "total_net_amount": round(sum(float(r.get("net_amount") or 0) for r in reports), 2),
            "overall_efficiency": round(sum(efficiencies) / len(efficiencies), 2) if efficiencies else 0.0,
        }

    @staticmethod
    def group_trends(reports: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """Group report rows by date for trend charts, oldest first."""
        days: Dict[str, Dict[str, Any]] = defaultdict(lambda: {
            "total_target": 0,
            "total_production": 0,
            "total_amount": 0.0,
            "total_net_amount": 0.0,
            "styles": [],
        })

        for r in reports:
            day = days[r["date"]]
            day["total_target"] += r.get("target_qty") or 0
            day["total_production"] += r.get("production_qty") or 0
            day["total_amount"] += float(r.get("total_amount") or 0)
            day["total_net_amount"] += float(r.get("net_amount") or 0)
            day["styles"].append({
                "style_no": r["style_no"],
                "line_no": r["line_no"],
                "target": r.get("target_qty") or 0,
                "production": r.get("production_qty") or 0,
                "efficiency": DailyProductionCalculator.calculate_efficiency(
                    r.get("production_qty") or 0, r.get("target_qty") or 0
                ),
            })

        return [
            {
                "date": date,
                **data,
                "total_amount": round(data["total_amount"], 2),
                "total_net_amount": round(data["total_net_amount"], 2),
            }
            for date, data in sorted(days.items())
        ]
