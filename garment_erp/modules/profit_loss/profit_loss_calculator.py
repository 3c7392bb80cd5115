from typing import Any, Dict, Iterable, List, Mapping


# Monthly overhead is spread over a fixed 30-day month
DAYS_PER_MONTH = 30

TOP_LINES_LIMIT = 5


def _amount(record: Mapping[str, Any], field: str) -> float:
    return float(record.get(field) or 0)


class ProfitLossCalculator:
    """
    Pure arithmetic for the profit & loss statement.

    Handles:
    - Period totals (earnings, expenses, net profit, margin)
    - Day-keyed breakdown across production, cash expense and salary ledgers
    - Line-keyed breakdown of production earnings
    """

    @staticmethod
    def daily_equivalent(monthly_expenses_total: float) -> float:
        return monthly_expenses_total / DAYS_PER_MONTH

    @staticmethod
    def calculate_summary(
        production: Iterable[Mapping[str, Any]],
        salaries: Iterable[Mapping[str, Any]],
        cash_expenses: Iterable[Mapping[str, Any]],
        monthly_expenses: Iterable[Mapping[str, Any]],
    ) -> Dict[str, Any]:
        """
        Net Profit = Earnings - (Daily Salary + Daily Cash Expenses
                                 + Monthly Expenses / 30)

        Examples:
            earnings=1000, salary=200, cash=100, monthly=900
            → daily equivalent 30 → net profit 670
        """
        total_earnings = sum(_amount(p, "net_amount") for p in production)
        total_salary = sum(_amount(s, "total_amount") for s in salaries)
        total_cash = sum(_amount(c, "amount") for c in cash_expenses)
        total_monthly = sum(_amount(m, "amount") for m in monthly_expenses)

        daily_equivalent = ProfitLossCalculator.daily_equivalent(total_monthly)
        total_expenses = daily_equivalent + total_cash + total_salary
        net_profit = total_earnings - total_expenses
        profit_margin = (net_profit / total_earnings * 100) if total_earnings > 0 else 0.0

        return {
            "total_earnings": round(total_earnings, 2),
            "total_expenses": round(total_expenses, 2),
            "net_profit": round(net_profit, 2),
            "profit_margin": round(profit_margin, 2),
            "breakdown": {
                "monthly_expenses": round(total_monthly, 2),
                "daily_equivalent_monthly_expenses": round(daily_equivalent, 2),
                "daily_cash_expenses": round(total_cash, 2),
                "daily_salary": round(total_salary, 2),
            },
        }

    @staticmethod
    def daily_breakdown(
        production: Iterable[Mapping[str, Any]],
        salaries: Iterable[Mapping[str, Any]],
        cash_expenses: Iterable[Mapping[str, Any]],
        monthly_expenses_total: float,
    ) -> List[Dict[str, Any]]:
        """One row per date that has any production, cash expense or salary."""
        daily_equivalent = ProfitLossCalculator.daily_equivalent(monthly_expenses_total)
        days: Dict[str, Dict[str, Any]] = {}

        def day_for(date: str) -> Dict[str, Any]:
            if date not in days:
                days[date] = {
                    "date": date,
                    "earnings": 0.0,
                    "monthly_expenses": daily_equivalent,
                    "daily_cash_expenses": 0.0,
                    "daily_salary": 0.0,
                    "net_profit": 0.0,
                    "production_count": 0,
                    "cash_expense_count": 0,
                    "salary_count": 0,
                }
            return days[date]

        for p in production:
            day = day_for(p["date"])
            day["earnings"] += _amount(p, "net_amount")
            day["production_count"] += 1

        for c in cash_expenses:
            day = day_for(c["date"])
            day["daily_cash_expenses"] += _amount(c, "amount")
            day["cash_expense_count"] += 1

        for s in salaries:
            day = day_for(s["date"])
            day["daily_salary"] += _amount(s, "total_amount")
            day["salary_count"] += 1

        rows = []
        for date in sorted(days):
            day = days[date]
            net = day["earnings"] - day["monthly_expenses"] - day["daily_cash_expenses"] - day["daily_salary"]
            rows.append({
                **day,
                "earnings": round(day["earnings"], 2),
                "monthly_expenses": round(day["monthly_expenses"], 2),
                "daily_cash_expenses": round(day["daily_cash_expenses"], 2),
                "daily_salary": round(day["daily_salary"], 2),
                "net_profit": round(net, 2),
            })
        return rows

    @staticmethod
    def line_breakdown(
        production: Iterable[Mapping[str, Any]],
        monthly_expenses_total: float,
    ) -> List[Dict[str, Any]]:
        """Earnings per line minus the daily overhead share, best line first."""
        daily_equivalent = ProfitLossCalculator.daily_equivalent(monthly_expenses_total)
        sections: Dict[str, Dict[str, Any]] = {}

        for p in production:
            section = p.get("line_no") or "General"
            if section not in sections:
                sections[section] = {
                    "section_id": section,
                    "section_name": section,
                    "earnings": 0.0,
                    "monthly_expenses": daily_equivalent,
                    "production_count": 0,
                }
            sections[section]["earnings"] += _amount(p, "net_amount")
            sections[section]["production_count"] += 1

        rows = [
            {
                **s,
                "earnings": round(s["earnings"], 2),
                "monthly_expenses": round(s["monthly_expenses"], 2),
                "net_profit": round(s["earnings"] - s["monthly_expenses"], 2),
            }
            for s in sections.values()
        ]
        rows.sort(key=lambda r: r["net_profit"], reverse=True)
        return rows

    @staticmethod
    def rank_lines(lines: List[Dict[str, Any]], limit: int = TOP_LINES_LIMIT):
        """(top, worst) lines by net profit; worst list starts with the lowest."""
        ordered = sorted(lines, key=lambda r: r["net_profit"], reverse=True)
        top = ordered[:limit]
        worst = list(reversed(ordered[-limit:])) if ordered else []
        return top, worst
