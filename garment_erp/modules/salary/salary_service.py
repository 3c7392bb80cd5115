from typing import Any, Dict, List
import logging

from garment_erp.core.models.salary import DailySalary
from garment_erp.core.schemas.salary import DailySalarySubmit, SalarySectionInput

logger = logging.getLogger(__name__)


class SalaryService:

    @staticmethod
    def calculate_amounts(record: SalarySectionInput) -> Dict[str, float]:
        """
        regular  = worker_count × regular_rate
        overtime = overtime_hours × overtime_rate
        """
        regular = record.worker_count * record.regular_rate
        overtime = record.overtime_hours * record.overtime_rate
        return {
            "regular_amount": round(regular, 2),
            "overtime_amount": round(overtime, 2),
            "total_amount": round(regular + overtime, 2),
        }

    @staticmethod
    def summarize(records: List[DailySalary]) -> Dict[str, Any]:
        return {
            "total_workers": sum(r.worker_count for r in records),
            "total_regular_amount": round(sum(r.regular_amount for r in records), 2),
            "total_overtime_amount": round(sum(r.overtime_amount for r in records), 2),
            "total_amount": round(sum(r.total_amount for r in records), 2),
        }

    @staticmethod
    async def get_day(date: str) -> Dict[str, Any]:
        records = await DailySalary.find(DailySalary.date == date).sort("+section").to_list()
        return {"date": date, "records": records, "summary": SalaryService.summarize(records)}

    @staticmethod
    async def submit_day(data: DailySalarySubmit) -> Dict[str, Any]:
        """Replace every section row of the date with the submitted set."""
        deleted = await DailySalary.find(DailySalary.date == data.date).delete()

        records = [
            DailySalary(
                date=data.date,
                **r.model_dump(),
                **SalaryService.calculate_amounts(r),
            )
            for r in data.records
        ]
        await DailySalary.insert_many(records)
        logger.info(
            f"Daily salary for {data.date}: replaced {deleted.deleted_count if deleted else 0} rows "
            f"with {len(records)} sections"
        )
        return await SalaryService.get_day(data.date)

    @staticmethod
    async def delete_day(date: str) -> int:
        result = await DailySalary.find(DailySalary.date == date).delete()
        return result.deleted_count if result else 0
