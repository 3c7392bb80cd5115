from typing import List, Optional
import logging

from fastapi import HTTPException, status

from garment_erp.core.models.expense import MonthlyExpense
from garment_erp.core.schemas.expense import MonthlyExpenseCreate, MonthlyExpenseUpdate
from garment_erp.shared.object_id import to_object_id
from garment_erp.shared.timezone import get_local_now

logger = logging.getLogger(__name__)


class MonthlyExpenseService:

    @staticmethod
    async def _ensure_unique(year: int, month: int, category: str, exclude_id=None):
        existing = await MonthlyExpense.find_one(
            {"year": year, "month": month, "category": category}
        )
        if existing and existing.id != exclude_id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Expense '{category}' already recorded for {year}-{str(month).zfill(2)}"
            )

    @staticmethod
    async def list_expenses(year: Optional[int] = None, month: Optional[int] = None) -> List[MonthlyExpense]:
        query = {}
        if year:
            query["year"] = year
        if month:
            query["month"] = month
        return await MonthlyExpense.find(query).sort("-year", "-month", "+category").to_list()

    @staticmethod
    async def get_expense(expense_id: str) -> MonthlyExpense:
        expense = await MonthlyExpense.get(to_object_id(expense_id, "Monthly expense"))
        if not expense:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Monthly expense not found")
        return expense

    @staticmethod
    async def create_expense(data: MonthlyExpenseCreate) -> MonthlyExpense:
        await MonthlyExpenseService._ensure_unique(data.year, data.month, data.category)
        expense = MonthlyExpense(**data.model_dump())
        await expense.insert()
        logger.info(f"Monthly expense {expense.category} {expense.amount} for {expense.year}-{expense.month}")
        return expense

    @staticmethod
    async def update_expense(expense_id: str, data: MonthlyExpenseUpdate) -> MonthlyExpense:
        expense = await MonthlyExpenseService.get_expense(expense_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if "category" in update_data and update_data["category"] != expense.category:
            await MonthlyExpenseService._ensure_unique(
                expense.year, expense.month, update_data["category"], exclude_id=expense.id
            )
        for field, value in update_data.items():
            setattr(expense, field, value)
        expense.updated_at = get_local_now()
        await expense.save()
        return expense

    @staticmethod
    async def delete_expense(expense_id: str) -> None:
        expense = await MonthlyExpenseService.get_expense(expense_id)
        await expense.delete()
