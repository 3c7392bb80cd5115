from collections import defaultdict
from math import ceil
from typing import Any, Dict, List, Optional
import logging
import re

from fastapi import HTTPException, status

from garment_erp.core.models.cashbook import CashbookEntry, CashbookType
from garment_erp.core.schemas.auth import CurrentUser
from garment_erp.core.schemas.cashbook import CashbookEntryCreate, CashbookEntryUpdate
from garment_erp.shared.date_utils import month_bounds, parse_month
from garment_erp.shared.object_id import to_object_id
from garment_erp.shared.timezone import get_local_now

logger = logging.getLogger(__name__)


class CashbookService:

    @staticmethod
    def with_running_balance(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Annotate entries with a running balance in the order given.
        CREDIT adds, DEBIT subtracts.
        """
        balance = 0.0
        result = []
        for entry in entries:
            amount = float(entry["amount"])
            balance += amount if entry["type"] == CashbookType.CREDIT.value else -amount
            result.append({**entry, "running_balance": round(balance, 2)})
        return result

    @staticmethod
    def summarize(entries: List[Dict[str, Any]]) -> Dict[str, Any]:
        debit_by_category: Dict[str, float] = defaultdict(float)
        credit_by_category: Dict[str, float] = defaultdict(float)
        for entry in entries:
            bucket = credit_by_category if entry["type"] == CashbookType.CREDIT.value else debit_by_category
            bucket[entry["category"]] += float(entry["amount"])

        total_credit = sum(credit_by_category.values())
        total_debit = sum(debit_by_category.values())
        return {
            "total_credit": round(total_credit, 2),
            "total_debit": round(total_debit, 2),
            "balance": round(total_credit - total_debit, 2),
            "debit_by_category": {k: round(v, 2) for k, v in debit_by_category.items()},
            "credit_by_category": {k: round(v, 2) for k, v in credit_by_category.items()},
            "entry_count": len(entries),
        }

    @staticmethod
    async def get_entry(entry_id: str) -> CashbookEntry:
        entry = await CashbookEntry.get(to_object_id(entry_id, "Cashbook entry"))
        if not entry:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cashbook entry not found")
        return entry

    @staticmethod
    async def list_entries(
        date: Optional[str] = None,
        entry_type: Optional[CashbookType] = None,
        category: Optional[str] = None,
        line_no: Optional[str] = None,
        page: int = 1,
        limit: int = 50,
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        if date:
            query["date"] = date
        if entry_type:
            query["type"] = entry_type.value
        if category:
            query["category"] = {"$regex": re.escape(category), "$options": "i"}
        if line_no:
            query["line_no"] = line_no

        total = await CashbookEntry.find(query).count()
        entries = await CashbookEntry.find(query).sort("-date", "-created_at").skip(
            (page - 1) * limit
        ).limit(limit).to_list()

        return {
            "entries": CashbookService.with_running_balance([e.model_dump(mode="json") for e in entries]),
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": ceil(total / limit) if limit else 0,
            },
        }

    @staticmethod
    async def create_entry(data: CashbookEntryCreate, current_user: CurrentUser) -> CashbookEntry:
        entry = CashbookEntry(**data.model_dump(), created_by=current_user.username)
        await entry.insert()
        logger.info(f"Cashbook {entry.type.value} {entry.amount} ({entry.category}) on {entry.date} by {current_user.username}")
        return entry

    @staticmethod
    async def update_entry(entry_id: str, data: CashbookEntryUpdate) -> CashbookEntry:
        entry = await CashbookService.get_entry(entry_id)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(entry, field, value)
        entry.updated_at = get_local_now()
        await entry.save()
        return entry

    @staticmethod
    async def delete_entry(entry_id: str) -> None:
        entry = await CashbookService.get_entry(entry_id)
        await entry.delete()
        logger.info(f"Cashbook entry {entry_id} deleted")

    @staticmethod
    async def monthly_summary(month: str) -> Dict[str, Any]:
        """Credit, debit and balance by category for a YYYY-MM month."""
        try:
            year, month_num = parse_month(month)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        start, end = month_bounds(year, month_num)
        entries = await CashbookEntry.find(
            {"date": {"$gte": start, "$lte": end}}
        ).to_list()
        return {
            "month": month,
            **CashbookService.summarize([e.model_dump(mode="json") for e in entries]),
        }
