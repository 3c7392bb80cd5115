from typing import List, Optional
import logging

from fastapi import HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from garment_erp.core.models.target import Target
from garment_erp.core.schemas.target import TargetCreate, TargetUpdate
from garment_erp.modules.daily_production.daily_production_calculator import (
    DailyProductionCalculator,
    TargetAction,
)
from garment_erp.modules.daily_production.daily_production_service import reconcile_safely
from garment_erp.shared.object_id import to_object_id
from garment_erp.shared.timezone import get_local_now

logger = logging.getLogger(__name__)


class TargetService:
    """
    Target CRUD. Every write is followed by a best-effort reconciliation
    of the daily production report for the affected key(s); the target
    write itself is never rolled back when reconciliation fails.
    """

    @staticmethod
    async def get_target(target_id: str) -> Target:
        target = await Target.get(to_object_id(target_id, "Target"))
        if not target:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Target not found")
        return target

    @staticmethod
    async def list_targets(
        date: Optional[str] = None,
        line_no: Optional[str] = None,
        style_no: Optional[str] = None,
    ) -> List[Target]:
        query = {}
        if date:
            query["date"] = date
        if line_no:
            query["line_no"] = line_no
        if style_no:
            query["style_no"] = style_no
        return await Target.find(query).sort("-date", "+line_no", "+in_time").to_list()

    @staticmethod
    async def create_target(db: AsyncIOMotorDatabase, data: TargetCreate) -> Target:
        target = Target(**data.model_dump())
        await target.insert()
        logger.info(f"Target {target.id} created for line {target.line_no}, style {target.style_no}, {target.date}")

        await reconcile_safely(db, TargetAction.CREATE, target.model_dump())
        return target

    @staticmethod
    async def update_target(db: AsyncIOMotorDatabase, target_id: str, data: TargetUpdate) -> Target:
        target = await TargetService.get_target(target_id)
        old_key = DailyProductionCalculator.report_key(target.model_dump())

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(target, field, value)
        target.updated_at = get_local_now()
        await target.save()

        new_key = DailyProductionCalculator.report_key(target.model_dump())
        await reconcile_safely(db, TargetAction.UPDATE, target.model_dump())

        # Moved to another (date, style, line): the old key lost this target
        if new_key != old_key:
            logger.info(f"Target {target.id} moved from {old_key} to {new_key}")
            await reconcile_safely(db, TargetAction.UPDATE, old_key)

        return target

    @staticmethod
    async def delete_target(db: AsyncIOMotorDatabase, target_id: str) -> None:
        target = await TargetService.get_target(target_id)
        snapshot = target.model_dump()
        await target.delete()
        logger.info(f"Target {target_id} deleted")

        await reconcile_safely(db, TargetAction.DELETE, snapshot)

    @staticmethod
    async def bulk_delete_targets(db: AsyncIOMotorDatabase, ids: List[str]) -> dict:
        """Delete many targets, then reconcile each affected key once."""
        object_ids, not_found = [], []
        for raw_id in ids:
            try:
                object_ids.append(to_object_id(raw_id, "Target"))
            except HTTPException:
                not_found.append(raw_id)

        targets = await Target.find({"_id": {"$in": object_ids}}).to_list()
        found_ids = {str(t.id) for t in targets}
        not_found.extend(str(oid) for oid in object_ids if str(oid) not in found_ids)

        if not targets:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No targets found for the given ids")

        keys = {}
        for t in targets:
            key = DailyProductionCalculator.report_key(t.model_dump())
            keys[(key["date"], key["style_no"], key["line_no"])] = key

        result = await Target.find({"_id": {"$in": [t.id for t in targets]}}).delete()
        deleted_count = result.deleted_count if result else 0
        logger.info(f"Bulk deleted {deleted_count} targets across {len(keys)} report keys")

        for key in keys.values():
            await reconcile_safely(db, TargetAction.DELETE, key)

        return {"deleted_count": deleted_count, "not_found": not_found}
