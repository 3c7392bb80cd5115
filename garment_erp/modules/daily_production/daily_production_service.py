"""
Target -> daily production reconciliation.

Every function takes the Motor database handle explicitly. The derived
report row for a (date, style_no, line_no) key is always rebuilt from the
targets currently stored for that key, so CREATE, UPDATE and DELETE share
one strategy: re-sum, then upsert or delete.
"""

from typing import Any, Dict, List, Mapping, Optional
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from garment_erp.core.db import collections
from garment_erp.core.monitoring.prometheus_middleware import (
    track_reconciliation,
    update_daily_production,
)
from garment_erp.modules.daily_production.daily_production_calculator import (
    DailyProductionCalculator,
    TargetAction,
)
from garment_erp.shared.timezone import get_local_now


logger = logging.getLogger(__name__)


class StyleNotFoundError(Exception):
    """A report needs pricing but its style is missing from the production list."""

    def __init__(self, style_no: str):
        self.style_no = style_no
        super().__init__(f"Production item with style_no {style_no} not found")


def serialize_report(doc: Mapping[str, Any]) -> Dict[str, Any]:
    """Raw report document -> JSON-friendly dict with a string id."""
    data = {k: v for k, v in doc.items() if k != "_id"}
    data["id"] = str(doc["_id"])
    return data


async def reconcile_target_production(
    db: AsyncIOMotorDatabase,
    action: TargetAction,
    target: Mapping[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Bring the report row for the target's key in line with stored targets.

    Must be called after the triggering write has been applied, so the
    target collection already reflects the create, update or delete.

    Returns the report as stored, or None when no row exists for the key
    afterwards (sum of hourly production is zero).

    Raises:
        StyleNotFoundError: the key has production but no priced style.
    """
    key = DailyProductionCalculator.report_key(target)
    reports = db[collections.DAILY_PRODUCTION_REPORTS]

    logger.info(
        f"🔄 Processing {action.value} for target {target.get('id') or target.get('_id')}: "
        f"Style {key['style_no']}, Line {key['line_no']}, Date {key['date']}"
    )

    matching = await db[collections.TARGETS].find(key).to_list(None)
    production_qty, target_qty = DailyProductionCalculator.summarize_targets(matching)

    logger.info(
        f"📊 Found {len(matching)} targets for Line {key['line_no']}: "
        f"production={production_qty}, target={target_qty}"
    )

    # AUTO-DELETE: no production for this key means no report row
    if production_qty <= 0:
        result = await reports.delete_many(key)
        outcome = "deleted" if result.deleted_count else "skipped"
        if result.deleted_count:
            logger.info(f"🗑️ AUTO-DELETE: report for {key} removed (production is 0)")
        else:
            logger.info(f"⏭️ Skipping report creation for {key} (production is 0)")
        track_reconciliation(action.value, outcome)
        update_daily_production(key["line_no"], 0)
        return None

    style = await db[collections.PRODUCTION_LIST].find_one({"style_no": key["style_no"]})
    if not style:
        raise StyleNotFoundError(key["style_no"])

    amounts = DailyProductionCalculator.calculate_amounts(
        production_qty,
        style.get("price") or 0,
        style.get("percentage") or 0,
    )

    now = get_local_now()
    await reports.update_one(
        key,
        {
            "$set": {
                "target_qty": target_qty,
                "production_qty": production_qty,
                **amounts,
                "updated_at": now,
            },
            "$setOnInsert": {"created_at": now},
        },
        upsert=True,
    )

    report = await reports.find_one(key)
    logger.info(
        f"✅ Report for {key} now production={production_qty}, target={target_qty}, "
        f"net_amount={amounts['net_amount']}"
    )
    track_reconciliation(action.value, "upserted")
    update_daily_production(key["line_no"], production_qty)
    return serialize_report(report)


async def reconcile_safely(
    db: AsyncIOMotorDatabase,
    action: TargetAction,
    target: Mapping[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Best-effort reconciliation for request handlers.

    The triggering target write has already succeeded and is reported to
    the client regardless; failures here are logged and counted, and can
    be repaired with resync_daily_production.
    """
    try:
        return await reconcile_target_production(db, action, target)
    except Exception:
        logger.exception(
            f"❌ Error reconciling daily production for {action.value} "
            f"(style={target.get('style_no')}, line={target.get('line_no')}, date={target.get('date')})"
        )
        track_reconciliation(action.value, "failed")
        return None


async def resync_daily_production(
    db: AsyncIOMotorDatabase,
    date: str,
    style_no: Optional[str] = None,
    line_no: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Rebuild every report row of a date (optionally narrowed to a style
    and/or line) from its targets. Rows left without targets are deleted.
    """
    query: Dict[str, Any] = {"date": date}
    if style_no:
        query["style_no"] = style_no
    if line_no:
        query["line_no"] = line_no

    keys = set()
    async for t in db[collections.TARGETS].find(query):
        keys.add((t["date"], t["style_no"], t["line_no"]))
    async for r in db[collections.DAILY_PRODUCTION_REPORTS].find(query):
        keys.add((r["date"], r["style_no"], r["line_no"]))

    upserted, removed, failed = 0, 0, []
    for d, s, l in sorted(keys):
        key = {"date": d, "style_no": s, "line_no": l}
        try:
            report = await reconcile_target_production(db, TargetAction.UPDATE, key)
        except StyleNotFoundError as e:
            logger.warning(f"Resync skipped {key}: {e}")
            failed.append({**key, "error": str(e)})
            continue
        if report:
            upserted += 1
        else:
            removed += 1

    logger.info(f"🔧 Resync {query}: {upserted} upserted, {removed} removed, {len(failed)} failed")
    return {
        "date": date,
        "keys_processed": len(keys),
        "upserted": upserted,
        "removed": removed,
        "failed": failed,
    }


async def _attach_style_info(db: AsyncIOMotorDatabase, reports: List[Dict[str, Any]]) -> None:
    style_nos = list({r["style_no"] for r in reports})
    if not style_nos:
        return
    styles = await db[collections.PRODUCTION_LIST].find(
        {"style_no": {"$in": style_nos}}
    ).to_list(None)
    style_map = {s["style_no"]: s for s in styles}
    for r in reports:
        style = style_map.get(r["style_no"], {})
        r["buyer"] = style.get("buyer")
        r["item"] = style.get("item")
        r["percentage"] = style.get("percentage")


async def list_reports(
    db: AsyncIOMotorDatabase,
    date: Optional[str] = None,
    style_no: Optional[str] = None,
    line_no: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Report rows filtered by date/style/line, newest date first."""
    query: Dict[str, Any] = {}
    if date:
        query["date"] = date
    if style_no:
        query["style_no"] = style_no
    if line_no:
        query["line_no"] = line_no

    docs = await db[collections.DAILY_PRODUCTION_REPORTS].find(query).sort(
        [("date", -1), ("line_no", 1), ("style_no", 1)]
    ).to_list(None)
    reports = [serialize_report(d) for d in docs]
    await _attach_style_info(db, reports)
    for r in reports:
        r["efficiency"] = DailyProductionCalculator.calculate_efficiency(
            r.get("production_qty") or 0, r.get("target_qty") or 0
        )
    return reports


async def get_daily_production_summary(db: AsyncIOMotorDatabase, date: str) -> Dict[str, Any]:
    """One day's report rows with totals and average efficiency."""
    reports = await list_reports(db, date=date)
    reports.sort(key=lambda r: (r["style_no"], r["line_no"]))
    return {
        "date": date,
        "reports": reports,
        "summary": DailyProductionCalculator.summarize_day(reports),
    }


async def get_production_trends(
    db: AsyncIOMotorDatabase,
    start_date: str,
    end_date: str,
) -> List[Dict[str, Any]]:
    """Per-day production totals between two dates (inclusive)."""
    docs = await db[collections.DAILY_PRODUCTION_REPORTS].find(
        {"date": {"$gte": start_date, "$lte": end_date}}
    ).to_list(None)
    return DailyProductionCalculator.group_trends(docs)
