from typing import List, Optional
import logging

from fastapi import HTTPException, status

from garment_erp.core.models.production_list import ProductionItem, ProductionStatus
from garment_erp.core.schemas.production_list import ProductionItemCreate, ProductionItemUpdate
from garment_erp.shared.cache_manager import (
    get_cached_production_list,
    refresh_production_list_cache,
    store_production_list,
)
from garment_erp.shared.object_id import to_object_id
from garment_erp.shared.timezone import get_local_now

logger = logging.getLogger(__name__)


class ProductionListService:

    @staticmethod
    async def get_item(item_id: str) -> ProductionItem:
        item = await ProductionItem.get(to_object_id(item_id, "Production item"))
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Production item not found")
        return item

    @staticmethod
    async def get_by_style(style_no: str) -> ProductionItem:
        item = await ProductionItem.find_one(ProductionItem.style_no == style_no)
        if not item:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Production item with style_no {style_no} not found"
            )
        return item

    @staticmethod
    async def list_items(
        status_filter: Optional[ProductionStatus] = None,
        buyer: Optional[str] = None,
    ) -> List[dict]:
        """
        All production items, newest first.
        The unfiltered list is served from Redis when cached.
        """
        if status_filter is None and buyer is None:
            cached = get_cached_production_list()
            if cached is not None:
                return cached

        query = {}
        if status_filter:
            query["status"] = status_filter.value
        if buyer:
            query["buyer"] = buyer

        items = await ProductionItem.find(query).sort("-created_at").to_list()
        formatted = [item.model_dump(mode="json") for item in items]

        if not query:
            store_production_list(formatted)
        return formatted

    @staticmethod
    async def create_item(data: ProductionItemCreate) -> ProductionItem:
        if await ProductionItem.find_one(ProductionItem.style_no == data.style_no):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Style {data.style_no} already exists"
            )

        item = ProductionItem(**data.model_dump())
        await item.insert()
        logger.info(f"Production item {item.style_no} created for buyer {item.buyer}")

        await refresh_production_list_cache()
        return item

    @staticmethod
    async def update_item(item_id: str, data: ProductionItemUpdate) -> ProductionItem:
        item = await ProductionListService.get_item(item_id)

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(item, field, value)
        item.updated_at = get_local_now()
        await item.save()
        logger.info(f"Production item {item.style_no} updated")

        await refresh_production_list_cache()
        return item

    @staticmethod
    async def delete_item(item_id: str) -> None:
        item = await ProductionListService.get_item(item_id)
        await item.delete()
        logger.info(f"Production item {item.style_no} deleted")

        await refresh_production_list_cache()
