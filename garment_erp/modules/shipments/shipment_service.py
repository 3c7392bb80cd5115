from typing import List, Optional
import logging

from fastapi import HTTPException, status

from garment_erp.core.models.production_list import ProductionItem
from garment_erp.core.models.shipment import Shipment
from garment_erp.core.schemas.shipment import ShipmentCreate, ShipmentUpdate
from garment_erp.shared.object_id import to_object_id

logger = logging.getLogger(__name__)


class ShipmentService:

    @staticmethod
    async def _shipped_qty(style_no: str, exclude_id=None) -> int:
        shipments = await Shipment.find(Shipment.style_no == style_no).to_list()
        return sum(s.quantity for s in shipments if s.id != exclude_id)

    @staticmethod
    async def _check_capacity(style_no: str, quantity: int, exclude_id=None) -> ProductionItem:
        item = await ProductionItem.find_one(ProductionItem.style_no == style_no)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Style {style_no} not found")

        shipped = await ShipmentService._shipped_qty(style_no, exclude_id)
        if shipped + quantity > item.total_qty:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"Shipment exceeds order quantity for {style_no}: "
                    f"{shipped} shipped + {quantity} > {item.total_qty}"
                )
            )
        return item

    @staticmethod
    async def list_shipments(style_no: Optional[str] = None) -> List[Shipment]:
        query = {"style_no": style_no} if style_no else {}
        return await Shipment.find(query).sort("-date").to_list()

    @staticmethod
    async def get_shipment(shipment_id: str) -> Shipment:
        shipment = await Shipment.get(to_object_id(shipment_id, "Shipment"))
        if not shipment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shipment not found")
        return shipment

    @staticmethod
    async def create_shipment(data: ShipmentCreate) -> Shipment:
        await ShipmentService._check_capacity(data.style_no, data.quantity)
        shipment = Shipment(**data.model_dump())
        await shipment.insert()
        logger.info(f"Shipment of {shipment.quantity} pcs for {shipment.style_no} to {shipment.destination}")
        return shipment

    @staticmethod
    async def update_shipment(shipment_id: str, data: ShipmentUpdate) -> Shipment:
        shipment = await ShipmentService.get_shipment(shipment_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if "quantity" in update_data:
            await ShipmentService._check_capacity(shipment.style_no, update_data["quantity"], exclude_id=shipment.id)
        for field, value in update_data.items():
            setattr(shipment, field, value)
        await shipment.save()
        return shipment

    @staticmethod
    async def delete_shipment(shipment_id: str) -> None:
        shipment = await ShipmentService.get_shipment(shipment_id)
        await shipment.delete()

    @staticmethod
    async def style_status(style_no: str) -> dict:
        item = await ProductionItem.find_one(ProductionItem.style_no == style_no)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Style {style_no} not found")
        shipped = await ShipmentService._shipped_qty(style_no)
        return {
            "style_no": style_no,
            "total_qty": item.total_qty,
            "shipped_qty": shipped,
            "remaining_qty": item.total_qty - shipped,
        }
