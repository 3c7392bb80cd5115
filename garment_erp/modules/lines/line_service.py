from typing import List, Optional
import logging

from fastapi import HTTPException, status

from garment_erp.core.models.line import Line, LineAssignment
from garment_erp.core.models.production_list import ProductionItem
from garment_erp.core.schemas.line import (
    LineCreate,
    LineUpdate,
    LineAssignmentCreate,
    LineAssignmentClose,
)
from garment_erp.shared.object_id import to_object_id
from garment_erp.shared.timezone import get_local_now

logger = logging.getLogger(__name__)


class LineService:

    @staticmethod
    async def list_lines(active_only: bool = False) -> List[Line]:
        query = {"is_active": True} if active_only else {}
        return await Line.find(query).sort("+code").to_list()

    @staticmethod
    async def get_line(line_id: str) -> Line:
        line = await Line.get(to_object_id(line_id, "Line"))
        if not line:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Line not found")
        return line

    @staticmethod
    async def create_line(data: LineCreate) -> Line:
        if await Line.find_one(Line.code == data.code):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Line {data.code} already exists"
            )
        line = Line(**data.model_dump())
        await line.insert()
        logger.info(f"Line {line.code} created")
        return line

    @staticmethod
    async def update_line(line_id: str, data: LineUpdate) -> Line:
        line = await LineService.get_line(line_id)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(line, field, value)
        line.updated_at = get_local_now()
        await line.save()
        return line

    @staticmethod
    async def delete_line(line_id: str) -> None:
        line = await LineService.get_line(line_id)
        if await LineAssignment.find_one({"line_code": line.code, "end_date": None}):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Line {line.code} has an active assignment"
            )
        await line.delete()
        logger.info(f"Line {line.code} deleted")


class LineAssignmentService:

    @staticmethod
    async def list_assignments(
        line_code: Optional[str] = None,
        active_only: bool = False,
    ) -> List[LineAssignment]:
        query = {}
        if line_code:
            query["line_code"] = line_code
        if active_only:
            query["end_date"] = None
        return await LineAssignment.find(query).sort("-start_date").to_list()

    @staticmethod
    async def get_assignment(assignment_id: str) -> LineAssignment:
        assignment = await LineAssignment.get(to_object_id(assignment_id, "Line assignment"))
        if not assignment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Line assignment not found")
        return assignment

    @staticmethod
    async def create_assignment(data: LineAssignmentCreate) -> LineAssignment:
        # 1. Both ends must exist
        if not await Line.find_one(Line.code == data.line_code):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Line {data.line_code} not found")
        if not await ProductionItem.find_one(ProductionItem.style_no == data.style_no):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Style {data.style_no} not found")

        # 2. One open assignment per line
        active = await LineAssignment.find_one({"line_code": data.line_code, "end_date": None})
        if active:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Line {data.line_code} is already assigned to style {active.style_no}"
            )

        assignment = LineAssignment(**data.model_dump())
        await assignment.insert()
        logger.info(f"Line {assignment.line_code} assigned to style {assignment.style_no} from {assignment.start_date}")
        return assignment

    @staticmethod
    async def close_assignment(assignment_id: str, data: LineAssignmentClose) -> LineAssignment:
        assignment = await LineAssignmentService.get_assignment(assignment_id)
        if assignment.end_date:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Assignment already closed")
        if data.end_date < assignment.start_date:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="end_date is before start_date")

        assignment.end_date = data.end_date
        await assignment.save()
        logger.info(f"Line {assignment.line_code} released from style {assignment.style_no} on {data.end_date}")
        return assignment

    @staticmethod
    async def delete_assignment(assignment_id: str) -> None:
        assignment = await LineAssignmentService.get_assignment(assignment_id)
        await assignment.delete()
