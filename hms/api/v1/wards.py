from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ...core.database import get_db
from ...api.deps import get_current_user
from ...services.booking_service import BookingService
from ...schemas.booking import WardResponse
from ...schemas.common import ApiResponse, envelope

router = APIRouter(prefix="/wards", tags=["Wards"], dependencies=[Depends(get_current_user)])

@router.get("", response_model=ApiResponse[List[WardResponse]])
async def list_wards(occupied: Optional[bool] = None, db: Session = Depends(get_db)):
    """All wards, optionally only the occupied or the free ones."""
    return envelope(BookingService(db).list_wards(occupied=occupied))
