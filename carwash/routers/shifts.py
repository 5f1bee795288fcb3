from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from carwash import schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data
from carwash.reports import check_date_filters, filter_by_date_range
from carwash.status import ShiftStatus, check_transition

router = APIRouter(prefix="/shifts", tags=["Shifts"])


@router.get("", response_model=List[schemas.ShiftOut])
def list_shifts(
    date: Optional[str] = Query(None),
    user_id: Optional[int] = Query(None, alias="userId"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    data: DataAccess = Depends(get_data),
):
    check_date_filters(date=date, startDate=start_date, endDate=end_date)
    shifts = data.collection("shifts")
    if date:
        shifts = [s for s in shifts if s.date == date]
    if user_id is not None:
        shifts = [s for s in shifts if s.user_id == user_id]
    if start_date and end_date:
        shifts = filter_by_date_range(shifts, start_date, end_date)
    return shifts


@router.get("/{shift_id}", response_model=schemas.ShiftOut)
def get_shift(shift_id: int, data: DataAccess = Depends(get_data)):
    return data.get("shifts", shift_id)


@router.post("", response_model=schemas.ShiftOut, status_code=201)
def create_shift(payload: schemas.ShiftCreate, data: DataAccess = Depends(get_data)):
    return data.create("shifts", payload.model_dump(mode="json"))


@router.put("/{shift_id}", response_model=schemas.ShiftOut)
def update_shift(shift_id: int, payload: schemas.ShiftCreate, data: DataAccess = Depends(get_data)):
    current = data.get("shifts", shift_id)
    check_transition(ShiftStatus, current.status, payload.status.value)
    return data.update("shifts", shift_id, payload.model_dump(mode="json"))


@router.delete("/{shift_id}", response_model=schemas.MessageResponse)
def delete_shift(shift_id: int, data: DataAccess = Depends(get_data)):
    data.delete("shifts", shift_id)
    return {"message": "Shift deleted"}
