from typing import List

from fastapi import APIRouter, Depends

from carwash import schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data

router = APIRouter(prefix="/appointment-services", tags=["Appointment services"])


@router.get("", response_model=List[schemas.AppointmentServiceOut])
def list_appointment_services(data: DataAccess = Depends(get_data)):
    return data.collection("appointment_services")


@router.get("/{item_id}", response_model=schemas.AppointmentServiceOut)
def get_appointment_service(item_id: int, data: DataAccess = Depends(get_data)):
    return data.get("appointment_services", item_id)


@router.post("", response_model=schemas.AppointmentServiceOut, status_code=201)
def create_appointment_service(
    payload: schemas.AppointmentServiceCreate,
    data: DataAccess = Depends(get_data),
):
    return data.create("appointment_services", payload.model_dump(mode="json"))


@router.delete("/{item_id}", response_model=schemas.MessageResponse)
def delete_appointment_service(item_id: int, data: DataAccess = Depends(get_data)):
    data.delete("appointment_services", item_id)
    return {"message": "Appointment service deleted"}
