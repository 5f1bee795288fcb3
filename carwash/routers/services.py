from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from carwash import schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data

router = APIRouter(prefix="/services", tags=["Services"])


@router.get("", response_model=List[schemas.ServiceOut])
def list_services(
    active: Optional[bool] = Query(None),
    data: DataAccess = Depends(get_data),
):
    services = data.collection("services")
    if active is not None:
        services = [s for s in services if bool(s.active) == active]
    return services


@router.get("/{service_id}", response_model=schemas.ServiceOut)
def get_service(service_id: int, data: DataAccess = Depends(get_data)):
    return data.get("services", service_id)


@router.post("", response_model=schemas.ServiceOut, status_code=201)
def create_service(payload: schemas.ServiceCreate, data: DataAccess = Depends(get_data)):
    return data.create("services", payload.model_dump(mode="json"))


@router.put("/{service_id}", response_model=schemas.ServiceOut)
def update_service(service_id: int, payload: schemas.ServiceCreate, data: DataAccess = Depends(get_data)):
    return data.update("services", service_id, payload.model_dump(mode="json"))


@router.delete("/{service_id}", response_model=schemas.MessageResponse)
def delete_service(service_id: int, data: DataAccess = Depends(get_data)):
    data.delete("services", service_id)
    return {"message": "Service deleted"}
