from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from carwash import schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get("", response_model=List[schemas.VehicleOut])
def list_vehicles(
    client_id: Optional[int] = Query(None, alias="clientId"),
    data: DataAccess = Depends(get_data),
):
    vehicles = data.collection("vehicles")
    if client_id is not None:
        vehicles = [v for v in vehicles if v.client_id == client_id]
    return vehicles


@router.get("/{vehicle_id}", response_model=schemas.VehicleOut)
def get_vehicle(vehicle_id: int, data: DataAccess = Depends(get_data)):
    return data.get("vehicles", vehicle_id)


@router.post("", response_model=schemas.VehicleOut, status_code=201)
def create_vehicle(payload: schemas.VehicleCreate, data: DataAccess = Depends(get_data)):
    return data.create("vehicles", payload.model_dump(mode="json"))


@router.put("/{vehicle_id}", response_model=schemas.VehicleOut)
def update_vehicle(vehicle_id: int, payload: schemas.VehicleCreate, data: DataAccess = Depends(get_data)):
    return data.update("vehicles", vehicle_id, payload.model_dump(mode="json"))


@router.delete("/{vehicle_id}", response_model=schemas.MessageResponse)
def delete_vehicle(vehicle_id: int, data: DataAccess = Depends(get_data)):
    data.delete("vehicles", vehicle_id)
    return {"message": "Vehicle deleted"}
