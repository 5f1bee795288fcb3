from typing import List

from fastapi import APIRouter, Depends

from carwash import schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=List[schemas.ClientOut])
def list_clients(data: DataAccess = Depends(get_data)):
    return data.collection("clients")


@router.get("/{client_id}", response_model=schemas.ClientOut)
def get_client(client_id: int, data: DataAccess = Depends(get_data)):
    return data.get("clients", client_id)


@router.get("/{client_id}/vehicles", response_model=List[schemas.VehicleOut])
def list_client_vehicles(client_id: int, data: DataAccess = Depends(get_data)):
    return [v for v in data.collection("vehicles") if v.client_id == client_id]


@router.post("", response_model=schemas.ClientOut, status_code=201)
def create_client(payload: schemas.ClientCreate, data: DataAccess = Depends(get_data)):
    return data.create("clients", payload.model_dump(mode="json"))


@router.put("/{client_id}", response_model=schemas.ClientOut)
def update_client(client_id: int, payload: schemas.ClientCreate, data: DataAccess = Depends(get_data)):
    return data.update("clients", client_id, payload.model_dump(mode="json"))


@router.delete("/{client_id}", response_model=schemas.MessageResponse)
def delete_client(client_id: int, data: DataAccess = Depends(get_data)):
    # Vehicles and appointments of the client are left in place.
    data.delete("clients", client_id)
    return {"message": "Client deleted"}
