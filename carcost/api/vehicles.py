"""Routes Véhicules / Vehicle API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.api.deps import get_scope
from carcost.database import get_db
from carcost.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from carcost.services.scoping import TenantScope
from carcost.services.vehicle_service import VehicleService

router = APIRouter()


@router.get("/", response_model=list[VehicleRead])
async def list_vehicles(
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Lister les véhicules / List vehicles."""
    return await VehicleService(db, scope).list_vehicles()


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Voir un véhicule / Get vehicle detail."""
    vehicle = await VehicleService(db, scope).get(vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


@router.post("/", response_model=VehicleRead, status_code=201)
async def create_vehicle(
    data: VehicleCreate,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Créer un véhicule / Create vehicle."""
    return await VehicleService(db, scope).create(data)


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(
    vehicle_id: int,
    data: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Modifier un véhicule / Update vehicle."""
    vehicle = await VehicleService(db, scope).update(vehicle_id, data)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Supprimer un véhicule et ses données / Delete vehicle and its data."""
    if not await VehicleService(db, scope).delete(vehicle_id):
        raise HTTPException(status_code=404, detail="Vehicle not found")
