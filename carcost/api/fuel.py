"""Routes Carburant / Fuel and charging API routes."""

import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.api.deps import get_scope
from carcost.database import get_db
from carcost.models.fuel_entry import EnergyType
from carcost.schemas.fuel import FuelEfficiencyRead, FuelEntryCreate, FuelEntryRead, FuelEntryUpdate
from carcost.services.fuel_service import FuelService
from carcost.services.scoping import TenantScope

router = APIRouter()


@router.get("/", response_model=list[FuelEntryRead])
async def list_fuel_entries(
    vehicle_id: int | None = None,
    energy_type: EnergyType | None = None,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Lister les pleins / List fuel entries."""
    return await FuelService(db, scope).list_entries(vehicle_id, energy_type, start_date, end_date)


# Avant /{entry_id} pour ne pas être capturé / Before /{entry_id} so it is not shadowed
@router.get("/efficiency/{vehicle_id}", response_model=FuelEfficiencyRead)
async def get_efficiency(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Efficacité du véhicule / Vehicle fuel efficiency."""
    efficiency = await FuelService(db, scope).efficiency(vehicle_id)
    if efficiency is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return efficiency


@router.get("/{entry_id}", response_model=FuelEntryRead)
async def get_fuel_entry(
    entry_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    entry = await FuelService(db, scope).get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Fuel entry not found")
    return entry


@router.post("/", response_model=FuelEntryRead, status_code=201)
async def create_fuel_entry(
    data: FuelEntryCreate,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Créer un plein et sa dépense / Create a fuel entry and its expense."""
    entry = await FuelService(db, scope).create(data)
    if entry is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return entry


@router.put("/{entry_id}", response_model=FuelEntryRead)
async def update_fuel_entry(
    entry_id: int,
    data: FuelEntryUpdate,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Modifier un plein / Update fuel entry."""
    entry = await FuelService(db, scope).update(entry_id, data)
    if entry is None:
        raise HTTPException(status_code=404, detail="Fuel entry not found")
    return entry


@router.delete("/{entry_id}", status_code=204)
async def delete_fuel_entry(
    entry_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Supprimer un plein et sa dépense / Delete fuel entry and its expense."""
    if not await FuelService(db, scope).delete(entry_id):
        raise HTTPException(status_code=404, detail="Fuel entry not found")
