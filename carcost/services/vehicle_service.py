"""Service véhicules / Vehicle registry service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from carcost.models.vehicle import Vehicle
from carcost.schemas.vehicle import VehicleCreate, VehicleUpdate
from carcost.services.errors import ValidationFailure
from carcost.services.scoping import TenantScope

logger = logging.getLogger(__name__)


class VehicleService:
    def __init__(self, db: AsyncSession, scope: TenantScope):
        self.db = db
        self.scope = scope

    async def list_vehicles(self) -> list[Vehicle]:
        result = await self.db.execute(self.scope.vehicles().order_by(Vehicle.make, Vehicle.model))
        return list(result.scalars().all())

    async def get(self, vehicle_id: int) -> Vehicle | None:
        return await self.scope.get_vehicle(self.db, vehicle_id)

    async def create(self, data: VehicleCreate) -> Vehicle:
        vehicle = Vehicle(user_id=self.scope.user_id, **data.model_dump())
        self.db.add(vehicle)
        await self.db.flush()
        logger.info("Vehicle %s created for user %s", vehicle.id, self.scope.user_id)
        return vehicle

    async def update(self, vehicle_id: int, data: VehicleUpdate) -> Vehicle | None:
        """Mise à jour partielle / Sparse update.

        La fenêtre de détention est vérifiée sur l'enregistrement fusionné.
        The ownership window is checked on the merged record.
        """
        vehicle = await self.get(vehicle_id)
        if vehicle is None:
            return None

        changes = data.model_dump(exclude_unset=True)
        for name in ("make", "model", "year", "purchase_price", "ownership_start", "energy_class"):
            if name in changes and changes[name] is None:
                raise ValidationFailure(name, f"{name} cannot be null")

        start = changes.get("ownership_start", vehicle.ownership_start)
        end = changes.get("ownership_end", vehicle.ownership_end)
        if end is not None and end < start:
            raise ValidationFailure("ownership_end", "Ownership end date must not be before start date")

        for key, value in changes.items():
            setattr(vehicle, key, value)
        await self.db.flush()
        return vehicle

    async def delete(self, vehicle_id: int) -> bool:
        """Supprimer avec dépenses, pleins et justificatifs / Delete with expenses, entries and receipts."""
        vehicle = await self.get(vehicle_id)
        if vehicle is None:
            return False
        await self.db.delete(vehicle)
        await self.db.flush()
        logger.info("Vehicle %s deleted for user %s", vehicle_id, self.scope.user_id)
        return True
