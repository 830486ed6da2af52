"""Schémas carburant et recharge / Fuel and charging schemas."""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from carcost.models.fuel_entry import EnergyType
from carcost.models.vehicle import EnergyClass
from carcost.schemas.common import ensure_not_future


class FuelEntryCreate(BaseModel):
    vehicle_id: int = Field(gt=0)
    energy_type: EnergyType
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=3)  # L ou kWh
    cost: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    odometer: int | None = Field(default=None, ge=0)
    date: datetime.date

    @field_validator("date")
    @classmethod
    def check_date(cls, value):
        return ensure_not_future(value)


class FuelEntryUpdate(BaseModel):
    """Mise à jour partielle / Sparse update.

    Un champ absent n'est pas modifié. Seul l'odomètre accepte null (effacer le relevé).
    An omitted field is left untouched. Only odometer accepts null (clears the reading).
    """
    energy_type: EnergyType | None = None
    amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=3)
    cost: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    odometer: int | None = Field(default=None, ge=0)
    date: datetime.date | None = None

    @field_validator("date")
    @classmethod
    def check_date(cls, value):
        return ensure_not_future(value)

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in ("energy_type", "amount", "cost", "date"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class FuelEntryRead(BaseModel):
    """Vue composée d'un plein / Composed fuel entry view."""
    id: int
    energy_type: EnergyType
    energy_type_display: str
    amount: float
    unit: str
    cost: float
    odometer: int | None = None
    date: datetime.date
    vehicle_id: int
    vehicle_make: str
    vehicle_model: str
    vehicle_energy_class: EnergyClass
    linked_expense_id: int | None = None
    cost_per_unit: float


# --- Efficacité / Efficiency ---

class EnergyBucketEfficiency(BaseModel):
    """Efficacité d'une famille d'énergie / Efficiency for one energy bucket."""
    unit: str
    total_cost: float = 0
    total_amount: float = 0
    total_kilometers: int = 0
    consumption_per_100km: float | None = None  # L/100km ou kWh/100km
    kilometers_per_unit: float | None = None
    cost_per_kilometer: float | None = None
    total_fill_ups: int = 0
    entries_with_odometer: int = 0


class HybridEfficiencyRead(BaseModel):
    """Efficacité séparée carburant/électricité / Split fuel/electricity efficiency."""
    fuel: EnergyBucketEfficiency
    electricity: EnergyBucketEfficiency
    blended_cost_per_kilometer: float | None = None


class FuelEfficiencyRead(BaseModel):
    vehicle_id: int
    total_cost: float = 0
    total_amount: float = 0
    total_kilometers: int = 0
    average_liters_per_100km: float | None = None
    average_kilometers_per_liter: float | None = None
    average_cost_per_kilometer: float | None = None
    average_cost_per_fill_up: float = 0
    total_fill_ups: int = 0
    entries_with_odometer: int = 0
    entries_without_odometer: int = 0
    hybrid: HybridEfficiencyRead | None = None
