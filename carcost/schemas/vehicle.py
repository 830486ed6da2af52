"""Schémas Véhicule / Vehicle schemas."""

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from carcost.models.vehicle import EnergyClass


class VehicleBase(BaseModel):
    make: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    year: int = Field(ge=1900, le=2100)
    purchase_price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    ownership_start: datetime.date
    ownership_end: datetime.date | None = None
    energy_class: EnergyClass = EnergyClass.GASOLINE


class VehicleCreate(VehicleBase):
    @model_validator(mode="after")
    def check_ownership_window(self):
        if self.ownership_end is not None and self.ownership_end < self.ownership_start:
            raise ValueError("Ownership end date must not be before start date")
        return self


class VehicleUpdate(BaseModel):
    make: str | None = Field(default=None, min_length=1, max_length=100)
    model: str | None = Field(default=None, min_length=1, max_length=100)
    year: int | None = Field(default=None, ge=1900, le=2100)
    purchase_price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    ownership_start: datetime.date | None = None
    ownership_end: datetime.date | None = None
    energy_class: EnergyClass | None = None


class VehicleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    make: str
    model: str
    year: int
    purchase_price: float
    ownership_start: datetime.date
    ownership_end: datetime.date | None = None
    energy_class: EnergyClass
    user_id: str
