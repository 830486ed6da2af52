"""Schémas dépenses / Expense ledger schemas."""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from carcost.config import settings
from carcost.models.expense import ExpenseCategory
from carcost.schemas.common import ensure_not_future


def _user_category(value: ExpenseCategory | None) -> ExpenseCategory | None:
    # Fuel passe uniquement par les pleins / Fuel goes through fuel entries only
    if value is ExpenseCategory.FUEL:
        raise ValueError("Fuel costs must be recorded as fuel entries")
    return value


class ExpenseCreate(BaseModel):
    vehicle_id: int = Field(gt=0)
    category: ExpenseCategory
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    date: datetime.date
    notes: str | None = Field(default=None, max_length=settings.MAX_NOTES_LENGTH)

    @field_validator("category")
    @classmethod
    def check_category(cls, value):
        return _user_category(value)

    @field_validator("date")
    @classmethod
    def check_date(cls, value):
        return ensure_not_future(value)


class ExpenseUpdate(BaseModel):
    vehicle_id: int | None = Field(default=None, gt=0)
    category: ExpenseCategory | None = None
    amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    date: datetime.date | None = None
    notes: str | None = Field(default=None, max_length=settings.MAX_NOTES_LENGTH)

    @field_validator("category")
    @classmethod
    def check_category(cls, value):
        return _user_category(value)

    @field_validator("date")
    @classmethod
    def check_date(cls, value):
        return ensure_not_future(value)

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in ("vehicle_id", "category", "amount", "date"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ExpenseRead(BaseModel):
    id: int
    category: ExpenseCategory
    amount: float
    date: datetime.date
    notes: str | None = None
    vehicle_id: int
    vehicle_make: str | None = None
    vehicle_model: str | None = None
    # Plein propriétaire si dépense miroir / Owning fuel entry for shadow expenses
    fuel_entry_id: int | None = None
