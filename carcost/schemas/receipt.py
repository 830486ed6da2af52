"""Schémas justificatifs / Receipt schemas."""

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ReceiptCreate(BaseModel):
    """Métadonnées d'un fichier déjà stocké / Metadata for an already stored file."""
    vehicle_id: int = Field(gt=0)
    file_path: str = Field(min_length=1, max_length=500)
    original_file_name: str | None = Field(default=None, max_length=255)
    merchant: str | None = Field(default=None, max_length=200)
    parsed_amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    parsed_date: datetime.date | None = None


class ReceiptRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    vehicle_id: int
    expense_id: int | None = None
    file_path: str
    original_file_name: str | None = None
    merchant: str | None = None
    parsed_amount: float | None = None
    parsed_date: datetime.date | None = None
    uploaded_at: datetime.datetime | None = None
