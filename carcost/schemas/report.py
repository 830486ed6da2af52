"""Schémas de rapports / Report schemas."""

import datetime

from pydantic import BaseModel


# --- TCO ---

class TcoReport(BaseModel):
    """Coût total de possession / Total cost of ownership for one vehicle."""
    vehicle_id: int
    vehicle_make: str
    vehicle_model: str
    vehicle_year: int

    purchase_price: float
    ownership_start: datetime.date
    ownership_end: datetime.date | None = None
    ownership_days: int

    total_fuel_cost: float
    total_expenses_cost: float  # inclut les dépenses miroir / includes shadow expenses
    total_cost: float
    expenses_by_category: dict[str, float] = {}

    total_kilometers: int | None = None
    cost_per_kilometer: float | None = None
    fuel_cost_per_kilometer: float | None = None
    expenses_cost_per_kilometer: float | None = None

    cost_per_day: float = 0
    cost_per_month: float = 0

    total_fuel_entries: int = 0
    total_expense_entries: int = 0


# --- Répartition / Breakdown ---

class CategoryBreakdownItem(BaseModel):
    category: str
    amount: float
    percentage: float
    count: int


class CostBreakdown(BaseModel):
    vehicle_id: int
    vehicle_make: str
    vehicle_model: str
    purchase_price: float
    total_fuel_cost: float
    total_expenses_cost: float  # hors dépenses miroir / excludes shadow expenses
    total_cost: float
    category_breakdown: list[CategoryBreakdownItem] = []


# --- Tendance mensuelle / Monthly trend ---

class MonthlyDataPoint(BaseModel):
    year: int
    month: int
    month_name: str
    fuel_cost: float
    expenses_cost: float
    total_cost: float
    fuel_entries: int
    expense_entries: int


class MonthlyCostTrend(BaseModel):
    vehicle_id: int
    vehicle_make: str
    vehicle_model: str
    monthly_data: list[MonthlyDataPoint] = []


# --- Synthèse multi-véhicules / Cross-vehicle summary ---

class VehicleSummaryItem(BaseModel):
    vehicle_id: int
    make: str
    model: str
    year: int
    purchase_price: float
    fuel_cost: float
    expenses_cost: float
    total_cost: float
    monthly_average: float


class VehicleSummary(BaseModel):
    total_vehicles: int = 0
    total_investment: float = 0
    total_fuel_cost: float = 0
    total_expenses_cost: float = 0
    grand_total_cost: float = 0
    vehicles: list[VehicleSummaryItem] = []
