"""
Service de rapports / Reporting service.

Compositions en lecture seule : TCO, répartition par catégorie, tendance
mensuelle et synthèse multi-véhicules.
Read-only compositions: TCO, category breakdown, monthly trend and
cross-vehicle summary.

Le TCO et la synthèse comptent les dépenses miroir dans les dépenses ET le
carburant dans son propre total ; la répartition les exclut.
TCO and summary count shadow expenses in expenses AND fuel in its own total;
the breakdown excludes them.
"""

import calendar
import logging
from collections import defaultdict
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.models.expense import Expense
from carcost.models.fuel_entry import FuelEntry
from carcost.models.vehicle import Vehicle
from carcost.schemas.common import today_utc
from carcost.schemas.report import (
    CategoryBreakdownItem,
    CostBreakdown,
    MonthlyCostTrend,
    MonthlyDataPoint,
    TcoReport,
    VehicleSummary,
    VehicleSummaryItem,
)
from carcost.services.scoping import TenantScope

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
PURCHASE_PRICE_LABEL = "Purchase Price"
FUEL_LABEL = "Fuel & Charging"


def ownership_days(vehicle: Vehicle) -> int:
    """Jours de détention, jusqu'à aujourd'hui si toujours possédé /
    Days owned, up to today when still owned."""
    end = vehicle.ownership_end or today_utc()
    return (end - vehicle.ownership_start).days


def _percentage(amount: Decimal, total: Decimal) -> float:
    return float(round(amount / total * 100, 2)) if total > 0 else 0


def _per_month(total: Decimal, days: int) -> Decimal:
    months = Decimal(days) / 30
    return total / months if months > 0 else ZERO


def _total_km(entries: Sequence[FuelEntry]) -> int | None:
    # Tri brut par odomètre, relevés absents en tête / Raw odometer sort, missing readings first
    ordered = sorted(entries, key=lambda e: (e.odometer is not None, e.odometer or 0))
    first, last = ordered[0].odometer, ordered[-1].odometer
    if first is None or last is None:
        return None
    return last - first


class ReportService:
    def __init__(self, db: AsyncSession, scope: TenantScope):
        self.db = db
        self.scope = scope

    async def _vehicle_rows(self, vehicle_id: int):
        """Véhicule, pleins et dépenses, ou None / Vehicle, entries and expenses, or None."""
        vehicle = await self.scope.get_vehicle(self.db, vehicle_id)
        if vehicle is None:
            logger.warning("Vehicle %s not available to user %s", vehicle_id, self.scope.user_id)
            return None
        fuel = await self.db.execute(select(FuelEntry).where(FuelEntry.vehicle_id == vehicle.id))
        expenses = await self.db.execute(select(Expense).where(Expense.vehicle_id == vehicle.id))
        return vehicle, list(fuel.scalars().all()), list(expenses.scalars().all())

    async def tco(self, vehicle_id: int) -> TcoReport | None:
        """Coût total de possession / Total cost of ownership."""
        rows = await self._vehicle_rows(vehicle_id)
        if rows is None:
            return None
        vehicle, entries, expenses = rows

        total_fuel = sum((e.cost for e in entries), ZERO)
        total_expenses = sum((e.amount for e in expenses), ZERO)
        total = vehicle.purchase_price + total_fuel + total_expenses
        days = ownership_days(vehicle)

        by_category: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for expense in expenses:
            by_category[expense.category.value] += expense.amount

        report = TcoReport(
            vehicle_id=vehicle.id,
            vehicle_make=vehicle.make,
            vehicle_model=vehicle.model,
            vehicle_year=vehicle.year,
            purchase_price=float(vehicle.purchase_price),
            ownership_start=vehicle.ownership_start,
            ownership_end=vehicle.ownership_end,
            ownership_days=days,
            total_fuel_cost=float(total_fuel),
            total_expenses_cost=float(total_expenses),
            total_cost=float(total),
            expenses_by_category={k: float(v) for k, v in by_category.items()},
            cost_per_day=float(round(total / days, 2)) if days > 0 else 0,
            cost_per_month=float(round(_per_month(total, days), 2)),
            total_fuel_entries=len(entries),
            total_expense_entries=len(expenses),
        )

        if len(entries) >= 2:
            km = _total_km(entries)
            report.total_kilometers = km
            if km is not None and km > 0:
                report.cost_per_kilometer = float(round(total / km, 4))
                report.fuel_cost_per_kilometer = float(round(total_fuel / km, 4))
                report.expenses_cost_per_kilometer = float(round(total_expenses / km, 4))
        return report

    async def breakdown(self, vehicle_id: int) -> CostBreakdown | None:
        """Répartition par catégorie sans double comptage / Category breakdown without double counting."""
        rows = await self._vehicle_rows(vehicle_id)
        if rows is None:
            return None
        vehicle, entries, expenses = rows

        shadow_ids = {e.linked_expense_id for e in entries if e.linked_expense_id is not None}
        own_expenses = [e for e in expenses if e.id not in shadow_ids]

        total_fuel = sum((e.cost for e in entries), ZERO)
        total_expenses = sum((e.amount for e in own_expenses), ZERO)
        total = vehicle.purchase_price + total_fuel + total_expenses

        items: list[CategoryBreakdownItem] = []
        if vehicle.purchase_price > 0:
            items.append(CategoryBreakdownItem(
                category=PURCHASE_PRICE_LABEL,
                amount=float(vehicle.purchase_price),
                percentage=_percentage(vehicle.purchase_price, total),
                count=1,
            ))
        if total_fuel > 0:
            items.append(CategoryBreakdownItem(
                category=FUEL_LABEL,
                amount=float(total_fuel),
                percentage=_percentage(total_fuel, total),
                count=len(entries),
            ))

        groups: dict[str, list[Expense]] = defaultdict(list)
        for expense in own_expenses:
            groups[expense.category.value].append(expense)
        grouped = []
        for category, members in groups.items():
            amount = sum((e.amount for e in members), ZERO)
            grouped.append(CategoryBreakdownItem(
                category=category,
                amount=float(amount),
                percentage=_percentage(amount, total),
                count=len(members),
            ))
        grouped.sort(key=lambda item: item.amount, reverse=True)
        items.extend(grouped)

        return CostBreakdown(
            vehicle_id=vehicle.id,
            vehicle_make=vehicle.make,
            vehicle_model=vehicle.model,
            purchase_price=float(vehicle.purchase_price),
            total_fuel_cost=float(total_fuel),
            total_expenses_cost=float(total_expenses),
            total_cost=float(total),
            category_breakdown=items,
        )

    async def monthly_trend(self, vehicle_id: int) -> MonthlyCostTrend | None:
        """Série mensuelle creuse / Sparse monthly series."""
        rows = await self._vehicle_rows(vehicle_id)
        if rows is None:
            return None
        vehicle, entries, expenses = rows

        fuel_by_month: dict[tuple[int, int], list[Decimal]] = defaultdict(list)
        for entry in entries:
            fuel_by_month[(entry.date.year, entry.date.month)].append(entry.cost)
        expenses_by_month: dict[tuple[int, int], list[Decimal]] = defaultdict(list)
        for expense in expenses:
            expenses_by_month[(expense.date.year, expense.date.month)].append(expense.amount)

        points = []
        for year, month in sorted(fuel_by_month.keys() | expenses_by_month.keys()):
            fuel_costs = fuel_by_month.get((year, month), [])
            expense_costs = expenses_by_month.get((year, month), [])
            fuel_cost = sum(fuel_costs, ZERO)
            expenses_cost = sum(expense_costs, ZERO)
            points.append(MonthlyDataPoint(
                year=year,
                month=month,
                month_name=calendar.month_name[month],
                fuel_cost=float(fuel_cost),
                expenses_cost=float(expenses_cost),
                total_cost=float(fuel_cost + expenses_cost),
                fuel_entries=len(fuel_costs),
                expense_entries=len(expense_costs),
            ))

        return MonthlyCostTrend(
            vehicle_id=vehicle.id,
            vehicle_make=vehicle.make,
            vehicle_model=vehicle.model,
            monthly_data=points,
        )

    async def summary(self) -> VehicleSummary:
        """Synthèse de tous les véhicules de l'utilisateur / Summary across the caller's vehicles."""
        result = await self.db.execute(self.scope.vehicles().order_by(Vehicle.id))
        vehicles = list(result.scalars().all())

        fuel_totals = await self._sum_by_vehicle(FuelEntry.vehicle_id, FuelEntry.cost, vehicles)
        expense_totals = await self._sum_by_vehicle(Expense.vehicle_id, Expense.amount, vehicles)

        items = []
        total_investment = total_fuel = total_expenses = ZERO
        for vehicle in vehicles:
            fuel_cost = fuel_totals.get(vehicle.id, ZERO)
            expenses_cost = expense_totals.get(vehicle.id, ZERO)
            total = vehicle.purchase_price + fuel_cost + expenses_cost
            items.append(VehicleSummaryItem(
                vehicle_id=vehicle.id,
                make=vehicle.make,
                model=vehicle.model,
                year=vehicle.year,
                purchase_price=float(vehicle.purchase_price),
                fuel_cost=float(fuel_cost),
                expenses_cost=float(expenses_cost),
                total_cost=float(total),
                monthly_average=float(round(_per_month(total, ownership_days(vehicle)), 2)),
            ))
            total_investment += vehicle.purchase_price
            total_fuel += fuel_cost
            total_expenses += expenses_cost

        return VehicleSummary(
            total_vehicles=len(vehicles),
            total_investment=float(total_investment),
            total_fuel_cost=float(total_fuel),
            total_expenses_cost=float(total_expenses),
            grand_total_cost=float(total_investment + total_fuel + total_expenses),
            vehicles=items,
        )

    async def _sum_by_vehicle(self, vehicle_col, amount_col, vehicles: list[Vehicle]) -> dict[int, Decimal]:
        if not vehicles:
            return {}
        result = await self.db.execute(
            select(vehicle_col, func.sum(amount_col))
            .where(vehicle_col.in_([v.id for v in vehicles]))
            .group_by(vehicle_col)
        )
        return {vid: Decimal(str(total)) for vid, total in result.all() if total is not None}
