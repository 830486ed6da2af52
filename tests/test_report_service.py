"""Tests des rapports / Report service tests."""

from datetime import date
from decimal import Decimal

import pytest

from carcost.models.expense import ExpenseCategory
from carcost.models.fuel_entry import EnergyType
from carcost.schemas.expense import ExpenseCreate
from carcost.schemas.fuel import FuelEntryCreate
from carcost.services.expense_service import ExpenseService
from carcost.services.fuel_service import FuelService
from carcost.services.report_service import ReportService

from conftest import make_vehicle


async def add_fuel(db, scope, vehicle_id, cost, day=date(2024, 1, 15), odometer=None, amount="40"):
    return await FuelService(db, scope).create(FuelEntryCreate(
        vehicle_id=vehicle_id,
        energy_type=EnergyType.GASOLINE,
        amount=Decimal(amount),
        cost=Decimal(cost),
        odometer=odometer,
        date=day,
    ))


async def add_expense(db, scope, vehicle_id, amount, category=ExpenseCategory.MAINTENANCE, day=date(2024, 1, 20)):
    return await ExpenseService(db, scope).create(ExpenseCreate(
        vehicle_id=vehicle_id,
        category=category,
        amount=Decimal(amount),
        date=day,
    ))


# --- Répartition / Breakdown ---

@pytest.mark.asyncio
async def test_breakdown_excludes_shadow_expenses(db, scope, vehicle):
    await add_fuel(db, scope, vehicle.id, "100")
    await add_expense(db, scope, vehicle.id, "200")

    report = await ReportService(db, scope).breakdown(vehicle.id)

    categories = {item.category: item for item in report.category_breakdown}
    assert list(categories) == ["Purchase Price", "Fuel & Charging", "Maintenance"]
    assert categories["Fuel & Charging"].amount == 100.0
    assert categories["Fuel & Charging"].count == 1
    assert categories["Maintenance"].amount == 200.0
    assert categories["Maintenance"].count == 1
    assert "Fuel" not in categories
    assert "Other" not in categories
    assert report.total_fuel_cost == 100.0
    assert report.total_expenses_cost == 200.0
    assert report.total_cost == 20300.0
    assert categories["Purchase Price"].percentage == 98.52
    assert categories["Maintenance"].percentage == 0.99


@pytest.mark.asyncio
async def test_breakdown_orders_categories_by_amount(db, scope, user):
    vehicle = await make_vehicle(db, user, purchase_price=Decimal("0"))
    await add_expense(db, scope, vehicle.id, "160", ExpenseCategory.PARKING)
    await add_expense(db, scope, vehicle.id, "500", ExpenseCategory.INSURANCE)
    await add_expense(db, scope, vehicle.id, "90", ExpenseCategory.PARKING)

    report = await ReportService(db, scope).breakdown(vehicle.id)

    assert [(i.category, i.amount, i.count, i.percentage) for i in report.category_breakdown] == [
        ("Insurance", 500.0, 1, 66.67),
        ("Parking", 250.0, 2, 33.33),
    ]
    assert report.total_cost == 750.0


@pytest.mark.asyncio
async def test_breakdown_of_empty_vehicle(db, scope, user):
    vehicle = await make_vehicle(db, user, purchase_price=Decimal("0"))
    report = await ReportService(db, scope).breakdown(vehicle.id)
    assert report.category_breakdown == []
    assert report.total_cost == 0


# --- TCO ---

@pytest.mark.asyncio
async def test_tco_counts_shadow_expenses_twice(db, scope, vehicle):
    await add_fuel(db, scope, vehicle.id, "150")
    await add_expense(db, scope, vehicle.id, "350")

    report = await ReportService(db, scope).tco(vehicle.id)

    assert report.total_fuel_cost == 150.0
    assert report.total_expenses_cost == 500.0
    assert report.total_cost == 20650.0
    assert report.expenses_by_category == {"Fuel": 150.0, "Maintenance": 350.0}
    assert report.total_fuel_entries == 1
    assert report.total_expense_entries == 2
    assert report.total_kilometers is None
    assert report.cost_per_kilometer is None


@pytest.mark.asyncio
async def test_tco_per_kilometer_metrics(db, scope, vehicle):
    await add_fuel(db, scope, vehicle.id, "60", odometer=10000)
    await add_fuel(db, scope, vehicle.id, "52.5", odometer=10500)

    report = await ReportService(db, scope).tco(vehicle.id)

    assert report.total_kilometers == 500
    assert report.total_cost == 20225.0
    assert report.cost_per_kilometer == 40.45
    assert report.fuel_cost_per_kilometer == 0.225
    assert report.expenses_cost_per_kilometer == 0.225


@pytest.mark.asyncio
async def test_tco_missing_odometer_yields_no_distance(db, scope, vehicle):
    await add_fuel(db, scope, vehicle.id, "60", odometer=10000)
    await add_fuel(db, scope, vehicle.id, "50", odometer=None)

    report = await ReportService(db, scope).tco(vehicle.id)
    assert report.total_kilometers is None
    assert report.cost_per_kilometer is None


@pytest.mark.asyncio
async def test_tco_ownership_rates(db, scope, user):
    vehicle = await make_vehicle(
        db, user, ownership_start=date(2024, 1, 1), ownership_end=date(2024, 1, 31),
    )
    report = await ReportService(db, scope).tco(vehicle.id)

    assert report.ownership_days == 30
    assert report.cost_per_day == 666.67
    assert report.cost_per_month == 20000.0


@pytest.mark.asyncio
async def test_tco_same_day_ownership(db, scope, user):
    vehicle = await make_vehicle(
        db, user, ownership_start=date(2024, 1, 1), ownership_end=date(2024, 1, 1),
    )
    report = await ReportService(db, scope).tco(vehicle.id)
    assert report.cost_per_day == 0
    assert report.cost_per_month == 0


# --- Tendance mensuelle / Monthly trend ---

@pytest.mark.asyncio
async def test_monthly_trend_is_sparse(db, scope, vehicle):
    await add_expense(db, scope, vehicle.id, "80", day=date(2024, 3, 5))
    await add_expense(db, scope, vehicle.id, "40", ExpenseCategory.TOLLS, day=date(2024, 1, 9))

    report = await ReportService(db, scope).monthly_trend(vehicle.id)

    assert [(p.year, p.month) for p in report.monthly_data] == [(2024, 1), (2024, 3)]
    assert report.monthly_data[0].month_name == "January"
    assert report.monthly_data[1].expenses_cost == 80.0
    assert report.monthly_data[1].fuel_entries == 0


@pytest.mark.asyncio
async def test_monthly_trend_groups_fuel_and_expenses(db, scope, vehicle):
    await add_fuel(db, scope, vehicle.id, "100", day=date(2023, 12, 28))
    await add_expense(db, scope, vehicle.id, "30", day=date(2024, 2, 1))

    report = await ReportService(db, scope).monthly_trend(vehicle.id)

    december, february = report.monthly_data
    assert (december.year, december.month) == (2023, 12)
    assert december.fuel_cost == 100.0
    assert december.fuel_entries == 1
    # La dépense miroir du plein est aussi dans le registre / The shadow expense is in the ledger too
    assert december.expense_entries == 1
    assert december.total_cost == december.fuel_cost + december.expenses_cost
    assert february.fuel_cost == 0
    assert february.total_cost == 30.0


# --- Synthèse / Summary ---

@pytest.mark.asyncio
async def test_summary_rolls_up_every_vehicle(db, scope, user, other_scope, other_user):
    first = await make_vehicle(
        db, user, ownership_start=date(2024, 1, 1), ownership_end=date(2024, 3, 31),
    )
    second = await make_vehicle(
        db, user, make="Renault", model="Zoe", purchase_price=Decimal("15000.00"),
        ownership_start=date(2024, 1, 1), ownership_end=date(2024, 3, 31),
    )
    await add_fuel(db, scope, first.id, "300")
    await add_expense(db, scope, second.id, "300")
    foreign = await make_vehicle(db, other_user)
    await add_expense(db, other_scope, foreign.id, "999")

    summary = await ReportService(db, scope).summary()

    assert summary.total_vehicles == 2
    assert summary.total_investment == 35000.0
    assert summary.total_fuel_cost == 300.0
    assert summary.total_expenses_cost == 600.0
    assert summary.grand_total_cost == 35900.0

    by_id = {item.vehicle_id: item for item in summary.vehicles}
    assert by_id[first.id].fuel_cost == 300.0
    assert by_id[first.id].expenses_cost == 300.0
    assert by_id[first.id].total_cost == 20600.0
    # 90 jours = 3 mois / 90 days = 3 months
    assert by_id[first.id].monthly_average == 6866.67
    assert by_id[second.id].fuel_cost == 0
    assert by_id[second.id].total_cost == 15300.0


@pytest.mark.asyncio
async def test_summary_without_vehicles(db, other_scope):
    summary = await ReportService(db, other_scope).summary()
    assert summary.total_vehicles == 0
    assert summary.grand_total_cost == 0
    assert summary.vehicles == []


@pytest.mark.asyncio
async def test_reports_hidden_from_other_tenant(db, other_scope, vehicle):
    reports = ReportService(db, other_scope)
    assert await reports.tco(vehicle.id) is None
    assert await reports.breakdown(vehicle.id) is None
    assert await reports.monthly_trend(vehicle.id) is None
