"""Tests du calcul d'efficacité / Efficiency calculator tests."""

from datetime import date
from decimal import Decimal

from carcost.models.fuel_entry import EnergyType, FuelEntry
from carcost.services.efficiency import EfficiencyCalculator


def entry(amount, cost, odometer=None, energy_type=EnergyType.GASOLINE):
    return FuelEntry(
        energy_type=energy_type,
        amount=Decimal(amount),
        cost=Decimal(cost),
        odometer=odometer,
        date=date(2024, 5, 1),
        vehicle_id=1,
    )


def test_window_excludes_first_fill_up():
    entries = [
        entry("40", "60", 10000),
        entry("35", "52.5", 10500),
        entry("45", "67.5"),
    ]
    result = EfficiencyCalculator.summarize(1, entries)

    assert result.total_kilometers == 500
    assert result.average_liters_per_100km == 7.0
    assert result.average_kilometers_per_liter == 14.29
    assert result.average_cost_per_kilometer == 0.36
    assert result.total_cost == 180.0
    assert result.total_amount == 120.0
    assert result.average_cost_per_fill_up == 60.0
    assert result.entries_with_odometer == 2
    assert result.entries_without_odometer == 1
    assert result.hybrid is None


def test_window_ignores_entry_order():
    entries = [entry("35", "52.5", 10500), entry("40", "60", 10000)]
    result = EfficiencyCalculator.summarize(1, entries)
    # Seul le plein à 10500 compte / Only the 10500 fill-up counts
    assert result.average_liters_per_100km == 7.0


def test_single_odometer_reading_is_cost_only():
    result = EfficiencyCalculator.summarize(1, [entry("40", "50", 10000), entry("20", "30")])

    assert result.average_liters_per_100km is None
    assert result.average_kilometers_per_liter is None
    assert result.average_cost_per_kilometer is None
    assert result.total_kilometers == 0
    assert result.total_cost == 80.0
    assert result.total_amount == 60.0
    assert result.average_cost_per_fill_up == 40.0
    assert result.entries_with_odometer == 1
    assert result.entries_without_odometer == 1


def test_zero_odometer_counts_as_missing():
    result = EfficiencyCalculator.summarize(1, [entry("40", "60", 0), entry("35", "50", 10500)])
    assert result.entries_with_odometer == 1
    assert result.entries_without_odometer == 1
    assert result.average_liters_per_100km is None


def test_flat_odometer_falls_back_to_costs():
    result = EfficiencyCalculator.summarize(1, [entry("40", "10", 1000), entry("35", "10.01", 1000)])
    assert result.total_kilometers == 0
    assert result.average_cost_per_kilometer is None
    # Moyenne non arrondie hors fenêtre / Unrounded average without a window
    assert result.average_cost_per_fill_up == 10.005


def test_no_entries():
    result = EfficiencyCalculator.summarize(7, [])
    assert result.vehicle_id == 7
    assert result.total_fill_ups == 0
    assert result.average_cost_per_fill_up == 0
    assert result.total_cost == 0


def test_hybrid_buckets_and_blended_cost():
    entries = [
        entry("12", "3.60", 30100, EnergyType.ELECTRICITY),
        entry("35", "55.30", 30400),
        entry("12.5", "3.75", 30520, EnergyType.ELECTRICITY),
        entry("33", "52.10", 30980),
    ]
    result = EfficiencyCalculator.summarize(1, entries, hybrid=True)
    hybrid = result.hybrid

    assert hybrid.fuel.unit == "L"
    assert hybrid.fuel.total_kilometers == 580
    assert hybrid.fuel.consumption_per_100km == 5.69
    assert hybrid.fuel.kilometers_per_unit == 17.58
    assert hybrid.fuel.cost_per_kilometer == 0.1852

    assert hybrid.electricity.unit == "kWh"
    assert hybrid.electricity.total_kilometers == 420
    assert hybrid.electricity.consumption_per_100km == 2.98
    assert hybrid.electricity.kilometers_per_unit == 33.6
    assert hybrid.electricity.cost_per_kilometer == 0.0175

    assert hybrid.blended_cost_per_kilometer == 0.1304


def test_hybrid_bucket_without_window():
    entries = [
        entry("12", "3.60", 30100, EnergyType.ELECTRICITY),
        entry("35", "55.30", 30400),
    ]
    hybrid = EfficiencyCalculator.hybrid(entries)
    assert hybrid.fuel.consumption_per_100km is None
    assert hybrid.electricity.consumption_per_100km is None
    assert hybrid.fuel.total_fill_ups == 1
    # Deux relevés au total : coût combiné calculable / Two readings overall: blended cost available
    assert hybrid.blended_cost_per_kilometer == round(58.90 / 300, 4)


def test_hybrid_top_level_ratio_mixes_units():
    entries = [
        entry("10", "18", 1000),
        entry("30", "9", 1500, EnergyType.ELECTRICITY),
        entry("10", "18", 2000),
    ]
    result = EfficiencyCalculator.summarize(1, entries, hybrid=True)

    # 30 kWh + 10 L sur 1000 km / 30 kWh + 10 L over 1000 km
    assert result.average_liters_per_100km == 4.0
    assert result.hybrid.fuel.consumption_per_100km == 1.0
    assert result.hybrid.electricity.consumption_per_100km is None
