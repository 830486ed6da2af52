"""
Calcul de l'efficacité énergétique / Fuel efficiency calculation.

Fenêtre odomètre : seuls les pleins avec un relevé > 0 bornent la distance,
et le carburant du premier plein de la fenêtre n'est jamais compté (il a été
acheté avant la distance mesurée).
Odometer window: only entries with a reading > 0 bound the distance, and the
first entry's fuel is never counted (it was bought before the measured distance).
"""

from collections.abc import Sequence
from decimal import Decimal

from carcost.models.fuel_entry import EnergyType, FuelEntry
from carcost.schemas.fuel import EnergyBucketEfficiency, FuelEfficiencyRead, HybridEfficiencyRead

ZERO = Decimal("0")


def _dec(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _with_odometer(entries: Sequence[FuelEntry]) -> list[FuelEntry]:
    """Pleins avec relevé valide, triés par odomètre / Entries with a valid reading, by odometer."""
    return sorted(
        (e for e in entries if e.odometer is not None and e.odometer > 0),
        key=lambda e: e.odometer,
    )


def _window(entries: Sequence[FuelEntry]) -> tuple[int, Decimal] | None:
    """(km, quantité consommée) ou None si la fenêtre est inexploitable /
    (kilometers, quantity burned) or None when no usable window exists."""
    ordered = _with_odometer(entries)
    if len(ordered) < 2:
        return None
    total_km = ordered[-1].odometer - ordered[0].odometer
    if total_km <= 0:
        return None
    used = sum((_dec(e.amount) for e in ordered[1:]), ZERO)
    return total_km, used


class EfficiencyCalculator:
    """Statistiques de consommation d'un véhicule / Vehicle consumption statistics."""

    @staticmethod
    def summarize(vehicle_id: int, entries: Sequence[FuelEntry], hybrid: bool = False) -> FuelEfficiencyRead:
        """Synthèse tous pleins confondus / Summary across every entry.

        Pour un hybride, les ratios de premier niveau additionnent litres et kWh ;
        seule la section `hybrid` sépare les unités.
        For a hybrid the top-level ratios add litres and kWh together; only the
        `hybrid` section keeps the units apart.
        """
        count = len(entries)
        total_cost = sum((_dec(e.cost) for e in entries), ZERO)
        total_amount = sum((_dec(e.amount) for e in entries), ZERO)
        with_odometer = len(_with_odometer(entries))

        result = FuelEfficiencyRead(
            vehicle_id=vehicle_id,
            total_cost=float(total_cost),
            total_amount=float(total_amount),
            # Pas de fenêtre : moyenne non arrondie / No window: average left unrounded
            average_cost_per_fill_up=float(total_cost / count) if count else 0,
            total_fill_ups=count,
            entries_with_odometer=with_odometer,
            entries_without_odometer=count - with_odometer,
        )

        window = _window(entries)
        if window is not None:
            total_km, used = window
            result.total_kilometers = total_km
            result.average_liters_per_100km = float(round(used / total_km * 100, 2))
            result.average_kilometers_per_liter = float(round(Decimal(total_km) / used, 2))
            result.average_cost_per_kilometer = float(round(total_cost / total_km, 4))
            result.average_cost_per_fill_up = float(round(total_cost / count, 2))

        if hybrid:
            result.hybrid = EfficiencyCalculator.hybrid(entries)
        return result

    @staticmethod
    def bucket(entries: Sequence[FuelEntry], unit: str) -> EnergyBucketEfficiency:
        """Efficacité d'une seule famille d'énergie / Efficiency of one energy family."""
        total_cost = sum((_dec(e.cost) for e in entries), ZERO)
        result = EnergyBucketEfficiency(
            unit=unit,
            total_cost=float(total_cost),
            total_amount=float(sum((_dec(e.amount) for e in entries), ZERO)),
            total_fill_ups=len(entries),
            entries_with_odometer=len(_with_odometer(entries)),
        )
        window = _window(entries)
        if window is None:
            return result

        total_km, used = window
        result.total_kilometers = total_km
        result.consumption_per_100km = float(round(used / total_km * 100, 2))
        result.kilometers_per_unit = float(round(Decimal(total_km) / used, 2))
        result.cost_per_kilometer = float(round(total_cost / total_km, 4))
        return result

    @staticmethod
    def hybrid(entries: Sequence[FuelEntry]) -> HybridEfficiencyRead:
        """Carburant et électricité séparés + coût/km combiné /
        Fuel and electricity split plus blended cost per km.

        À lire à la place des ratios de `summarize`, qui mélangent les unités.
        Read these instead of the `summarize` ratios, which mix units.
        """
        fuel = [e for e in entries if e.energy_type is not EnergyType.ELECTRICITY]
        electricity = [e for e in entries if e.energy_type is EnergyType.ELECTRICITY]

        blended = None
        ordered = _with_odometer(entries)
        if len(ordered) >= 2:
            span = ordered[-1].odometer - ordered[0].odometer
            if span > 0:
                total_cost = sum((_dec(e.cost) for e in entries), ZERO)
                blended = float(round(total_cost / span, 4))

        return HybridEfficiencyRead(
            fuel=EfficiencyCalculator.bucket(fuel, "L"),
            electricity=EfficiencyCalculator.bucket(electricity, "kWh"),
            blended_cost_per_kilometer=blended,
        )
