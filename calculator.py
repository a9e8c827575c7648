from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Mapping
import math

from errors import MissingParameters
from utils import round_half_up

# Wire names, in the order clients send them
FIELDS = ("power", "hoursPerDay", "daysPerMonth", "monthsPerYear", "costPerKwh")

KWH_PLACES = 3
COST_PLACES = 2


@dataclass(frozen=True)
class CalculationInput:
    power: float            # W
    hoursPerDay: float
    daysPerMonth: float
    monthsPerYear: float
    costPerKwh: float       # currency / kWh

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class CalculationResult:
    monthlyKwh: float
    annualKwh: float
    monthlyCost: float
    annualCost: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def to_number(val: Any) -> float:
    """
    Loose numeric coercion: None and blank strings are 0, numeric strings are
    parsed, anything else is NaN. Never raises.
    """
    if val is None:
        return 0.0
    if isinstance(val, (int, float)):
        try:
            return float(val)
        except OverflowError:
            # ints beyond float range
            return math.inf if val > 0 else -math.inf
    if isinstance(val, str):
        s = val.strip()
        if not s:
            return 0.0
        if "_" in s:
            return math.nan
        try:
            return float(s)
        except ValueError:
            return math.nan
    return math.nan


def missing_fields(payload: Mapping[str, Any]) -> List[str]:
    return [f for f in FIELDS if f not in payload]


def parse_input(payload: Mapping[str, Any]) -> CalculationInput:
    """Check all five fields are present, then coerce them."""
    missing = missing_fields(payload)
    if missing:
        raise MissingParameters(missing)
    return CalculationInput(**{f: to_number(payload[f]) for f in FIELDS})


def compute(inp: CalculationInput) -> CalculationResult:
    """
    Monthly and annual energy (kWh) and cost for a device.

    Every figure is computed at full precision first; each output is then
    rounded on its own (energy to 3 places, cost to 2).
    """
    power = to_number(inp.power)
    hours = to_number(inp.hoursPerDay)
    days = to_number(inp.daysPerMonth)
    months = to_number(inp.monthsPerYear)
    cost = to_number(inp.costPerKwh)

    monthly_kwh = (power / 1000) * hours * days
    annual_kwh = monthly_kwh * months

    monthly_cost = monthly_kwh * cost
    annual_cost = annual_kwh * cost

    return CalculationResult(
        monthlyKwh=round_half_up(monthly_kwh, KWH_PLACES),
        annualKwh=round_half_up(annual_kwh, KWH_PLACES),
        monthlyCost=round_half_up(monthly_cost, COST_PLACES),
        annualCost=round_half_up(annual_cost, COST_PLACES),
    )
