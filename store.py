import logging
import math
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from calculator import CalculationInput, compute
from errors import InternalError, StoreUnavailable
from models import db, Simulation
from utils import utcnow

log = logging.getLogger(__name__)

SimulationRecord = Dict[str, Any]


class SimulationStore:
    """
    Append-only history of calculations.

    Configured or not is decided once, from the database URI handed in at
    construction. Unconfigured stores refuse every operation with
    StoreUnavailable before touching the database.
    """

    def __init__(self, database_uri: Optional[str]):
        self.database_uri = database_uri or None
        self._schema_ready = False

    @property
    def configured(self) -> bool:
        return self.database_uri is not None

    def _require_configured(self):
        if not self.configured:
            raise StoreUnavailable()
        if not self._schema_ready:
            self.ensure_schema()

    def ensure_schema(self):
        """Create the simulation table if needed. Idempotent."""
        if not self.configured:
            raise StoreUnavailable()
        try:
            db.create_all()
        except SQLAlchemyError as e:
            log.exception("Creating simulation table failed")
            raise InternalError() from e
        self._schema_ready = True

    def save(self, inp: CalculationInput) -> SimulationRecord:
        """Recompute the result from `inp`, insert and return the new record."""
        self._require_configured()

        result = compute(inp)
        values = {**inp.as_dict(), **result.as_dict()}
        bad = [k for k, v in values.items() if not math.isfinite(v)]
        if bad:
            log.warning("Refusing to store non-numeric values for %s", ", ".join(bad))
            raise InternalError()

        row = Simulation(
            power=inp.power,
            hours_per_day=inp.hoursPerDay,
            days_per_month=inp.daysPerMonth,
            months_per_year=inp.monthsPerYear,
            cost_per_kwh=inp.costPerKwh,
            monthly_kwh=result.monthlyKwh,
            annual_kwh=result.annualKwh,
            monthly_cost=result.monthlyCost,
            annual_cost=result.annualCost,
            created_at=utcnow(),
        )
        try:
            db.session.add(row)
            db.session.commit()
            record = row.as_dict()
        except SQLAlchemyError as e:
            db.session.rollback()
            log.exception("Error saving simulation")
            raise InternalError() from e
        log.debug("Saved simulation %s", record["id"])
        return record

    def list(self) -> List[SimulationRecord]:
        """All records, newest first; equal timestamps keep the later insert first."""
        self._require_configured()
        try:
            rows = (
                Simulation.query
                .order_by(Simulation.created_at.desc(), Simulation.id.desc())
                .all()
            )
            return [r.as_dict() for r in rows]
        except SQLAlchemyError as e:
            db.session.rollback()
            log.exception("Error fetching simulations")
            raise InternalError() from e
