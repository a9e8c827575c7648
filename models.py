from flask_sqlalchemy import SQLAlchemy

from utils import iso_utc, utcnow

db = SQLAlchemy()


class Simulation(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    # inputs
    power = db.Column(db.Float, nullable=False)            # W
    hours_per_day = db.Column(db.Float, nullable=False)
    days_per_month = db.Column(db.Float, nullable=False)
    months_per_year = db.Column(db.Float, nullable=False)
    cost_per_kwh = db.Column(db.Float, nullable=False)     # currency/kWh
    # results, always recomputed from the inputs on save
    monthly_kwh = db.Column(db.Float, nullable=False)
    annual_kwh = db.Column(db.Float, nullable=False)
    monthly_cost = db.Column(db.Float, nullable=False)
    annual_cost = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), index=True, nullable=False, default=utcnow)

    def as_dict(self):
        return {
            "id": self.id,
            "power": self.power,
            "hoursPerDay": self.hours_per_day,
            "daysPerMonth": self.days_per_month,
            "monthsPerYear": self.months_per_year,
            "costPerKwh": self.cost_per_kwh,
            "monthlyKwh": self.monthly_kwh,
            "annualKwh": self.annual_kwh,
            "monthlyCost": self.monthly_cost,
            "annualCost": self.annual_cost,
            "createdAt": iso_utc(self.created_at),
        }
