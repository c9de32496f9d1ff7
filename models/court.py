from datetime import datetime
from models.db import db

class Court(db.Model):
    __tablename__ = "courts"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True)
    sport = db.Column(db.String(40), nullable=True)  # None = multi-sport

    # hourly rates in whole currency units
    weekday_rate = db.Column(db.Integer, nullable=False, default=0)
    weekend_rate = db.Column(db.Integer, nullable=False, default=0)

    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "sport": self.sport,
            "weekday_rate": self.weekday_rate,
            "weekend_rate": self.weekend_rate,
            "is_active": self.is_active,
        }
