from models import db
from models.court import Court

# name, sport, weekday rate/hr, weekend rate/hr
DEFAULT_COURTS = [
    ("Court A", None, 800, 1000),
    ("Court B", None, 800, 1000),
    ("Turf 1", "Football", 1200, 1500),
]

def seed_courts() -> int:
    existing = {c.name for c in Court.query.all()}
    created = 0
    for name, sport, weekday_rate, weekend_rate in DEFAULT_COURTS:
        if name not in existing:
            db.session.add(Court(name=name, sport=sport, weekday_rate=weekday_rate, weekend_rate=weekend_rate))
            created += 1
    db.session.commit()
    return created
