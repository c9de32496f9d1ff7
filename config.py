import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _int_list(value: str):
    return tuple(int(p) for p in value.split(",") if p.strip())


class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the app as courtslot.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "courtslot.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Slot granularity in minutes
    SLOT_MINUTES = int(os.getenv("SLOT_MINUTES", "15"))

    # Python weekday numbers (Mon=0). Default: Saturday, Sunday
    WEEKEND_DAYS = _int_list(os.getenv("WEEKEND_DAYS", "5,6"))

    # Operating hours enforced on the staff booking path
    OPENING_TIME = os.getenv("OPENING_TIME", "06:00")
    CLOSING_TIME = os.getenv("CLOSING_TIME", "23:00")

    # Payment bookkeeping
    DEFAULT_PAYMENT_MODE = os.getenv("DEFAULT_PAYMENT_MODE", "CASH")

    # Staff bookings require a 10-digit phone number
    STAFF_PHONE_PATTERN = r"^\d{10}$"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
