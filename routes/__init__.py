from .health import health_bp
from .courts import court_bp
from .booking import booking_bp
