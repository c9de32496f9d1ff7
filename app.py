import logging

from flask import Flask, jsonify
from config import Config
from routes import health_bp, court_bp, booking_bp

from models import db
from flask_migrate import Migrate
from services.errors import BookingError


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(court_bp)
    app.register_blueprint(booking_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    @app.errorhandler(BookingError)
    def _booking_error(exc):
        return jsonify(error=exc.message, **exc.payload()), exc.status_code

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        # JSON API only
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp


    register_cli(app)


    return app

#-------------------------
import click
from utils.seed import seed_courts

def register_cli(app):
    @app.cli.command("seed-courts")
    def seed_courts_command():
        """Create the demo courts if they are missing (idempotent)."""
        created = seed_courts()
        print(f"{created} court(s) created")

    @app.cli.command("set-court-rates")
    @click.argument("name")
    @click.argument("weekday_rate", type=int)
    @click.argument("weekend_rate", type=int)
    def set_court_rates(name, weekday_rate, weekend_rate):
        """Update the hourly rates of a court by name."""
        from models.court import Court

        court = Court.query.filter_by(name=name.strip()).first()
        if not court:
            print("Court not found")
            return

        court.weekday_rate = weekday_rate
        court.weekend_rate = weekend_rate
        db.session.commit()

        print(f"{court.name}: weekday {weekday_rate}/hr, weekend {weekend_rate}/hr")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
