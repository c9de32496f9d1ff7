from models.court import Court
from utils.seed import DEFAULT_COURTS, seed_courts


def test_seed_courts_is_idempotent(app):
    assert seed_courts() == len(DEFAULT_COURTS)
    assert seed_courts() == 0
    assert Court.query.count() == len(DEFAULT_COURTS)


def test_cli_commands(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed-courts"])
    assert "3 court(s) created" in result.output

    result = runner.invoke(args=["set-court-rates", "Court A", "900", "1100"])
    assert result.exit_code == 0
    court = Court.query.filter_by(name="Court A").one()
    assert (court.weekday_rate, court.weekend_rate) == (900, 1100)

    result = runner.invoke(args=["set-court-rates", "Nowhere", "1", "1"])
    assert "Court not found" in result.output
