from models.enums import PaymentStatus
from services.payments import balance_for, derive_payment_status


def test_derived_status():
    assert derive_payment_status(0, 800) is PaymentStatus.PENDING
    assert derive_payment_status(None, 800) is PaymentStatus.PENDING
    assert derive_payment_status(300, 800) is PaymentStatus.PARTIAL
    assert derive_payment_status(800, 800) is PaymentStatus.PAID
    assert derive_payment_status(900, 800) is PaymentStatus.PAID


def test_free_booking_without_advance_is_pending():
    assert derive_payment_status(0, 0) is PaymentStatus.PENDING


def test_override_wins():
    assert derive_payment_status(0, 800, override=PaymentStatus.PAID) is PaymentStatus.PAID
    assert derive_payment_status(800, 800, override="PARTIAL") is PaymentStatus.PARTIAL


def test_balance_never_negative():
    assert balance_for(800, 300) == 500
    assert balance_for(700, 800) == 0
    assert balance_for(800, None) == 800
