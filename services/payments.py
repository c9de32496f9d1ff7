from models.enums import PaymentStatus


def balance_for(final_amount: int, advance_paid: int) -> int:
    return max(0, final_amount - (advance_paid or 0))


def derive_payment_status(advance_paid, final_amount, override=None) -> PaymentStatus:
    # A caller-supplied status is stored as-is
    if override:
        return PaymentStatus(override)

    advance = advance_paid or 0
    if advance <= 0:
        return PaymentStatus.PENDING
    if advance >= final_amount:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIAL
