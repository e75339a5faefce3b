from reconciler.domain.entities.booking import BookingPaymentStatus
from reconciler.domain.entities.payment import PaymentStatus
from reconciler.domain.events import EventKind
from reconciler.domain.statuses import enum_value, is_known_status, parse_status


def test_parse_status_returns_member_for_known_value():
    assert parse_status(PaymentStatus, "PAID") is PaymentStatus.PAID


def test_parse_status_keeps_foreign_value_as_string():
    assert parse_status(PaymentStatus, "REFUNDED") == "REFUNDED"
    assert parse_status(BookingPaymentStatus, "REFUNDED") == "REFUNDED"


def test_enum_value_accepts_members_and_strings():
    assert enum_value(EventKind.PAYMENT_SUCCEEDED) == "payment_intent.succeeded"
    assert enum_value(PaymentStatus.FAILED) == "FAILED"
    assert enum_value("customer.created") == "customer.created"


def test_is_known_status():
    assert is_known_status(PaymentStatus, PaymentStatus.PENDING)
    assert is_known_status(PaymentStatus, "PENDING")
    assert not is_known_status(PaymentStatus, "REFUNDED")
