"""Booking payment reconciler: applies Stripe webhook events to bookings, orders and payments."""

__version__ = "0.1.0"
