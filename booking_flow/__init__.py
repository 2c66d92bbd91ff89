"""Booking flow driver for the partner booking wizard."""

__version__ = '0.1.0'
