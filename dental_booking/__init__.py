"""Appointment booking backend for a dental clinic"""

__version__ = "1.0.0"
