"""Booking agent: appointment availability checks and nearest-slot suggestions."""
