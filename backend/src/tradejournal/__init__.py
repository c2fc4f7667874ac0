"""
Trading Journal Application

A personal trading journal backend: per-day notes, per-trade entries and
daily profit/loss aggregated for a calendar view.
"""

__version__ = "1.0.0"
__author__ = "Trading Journal Development Team"
__description__ = "Personal trading journal API"
