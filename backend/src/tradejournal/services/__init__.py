"""
Services module for business logic.

Includes:
- JournalService: trade entries, day notes and daily P/L aggregation
- auth_service: local accounts and OAuth identity resolution
"""

from .journal_service import JournalService, journal_service

__all__ = [
    "JournalService",
    "journal_service",
]
