"""Domain layer for sacredfinance application."""

from sacredfinance.domain.bookkeeping import BookkeepingService
from sacredfinance.domain.users import UserService
from sacredfinance.domain.reports import ReportService
from sacredfinance.domain.insights import InsightService

__all__ = [
    "BookkeepingService",
    "UserService",
    "ReportService",
    "InsightService",
]
