"""Core package: provides models, database helpers, settings, errors, and shared utilities."""

from .db import Transaction, get_engine, init_db  # noqa: F401
from .errors import ClientError, InvalidMonthError, SeedError, ServerError  # noqa: F401
from .models import CombinedReport, Statistics, TransactionOut  # noqa: F401
from .settings import Settings  # noqa: F401
from .utils import get_logger  # noqa: F401
