"""Core application components."""

from core.logger import setup_logger, get_logger
from core.constants import (
    RaffleDefaults,
    PurchaseDefaults,
    DrawStatus,
    ConsoleDefaults,
)
from core.exceptions import (
    ApplicationError,
    ConfigurationError,
    ValidationError,
    InvalidInputError,
    ServiceError,
    RaffleError,
    DrawNotOpenError,
    TicketLimitError,
)
from core.models import (
    Ticket,
    Participant,
    PurchaseResult,
    TierResult,
    DrawResult,
    RaffleStatus,
    RaffleRules,
)

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    # Constants
    'RaffleDefaults',
    'PurchaseDefaults',
    'DrawStatus',
    'ConsoleDefaults',
    # Exceptions
    'ApplicationError',
    'ConfigurationError',
    'ValidationError',
    'InvalidInputError',
    'ServiceError',
    'RaffleError',
    'DrawNotOpenError',
    'TicketLimitError',
    # Models
    'Ticket',
    'Participant',
    'PurchaseResult',
    'TierResult',
    'DrawResult',
    'RaffleStatus',
    'RaffleRules',
]
