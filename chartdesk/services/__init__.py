"""
ChartDesk Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from chartdesk.services.base import (
    BaseService,
    ServiceError,
    ExternalAPIError,
    SymbolNotFoundError,
)

__all__ = [
    "BaseService",
    "ServiceError",
    "ExternalAPIError",
    "SymbolNotFoundError",
]
