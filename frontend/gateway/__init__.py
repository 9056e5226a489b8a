"""Remote data gateway: contract plus HTTP and in-memory implementations."""

from frontend.gateway.base import (
    Filter,
    Gateway,
    GatewayError,
    NoSingleRowError,
    Order,
    Result,
    Session,
    eq,
    in_,
    page_range,
)
from frontend.gateway.memory import MemoryGateway

__all__ = [
    "Filter",
    "Gateway",
    "GatewayError",
    "MemoryGateway",
    "NoSingleRowError",
    "Order",
    "Result",
    "Session",
    "eq",
    "in_",
    "page_range",
]
