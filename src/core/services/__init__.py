"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py
- src/config (logging and settings)

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.movement_rules import (
    check_entry_counterparty,
    check_exit_counterparty,
    check_purpose,
    check_quantity,
)
from src.core.services.stock_aggregation import StockAggregationService
from src.core.services.tenant_guard import TenantScopeGuard, require_tenant

__all__ = [
    # Tenant scope
    "TenantScopeGuard",
    "require_tenant",
    # Movement rules
    "check_entry_counterparty",
    "check_exit_counterparty",
    "check_purpose",
    "check_quantity",
    # Aggregation
    "StockAggregationService",
]
