from .allocator import (
    AllocationResult,
    DurationMetrics,
    allocated_overhead,
    auto_allocation,
    duration_metrics,
    profit_margin,
    project_price,
    weekly_overhead,
)
from .ledgers import CostLedger, OfficeRentLedger, RecordLedger
from .projects import ProjectLedger
from .storage import JsonKeyValueStore, MemoryKeyValueStore

__all__ = [
    "AllocationResult",
    "CostLedger",
    "DurationMetrics",
    "JsonKeyValueStore",
    "MemoryKeyValueStore",
    "OfficeRentLedger",
    "ProjectLedger",
    "RecordLedger",
    "allocated_overhead",
    "auto_allocation",
    "duration_metrics",
    "profit_margin",
    "project_price",
    "weekly_overhead",
]
