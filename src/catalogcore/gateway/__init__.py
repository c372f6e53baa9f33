"""Entity Repository Gateway contract and the in-memory adapter."""

from .base import EntityFilter, EntityGateway, Pagination, ProductRecord, Record, RecordCollection
from .memory import MemoryGateway, MemoryRecord

__all__ = [
    "EntityFilter",
    "EntityGateway",
    "MemoryGateway",
    "MemoryRecord",
    "Pagination",
    "ProductRecord",
    "Record",
    "RecordCollection",
]
