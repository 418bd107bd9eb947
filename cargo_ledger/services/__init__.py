"""
Services package for Cargo Ledger.
"""

from cargo_ledger.services.batch import BatchPersister, ContainerService, ShipService

__all__ = [
    "BatchPersister",
    "ShipService",
    "ContainerService",
]
