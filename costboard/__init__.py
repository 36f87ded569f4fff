"""Operating-cost dashboard backend: cost ledgers, project overhead allocation and pricing."""

__version__ = "0.1.0"
