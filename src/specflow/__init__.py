"""SpecFlow - deterministic backlog generation from a feature description."""

__version__ = "0.1.0"
