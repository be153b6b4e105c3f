"""fleet-stats: breakdown reports over a fleet status snapshot."""

__version__ = "0.1.0"
