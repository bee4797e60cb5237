"""Mission control: coordination ledger for a small team of agents."""

__version__ = "0.1.0"
