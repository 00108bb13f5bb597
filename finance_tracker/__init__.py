"""Personal finance tracker: income/expense transactions with live statistics."""

__version__ = "0.1.0"
