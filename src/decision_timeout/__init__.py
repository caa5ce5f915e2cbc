"""Decision Timeout: a commitment engine for time-boxed yes/no decisions."""

__version__ = "0.1.0"
