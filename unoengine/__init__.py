"""UNO rules engine with scripted opponents."""

__version__ = "0.1.0"
