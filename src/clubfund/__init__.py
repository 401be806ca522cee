"""Cost allocation and fund balance engine for a small badminton club."""

__version__ = "0.1.0"
