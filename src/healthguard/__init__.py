"""Health Guard - architecture-compliance gate for changed sources."""

__version__ = "1.1.0"
