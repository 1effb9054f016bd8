"""extsecret - resolve and write back missing external secret properties."""

__version__ = "0.1.0"
