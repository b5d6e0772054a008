"""App package ingestion for extensible hosts"""

__version__ = "0.1.0"
