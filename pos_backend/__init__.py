"""
POS order backend

Order ingestion, customer identity and stock bookkeeping for a point-of-sale
client, served over a command-style HTTP surface.
"""

__version__ = "0.3.0"
