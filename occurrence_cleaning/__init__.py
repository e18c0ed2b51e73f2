"""
Cleaning pipelines for crabeater seal occurrence records from GBIF and
SCAR-APIS.
"""

__version__ = "0.1.0"
