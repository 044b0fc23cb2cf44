"""Live earthquake feed visualiser (artistic and geographic views)."""
__version__ = "0.1.0"
