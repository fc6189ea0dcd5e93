"""cellcalc -- spreadsheet formula parsing and evaluation."""

__version__ = "0.1.0"
