"""Fieldbook: construction project records service"""

__version__ = "1.0.0"
