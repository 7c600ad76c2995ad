"""
Costboard - multi-cloud cost analytics for dashboard views.
"""

__version__ = "0.1.0"
