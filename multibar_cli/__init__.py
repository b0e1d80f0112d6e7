"""
multibar-cli: concurrent downloads rendered as live terminal progress bars.
"""

__version__ = "0.1.0"
