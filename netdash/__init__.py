"""
netdash - live network throughput dashboard.
"""

__version__ = "0.1.0"
