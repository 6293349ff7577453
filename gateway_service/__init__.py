"""
Dashboard Gateway Service

Forwarding gateway between the dashboard and its backend API / external resources.
"""

__version__ = "1.0.0"
