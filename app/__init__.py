"""
Smart Home Room Status Service

A FastAPI backend that normalizes smart-home device state from a local
home-automation hub or a cloud device registry into the unified room device
shape consumed by the dashboard.
"""

__version__ = "1.0.0"
__author__ = "Smart Home Energy Team"
__description__ = "Normalized room device status for the smart home dashboard"
