"""
servicehours - service availability and order-time scheduling for restaurants.
"""

__version__ = "0.1.0"
