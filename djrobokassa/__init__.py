"""
Robokassa Payment Utility for Django

Signature building, callback verification and operation state queries
for the Robokassa payment gateway.
"""

__version__ = "0.1.0"
