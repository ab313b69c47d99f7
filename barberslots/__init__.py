"""
barberslots - barbershop booking client and slot availability calculator.
"""

__version__ = "0.1.0"
