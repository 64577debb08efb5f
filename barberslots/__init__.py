"""
barberslots - bookable appointment slots for barbers and barber shops.
"""

__version__ = "0.1.0"
