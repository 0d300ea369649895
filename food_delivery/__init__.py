"""
Food Delivery API - catalog, cart and order backend
"""
__version__ = "1.0.0"
