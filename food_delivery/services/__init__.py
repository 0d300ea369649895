"""
Domain services: catalog, cart, order ledger, payment and image storage
"""
