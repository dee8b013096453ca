"""
Domain layer: business entities independent of persistence.
"""
