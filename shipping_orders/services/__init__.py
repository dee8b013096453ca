"""
Business services for the shipping orders system.
"""
