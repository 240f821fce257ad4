"""
Endpoint modules for version 1 of the API.
"""
