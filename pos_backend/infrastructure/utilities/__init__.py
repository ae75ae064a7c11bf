"""
Shared infrastructure utilities: constants, exceptions and small helpers.
"""
