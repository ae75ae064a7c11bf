"""
Domain Layer

Entities, value objects and repository contracts for the point-of-sale core.
"""
