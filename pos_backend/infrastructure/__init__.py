"""
Infrastructure Layer

Contains all external dependencies and implementations:
- Database implementations
- Configuration management
- Logging infrastructure
"""
