"""
Feature modules for the IdP auth client.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models and value types
- service.py: Business logic implementation
- exceptions.py: Module-specific exceptions

The session module sits on top and talks to the others only through
their interfaces.
"""
