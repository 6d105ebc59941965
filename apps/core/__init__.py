"""
Core app - Shared abstractions and utilities.

This app provides the cross-cutting pieces every domain app relies on:
- Error taxonomy (errors.py) and its HTTP mapping (handlers.py)
- Dual-surface routing for the web and mobile clients (routing.py)
- camelCase wire schemas (schemas.py)
"""
