"""
Infrastructure layer - adapters, stubs, observability and monitoring.

IMPORT RULES:
- CAN import from: domain, application (ports)
"""
