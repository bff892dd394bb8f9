"""
Application layer - Use cases and orchestration for the case registry.

This layer contains:
- Port definitions (abstract interfaces for infrastructure)
- Application services (CaseRegistryService)

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure (observability excepted, see services/base.py)
"""
