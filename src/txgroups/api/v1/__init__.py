"""
API v1 endpoints.

Route prefix constants for consistent API versioning.
"""

API_V1_PREFIX: str = ""

GROUPS_PREFIX: str = f"{API_V1_PREFIX}/groups"

__all__ = [
    "API_V1_PREFIX",
    "GROUPS_PREFIX",
]
