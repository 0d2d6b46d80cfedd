"""
Summaries package: book summary records and the service that manages them.

This package contains:
- Summary entity and input schemas
- Identifier parsing for stored records
- Explicit input validation and tag normalization
- MongoDB-backed record store
- Summary service with ownership enforcement
"""

__version__ = "1.0.0"
