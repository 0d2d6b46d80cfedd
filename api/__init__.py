"""
FastAPI RESTful API for book summaries.

This module provides a REST API for:
- Listing and fetching book summaries
- Creating, updating and deleting summaries
- Bearer token authentication for writes
- Owner-only write authorization
"""
