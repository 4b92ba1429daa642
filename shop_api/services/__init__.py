"""
High-level use cases for the seller accounts API.

Each service module orchestrates repositories/adapters to implement business
rules (register a shop, redeem an activation token, authorize a request).

Routers (FastAPI endpoints) call these services and only shape the HTTP response.
"""
