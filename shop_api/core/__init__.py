"""
Core utilities shared across the seller accounts API.

This package hosts:
- configuration helpers (env vars, cookie names, token lifetimes)
- the error taxonomy and the JSON error formatter
- security primitives (password hashing, signed tokens)
- adapters for external providers (SMTP mailer, media host)

Services depend on these primitives instead of reading the environment or
talking to providers directly.
"""
