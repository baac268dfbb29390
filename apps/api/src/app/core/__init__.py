"""
Core module - Cross-cutting infrastructure shared by every feature module.

- config: environment settings (pydantic-settings)
- database: async engine, sessions and the declarative base
- redis: optional shared client
- security / auth: password hashing, JWTs and bearer token dependencies
- rate_limit: sliding-window limits for public endpoints
- uploads: validated file descriptors and storage
"""
