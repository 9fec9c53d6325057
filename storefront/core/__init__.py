"""
Core utilities shared across the storefront API.

This package hosts configuration, logging setup, password hashing, bearer
token signing and the per-IP rate limiter. Routers and services depend on
these primitives instead of reading os.environ or crypto libraries directly.
"""
