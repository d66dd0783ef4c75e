"""HTTP middleware for the registration payments service."""
