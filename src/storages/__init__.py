"""Storages module for the registration payments service.

This module provides access to the category profile store.

The module includes:
- ProfileStoreInterface: Abstract interface for profile reads and writes
- SQLAlchemyProfileStore: SQLAlchemy implementation over the profile tables

The module supports swapping the store implementation through the interface
pattern, which the test suite uses to run against an in-memory fake.
"""
