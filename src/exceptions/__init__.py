"""Custom exceptions module for the registration payments service.

This module contains all custom exception classes used throughout the
application:

- Payment exceptions for checkout validation, webhook authentication and
  payment provider failures
- Storage exceptions for profile store reads and writes
"""
