"""Configuration module for the registration payments service.

This module contains all configuration settings and dependency injection
functions for the application. It provides:

- Application settings management with environment variable support
- Logging configuration
- Dependency injection functions for FastAPI
- Payment provider and profile store wiring

The module uses Pydantic settings for type-safe configuration management
and automatic environment variable loading.
"""
