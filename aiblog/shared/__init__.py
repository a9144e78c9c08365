"""
Shared module package.

Contains cross-cutting concerns used across domains:
- Error catalog and error-to-HTTP translation
- Response envelope
- Database session management
- Security middleware and rate limiting
- Logging configuration
"""
