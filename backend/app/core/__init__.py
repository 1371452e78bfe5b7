# app/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- errors: Error taxonomy rendered as single-key JSON bodies
- security: Password hashing and the signed token service
- embedded: Ordered sub-document lists with generated ids
- permissions: Ownership checks for destructive operations
"""
