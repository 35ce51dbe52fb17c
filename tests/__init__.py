"""
Test suite for the task manager API.

This package contains:
- unit/: Token, password, schema, model and service tests
- integration/: HTTP tests through the Flask test client
- security/: Token tampering, mass assignment and injection tests
- smoke/: Minimal is-it-up checks
"""
