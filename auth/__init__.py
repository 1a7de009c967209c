"""auth/ -- Credential verification and session-token lifecycle.

Layer rule: auth/ imports only stdlib + third-party libraries.
It does NOT import from api/, client/, core/, or directory/. Configuration
values (signing key, token lifetime, database URL) are passed in by the
caller. api/ imports from auth/, not the other way around.
"""
