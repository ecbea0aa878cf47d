"""Internal modules for httpbridge.

WARNING: This package is not a stable API. Import from ``httpbridge`` instead.

Modules:
    bridge - Script-facing request/client functions
    runtime - Script runtime collaborator (handles, values, results)
    transport - HTTP client collaborator
    cookies - Cookie jar view
    http - Shared HTTP client configuration
    config - Client options
    redaction - Header redaction for debug output
"""
