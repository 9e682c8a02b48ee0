"""Internal modules for the Altogic SDK.

WARNING: These modules are not part of the public API and may change
without notice.

Modules:
    fetcher - Request dispatcher shared by all managers
    http - Shared HTTP client configuration
    redaction - Redaction of sensitive values in debug output
"""
