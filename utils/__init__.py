"""
Utility package setup.

Shared constants, the exception hierarchy and the error-handling decorator.
"""
