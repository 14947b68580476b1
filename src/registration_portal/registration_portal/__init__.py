"""Event Registration Portal package.

This package is organized by feature modules (registrations, stats, auth)
with a thin Flask controller layer and service/repository layers underneath.
"""
