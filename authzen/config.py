"""Flask configuration for AuthZEN access checks."""

import os

AUTHZEN_URL = os.environ.get('AUTHZEN_URL', None)
"""URL of the AuthZEN access evaluation endpoint."""

AUTHZEN_SUBJECT_HEADER = os.environ.get('AUTHZEN_SUBJECT_HEADER', 'X-User-Id')
"""
Request header that may carry a raw subject identifier.

Intended for development and testing. Set to an empty string to disable.
"""

AUTHZEN_SUBJECT_CLAIM = os.environ.get('AUTHZEN_SUBJECT_CLAIM', 'sub')
"""Bearer token claim that carries the subject identifier."""

JWT_SECRET = os.environ.get('JWT_SECRET', None)
"""Key used to verify bearer tokens. Bearer tokens are ignored if unset."""

JWT_ALGORITHMS = os.environ.get('JWT_ALGORITHMS', 'HS256')
"""Comma-separated list of accepted bearer token signing algorithms."""

AUTHZEN_FALLBACK_SUBJECT = os.environ.get('AUTHZEN_FALLBACK_SUBJECT', None)
"""Subject used when no other identity is available. Honored only in testing."""
