"""Functions for working with bearer tokens on user/client requests."""

from typing import Any, Dict, List, Optional

import jwt

from . import exceptions


def encode(claims: Dict[str, Any], secret: str,
           algorithm: str = 'HS256') -> str:
    """Encode claims as a signed JWT."""
    token = jwt.encode(claims, secret, algorithm=algorithm)
    if isinstance(token, bytes):
        return token.decode('utf-8')
    return token


def decode(token: str, secret: str,
           algorithms: Optional[List[str]] = None) -> Dict[str, Any]:
    """
    Decode a bearer token, verifying its signature and expiry.

    Tokens without an ``exp`` claim are rejected.

    Parameters
    ----------
    token : str
        The encoded JWT, without the ``Bearer`` prefix.
    secret : str
        Key used to verify the token signature.
    algorithms : list
        Signing algorithms that are accepted. Defaults to ``['HS256']``.

    Returns
    -------
    dict
        The verified claims.

    Raises
    ------
    :class:`.exceptions.InvalidToken`
        If the token is malformed, forged, expired, or has no expiry.

    """
    if algorithms is None:
        algorithms = ['HS256']
    try:
        data: Dict[str, Any] = jwt.decode(token, secret, algorithms=algorithms,
                                          options={'require': ['exp']})
    except jwt.exceptions.InvalidTokenError as e:
        raise exceptions.InvalidToken('Not a valid token') from e
    return data


def from_header(header: Optional[str]) -> str:
    """
    Extract the raw token from an ``Authorization`` header value.

    Raises
    ------
    :class:`.exceptions.MissingToken`
        If the header is absent or does not carry a bearer token.

    """
    if not header:
        raise exceptions.MissingToken('Authorization header not found')
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        raise exceptions.MissingToken('Authorization header lacks a bearer token')
    return parts[1]

