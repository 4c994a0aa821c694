"""
Resolution of the subject on whose behalf a request is made.

A resolver is a function with the signature
``(operation: domain.ProtectedOperation) -> Optional[str]``. Resolvers are
tried in order and the first non-empty identifier wins, so earlier resolvers
act as overrides for later ones. The default chain is:

1. :func:`from_operation`, the subject declared on the protected view.
2. :func:`from_header`, a raw identifier in a request header. For development
   and testing; disable by setting ``AUTHZEN_SUBJECT_HEADER`` to ``''``.
3. :func:`from_bearer_token`, a claim of a verified bearer JWT. Only used
   when ``JWT_SECRET`` is configured.
4. :func:`from_principal`, the principal already authenticated by the
   server or upstream middleware (``REMOTE_USER``).

Applications can supply their own chain to :class:`authzen.AuthZen`.
"""

import logging
from typing import Callable, List, Mapping, Optional, Sequence

from flask import current_app, request

from . import config as settings, domain, tokens
from .exceptions import ConfigurationError, InvalidToken, MissingToken

logger = logging.getLogger(__name__)

Resolver = Callable[[domain.ProtectedOperation], Optional[str]]


def from_operation(operation: domain.ProtectedOperation) -> Optional[str]:
    """Use the subject declared on the protected operation."""
    return operation.subject


def from_header(operation: domain.ProtectedOperation) -> Optional[str]:
    """Use a raw subject identifier passed in a request header."""
    header = current_app.config.get('AUTHZEN_SUBJECT_HEADER',
                                    settings.AUTHZEN_SUBJECT_HEADER)
    if not header:
        return None
    value = request.headers.get(header, '').strip()
    return value or None


def from_bearer_token(operation: domain.ProtectedOperation) -> Optional[str]:
    """
    Use the subject claim of a bearer token in the ``Authorization`` header.

    The token signature and expiry are verified before any claim is trusted.
    Invalid tokens are ignored so that later resolvers may still apply.

    Raises
    ------
    :class:`.ConfigurationError`
        If a bearer token is present but ``JWT_SECRET`` is not set.

    """
    try:
        token = tokens.from_header(request.headers.get('Authorization'))
    except MissingToken:
        return None

    secret = current_app.config.get('JWT_SECRET')
    if not secret:
        raise ConfigurationError('Missing token verification secret')
    algorithms = _algorithms(current_app.config)
    try:
        claims = tokens.decode(token, secret, algorithms)
    except InvalidToken:    # Might be forged!
        logger.error('Auth token not valid')
        return None

    claim = current_app.config.get('AUTHZEN_SUBJECT_CLAIM', 'sub')
    subject = claims.get(claim)
    if subject is None:
        logger.info('Auth token has no %s claim', claim)
        return None
    return str(subject)


def from_principal(operation: domain.ProtectedOperation) -> Optional[str]:
    """Use the name of the principal authenticated upstream."""
    principal: Optional[str] = request.environ.get('REMOTE_USER')
    return principal


def fallback_subject(operation: domain.ProtectedOperation) -> Optional[str]:
    """Use the configured fallback subject. Only honored in testing mode."""
    if not current_app.testing:
        return None
    subject: Optional[str] = current_app.config.get('AUTHZEN_FALLBACK_SUBJECT')
    return subject


def default_resolvers(config: Mapping) -> List[Resolver]:
    """
    Build the resolver chain implied by the application configuration.

    The header resolver is included unless ``AUTHZEN_SUBJECT_HEADER`` is
    set to an empty value, whether or not :class:`authzen.AuthZen` has
    applied its configuration defaults to the application.
    """
    resolvers: List[Resolver] = [from_operation]
    if config.get('AUTHZEN_SUBJECT_HEADER', settings.AUTHZEN_SUBJECT_HEADER):
        resolvers.append(from_header)
    if config.get('JWT_SECRET'):
        resolvers.append(from_bearer_token)
    resolvers.append(from_principal)
    if config.get('AUTHZEN_FALLBACK_SUBJECT'):
        resolvers.append(fallback_subject)
    return resolvers


def resolve_subject(operation: domain.ProtectedOperation,
                    resolvers: Sequence[Resolver]) -> Optional[str]:
    """
    Determine the subject of ``operation``.

    Returns
    -------
    str or None
        The first non-empty identifier produced by ``resolvers``, or ``None``
        if no resolver could identify the subject.

    """
    for resolver in resolvers:
        subject = resolver(operation)
        if subject:
            logger.debug('Subject resolved by %s',
                         getattr(resolver, '__name__', resolver))
            return subject
    return None


def _algorithms(config: Mapping) -> List[str]:
    value = config.get('JWT_ALGORITHMS') or 'HS256'
    if isinstance(value, str):
        return [alg.strip() for alg in value.split(',') if alg.strip()]
    return list(value)
