"""The decision service answers whether a subject may act on a resource."""

import logging
from typing import Any, Optional
from functools import wraps

import requests
from flask import Flask, current_app, g, has_app_context

from ..domain import AccessCheckRequest, AccessDecision, DENY, to_dict, \
    decision_from_dict
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class DecisionServiceSession(object):
    """
    Issues access checks to a remote AuthZEN decision endpoint.

    Any failure to obtain a well-formed decision is reported as a ``deny``
    decision; callers never see an exception for an unreachable or erroring
    service.
    """

    def __init__(self, endpoint: str) -> None:
        """Create a new HTTP session."""
        self.endpoint = endpoint
        self._session = requests.Session()
        logger.debug('New DecisionServiceSession with endpoint = %s',
                     endpoint)

    def status(self) -> bool:
        """Check the availability of the decision service."""
        try:
            response = self._session.head(self.endpoint)
        except requests.exceptions.RequestException:
            return False
        if not response.ok:
            return False
        return True

    def close(self) -> None:
        """Release pooled connections held by the HTTP session."""
        self._session.close()

    def check_access(self, request: AccessCheckRequest) -> AccessDecision:
        """
        Ask the decision service whether ``request`` is permitted.

        Parameters
        ----------
        request : :class:`.AccessCheckRequest`
            Must carry a non-empty subject id and action.

        Returns
        -------
        :class:`.AccessDecision`
            The decision returned by the service, or a ``deny`` decision if
            the service could not be reached, responded with an error status,
            or returned something that is not a decision.

        Raises
        ------
        ValueError
            If the subject id or action is empty.

        """
        if not request.subject.id:
            raise ValueError('Subject id is required')
        if not request.action:
            raise ValueError('Action is required')

        logger.debug('Check %s on %s/%s for %s', request.action,
                     request.resource.type, request.resource.id,
                     request.subject.id)
        try:
            response = self._session.post(self.endpoint, json=to_dict(request))
        except requests.exceptions.RequestException as e:
            logger.error('Decision service request failed: %s', e)
            return AccessDecision(decision=DENY,
                                  reason='Decision service unavailable')
        if not response.ok:
            logger.error('Decision service responded with status %i',
                         response.status_code)
            return AccessDecision(
                decision=DENY,
                reason='Decision service responded with status %i'
                % response.status_code
            )
        try:
            data: Any = response.json()
            decision = decision_from_dict(data)
        except (ValueError, RecursionError) as e:
            logger.error('Decision response could not be read: %s', e)
            return AccessDecision(decision=DENY)
        logger.debug('Got decision %s', decision.decision)
        return decision


def init_app(app: Optional[Flask] = None) -> None:
    """
    Set required configuration defaults for the application.

    Parameters
    ----------
    app : :class:`flask.Flask`
    """
    if app is not None:
        app.config.setdefault('AUTHZEN_URL', None)


def get_session(app: Optional[Flask] = None) -> DecisionServiceSession:
    """
    Create a new decision service session.

    Parameters
    ----------
    app : :class:`flask.Flask`

    Return
    ------
    :class:`.DecisionServiceSession`

    """
    config = app.config if app is not None else current_app.config
    endpoint = config.get('AUTHZEN_URL')
    if not endpoint:
        raise ConfigurationError('AUTHZEN_URL is not set')
    return DecisionServiceSession(endpoint)


def current_session(app: Optional[Flask] = None) -> DecisionServiceSession:
    """
    Get the decision service session for this context (if there is one).

    Parameters
    ----------
    app : :class:`flask.Flask`

    Return
    ------
    :class:`.DecisionServiceSession`

    """
    if has_app_context():
        if 'authzen_session' not in g:
            g.authzen_session = get_session(app)  # type: ignore
        return g.authzen_session  # type: ignore
    return get_session(app)


def close_session() -> None:
    """Close the session for this context, if one was opened."""
    session: Optional[DecisionServiceSession] = \
        g.pop('authzen_session', None)
    if session is not None:
        session.close()


@wraps(DecisionServiceSession.check_access)
def check_access(request: AccessCheckRequest) -> AccessDecision:
    """Wrapper for :meth:`DecisionServiceSession.check_access`."""
    return current_session().check_access(request)
