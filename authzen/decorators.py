"""
AuthZEN authorization of user/client requests.

This module provides :func:`authorize`, a decorator factory used to protect
Flask routes. The decorated route declares the action it performs and,
optionally, the resource it acts upon and an explicit subject. Before the
route is called, the subject is resolved (see :mod:`authzen.identity`) and the
decision service is asked whether the subject may perform the action.

Here's an example of how you might use this in a Flask application:

.. code-block:: python

   from authzen.decorators import authorize


   @blueprint.route('/documents/<string:doc_id>', methods=['GET'])
   @authorize('view', resource_type='document')
   def get_document(doc_id: str):
       '''Anyone allowed to view documents may read this one.'''
       ...


When the decorated route function is called...

- If no subject can be resolved, an :class:`Unauthorized` exception is raised
  and the decision service is not contacted.
- The decision service is asked about the subject, action and resource. The
  resource defaults to ``DefaultResource``/``DefaultId``.
- If the decision is anything other than ``allow``, a :class:`Forbidden`
  exception is raised carrying the decision reason, if any.
- Otherwise the route is called with the original parameters.

:func:`enforce` performs the same steps for an arbitrary continuation, for
use outside of route decorators.
"""

import logging
from typing import Any, Callable, Optional, Sequence
from functools import wraps

from flask import current_app
from werkzeug.exceptions import Forbidden, Unauthorized

from . import domain, identity
from .services import decision

logger = logging.getLogger(__name__)

ACCESS_DENIED = 'Access denied'
NO_SUBJECT = 'No subject identity available'


def enforce(operation: domain.ProtectedOperation,
            proceed: Callable[[], Any]) -> Any:
    """
    Check ``operation`` with the decision service, then call ``proceed``.

    Parameters
    ----------
    operation : :class:`.domain.ProtectedOperation`
        Describes the action, resource and (optional) subject to check.
    proceed : callable
        Called with no arguments if access is allowed.

    Returns
    -------
    object
        Whatever ``proceed`` returns.

    Raises
    ------
    :class:`.Unauthorized`
        If no subject identity could be resolved.
    :class:`.Forbidden`
        If the decision is not ``allow``.

    """
    subject = identity.resolve_subject(operation, _resolvers())
    if not subject:
        logger.debug('No subject; aborting')
        raise Unauthorized(NO_SUBJECT)

    check = domain.AccessCheckRequest(
        subject=domain.Subject(id=subject),
        resource=operation.resource,
        action=operation.action
    )
    result = decision.check_access(check)
    if not result.allowed:
        logger.debug('Decision service returned %s', result.decision)
        raise Forbidden(result.reason or ACCESS_DENIED)

    logger.debug('Request is authorized, proceeding')
    return proceed()


def authorize(action: str, resource_type: Optional[str] = None,
              resource_id: Optional[str] = None,
              subject: Optional[str] = None) -> Callable:
    """
    Generate a decorator to enforce an AuthZEN access check.

    Parameters
    ----------
    action : str
        The relation or operation being checked, e.g. ``view``.
    resource_type : str
        Type of the protected resource. Defaults to ``DefaultResource``.
    resource_id : str
        Identifier of the protected resource. Defaults to ``DefaultId``.
    subject : str
        Explicit subject identifier. Takes precedence over any identity
        derived from the request.

    Returns
    -------
    function
        A decorator that checks access before calling the route.

    """
    if not action:
        raise ValueError('An action is required')
    operation = domain.ProtectedOperation(action=action,
                                          resource_type=resource_type,
                                          resource_id=resource_id,
                                          subject=subject)

    def protector(func: Callable) -> Callable:
        """Decorator that provides access enforcement."""
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            """Check access before executing the route."""
            return enforce(operation, lambda: func(*args, **kwargs))
        return wrapper
    return protector


def _resolvers() -> Sequence[identity.Resolver]:
    ext = current_app.extensions.get('authzen')
    if ext is not None:
        return ext.resolvers
    return identity.default_resolvers(current_app.config)
