"""Defines the access-check concepts exchanged with an AuthZEN decision service."""

from typing import Any, Dict, NamedTuple, Optional, Sequence

DEFAULT_SUBJECT_TYPE = 'user'
DEFAULT_RESOURCE_TYPE = 'DefaultResource'
DEFAULT_RESOURCE_ID = 'DefaultId'

ALLOW = 'allow'
DENY = 'deny'


class Subject(NamedTuple):
    """The principal whose access is being evaluated."""

    id: str
    """Identifier of the principal, e.g. a username or user id."""

    type: str = DEFAULT_SUBJECT_TYPE
    """Kind of principal."""


class Resource(NamedTuple):
    """The object being acted upon."""

    type: str = DEFAULT_RESOURCE_TYPE
    id: str = DEFAULT_RESOURCE_ID


class AccessCheckRequest(NamedTuple):
    """A single question put to the decision service."""

    subject: Subject
    resource: Resource
    action: str
    """Relation or operation being checked, e.g. ``view`` or ``edit``."""


class AccessDecision(NamedTuple):
    """The verdict of the decision service."""

    decision: str
    """Either ``allow`` or ``deny``; compared case-insensitively."""

    reason: Optional[str] = None
    """Human-readable explanation, if the service provided one."""

    obligations: Sequence[Any] = ()
    """Opaque data the service attached to the decision."""

    advice: Sequence[Any] = ()
    """Opaque data the service attached to the decision."""

    @property
    def allowed(self) -> bool:
        """Whether this decision permits the operation to proceed."""
        return self.decision.lower() == ALLOW


class ProtectedOperation(NamedTuple):
    """Describes what must be checked before a protected view may run."""

    action: str
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    subject: Optional[str] = None
    """Explicit subject identifier, overriding any request-derived identity."""

    @property
    def resource(self) -> Resource:
        """The target resource, with defaults applied."""
        return Resource(type=self.resource_type or DEFAULT_RESOURCE_TYPE,
                        id=self.resource_id or DEFAULT_RESOURCE_ID)


def to_dict(request: AccessCheckRequest) -> Dict[str, Any]:
    """Generate the JSON-serializable wire form of an access check."""
    return {
        'subject': {'type': request.subject.type, 'id': request.subject.id},
        'resource': {'type': request.resource.type,
                     'id': request.resource.id},
        'action': request.action
    }


def decision_from_dict(data: Any) -> AccessDecision:
    """
    Build an :class:`.AccessDecision` from a decoded response body.

    Parameters
    ----------
    data : object
        The decoded JSON document returned by the decision service.

    Returns
    -------
    :class:`.AccessDecision`

    Raises
    ------
    ValueError
        If ``data`` does not have the shape of a decision.

    """
    if not isinstance(data, dict):
        raise ValueError('Decision must be an object')
    decision = data.get('decision')
    if not isinstance(decision, str):
        raise ValueError('Decision value must be a string')
    reason = data.get('reason')
    if reason is not None and not isinstance(reason, str):
        raise ValueError('Reason must be a string')
    obligations = data.get('obligations')
    advice = data.get('advice')
    if obligations is None:
        obligations = []
    if advice is None:
        advice = []
    if not isinstance(obligations, list) or not isinstance(advice, list):
        raise ValueError('Obligations and advice must be arrays')
    return AccessDecision(decision=decision, reason=reason,
                          obligations=obligations, advice=advice)
