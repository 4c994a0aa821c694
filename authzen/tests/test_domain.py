"""Tests for :mod:`authzen.domain`."""

from unittest import TestCase

from authzen import domain


class TestAccessDecision(TestCase):
    """Tests for :class:`.domain.AccessDecision`."""

    def test_allow_is_case_insensitive(self):
        """Any capitalization of ``allow`` permits the operation."""
        for value in ['allow', 'Allow', 'ALLOW', 'aLLoW']:
            self.assertTrue(domain.AccessDecision(value).allowed,
                            f'{value} is allowed')

    def test_anything_else_is_denied(self):
        """Only ``allow`` permits the operation."""
        for value in ['deny', 'DENY', '', 'allowed', ' allow', 'yes', 'true',
                      'permit', 'allow\n']:
            self.assertFalse(domain.AccessDecision(value).allowed,
                             f'{value!r} is not allowed')

    def test_defaults(self):
        """A bare decision has no reason, obligations or advice."""
        result = domain.AccessDecision(domain.DENY)
        self.assertIsNone(result.reason)
        self.assertEqual(list(result.obligations), [])
        self.assertEqual(list(result.advice), [])


class TestProtectedOperation(TestCase):
    """Tests for :class:`.domain.ProtectedOperation`."""

    def test_resource_defaults(self):
        """With no resource type or id, the defaults are used."""
        operation = domain.ProtectedOperation(action='view')
        self.assertEqual(operation.resource,
                         domain.Resource('DefaultResource', 'DefaultId'))

    def test_resource_explicit(self):
        """Explicit resource type and id are used as given."""
        operation = domain.ProtectedOperation(action='view',
                                              resource_type='document',
                                              resource_id='42')
        self.assertEqual(operation.resource.type, 'document')
        self.assertEqual(operation.resource.id, '42')

    def test_partial_resource(self):
        """Only the missing part of the resource is defaulted."""
        operation = domain.ProtectedOperation(action='view',
                                              resource_type='document')
        self.assertEqual(operation.resource.type, 'document')
        self.assertEqual(operation.resource.id, 'DefaultId')


class TestToDict(TestCase):
    """Tests for :func:`.domain.to_dict`."""

    def test_wire_format(self):
        """The access check has the AuthZEN request shape."""
        request = domain.AccessCheckRequest(
            subject=domain.Subject(id='u1'),
            resource=domain.ProtectedOperation(action='view').resource,
            action='view'
        )
        self.assertDictEqual(domain.to_dict(request), {
            'subject': {'type': 'user', 'id': 'u1'},
            'resource': {'type': 'DefaultResource', 'id': 'DefaultId'},
            'action': 'view'
        })


class TestDecisionFromDict(TestCase):
    """Tests for :func:`.domain.decision_from_dict`."""

    def test_minimal(self):
        """Only ``decision`` is required."""
        result = domain.decision_from_dict({'decision': 'allow'})
        self.assertEqual(result.decision, 'allow')
        self.assertIsNone(result.reason)
        self.assertEqual(list(result.obligations), [])

    def test_full(self):
        """Reason, obligations and advice are preserved in order."""
        result = domain.decision_from_dict({
            'decision': 'deny',
            'reason': 'not owner',
            'obligations': [{'log': True}, 'notify'],
            'advice': ['ask the owner']
        })
        self.assertEqual(result.reason, 'not owner')
        self.assertEqual(result.obligations, [{'log': True}, 'notify'])
        self.assertEqual(result.advice, ['ask the owner'])

    def test_not_a_decision(self):
        """Anything without the shape of a decision is rejected."""
        for data in [None, [], 'allow', 1, True, {}, {'decision': None},
                     {'decision': True}, {'decision': ['allow']},
                     {'decision': 'allow', 'reason': 5},
                     {'decision': 'allow', 'obligations': 'x'},
                     {'decision': 'allow', 'advice': {'a': 1}}]:
            with self.assertRaises(ValueError, msg=f'{data!r}'):
                domain.decision_from_dict(data)
