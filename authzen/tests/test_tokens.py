"""Tests for :mod:`authzen.tokens`."""

from unittest import TestCase
import time

import jwt

from authzen import tokens
from authzen.exceptions import InvalidToken, MissingToken

SECRET = 'foosecret' * 8


class TestDecode(TestCase):
    """Tokens are only trusted once verified."""

    def test_valid_token(self):
        """A correctly signed, unexpired token is decoded."""
        token = tokens.encode({'sub': 'u1', 'exp': int(time.time()) + 60},
                              SECRET)
        self.assertEqual(tokens.decode(token, SECRET)['sub'], 'u1')

    def test_token_with_bad_signature(self):
        """A JWT produced with a different secret is rejected."""
        token = tokens.encode({'sub': 'u1', 'exp': int(time.time()) + 60},
                              'nottherightsecret' * 8)
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET)

    def test_expired_token(self):
        """An expired JWT is rejected."""
        token = tokens.encode({'sub': 'u1', 'exp': int(time.time()) - 60},
                              SECRET)
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET)

    def test_token_without_expiry(self):
        """A correctly signed JWT with no expiry is rejected."""
        token = tokens.encode({'sub': 'u1'}, SECRET)
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET)

    def test_unsigned_token(self):
        """A JWT with no signature is rejected."""
        token = jwt.encode({'sub': 'u1'}, '', algorithm='none')
        if isinstance(token, bytes):
            token = token.decode('utf-8')
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET)

    def test_not_a_token(self):
        """Something other than a JWT is rejected."""
        with self.assertRaises(InvalidToken):
            tokens.decode('definitelynotatoken', SECRET)

    def test_unexpected_algorithm(self):
        """A token signed with an algorithm that is not accepted is rejected."""
        token = tokens.encode({'sub': 'u1', 'exp': int(time.time()) + 60},
                              SECRET, algorithm='HS512')
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET, ['HS256'])
        self.assertEqual(tokens.decode(token, SECRET, ['HS512'])['sub'], 'u1')


class TestFromHeader(TestCase):
    """Bearer tokens are extracted from the ``Authorization`` header."""

    def test_bearer(self):
        """The token follows the ``Bearer`` scheme."""
        self.assertEqual(tokens.from_header('Bearer abc.def.ghi'),
                         'abc.def.ghi')
        self.assertEqual(tokens.from_header('bearer abc.def.ghi'),
                         'abc.def.ghi')

    def test_missing_or_malformed(self):
        """Other header values carry no bearer token."""
        for header in [None, '', 'Bearer', 'Basic Zm9vOmJhcg==',
                       'Bearer a b', 'abc.def.ghi']:
            with self.assertRaises(MissingToken, msg=f'{header!r}'):
                tokens.from_header(header)
