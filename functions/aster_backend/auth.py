"""
Operator authentication for the back-office endpoints.

The content layer only ever receives an already-verified operator; verifying
the bearer token is done here.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Protocol

import firebase_admin
from firebase_admin import auth as firebase_auth

logger = logging.getLogger(__name__)


class InvalidOperatorToken(Exception):
    """The bearer token is missing, malformed, expired or not an operator's."""


@dataclass(frozen=True)
class Operator:
    uid: str
    email: Optional[str] = None


class TokenVerifier(Protocol):
    def verify(self, token: str) -> Operator:
        ...


class FirebaseTokenVerifier:
    """Verifies Firebase Auth ID tokens issued to signed-in operators."""

    def __init__(self, project_id: Optional[str] = None):
        try:
            firebase_admin.get_app()
        except ValueError:
            options = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(options=options)

    def verify(self, token: str) -> Operator:
        try:
            claims = firebase_auth.verify_id_token(token)
        except (
            firebase_auth.InvalidIdTokenError,
            firebase_auth.CertificateFetchError,
            firebase_auth.UserDisabledError,
            ValueError,
        ) as e:
            logger.info("Rejected operator token: %s", e)
            raise InvalidOperatorToken(str(e)) from e
        return Operator(uid=claims["uid"], email=claims.get("email"))


class StaticTokenVerifier:
    """Shared-secret verifier for local runs and tests."""

    def __init__(self, expected_token: str, uid: str = "local-operator"):
        if not expected_token:
            raise ValueError("StaticTokenVerifier needs a non-empty token")
        self._expected = expected_token
        self._uid = uid

    def verify(self, token: str) -> Operator:
        if not secrets.compare_digest(token.encode(), self._expected.encode()):
            raise InvalidOperatorToken("Token does not match the operator token")
        return Operator(uid=self._uid)


class DenyAllVerifier:
    """Used when no operator credential is configured: nobody gets in."""

    def verify(self, token: str) -> Operator:
        raise InvalidOperatorToken("No operator authentication is configured")
