import unittest
from unittest.mock import patch

from firebase_admin import auth as firebase_auth

from aster_backend.auth import (
    DenyAllVerifier,
    FirebaseTokenVerifier,
    InvalidOperatorToken,
    StaticTokenVerifier,
)


class StaticTokenVerifierTests(unittest.TestCase):
    def test_matching_token(self):
        operator = StaticTokenVerifier("s3cret").verify("s3cret")
        self.assertEqual(operator.uid, "local-operator")

    def test_wrong_token(self):
        with self.assertRaises(InvalidOperatorToken):
            StaticTokenVerifier("s3cret").verify("guess")

    def test_empty_token_not_allowed(self):
        with self.assertRaises(ValueError):
            StaticTokenVerifier("")

    def test_deny_all(self):
        with self.assertRaises(InvalidOperatorToken):
            DenyAllVerifier().verify("anything")


class FirebaseTokenVerifierTests(unittest.TestCase):
    def setUp(self):
        with patch("firebase_admin.get_app"):
            self.verifier = FirebaseTokenVerifier()

    @patch("firebase_admin.auth.verify_id_token")
    def test_valid_token(self, mock_verify):
        mock_verify.return_value = {"uid": "abc", "email": "admin@asterandco.com"}
        operator = self.verifier.verify("token")
        self.assertEqual(operator.uid, "abc")
        self.assertEqual(operator.email, "admin@asterandco.com")
        mock_verify.assert_called_once_with("token")

    @patch("firebase_admin.auth.verify_id_token")
    def test_invalid_token(self, mock_verify):
        mock_verify.side_effect = firebase_auth.InvalidIdTokenError("bad token")
        with self.assertRaises(InvalidOperatorToken):
            self.verifier.verify("token")

    @patch("firebase_admin.auth.verify_id_token")
    def test_malformed_token(self, mock_verify):
        mock_verify.side_effect = ValueError("Illegal ID token provided")
        with self.assertRaises(InvalidOperatorToken):
            self.verifier.verify("")

    def test_initializes_app_when_missing(self):
        with patch("firebase_admin.get_app", side_effect=ValueError("no app")), patch(
            "firebase_admin.initialize_app"
        ) as mock_init:
            FirebaseTokenVerifier("aster-prod")
        mock_init.assert_called_once_with(options={"projectId": "aster-prod"})


if __name__ == "__main__":
    unittest.main()
