"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException

from aster_backend.auth import (
    DenyAllVerifier,
    FirebaseTokenVerifier,
    InvalidOperatorToken,
    Operator,
    StaticTokenVerifier,
    TokenVerifier,
)
from aster_backend.config import get_settings
from aster_backend.repository import ContentRepository
from aster_backend.store import (
    DocumentStore,
    FirestoreDocumentStore,
    InMemoryDocumentStore,
    SqlDocumentStore,
)

logger = logging.getLogger(__name__)

_document_store: DocumentStore | None = None
_token_verifier: TokenVerifier | None = None


def get_document_store() -> DocumentStore:
    """
    Return a singleton store so in-memory content persists across requests.
    """
    global _document_store
    if _document_store:
        return _document_store

    settings = get_settings()
    timeout = settings.store_timeout_seconds
    if settings.store_backend == "firestore":
        _document_store = FirestoreDocumentStore(
            project_id=settings.firestore_project_id, timeout=timeout
        )
    elif settings.store_backend == "sql":
        _document_store = SqlDocumentStore(settings.database_url or "", timeout=timeout)
    else:
        _document_store = InMemoryDocumentStore()
    logger.info("Using %s document store", settings.store_backend)
    return _document_store


def get_content_repository(
    store: DocumentStore = Depends(get_document_store),
) -> ContentRepository:
    return ContentRepository(store)


def get_token_verifier() -> TokenVerifier:
    global _token_verifier
    if _token_verifier:
        return _token_verifier

    settings = get_settings()
    if settings.use_firebase_auth:
        _token_verifier = FirebaseTokenVerifier(settings.firestore_project_id)
    elif settings.operator_token:
        _token_verifier = StaticTokenVerifier(settings.operator_token)
    else:
        logger.warning("No operator authentication configured; admin routes are closed")
        _token_verifier = DenyAllVerifier()
    return _token_verifier


def require_operator(
    authorization: str | None = Header(default=None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Operator:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=401,
            detail="Operator sign-in required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return verifier.verify(token.strip())
    except InvalidOperatorToken:
        raise HTTPException(
            status_code=401,
            detail="Invalid operator token",
            headers={"WWW-Authenticate": "Bearer"},
        )
