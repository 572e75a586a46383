"""
app/config.py - Application configuration and Firebase initialization.

This module defines a Pydantic BaseSettings class to load configuration from environment,
and initializes the Firebase Admin SDK (Firestore DB) using the provided credentials.
Initialization is lazy: the first call to `get_db()` creates the Firebase app and the
Firestore client, so importing the app (or running the tests) never needs credentials.
"""
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("pos.config")


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    firebase_cred_file: str = "firebase_service_account.json"
    firebase_project_id: str = ""

    # Firebase credentials from environment variables (for Cloud Run)
    firebase_private_key_id: Optional[str] = None
    firebase_private_key: Optional[str] = None
    firebase_client_email: Optional[str] = None
    firebase_client_id: Optional[str] = None
    firebase_auth_uri: Optional[str] = None
    firebase_token_uri: Optional[str] = None
    firebase_auth_provider_x509_cert_url: Optional[str] = None
    firebase_client_x509_cert_url: Optional[str] = None

    # Prepended to every Firestore collection name (e.g. "staging_")
    firebase_collection_prefix: str = ""

    debug: bool = False
    allow_mock_tokens: bool = False  # accept mock_jwt_token_<uid> (development only)
    log_level: str = "INFO"
    allowed_origins: str = "*"  # Comma-separated list or '*' for all
    currency: str = "USD"

    # Client side (checkout terminal)
    api_base_url: str = "http://localhost:8000"
    api_timeout: float = 10.0
    session_file: str = ".pos_session.json"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def origins(self) -> list[str]:
        if not self.allowed_origins or self.allowed_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


# Load settings from environment (.env file, etc.)
settings = Settings()

_db = None


def _credentials() -> credentials.Certificate:
    # Check if we have environment variables for Firebase credentials (Cloud Run)
    if all([
        settings.firebase_private_key_id,
        settings.firebase_private_key,
        settings.firebase_client_email,
        settings.firebase_client_id,
        settings.firebase_auth_uri,
        settings.firebase_token_uri,
        settings.firebase_auth_provider_x509_cert_url,
        settings.firebase_client_x509_cert_url,
    ]):
        cred_dict = {
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "private_key_id": settings.firebase_private_key_id,
            "private_key": settings.firebase_private_key.replace("\\n", "\n"),
            "client_email": settings.firebase_client_email,
            "client_id": settings.firebase_client_id,
            "auth_uri": settings.firebase_auth_uri,
            "token_uri": settings.firebase_token_uri,
            "auth_provider_x509_cert_url": settings.firebase_auth_provider_x509_cert_url,
            "client_x509_cert_url": settings.firebase_client_x509_cert_url,
        }
        return credentials.Certificate(cred_dict)
    # Use service account file (local development)
    return credentials.Certificate(settings.firebase_cred_file)


def init_firebase() -> firebase_admin.App:
    """Initialize (or reuse) the default Firebase app."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass
    try:
        app = firebase_admin.initialize_app(_credentials(), {"projectId": settings.firebase_project_id})
    except ValueError as e:
        if "already exists" in str(e):
            return firebase_admin.get_app()
        raise
    logger.info("Firebase initialized for project %s", settings.firebase_project_id or "<default>")
    return app


def get_db():
    """Firestore client, created on first use."""
    global _db
    if _db is None:
        init_firebase()
        _db = firestore.client()
    return _db


def collection_name(name: str) -> str:
    """Prefix-aware collection name (FIREBASE_COLLECTION_PREFIX)."""
    prefix = (settings.firebase_collection_prefix or "").strip()
    return f"{prefix}{name}" if prefix else name
