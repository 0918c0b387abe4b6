"""Application Ports."""

from apps.social_auth.application.common.ports.document_store import DocumentStore
from apps.social_auth.application.common.ports.key_value_store import KeyValueStore
from apps.social_auth.application.common.ports.token_cipher import TokenCipher

__all__ = ["DocumentStore", "KeyValueStore", "TokenCipher"]
