"""Document-store backed gateways."""

from apps.social_auth.infrastructure.persistence_documents.user_account_gateway import (
    DocumentUserAccountGateway,
)

__all__ = ["DocumentUserAccountGateway"]
