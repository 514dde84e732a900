# storagehub/services/credentials.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from storagehub.core.errors import CredentialError
from storagehub.services.object_store import ObjectStore

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60


@dataclass(frozen=True)
class SignedURL:
    url: str
    key: str
    content_type: str
    expires_at: datetime


class CredentialIssuer:
    """Mints signed PUT URLs; expiry is enforced by the object store, not tracked here."""

    def __init__(self, store: ObjectStore):
        self.store = store

    def issue_write_credential(
        self, key: str, content_type: str, ttl_seconds: int = DEFAULT_TTL_SECONDS
    ) -> SignedURL:
        if ttl_seconds <= 0:
            raise CredentialError(
                "Credential lifetime must be positive", details={"ttl_seconds": ttl_seconds}
            )
        issued_at = datetime.now(timezone.utc)
        url = self.store.generate_signed_put_url(key, content_type, ttl_seconds)
        logger.debug("Issued write URL for %s (%ss)", key, ttl_seconds)
        return SignedURL(
            url=url,
            key=key,
            content_type=content_type,
            expires_at=issued_at + timedelta(seconds=ttl_seconds),
        )
