# storagehub/services/object_store.py
import logging
from functools import lru_cache
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from storagehub.core.config import get_settings
from storagehub.core.errors import CredentialError, DependencyError

logger = logging.getLogger(__name__)


class ObjectStore:
    """Thin wrapper over an S3 client bound to one bucket."""

    def __init__(self, client, bucket: Optional[str]):
        self.client = client
        self.bucket = bucket

    def _require_bucket(self) -> str:
        if not self.bucket:
            raise CredentialError(
                "Object store is not configured",
                error_code="BUCKET_NOT_CONFIGURED",
                details={"reason": "AWS_S3_BUCKET_NAME is not set"},
            )
        return self.bucket

    def generate_signed_put_url(self, key: str, content_type: str, expires_in: int) -> str:
        bucket = self._require_bucket()
        try:
            return self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": bucket, "Key": key, "ContentType": content_type},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Signing put_object for %s failed", key, exc_info=True)
            raise CredentialError(
                "Failed to generate pre-signed URL", details={"reason": str(e)}
            ) from e

    def put_marker(self, key: str) -> None:
        bucket = self._require_bucket()
        try:
            self.client.put_object(Bucket=bucket, Key=key, Body=b"")
        except (BotoCoreError, ClientError) as e:
            logger.error("Writing folder marker %s failed", key, exc_info=True)
            raise CredentialError(
                "Failed to write folder marker", details={"reason": str(e), "key": key}
            ) from e

    def object_exists(self, key: str) -> bool:
        bucket = self._require_bucket()
        try:
            self.client.head_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise DependencyError(
                "Failed to check object in store", details={"reason": str(e), "key": key}
            ) from e
        except BotoCoreError as e:
            raise DependencyError(
                "Failed to check object in store", details={"reason": str(e), "key": key}
            ) from e
        return True


@lru_cache
def get_object_store() -> ObjectStore:
    settings = get_settings()
    s3 = boto3.client(
        "s3",
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
        endpoint_url=settings.aws_endpoint_url,
    )
    return ObjectStore(s3, settings.aws_s3_bucket_name)
