"""S3 datastore for payloads fetched by jobs."""

import uuid
from datetime import datetime
from typing import Any

import boto3
from botocore.exceptions import ClientError
from structlog import get_logger

from asset_pipeline.aws.client_factory import get_boto3_client_kwargs
from asset_pipeline.datastores.base import DataNotFound, DataStoreError

logger = get_logger(__name__)

NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class S3DataStore:
    """Stores payloads as objects in a single bucket under a key prefix."""

    def __init__(
        self,
        bucket_name: str,
        key_prefix: str = "",
        client: Any = None,
        region_name: str | None = None,
    ):
        """Initialize the S3 datastore.

        Uses AWS_ACCESS_KEY_ID/AWS_SECRET_ACCESS_KEY if set; otherwise
        boto3 default credential provider (SSO, role, etc.).

        Args:
            bucket_name: Bucket holding the payloads
            key_prefix: Prefix prepended to every uid to form the object key
            client: Optional pre-built boto3 S3 client
            region_name: Region for the boto3 client, defaults to AWS_REGION
        """
        self.bucket_name = bucket_name
        self.key_prefix = key_prefix
        self.s3_client = client or boto3.client(
            "s3", **get_boto3_client_kwargs("s3", region_name=region_name)
        )

    def _key_for(self, uid: str) -> str:
        return f"{self.key_prefix}{uid}"

    def store(self, data: bytes, meta: dict[str, Any] | None = None) -> str:
        """Upload a payload and return its uid.

        Args:
            data: Payload bytes
            meta: Optional metadata stored as S3 object metadata (values stringified)

        Returns:
            The uid the payload is retrievable under

        Raises:
            DataStoreError: If upload fails
        """
        uid = f"{datetime.utcnow():%Y/%m/%d}/{uuid.uuid4().hex}"
        key = self._key_for(uid)

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                Metadata={str(k): str(v) for k, v in (meta or {}).items()},
            )
        except ClientError as e:
            logger.error("Failed to upload data to S3", bucket=self.bucket_name, key=key, error=str(e))
            raise DataStoreError(f"Failed to store data as {uid}: {str(e)}") from e

        logger.info("Stored data in S3", bucket=self.bucket_name, key=key, size=len(data))
        return uid

    def retrieve(self, uid: str) -> bytes:
        """Download the payload stored under uid.

        Raises:
            DataNotFound: If the object does not exist
            DataStoreError: On any other S3 failure
        """
        key = self._key_for(uid)
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=key)
            return response["Body"].read()
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in NOT_FOUND_CODES:
                raise DataNotFound(f"No data stored as {uid!r}") from e
            logger.error("Failed to download data from S3", bucket=self.bucket_name, key=key, error=str(e))
            raise DataStoreError(f"Failed to retrieve {uid!r}: {str(e)}") from e

    def destroy(self, uid: str) -> None:
        """Delete the object stored under uid.

        Raises:
            DataStoreError: If deletion fails
        """
        key = self._key_for(uid)
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            logger.error("Failed to delete data from S3", bucket=self.bucket_name, key=key, error=str(e))
            raise DataStoreError(f"Failed to destroy {uid!r}: {str(e)}") from e
        logger.info("Destroyed data in S3", bucket=self.bucket_name, key=key)
