"""S3 implementation of the discovery directory."""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import DirectoryClientError, ObjectNotFoundError
from ..models import ObjectListingPage
from .directory_client import DirectoryClient

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3DirectoryClient(DirectoryClient):
    """Maps the directory contract onto a boto3 S3 client.

    Parameters:
        s3_client: A ready-to-use ``boto3`` S3 client, typically built
            by :func:`~object_store_discovery.directory.s3_client_provider.create_s3_client`.
    """

    def __init__(self, s3_client: Any) -> None:
        self._s3 = s3_client

    def put(self, bucket: str, key: str, data: bytes) -> None:
        try:
            self._s3.put_object(Bucket=bucket, Key=key, Body=data, ContentLength=len(data))
        except (ClientError, BotoCoreError) as e:
            raise DirectoryClientError(bucket, key, reason=str(e)) from e

    def get(self, bucket: str, key: str) -> bytes:
        try:
            response = self._s3.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(bucket, key) from e
            raise DirectoryClientError(bucket, key, reason=str(e)) from e
        except BotoCoreError as e:
            raise DirectoryClientError(bucket, key, reason=str(e)) from e

        body = response["Body"]
        try:
            return body.read()
        except BotoCoreError as e:
            raise DirectoryClientError(bucket, key, reason=str(e)) from e
        finally:
            try:
                body.close()
            except Exception:
                logger.debug("Not able to close S3 stream for %s", key, exc_info=True)

    def list_page(
        self,
        bucket: str,
        prefix: str,
        continuation_token: str | None = None,
    ) -> ObjectListingPage:
        kwargs: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix}
        if continuation_token is not None:
            kwargs["ContinuationToken"] = continuation_token
        try:
            response = self._s3.list_objects_v2(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise DirectoryClientError(bucket, prefix, reason=str(e)) from e

        keys = [obj["Key"] for obj in response.get("Contents", [])]
        next_token = response.get("NextContinuationToken") if response.get("IsTruncated") else None
        return ObjectListingPage(keys=keys, next_token=next_token)

    def delete(self, bucket: str, key: str) -> None:
        try:
            self._s3.delete_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                return
            raise DirectoryClientError(bucket, key, reason=str(e)) from e
        except BotoCoreError as e:
            raise DirectoryClientError(bucket, key, reason=str(e)) from e
