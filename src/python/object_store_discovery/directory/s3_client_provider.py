"""Builds a boto3 S3 client from :class:`DiscoveryConfig`.

Credentials are obtained with the strategy named by
``credentials-type``. Any failure here is fatal: a node that cannot
reach its discovery bucket should not start.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import boto3
import botocore.session
from botocore.config import Config as BotoConfig
from botocore.credentials import CredentialResolver, InstanceMetadataProvider
from botocore.exceptions import BotoCoreError, ClientError
from botocore.utils import InstanceMetadataFetcher

from ..configs import AuthenticationType, DiscoveryConfig
from ..exceptions import DiscoveryConfigurationError

logger = logging.getLogger(__name__)

_CONNECT_TIMEOUT = 5.0
_READ_TIMEOUT = 10.0
_MAX_ATTEMPTS = 3
_METADATA_TIMEOUT = 2.0
_METADATA_ATTEMPTS = 2


def create_s3_client(config: DiscoveryConfig) -> Any:
    """Return an S3 client for ``config.bucket_name``.

    Raises:
        DiscoveryConfigurationError: Credentials cannot be obtained or
            the bucket does not exist.
    """
    try:
        session = create_session(config)
    except DiscoveryConfigurationError:
        raise
    except (BotoCoreError, ValueError) as e:
        logger.error("Not able to authenticate with S3 using '%s' credentials", config.credentials_type)
        raise DiscoveryConfigurationError(f"Not able to authenticate with S3: {e}") from e

    if session.get_credentials() is None:
        raise DiscoveryConfigurationError(
            f"No S3 credentials available for credentials-type '{config.credentials_type}'"
        )

    client = session.client(
        "s3",
        endpoint_url=config.endpoint_url,
        config=BotoConfig(
            connect_timeout=_CONNECT_TIMEOUT,
            read_timeout=_READ_TIMEOUT,
            retries={"max_attempts": _MAX_ATTEMPTS, "mode": "standard"},
        ),
    )
    check_bucket(client, config.bucket_name)
    return client


def create_session(config: DiscoveryConfig) -> boto3.session.Session:
    """Create a boto3 session for the configured credentials strategy."""
    region = config.bucket_region
    auth = config.credentials_type

    if auth == AuthenticationType.DEFAULT:
        return boto3.session.Session(region_name=region)

    if auth == AuthenticationType.ENVIRONMENT_VARIABLES:
        access_key = os.environ.get("AWS_ACCESS_KEY_ID") or os.environ.get("AWS_ACCESS_KEY")
        secret_key = os.environ.get("AWS_SECRET_ACCESS_KEY") or os.environ.get("AWS_SECRET_KEY")
        if not access_key or not secret_key:
            raise DiscoveryConfigurationError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set for "
                "credentials-type 'environment_variables'"
            )
        return boto3.session.Session(
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            aws_session_token=os.environ.get("AWS_SESSION_TOKEN"),
            region_name=region,
        )

    if auth == AuthenticationType.USER_CREDENTIALS_FILE:
        return boto3.session.Session(profile_name=config.credentials_profile or "default", region_name=region)

    if auth == AuthenticationType.INSTANCE_PROFILE_CREDENTIALS:
        botocore_session = botocore.session.Session()
        provider = InstanceMetadataProvider(
            iam_role_fetcher=InstanceMetadataFetcher(
                timeout=_METADATA_TIMEOUT,
                num_attempts=_METADATA_ATTEMPTS,
            )
        )
        botocore_session.register_component("credential_provider", CredentialResolver(providers=[provider]))
        return boto3.session.Session(botocore_session=botocore_session, region_name=region)

    if auth == AuthenticationType.ACCESS_KEY:
        return boto3.session.Session(
            aws_access_key_id=config.credentials_access_key_id,
            aws_secret_access_key=config.credentials_secret_access_key,
            region_name=region,
        )

    if auth == AuthenticationType.TEMPORARY_SESSION:
        return boto3.session.Session(
            aws_access_key_id=config.credentials_access_key_id,
            aws_secret_access_key=config.credentials_secret_access_key,
            aws_session_token=config.credentials_session_token,
            region_name=region,
        )

    raise ValueError(f"Unknown credentials type {auth}")


def check_bucket(s3_client: Any, bucket_name: str) -> None:
    """Fail fast if ``bucket_name`` does not exist.

    Errors other than a missing bucket (for example a policy that
    denies ``HeadBucket``) are logged and tolerated.
    """
    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError as e:
        code = str(e.response.get("Error", {}).get("Code", ""))
        if code in ("404", "NoSuchBucket", "NotFound"):
            logger.error("S3 bucket %s does not exist", bucket_name)
            raise DiscoveryConfigurationError(f"S3 bucket {bucket_name} does not exist") from e
        for name, value in e.response.get("Error", {}).items():
            logger.debug("Additional error information %s : %s", name, value)
        logger.error("Error at checking if S3 bucket %s exists", bucket_name, exc_info=True)
    except BotoCoreError:
        logger.error("Error at checking if S3 bucket %s exists", bucket_name, exc_info=True)
