"""Boto3 client factory.

If AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY are set, use them;
otherwise use the default boto3 credential provider (SSO, role, etc.).
"""

import os
from typing import Any

from asset_pipeline.config import settings


def get_boto3_client_kwargs(service: str = "s3", region_name: str | None = None) -> dict[str, Any]:
    """Return kwargs for boto3.client() so that explicit credentials are used only when set.

    Args:
        service: Service name for boto3 (e.g. 's3').
        region_name: Region to use instead of the global AWS_REGION setting.

    Returns:
        Dict with at least 'region_name'. May include 'aws_access_key_id' and
        'aws_secret_access_key' when set in env.
    """
    kwargs: dict[str, Any] = {
        "region_name": region_name or settings.aws.region,
    }
    access_key = os.environ.get("AWS_ACCESS_KEY_ID", "").strip()
    secret_key = os.environ.get("AWS_SECRET_ACCESS_KEY", "").strip()
    if access_key and secret_key:
        kwargs["aws_access_key_id"] = access_key
        kwargs["aws_secret_access_key"] = secret_key
    endpoint_url = os.environ.get(f"AWS_{service.upper()}_ENDPOINT_URL", "").strip()
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return kwargs
