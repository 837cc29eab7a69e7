import boto3
from botocore.config import Config

from ecr_sync.packages.reconciler import (
    ECRPublicRegistryClient,
    ECRRegistryClient,
    RegistryClient,
    RegistryVariant,
)
from ecr_sync.settings import AWSConfig


def aws_session_factory(settings: AWSConfig) -> boto3.Session:
    return boto3.Session(
        region_name=settings.AWS_REGION or None,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
        aws_session_token=settings.AWS_SESSION_TOKEN or None,
    )


def botocore_config_factory(settings: AWSConfig) -> Config:
    # total_max_attempts counts the initial request, so 1 means no retries
    return Config(
        retries={"mode": "standard", "total_max_attempts": settings.AWS_MAX_ATTEMPTS}
    )


def registry_client_factory(
    variant: RegistryVariant, settings: AWSConfig
) -> RegistryClient:
    """Factory function for creating registry clients based on registry variant.

    Returns:
        RegistryClient instance for the variant's boto3 service
    """
    session = aws_session_factory(settings)
    client = session.client(
        variant.service_name,
        region_name=variant.region or settings.AWS_REGION or None,
        config=botocore_config_factory(settings),
    )

    if variant.service_name == "ecr":
        return ECRRegistryClient(client)
    elif variant.service_name == "ecr-public":
        return ECRPublicRegistryClient(client)
    else:
        raise ValueError(f"Invalid registry service: {variant.service_name}")
