import boto3
import pytest
from botocore.stub import Stubber

from ..clients import ECRPublicRegistryClient, ECRRegistryClient


def _boto_client(service_name: str):
    return boto3.client(
        service_name,
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def ecr_boto_client():
    return _boto_client("ecr")


@pytest.fixture
def ecr_stubber(ecr_boto_client):
    with Stubber(ecr_boto_client) as stubber:
        yield stubber


@pytest.fixture
def ecr_registry(ecr_boto_client, ecr_stubber) -> ECRRegistryClient:
    return ECRRegistryClient(ecr_boto_client)


@pytest.fixture
def ecr_public_boto_client():
    return _boto_client("ecr-public")


@pytest.fixture
def ecr_public_stubber(ecr_public_boto_client):
    with Stubber(ecr_public_boto_client) as stubber:
        yield stubber


@pytest.fixture
def ecr_public_registry(
    ecr_public_boto_client, ecr_public_stubber
) -> ECRPublicRegistryClient:
    return ECRPublicRegistryClient(ecr_public_boto_client)


@pytest.fixture
def policy_file(tmp_path):
    """Write a policy document to a temporary file and return its path."""

    def write(text: str, name: str = "policy.json"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write
