"""Registry client adapters for the private and public registries.

This module provides the RegistryClient protocol and boto3-backed
implementations for Amazon ECR and Amazon ECR Public. Lookups return an
outcome (Ok / NotFound / Failed) so the reconciler can branch on
"does not exist yet" without inspecting boto3 errors itself. Writes raise.
"""

from typing import TYPE_CHECKING, Any, Protocol

import structlog
from botocore.exceptions import ClientError

from .errors import (
    CapabilityNotSupported,
    ContractViolation,
    ErrorKind,
    Failed,
    Ok,
    Outcome,
    error_code,
    to_outcome,
)
from .types import PolicyKind, RepositoryRecord

if TYPE_CHECKING:
    from mypy_boto3_ecr.client import ECRClient
    from mypy_boto3_ecr_public.client import ECRPublicClient

logger = structlog.stdlib.get_logger(__name__)


ECR_ERROR_CODES: dict[str, ErrorKind] = {
    "RepositoryNotFoundException": ErrorKind.REPOSITORY_NOT_FOUND,
    "LifecyclePolicyNotFoundException": ErrorKind.LIFECYCLE_POLICY_NOT_FOUND,
    "RepositoryPolicyNotFoundException": ErrorKind.REPOSITORY_POLICY_NOT_FOUND,
}

ECR_PUBLIC_ERROR_CODES: dict[str, ErrorKind] = {
    "RepositoryNotFoundException": ErrorKind.REPOSITORY_NOT_FOUND,
}


class RegistryClient(Protocol):
    """Protocol for registry client implementations.

    Lookup methods return an Outcome; write methods return nothing and raise
    the underlying client error on failure.
    """

    def describe_repository(self, name: str) -> Outcome[RepositoryRecord]:
        """Look up a single repository by name.

        Raises:
            ContractViolation if the registry does not return exactly one
            repository with an address
        """
        ...

    def create_repository(self, name: str) -> RepositoryRecord: ...

    def get_policy(self, kind: PolicyKind, repository_name: str) -> Outcome[str]:
        """Fetch the policy text of the given kind attached to a repository."""
        ...

    def put_policy(self, kind: PolicyKind, repository_name: str, text: str) -> None:
        """Replace the policy of the given kind with ``text``."""
        ...


def _repository_record(
    repository: dict[str, Any] | None, operation: str, name: str
) -> RepositoryRecord:
    if repository is None:
        raise ContractViolation(
            f"unexpected response: {operation} returned no repository"
        )
    uri = repository.get("repositoryUri")
    if not uri:
        raise ContractViolation(
            f"unexpected response: {operation} returned no repositoryUri"
        )
    return RepositoryRecord(name=repository.get("repositoryName", name), uri=uri)


class _BaseRegistryClient:
    error_codes: dict[str, ErrorKind] = {}
    registry_name = ""

    def __init__(self, client: Any):
        self.client = client

    def _lookup_failed(self, error: ClientError, **context):
        outcome = to_outcome(error, self.error_codes)
        if isinstance(outcome, Failed):
            logger.error(
                f"Failed to query {self.registry_name}",
                error_code=error_code(error),
                **context,
            )
        else:
            logger.debug(
                "Resource not found",
                registry=self.registry_name,
                kind=outcome.kind.value,
                **context,
            )
        return outcome

    def describe_repository(self, name: str) -> Outcome[RepositoryRecord]:
        try:
            response = self.client.describe_repositories(repositoryNames=[name])
        except ClientError as e:
            return self._lookup_failed(e, repository=name)

        repositories = response.get("repositories")
        if repositories is None:
            raise ContractViolation(
                "unexpected response: describe_repositories returned no repositories"
            )
        if len(repositories) != 1:
            raise ContractViolation(
                f"unexpected response: describe_repositories returned "
                f"{len(repositories)} repositories for {name!r}"
            )
        return Ok(_repository_record(repositories[0], "describe_repositories", name))

    def create_repository(self, name: str) -> RepositoryRecord:
        try:
            response = self.client.create_repository(repositoryName=name)
        except ClientError as e:
            logger.error(
                f"Failed to create {self.registry_name} repository",
                repository=name,
                error_code=error_code(e),
            )
            raise
        return _repository_record(
            response.get("repository"), "create_repository", name
        )


class ECRRegistryClient(_BaseRegistryClient):
    """Amazon ECR (private, regional) registry client."""

    error_codes = ECR_ERROR_CODES
    registry_name = "ECR"

    def __init__(self, ecr_client: "ECRClient"):
        super().__init__(ecr_client)

    def get_policy(self, kind: PolicyKind, repository_name: str) -> Outcome[str]:
        try:
            if kind == PolicyKind.LIFECYCLE:
                response = self.client.get_lifecycle_policy(
                    repositoryName=repository_name
                )
                text = response.get("lifecyclePolicyText")
            else:
                response = self.client.get_repository_policy(
                    repositoryName=repository_name
                )
                text = response.get("policyText")
        except ClientError as e:
            return self._lookup_failed(
                e, repository=repository_name, policy=kind.value
            )

        if text is None:
            raise ContractViolation(
                f"unexpected response: {kind.value} policy of {repository_name!r} has no text"
            )
        return Ok(text)

    def put_policy(self, kind: PolicyKind, repository_name: str, text: str) -> None:
        try:
            if kind == PolicyKind.LIFECYCLE:
                self.client.put_lifecycle_policy(
                    repositoryName=repository_name, lifecyclePolicyText=text
                )
            else:
                self.client.set_repository_policy(
                    repositoryName=repository_name, policyText=text
                )
        except ClientError as e:
            logger.error(
                "Failed to write policy",
                repository=repository_name,
                policy=kind.value,
                error_code=error_code(e),
            )
            raise


class ECRPublicRegistryClient(_BaseRegistryClient):
    """Amazon ECR Public registry client.

    ECR Public does not support lifecycle policies
    (https://github.com/aws/containers-roadmap/issues/1268), and repository
    policies are not managed for it here.
    """

    error_codes = ECR_PUBLIC_ERROR_CODES
    registry_name = "ECR Public"

    def __init__(self, ecr_public_client: "ECRPublicClient"):
        super().__init__(ecr_public_client)

    def get_policy(self, kind: PolicyKind, repository_name: str) -> Outcome[str]:
        raise CapabilityNotSupported(
            f"{kind.value} policy is not supported by {self.registry_name}"
        )

    def put_policy(self, kind: PolicyKind, repository_name: str, text: str) -> None:
        raise CapabilityNotSupported(
            f"{kind.value} policy is not supported by {self.registry_name}"
        )
