"""Reconciler types and data structures.

This module contains shared types used across the reconciler package.
No dependencies on ecr_sync.* modules outside the package.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class PolicyKind(str, Enum):
    LIFECYCLE = "lifecycle"
    REPOSITORY = "repository"


class PolicyAction(str, Enum):
    """What a policy reconciliation step did to the remote document."""

    UP_TO_DATE = "up_to_date"
    UPDATED = "updated"
    CREATED = "created"


@dataclass(frozen=True)
class RepositoryRecord:
    """A repository as returned by the registry.

    Attributes:
        name: Repository name (e.g., "app-a")
        uri: Address clients pull and push with
             (e.g., "123456789012.dkr.ecr.us-east-1.amazonaws.com/app-a")
    """

    name: str
    uri: str


@dataclass(frozen=True)
class RegistryVariant:
    """Capabilities of a registry flavour.

    The reconciler only runs the policy steps a variant supports; supplying a
    policy for an unsupported kind is rejected before any remote call.
    """

    name: str
    service_name: str
    region: str | None = None
    supports_lifecycle_policy: bool = False
    supports_repository_policy: bool = False

    def supports(self, kind: PolicyKind) -> bool:
        if kind == PolicyKind.LIFECYCLE:
            return self.supports_lifecycle_policy
        return self.supports_repository_policy


PRIVATE_REGISTRY = RegistryVariant(
    name="ecr",
    service_name="ecr",
    supports_lifecycle_policy=True,
    supports_repository_policy=True,
)

# ECR Public API is only served from us-east-1 and has no lifecycle policies
# https://docs.aws.amazon.com/general/latest/gr/ecr-public.html
PUBLIC_REGISTRY = RegistryVariant(
    name="ecr-public",
    service_name="ecr-public",
    region="us-east-1",
)


@dataclass(frozen=True)
class ReconcileInputs:
    repository: str
    lifecycle_policy: Path | None = None
    repository_policy: Path | None = None

    def policy_path(self, kind: PolicyKind) -> Path | None:
        if kind == PolicyKind.LIFECYCLE:
            return self.lifecycle_policy
        return self.repository_policy


@dataclass(frozen=True)
class ReconcileOutputs:
    repository_uri: str
