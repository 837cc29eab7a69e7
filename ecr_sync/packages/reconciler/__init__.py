"""Repository reconciler package.

Ensures a container registry repository exists and that its policies match
local JSON documents, for Amazon ECR and Amazon ECR Public.
"""

from .clients import ECRPublicRegistryClient, ECRRegistryClient, RegistryClient
from .errors import CapabilityNotSupported, ContractViolation, ErrorKind
from .reconciler import Reconciler, ensure_repository, reconcile_policy
from .types import (
    PRIVATE_REGISTRY,
    PUBLIC_REGISTRY,
    PolicyAction,
    PolicyKind,
    ReconcileInputs,
    ReconcileOutputs,
    RegistryVariant,
    RepositoryRecord,
)

__all__ = [
    # Protocol
    "RegistryClient",
    # Clients
    "ECRRegistryClient",
    "ECRPublicRegistryClient",
    # Engine
    "Reconciler",
    "ensure_repository",
    "reconcile_policy",
    # Errors
    "CapabilityNotSupported",
    "ContractViolation",
    "ErrorKind",
    # Types
    "PRIVATE_REGISTRY",
    "PUBLIC_REGISTRY",
    "PolicyAction",
    "PolicyKind",
    "ReconcileInputs",
    "ReconcileOutputs",
    "RegistryVariant",
    "RepositoryRecord",
]
