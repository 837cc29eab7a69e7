"""Idempotent reconciliation of a registry repository.

The sequence is strictly ordered: ensure the repository exists, then bring
each supported policy in line with its local document. Only "does not exist
yet" outcomes are handled here; every other error propagates unchanged, and no
call is ever retried (the pipeline running the action owns retries).
"""

from pathlib import Path

import structlog

from ecr_sync.utils.actions import group

from .clients import RegistryClient
from .documents import documents_equal, parse_policy_document, read_policy_document
from .errors import (
    POLICY_ABSENT_KINDS,
    CapabilityNotSupported,
    ErrorKind,
    NotFound,
    Ok,
)
from .types import (
    PolicyAction,
    PolicyKind,
    ReconcileInputs,
    ReconcileOutputs,
    RegistryVariant,
    RepositoryRecord,
)

logger = structlog.stdlib.get_logger(__name__)

# (verb, human readable name) per policy kind, as shown in the job log
POLICY_LABELS: dict[PolicyKind, tuple[str, str]] = {
    PolicyKind.LIFECYCLE: ("put", "lifecycle policy"),
    PolicyKind.REPOSITORY: ("set", "repository policy"),
}


async def ensure_repository(client: RegistryClient, name: str) -> RepositoryRecord:
    """Return the repository called ``name``, creating it if it does not exist."""
    outcome = client.describe_repository(name)

    if isinstance(outcome, Ok):
        repository = outcome.value
        logger.info(
            f"repository {repository.uri} found",
            repository=name,
            repository_uri=repository.uri,
        )
        return repository

    if (
        isinstance(outcome, NotFound)
        and outcome.kind == ErrorKind.REPOSITORY_NOT_FOUND
    ):
        repository = client.create_repository(name)
        logger.info(
            f"repository {repository.uri} has been created",
            repository=name,
            repository_uri=repository.uri,
        )
        return repository

    raise outcome.error


async def reconcile_policy(
    client: RegistryClient,
    kind: PolicyKind,
    repository_name: str,
    path: Path,
) -> PolicyAction:
    """Write the local policy document if the remote one differs or is absent.

    Documents are compared after JSON parsing, so formatting and key order
    differences do not cause a write. The raw local text is what gets written.
    """
    verb, label = POLICY_LABELS[kind]
    policy_text = read_policy_document(path)
    desired = parse_policy_document(policy_text)
    logger.debug(
        f"Checking if {label} {path} has changed for repository {repository_name}",
        repository=repository_name,
        path=str(path),
    )

    outcome = client.get_policy(kind, repository_name)

    if isinstance(outcome, Ok):
        if documents_equal(desired, parse_policy_document(outcome.value)):
            logger.info(
                f"{label.capitalize()} {path} for repository {repository_name} "
                "is already up to date",
                repository=repository_name,
                path=str(path),
            )
            return PolicyAction.UP_TO_DATE
        action = PolicyAction.UPDATED
    elif isinstance(outcome, NotFound) and outcome.kind in POLICY_ABSENT_KINDS[kind]:
        action = PolicyAction.CREATED
    else:
        raise outcome.error

    client.put_policy(kind, repository_name, policy_text)
    logger.info(
        f"Successfully {verb} {label} {path} to repository {repository_name}",
        repository=repository_name,
        path=str(path),
        action=action.value,
    )
    return action


class Reconciler:
    """Runs the reconciliation sequence for one registry variant."""

    def __init__(
        self,
        client: RegistryClient,
        variant: RegistryVariant,
        group_logs: bool = False,
    ):
        self.client = client
        self.variant = variant
        self.group_logs = group_logs

    def check_capabilities(self, inputs: ReconcileInputs):
        for kind in PolicyKind:
            if inputs.policy_path(kind) is not None and not self.variant.supports(
                kind
            ):
                raise CapabilityNotSupported(
                    f"{POLICY_LABELS[kind][1]} is not supported by {self.variant.name}"
                )

    async def run(self, inputs: ReconcileInputs) -> ReconcileOutputs:
        self.check_capabilities(inputs)
        structlog.contextvars.bind_contextvars(
            registry=self.variant.name, repository=inputs.repository
        )
        try:
            with group(
                f"Create repository {inputs.repository} if not exist",
                enabled=self.group_logs,
            ):
                repository = await ensure_repository(self.client, inputs.repository)

            for kind in PolicyKind:
                path = inputs.policy_path(kind)
                if path is None:
                    continue
                verb, label = POLICY_LABELS[kind]
                with group(
                    f"{verb.capitalize()} the {label} to repository {inputs.repository}",
                    enabled=self.group_logs,
                ):
                    await reconcile_policy(self.client, kind, inputs.repository, path)
        finally:
            structlog.contextvars.unbind_contextvars("registry", "repository")

        return ReconcileOutputs(repository_uri=repository.uri)
