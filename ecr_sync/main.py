import asyncio

import structlog

from ecr_sync.factories import registry_client_factory
from ecr_sync.packages.reconciler import (
    PRIVATE_REGISTRY,
    PUBLIC_REGISTRY,
    Reconciler,
    ReconcileOutputs,
    RegistryVariant,
)
from ecr_sync.settings import ActionsConfig, Settings
from ecr_sync.utils.actions import error_annotation, set_output
from ecr_sync.utils.logging import setup_logger

logger = structlog.stdlib.get_logger(__name__)

REPOSITORY_URI_OUTPUT = "repository-uri"


def registry_variant(settings: Settings) -> RegistryVariant:
    if settings.INPUT_PUBLIC:
        return PUBLIC_REGISTRY
    return PRIVATE_REGISTRY


async def run(settings: Settings) -> ReconcileOutputs:
    variant = registry_variant(settings)
    inputs = settings.reconcile_inputs()

    reconciler = Reconciler(
        client=registry_client_factory(variant, settings),
        variant=variant,
        group_logs=settings.GITHUB_ACTIONS,
    )
    outputs = await reconciler.run(inputs)

    set_output(
        REPOSITORY_URI_OUTPUT,
        outputs.repository_uri,
        output_path=settings.GITHUB_OUTPUT or None,
    )
    return outputs


def main() -> int:
    setup_logger()
    actions = ActionsConfig()

    try:
        settings = Settings()
        asyncio.run(run(settings))
    except Exception as e:
        logger.exception("Failed to reconcile repository", error=str(e))
        if actions.GITHUB_ACTIONS:
            error_annotation(str(e))
        return 1
    return 0
