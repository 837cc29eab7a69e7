from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ecr_sync.packages.reconciler.types import ReconcileInputs


class InputConfig(BaseSettings):
    """Action inputs.

    GitHub Actions exposes ``with:`` inputs as ``INPUT_<NAME>`` environment
    variables, keeping dashes in the name, and sets unspecified inputs to an
    empty string.
    """

    INPUT_REPOSITORY: str = Field(min_length=1)
    INPUT_PUBLIC: bool = False
    INPUT_LIFECYCLE_POLICY: Path | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "INPUT_LIFECYCLE-POLICY", "INPUT_LIFECYCLE_POLICY"
        ),
    )
    INPUT_REPOSITORY_POLICY: Path | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "INPUT_REPOSITORY-POLICY", "INPUT_REPOSITORY_POLICY"
        ),
    )

    @field_validator("INPUT_PUBLIC", mode="before")
    @classmethod
    def empty_public_is_false(cls, value):
        if isinstance(value, str) and not value.strip():
            return False
        return value

    @field_validator("INPUT_LIFECYCLE_POLICY", "INPUT_REPOSITORY_POLICY", mode="before")
    @classmethod
    def empty_path_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AWSConfig(BaseSettings):
    # Empty values fall back to the default boto3 credential and region chain
    AWS_REGION: str = ""
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_SESSION_TOKEN: str = ""

    AWS_MAX_ATTEMPTS: int = Field(default=1, ge=1)
    """Total attempts per API call, including the first one.

    The default of 1 disables SDK retries; the workflow re-runs the action
    when a retry is wanted.
    """


class ActionsConfig(BaseSettings):
    GITHUB_ACTIONS: bool = False
    GITHUB_OUTPUT: str = ""


class Settings(
    InputConfig,
    AWSConfig,
    ActionsConfig,
    BaseSettings,
):
    model_config = SettingsConfigDict(
        env_file=(".env",),
        extra="ignore",
    )

    def reconcile_inputs(self) -> ReconcileInputs:
        return ReconcileInputs(
            repository=self.INPUT_REPOSITORY,
            lifecycle_policy=self.INPUT_LIFECYCLE_POLICY,
            repository_policy=self.INPUT_REPOSITORY_POLICY,
        )
