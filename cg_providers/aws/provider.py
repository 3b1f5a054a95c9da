"""AWS provider: profile discovery, the region list and session setup."""

from __future__ import annotations

import logging
from typing import Any, Callable

import boto3
from botocore.exceptions import BotoCoreError

from cg_common.errors import PreconditionError, RemoteError
from cg_common.settings import CloudgateSettings
from cg_core.catalog import ProviderRef
from cg_core.models import Locator
from cg_providers.aws.catalog import AWS_REF
from cg_providers.aws.session import AwsSession, remote_call

logger = logging.getLogger(__name__)

FALLBACK_PROFILE = "default"


class AwsProvider:
    """Opens an ``AwsSession`` for a (profile, region) locator."""

    def __init__(
        self,
        settings: CloudgateSettings | None = None,
        session_factory: Callable[..., Any] = boto3.Session,
    ) -> None:
        self.settings = settings or CloudgateSettings()
        self._session_factory = session_factory

    @property
    def ref(self) -> ProviderRef:
        return AWS_REF

    def list_profiles(self) -> list[str]:
        try:
            profiles = sorted(self._session_factory().available_profiles)
        except BotoCoreError as exc:
            logger.warning("Could not read AWS profiles: %s", exc)
            profiles = []
        if not profiles:
            profiles = [FALLBACK_PROFILE]
        preferred = self.settings.default_profile
        if preferred and preferred in profiles:
            profiles.remove(preferred)
            profiles.insert(0, preferred)
        return profiles

    def locator_options(self, key: str) -> list[str]:
        if key == "profile":
            return self.list_profiles()
        if key == "region":
            return list(self.settings.regions)
        raise KeyError(f"AWS has no locator field '{key}'")

    def open_session(self, locator: Locator) -> AwsSession:
        values = dict(locator)
        profile = values.get("profile")
        region = values.get("region")
        if not profile or not region:
            raise PreconditionError(
                "AWS profile and region must be specified", context=values
            )
        logger.info("Opening AWS session (profile=%s, region=%s)", profile, region)
        with remote_call("open_session"):
            session = self._session_factory(profile_name=profile, region_name=region)
            if session.get_credentials() is None:
                raise RemoteError(
                    f"No credentials found for profile '{profile}'",
                    context={"profile": profile},
                )
            return AwsSession(
                session.client("codepipeline"),
                session.client("lambda"),
                region=region,
            )
