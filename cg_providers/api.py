"""Public API surface for cloud providers."""

from cg_providers.aws import AWS_PROVIDER_ID, AWS_REF, AwsProvider, AwsSession
from cg_providers.placeholders import PlaceholderProvider, azure_provider, gcp_provider
from cg_providers.registry import (
    ENTRYPOINT_GROUP,
    ProviderRegistry,
    builtin_providers,
    create_registry,
)

__all__ = [
    "AWS_PROVIDER_ID",
    "AWS_REF",
    "AwsProvider",
    "AwsSession",
    "ENTRYPOINT_GROUP",
    "PlaceholderProvider",
    "ProviderRegistry",
    "azure_provider",
    "builtin_providers",
    "create_registry",
    "gcp_provider",
]
