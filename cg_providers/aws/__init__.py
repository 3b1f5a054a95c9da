"""Amazon Web Services provider backed by boto3."""

from cg_providers.aws.catalog import AWS_PROVIDER_ID, AWS_REF
from cg_providers.aws.provider import AwsProvider
from cg_providers.aws.session import AwsSession

__all__ = ["AWS_PROVIDER_ID", "AWS_REF", "AwsProvider", "AwsSession"]
