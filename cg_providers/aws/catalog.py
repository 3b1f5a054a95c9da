"""Static capability tree for Amazon Web Services."""

from __future__ import annotations

from cg_core.catalog import (
    CategoryRef,
    LocatorField,
    OperationKind,
    OperationRef,
    ProviderRef,
    ServiceRef,
)

AWS_PROVIDER_ID = "aws"

MANUAL_APPROVAL = OperationRef(
    id="codepipeline.manual-approval",
    name="Manual Approval",
    description="Manage Pipeline Approvals",
    kind=OperationKind.MANUAL_APPROVAL,
)
PIPELINE_STATUS = OperationRef(
    id="codepipeline.pipeline-status",
    name="Pipeline Status",
    description="View Pipeline Status",
    kind=OperationKind.PIPELINE_STATUS,
)
START_PIPELINE = OperationRef(
    id="codepipeline.start-pipeline",
    name="Start Pipeline",
    description="Trigger Pipeline Execution",
    kind=OperationKind.START_PIPELINE,
)
FUNCTION_STATUS = OperationRef(
    id="lambda.function-status",
    name="Function Status",
    description="View Lambda Function Status",
    kind=OperationKind.FUNCTION_STATUS,
)

CODEPIPELINE = ServiceRef(
    id="codepipeline",
    name="CodePipeline",
    description="Continuous Delivery Service",
    categories=(
        CategoryRef(
            id="codepipeline.workflows",
            name="Workflows",
            description="CodePipeline Workflows",
            operations=(PIPELINE_STATUS, START_PIPELINE),
        ),
        CategoryRef(
            id="codepipeline.operations",
            name="Operations",
            description="CodePipeline Operations",
            operations=(MANUAL_APPROVAL,),
        ),
        CategoryRef(
            id="codepipeline.internal",
            name="Internal Operations",
            description="CodePipeline Internal Operations",
            visible=False,
        ),
    ),
)

LAMBDA = ServiceRef(
    id="lambda",
    name="Lambda",
    description="Serverless Compute Service",
    categories=(
        CategoryRef(
            id="lambda.workflows",
            name="Workflows",
            description="Lambda Function Workflows",
            operations=(FUNCTION_STATUS,),
        ),
    ),
)

AWS_REF = ProviderRef(
    id=AWS_PROVIDER_ID,
    name="AWS",
    description="Amazon Web Services",
    locator_fields=(
        LocatorField("profile", "AWS Profile", "Enter AWS profile name..."),
        LocatorField("region", "AWS Region", "Enter AWS region..."),
    ),
    services=(CODEPIPELINE, LAMBDA),
)
