"""Locator-bound AWS session over boto3 CodePipeline and Lambda clients."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from botocore.exceptions import BotoCoreError, ClientError

from cg_common.errors import RemoteError
from cg_core.models import ApprovalItem, FunctionStatus, PipelineStatus, StageStatus

logger = logging.getLogger(__name__)

SOURCE_ACTION_NAME = "Source"
TIMESTAMP_FORMAT = "%b %d %H:%M:%S"


def describe_aws_error(exc: Exception) -> str:
    """Operator-facing message for a botocore failure."""
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return error.get("Message") or error.get("Code") or str(exc)
    return str(exc)


@contextmanager
def remote_call(operation: str) -> Iterator[None]:
    """Translate botocore failures raised inside the block into ``RemoteError``."""
    try:
        yield
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code", "")
        raise RemoteError(
            describe_aws_error(exc),
            context={"operation": operation, "code": code},
            cause=exc,
        ) from exc
    except BotoCoreError as exc:
        raise RemoteError(
            describe_aws_error(exc), context={"operation": operation}, cause=exc
        ) from exc


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT) + " UTC"


def _stage_status(stage: dict[str, Any]) -> StageStatus:
    name = stage.get("stageName", "")
    latest = stage.get("latestExecution")
    if not latest:
        return StageStatus(name=name)
    changes = [
        action["latestExecution"]["lastStatusChange"]
        for action in stage.get("actionStates", [])
        if action.get("latestExecution", {}).get("lastStatusChange") is not None
    ]
    last_updated = format_timestamp(max(changes)) if changes else "N/A"
    return StageStatus(
        name=name, status=latest.get("status", "Unknown"), last_updated=last_updated
    )


class AwsSession:
    """Implements the collaborator calls against one profile and region."""

    def __init__(self, codepipeline: Any, lambda_client: Any, *, region: str = "") -> None:
        self.codepipeline = codepipeline
        self.lambda_client = lambda_client
        self.region = region

    def _pipeline_names(self) -> list[str]:
        paginator = self.codepipeline.get_paginator("list_pipelines")
        names: list[str] = []
        for page in paginator.paginate():
            names.extend(p["name"] for p in page.get("pipelines", []))
        return names

    def _pipeline_states(self) -> Iterator[tuple[str, dict[str, Any]]]:
        """Yield each pipeline's state; a pipeline that cannot be read is skipped."""
        with remote_call("list_pipelines"):
            names = self._pipeline_names()
        for name in names:
            try:
                state = self.codepipeline.get_pipeline_state(name=name)
            except ClientError as exc:
                logger.warning("Skipping pipeline %s: %s", name, describe_aws_error(exc))
                continue
            yield name, state

    def list_pending_approvals(self) -> list[ApprovalItem]:
        approvals: list[ApprovalItem] = []
        for name, state in self._pipeline_states():
            for stage in state.get("stageStates", []):
                for action in stage.get("actionStates", []):
                    latest = action.get("latestExecution") or {}
                    if latest.get("status") != "InProgress" or not latest.get("token"):
                        continue
                    approvals.append(
                        ApprovalItem(
                            pipeline_name=name,
                            stage_name=stage["stageName"],
                            action_name=action["actionName"],
                            token=latest["token"],
                        )
                    )
        logger.info("Found %d pending approval(s) in %s", len(approvals), self.region)
        return approvals

    def decide_approval(self, item: ApprovalItem, approved: bool, comment: str) -> None:
        status = "Approved" if approved else "Rejected"
        with remote_call("put_approval_result"):
            self.codepipeline.put_approval_result(
                pipelineName=item.pipeline_name,
                stageName=item.stage_name,
                actionName=item.action_name,
                result={"summary": comment, "status": status},
                token=item.token,
            )
        logger.info(
            "%s %s/%s/%s", status, item.pipeline_name, item.stage_name, item.action_name
        )

    def list_pipeline_status(self) -> list[PipelineStatus]:
        statuses: list[PipelineStatus] = []
        for name, state in self._pipeline_states():
            stages = tuple(_stage_status(s) for s in state.get("stageStates", []))
            statuses.append(PipelineStatus(name=name, stages=stages))
        return statuses

    def start_pipeline(self, pipeline_name: str, revision: str | None = None) -> None:
        params: dict[str, Any] = {"name": pipeline_name}
        if revision:
            params["sourceRevisions"] = [
                {
                    "actionName": SOURCE_ACTION_NAME,
                    "revisionType": "COMMIT_ID",
                    "revisionValue": revision,
                }
            ]
        with remote_call("start_pipeline_execution"):
            response = self.codepipeline.start_pipeline_execution(**params)
        logger.info(
            "Started pipeline %s (execution %s)",
            pipeline_name,
            response.get("pipelineExecutionId", "?"),
        )

    def list_functions(self) -> list[FunctionStatus]:
        functions: list[FunctionStatus] = []
        with remote_call("list_functions"):
            paginator = self.lambda_client.get_paginator("list_functions")
            for page in paginator.paginate():
                for fn in page.get("Functions", []):
                    functions.append(
                        FunctionStatus(
                            name=fn.get("FunctionName", ""),
                            runtime=fn.get("Runtime", ""),
                            memory=fn.get("MemorySize", 0),
                            timeout=fn.get("Timeout", 0),
                            last_update=fn.get("LastModified", ""),
                            handler=fn.get("Handler", ""),
                            description=fn.get("Description", ""),
                        )
                    )
        return functions
