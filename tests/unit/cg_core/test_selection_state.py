"""Tests for the immutable selection path."""

from __future__ import annotations

import pytest

from cg_common.errors import PreconditionError
from cg_core.models import ApprovalDecision
from cg_core.selection import Depth, SelectionState
from cg_providers.aws.catalog import AWS_REF, CODEPIPELINE, LAMBDA, MANUAL_APPROVAL
from tests.helpers.fakes import APPROVAL, FakeSession


pytestmark = pytest.mark.unit_core


def _deep_selection() -> SelectionState:
    operations = CODEPIPELINE.categories[1]
    return (
        SelectionState()
        .with_provider(AWS_REF)
        .with_locator_value("profile", "default")
        .with_locator_value("region", "us-east-1")
        .with_session(FakeSession())
        .with_service(CODEPIPELINE)
        .with_category(operations)
        .with_operation(MANUAL_APPROVAL)
        .with_collection((APPROVAL,))
        .with_target(APPROVAL)
        .with_action(ApprovalDecision.APPROVE)
        .with_text("ok")
    )


def test_path_lists_values_in_hierarchy_order() -> None:
    selection = _deep_selection()
    depths = [entry.depth for entry in selection.path()]
    assert depths == [
        Depth.PROVIDER,
        Depth.LOCATOR,
        Depth.LOCATOR,
        Depth.SERVICE,
        Depth.CATEGORY,
        Depth.OPERATION,
        Depth.TARGET,
        Depth.ACTION,
        Depth.TEXT,
    ]
    assert selection.locator_value("region") == "us-east-1"
    assert selection.locator_complete


def test_setting_a_shallow_value_clears_everything_deeper() -> None:
    selection = _deep_selection().with_service(LAMBDA)
    assert selection.service is LAMBDA
    assert selection.session is not None
    assert selection.category is None
    assert selection.operation is None
    assert selection.collection is None
    assert selection.target is None
    assert selection.action is None
    assert selection.text is None


def test_truncate_operation_releases_collection() -> None:
    selection = _deep_selection().truncate(Depth.OPERATION)
    assert selection.operation is None
    assert selection.collection is None
    assert selection.category is not None


def test_truncate_locator_releases_session() -> None:
    selection = _deep_selection().truncate(Depth.LOCATOR)
    assert selection.locator == ()
    assert selection.session is None
    assert selection.provider is AWS_REF
    assert len(selection.path()) == 1


def test_changing_a_locator_value_drops_session_and_later_fields() -> None:
    selection = _deep_selection().with_locator_value("profile", "prod")
    assert selection.locator == (("profile", "prod"),)
    assert selection.session is None
    assert selection.service is None


def test_without_last_locator_value() -> None:
    selection = _deep_selection().without_last_locator_value()
    assert selection.locator == (("profile", "default"),)
    assert selection.session is None
    assert selection.service is None
    assert SelectionState().without_last_locator_value() == SelectionState()


def test_target_is_a_copy_of_the_listed_item() -> None:
    selection = _deep_selection()
    assert selection.target == APPROVAL
    assert selection.target is not APPROVAL


def test_with_collection_keeps_operation_and_clears_target() -> None:
    selection = _deep_selection().with_collection(())
    assert selection.operation is MANUAL_APPROVAL
    assert selection.collection == ()
    assert selection.target is None


@pytest.mark.parametrize(
    "build",
    [
        lambda s: s.with_locator_value("profile", "default"),
        lambda s: s.with_service(CODEPIPELINE),
        lambda s: s.with_category(CODEPIPELINE.categories[0]),
        lambda s: s.with_operation(MANUAL_APPROVAL),
        lambda s: s.with_collection(()),
        lambda s: s.with_target(APPROVAL),
        lambda s: s.with_action(ApprovalDecision.REJECT),
        lambda s: s.with_text("x"),
    ],
)
def test_setters_require_their_parent(build) -> None:
    with pytest.raises(PreconditionError):
        build(SelectionState())


def test_locator_fields_must_be_filled_in_order() -> None:
    selection = SelectionState().with_provider(AWS_REF)
    with pytest.raises(PreconditionError):
        selection.with_locator_value("region", "us-east-1")


def test_session_requires_complete_locator() -> None:
    selection = SelectionState().with_provider(AWS_REF).with_locator_value("profile", "p")
    with pytest.raises(PreconditionError):
        selection.with_session(FakeSession())


def test_unknown_locator_key_is_rejected() -> None:
    with pytest.raises(KeyError):
        SelectionState().with_provider(AWS_REF).with_locator_value("account", "1")
