import pytest

from mfgtrack import crud
from mfgtrack.config.settings import settings
from mfgtrack.core import quality_gate, workflow
from mfgtrack.core.exceptions import QualityCheckpointRequired, RecordNotFound, ValidationError

from conftest import ORG


def first_progress(db, order):
    return crud.get_order_progress(db, ORG, order.id)[0]


def precheck(db, progress):
    return quality_gate.create_checkpoint(db, ORG, progress.order_id, progress.stage_id, "pre_stage")


@pytest.mark.parametrize("verdict", [None, "in_review", "failed"])
def test_blocking_precheck_prevents_start_without_mutation(db, order, verdict):
    progress = first_progress(db, order)
    cp = precheck(db, progress)
    if verdict:
        quality_gate.record_result(db, ORG, cp.id, verdict)

    with pytest.raises(QualityCheckpointRequired) as exc:
        workflow.start_stage(db, ORG, progress.id)
    assert exc.value.check_type == "pre_stage"

    db.refresh(progress)
    assert progress.status == "pending"
    assert progress.started_at is None
    db.refresh(order)
    assert order.status == "draft"


def test_passed_precheck_allows_start(db, order):
    progress = first_progress(db, order)
    cp = precheck(db, progress)
    quality_gate.record_result(db, ORG, cp.id, "passed", inspection_results={"gsm": 52})
    started = workflow.start_stage(db, ORG, progress.id)
    assert started.status == "in_progress"
    assert started.quality_status == "passed"


def test_latest_precheck_wins(db, order):
    progress = first_progress(db, order)
    quality_gate.record_result(db, ORG, precheck(db, progress).id, "failed", defects_found=["smudge"])
    quality_gate.record_result(db, ORG, precheck(db, progress).id, "passed")
    assert quality_gate.has_blocking_precheck(db, ORG, progress.order_id, progress.stage_id) is False


def test_strict_mode_requires_a_precheck(db, order, monkeypatch):
    monkeypatch.setattr(settings, "REQUIRE_PRE_STAGE_CHECKPOINT", True)
    progress = first_progress(db, order)
    with pytest.raises(QualityCheckpointRequired):
        workflow.start_stage(db, ORG, progress.id)


def test_record_result_rejects_unknown_verdict(db, order):
    cp = precheck(db, first_progress(db, order))
    with pytest.raises(ValidationError):
        quality_gate.record_result(db, ORG, cp.id, "maybe")


def test_checkpoint_for_unknown_stage(db, order):
    with pytest.raises(RecordNotFound):
        quality_gate.create_checkpoint(db, ORG, order.id, 9999, "pre_stage")
    with pytest.raises(ValidationError):
        quality_gate.create_checkpoint(db, ORG, order.id, first_progress(db, order).stage_id, "midway")


def test_release_needs_a_passed_and_no_pending_check(db, order):
    progress = workflow.start_stage(db, ORG, first_progress(db, order).id)
    workflow.complete_stage(db, ORG, progress.id)

    can_release, reason = quality_gate.evaluate_release(db, ORG, order.id, progress.stage_id)
    assert can_release is False
    assert reason == "No passed quality inspection"

    post = crud.list_checkpoints(db, ORG, order.id, progress.stage_id, "post_stage")[0]
    quality_gate.record_result(db, ORG, post.id, "passed")
    assert quality_gate.evaluate_release(db, ORG, order.id, progress.stage_id) == (True, "Transition allowed")

    precheck(db, progress)
    assert quality_gate.evaluate_release(db, ORG, order.id, progress.stage_id) == (
        False, "Pending quality inspection exists",
    )
