import pytest

from mfgtrack import crud, schemas
from mfgtrack.core import orders, progression, quality_gate, stage_catalog, workflow
from mfgtrack.core.exceptions import NoEligibleStage, QualityCheckpointRequired

from conftest import ORG


def records(db, order):
    return crud.get_order_progress(db, ORG, order.id)


def test_aggregate_counts_running_stage_share(db, order):
    first, second = records(db, order)[:2]
    workflow.start_stage(db, ORG, first.id)
    workflow.complete_stage(db, ORG, first.id)
    workflow.start_stage(db, ORG, second.id)
    workflow.update_progress(db, ORG, second.id, 40)

    assert progression.overall_percentage(records(db, order)) == pytest.approx(28.0)


def test_aggregate_is_zero_for_new_order(db, order):
    assert progression.overall_percentage(records(db, order)) == 0.0


def test_current_stage_prefers_running_over_pending(db, order):
    rows = records(db, order)
    workflow.start_stage(db, ORG, rows[2].id)
    assert progression.current_stage(records(db, order)).id == rows[2].id


def test_current_stage_none_when_all_done(db, order):
    for row in records(db, order):
        workflow.start_stage(db, ORG, row.id)
        workflow.complete_stage(db, ORG, row.id)
    assert progression.current_stage(records(db, order)) is None
    summary = progression.order_summary(db, ORG, order.id)
    assert summary["current_stage"] == progression.COMPLETED_LABEL
    assert summary["overall_percentage"] == 100.0
    assert summary["status"] == "completed"


def test_advance_walks_the_pipeline(db, order):
    result = progression.advance_to_next_stage(db, ORG, order.id)
    assert (result.stage_name, result.action, result.status) == ("Order Punching", "started", "in_progress")

    with pytest.raises(NoEligibleStage) as exc:
        progression.advance_to_next_stage(db, ORG, order.id)
    assert "still in progress at 0%" in exc.value.message

    running = records(db, order)[0]
    workflow.update_progress(db, ORG, running.id, 99.9)
    result = progression.advance_to_next_stage(db, ORG, order.id)
    assert (result.stage_name, result.action, result.status) == ("Order Punching", "completed", "completed")
    assert result.overall_percentage == pytest.approx(20.0)

    result = progression.advance_to_next_stage(db, ORG, order.id)
    assert (result.stage_name, result.action) == ("Gravure Printing", "started")


def test_advance_respects_quality_gate(db, order):
    first = records(db, order)[0]
    quality_gate.create_checkpoint(db, ORG, order.id, first.stage_id, "pre_stage")
    with pytest.raises(QualityCheckpointRequired):
        progression.advance_to_next_stage(db, ORG, order.id)
    db.refresh(first)
    assert first.status == "pending"


def test_advance_finished_order(db, order):
    for row in records(db, order):
        workflow.start_stage(db, ORG, row.id)
        workflow.complete_stage(db, ORG, row.id)
    with pytest.raises(NoEligibleStage) as exc:
        progression.advance_to_next_stage(db, ORG, order.id)
    assert "no remaining stages" in exc.value.message


def test_advance_reports_held_stage(db):
    stage_catalog.create_stage(db, ORG, "Printing", "printing", 1)
    order = orders.create_order(db, ORG, schemas.OrderCreate(item_code="LAM-009", order_quantity=10))
    only = records(db, order)[0]
    workflow.start_stage(db, ORG, only.id)
    workflow.hold_stage(db, ORG, only.id, "operator break")
    with pytest.raises(NoEligibleStage) as exc:
        progression.advance_to_next_stage(db, ORG, order.id)
    assert "on hold" in exc.value.message


def test_deactivated_stage_not_counted_but_cancelled_is(db, order, stages):
    rows = records(db, order)
    workflow.cancel_stage(db, ORG, rows[4].id, "customer dropped packaging")
    stage_catalog.set_stage_active(db, ORG, stages[3].id, False)
    workflow.start_stage(db, ORG, rows[0].id)
    workflow.complete_stage(db, ORG, rows[0].id)
    # four active stages remain, one of them completed; the cancelled one stays in the total
    assert progression.overall_percentage(records(db, order)) == pytest.approx(25.0)
    summary = progression.order_summary(db, ORG, order.id)
    assert len(summary["stages"]) == 4


def test_cancelled_stage_stays_in_the_total(db, order):
    rows = records(db, order)
    workflow.cancel_stage(db, ORG, rows[4].id, "packaging done by customer")
    workflow.start_stage(db, ORG, rows[0].id)
    workflow.complete_stage(db, ORG, rows[0].id)
    assert progression.overall_percentage(records(db, order)) == pytest.approx(20.0)
