import pytest

from mfgtrack.core import stage_catalog
from mfgtrack.core.exceptions import DuplicateSequenceError, RecordNotFound, ValidationError

from conftest import ORG


def make_stages(db, positions):
    return [
        stage_catalog.create_stage(db, ORG, f"Stage {p}", "printing", p)
        for p in positions
    ]


def test_create_stage_defaults_material_categories(db):
    stage = stage_catalog.create_stage(db, ORG, "Gravure Printing", "printing", 1)
    assert stage.is_active is True
    assert stage.sequence_order == 1
    assert "inks" in stage.stage_config["material_categories"]


def test_create_stage_keeps_explicit_config(db):
    stage = stage_catalog.create_stage(
        db, ORG, "Punching", "punching", 1, {"material_categories": ["substrate"], "press": "P1"}
    )
    assert stage.stage_config == {"material_categories": ["substrate"], "press": "P1"}


def test_duplicate_sequence_is_rejected_not_shifted(db):
    make_stages(db, [1, 2, 3])
    with pytest.raises(DuplicateSequenceError) as exc:
        stage_catalog.create_stage(db, ORG, "Another", "coating", 2)
    assert exc.value.sequence_order == 2
    # the existing stages keep their positions
    positions = [s.sequence_order for s in stage_catalog.list_active_stages(db, ORG)]
    assert positions == [1, 2, 3]


def test_same_sequence_allowed_in_another_org(db):
    make_stages(db, [1])
    other = stage_catalog.create_stage(db, "org-other", "Printing", "printing", 1)
    assert other.sequence_order == 1


def test_invalid_stage_collects_every_error(db):
    with pytest.raises(ValidationError) as exc:
        stage_catalog.create_stage(db, ORG, "  ", "welding", 0)
    assert len(exc.value.errors) == 3
    assert any("welding" in e for e in exc.value.errors)


def test_active_stages_listed_in_sequence_order(db):
    make_stages(db, [3, 1, 2])
    assert [s.sequence_order for s in stage_catalog.list_active_stages(db, ORG)] == [1, 2, 3]


def test_reorder_clamps_to_one(db):
    stage = make_stages(db, [4])[0]
    moved = stage_catalog.reorder_stage(db, ORG, stage.id, -3)
    assert moved.sequence_order == 1


def test_deactivated_stage_frees_its_position(db):
    first, _ = make_stages(db, [1, 2])
    stage_catalog.set_stage_active(db, ORG, first.id, False)
    replacement = stage_catalog.create_stage(db, ORG, "Replacement", "lamination", 1)
    assert replacement.sequence_order == 1
    assert [s.id for s in stage_catalog.list_active_stages(db, ORG)][0] == replacement.id
    # reactivating would collide with the replacement
    with pytest.raises(DuplicateSequenceError):
        stage_catalog.set_stage_active(db, ORG, first.id, True)


def test_get_stage_of_other_org_is_not_found(db):
    stage = make_stages(db, [1])[0]
    with pytest.raises(RecordNotFound):
        stage_catalog.get_stage(db, "org-other", stage.id)


def test_seed_default_stages_is_idempotent(db):
    seeded = stage_catalog.seed_default_stages(db, ORG)
    assert [s.stage_type for s in seeded] == [
        "punching", "printing", "lamination", "coating", "slitting_packaging",
    ]
    again = stage_catalog.seed_default_stages(db, ORG)
    assert [s.id for s in again] == [s.id for s in seeded]
