import random

import pytest

from mfgtrack import crud, schemas
from mfgtrack.core import bom_validator
from mfgtrack.core.exceptions import NoActiveBOM, ValidationError

from conftest import ORG


def comp(code, weight, **extra):
    return dict(component_item_code=code, weight_percentage=weight, **extra)


def bom_payload(*components, item_code="LAM-001", **header):
    return schemas.BOMCreate(item_code=item_code, components=list(components), **header)


def test_valid_partition_has_no_errors():
    assert bom_validator.validate_composition([comp("PET-12", 60), comp("ADH-1", 40)]) == []


def test_sum_within_tolerance_is_accepted():
    assert bom_validator.validate_composition([comp("PET-12", 60), comp("ADH-1", 39.95)]) == []


def test_short_sum_reports_remaining_percentage():
    errors = bom_validator.validate_composition([comp("PET-12", 60), comp("ADH-1", 30)])
    assert errors == ["Total weight percentage is 90.0%; 10.0% remaining to reach 100%"]


def test_excess_sum_reports_overshoot():
    errors = bom_validator.validate_composition([comp("PET-12", 60), comp("ADH-1", 50)])
    assert errors == ["Total weight percentage is 110.0%; exceeds 100% by 10.0%"]


def test_empty_component_list():
    assert bom_validator.validate_composition([]) == ["At least one component is required"]


def test_every_violation_is_reported():
    errors = bom_validator.validate_composition([
        comp("PET-12", 0),
        comp("pet-12", 150),
        comp("INK-RED", 20),
    ])
    assert len(errors) == 4
    assert sum("weight percentage must be greater than 0" in e for e in errors) == 2
    assert any("exceeds 100%" in e for e in errors)
    assert any("PET-12 appears 2 times" in e for e in errors)


def test_accept_persists_ratio_as_fraction(db):
    bom = bom_validator.accept_bom(db, ORG, bom_payload(comp("PET-12", 60), comp("ADH-1", 40)))
    assert bom.bom_version == "1.0"
    assert bom.approval_status == "draft"
    assert bom.is_active is False
    lines = {c.component_item_code: c for c in bom.components}
    assert lines["PET-12"].quantity_ratio == pytest.approx(0.6)
    assert lines["PET-12"].weight_percentage == 60
    assert [c.line_number for c in bom.components] == [1, 2]


def test_versions_increment_per_item(db):
    payload = bom_payload(comp("PET-12", 100))
    versions = [bom_validator.accept_bom(db, ORG, payload).bom_version for _ in range(3)]
    assert versions == ["1.0", "1.1", "1.2"]
    other = bom_validator.accept_bom(db, ORG, bom_payload(comp("PET-12", 100), item_code="LAM-002"))
    assert other.bom_version == "1.0"


def test_rejected_bom_persists_nothing(db):
    with pytest.raises(ValidationError) as exc:
        bom_validator.accept_bom(db, ORG, bom_payload(comp("PET-12", 60), comp("ADH-1", 30)))
    assert "remaining to reach 100%" in exc.value.errors[0]
    assert crud.list_versions(db, ORG, "LAM-001") == []


def test_unknown_stage_and_consumption_type_rejected(db):
    payload = bom_payload(comp("PET-12", 100, stage_id=999, consumption_type="magic"))
    with pytest.raises(ValidationError) as exc:
        bom_validator.accept_bom(db, ORG, payload)
    assert len(exc.value.errors) == 2


def test_approve_makes_single_active_version(db):
    first = bom_validator.accept_bom(db, ORG, bom_payload(comp("PET-12", 100)))
    second = bom_validator.accept_bom(db, ORG, bom_payload(comp("PET-12", 70), comp("ADH-1", 30)))
    bom_validator.approve_bom(db, ORG, first.id)
    bom_validator.approve_bom(db, ORG, second.id)

    db.refresh(first)
    assert first.is_active is False
    active = bom_validator.get_active_bom(db, ORG, "LAM-001")
    assert active.id == second.id
    assert active.approval_status == "approved"


def test_no_active_bom(db):
    bom_validator.accept_bom(db, ORG, bom_payload(comp("PET-12", 100)))
    with pytest.raises(NoActiveBOM):
        bom_validator.get_active_bom(db, ORG, "LAM-001")


def test_explode_applies_yield_and_waste(db):
    bom = bom_validator.accept_bom(
        db, ORG,
        bom_payload(comp("PET-12", 60, waste_percentage=5), comp("ADH-1", 40), yield_percentage=80),
    )
    bom_validator.approve_bom(db, ORG, bom.id)

    lines = {line["component_item_code"]: line for line in bom_validator.explode_bom(db, ORG, "LAM-001", 1000)}
    assert lines["PET-12"]["net_quantity"] == pytest.approx(750.0)
    assert lines["PET-12"]["gross_quantity"] == pytest.approx(787.5)
    assert lines["ADH-1"]["net_quantity"] == pytest.approx(500.0)
    assert lines["ADH-1"]["gross_quantity"] == pytest.approx(500.0)


def random_partition(rng, count):
    """`count` positive weights in hundredths of a percent summing to 10000"""
    cuts = sorted(rng.sample(range(1, 10000), count - 1))
    bounds = [0] + cuts + [10000]
    return [hi - lo for lo, hi in zip(bounds, bounds[1:])]


@pytest.mark.parametrize("seed", range(25))
def test_random_partitions_accepted_and_perturbations_rejected(db, seed):
    rng = random.Random(seed)
    weights = random_partition(rng, rng.randint(1, 10))
    components = [comp(f"RM-{i}", w / 100) for i, w in enumerate(weights, start=1)]
    assert bom_validator.validate_composition(components) == []
    assert bom_validator.accept_bom(db, ORG, bom_payload(*components)).bom_version == "1.0"

    idx = rng.randrange(len(weights))
    delta = rng.randint(11, 500)
    directions = []
    if weights[idx] + delta <= 10000:
        directions.append(1)
    if weights[idx] - delta >= 1:
        directions.append(-1)
    sign = rng.choice(directions)
    components[idx] = comp(f"RM-{idx + 1}", (weights[idx] + sign * delta) / 100)

    errors = bom_validator.validate_composition(components)
    assert len(errors) == 1
    if sign > 0:
        assert errors[0].endswith(f"exceeds 100% by {round(delta / 100, 2)}%")
    else:
        assert errors[0].endswith(f"; {round(delta / 100, 2)}% remaining to reach 100%")


def test_duplicate_codes_rejected_even_when_sum_is_exact(db):
    components = [comp("PET-12", 50), comp("pet-12", 50)]
    errors = bom_validator.validate_composition(components)
    assert errors == ["Raw material PET-12 appears 2 times; each material may appear only once"]
    with pytest.raises(ValidationError):
        bom_validator.accept_bom(db, ORG, bom_payload(*components))
    assert crud.list_versions(db, ORG, "LAM-001") == []


def test_blank_item_code_rejected(db):
    with pytest.raises(ValidationError) as exc:
        bom_validator.accept_bom(db, ORG, bom_payload(comp("PET-12", 100), item_code="   "))
    assert exc.value.errors == ["Finished item code is required"]
    assert crud.list_versions(db, ORG, "   ") == []
