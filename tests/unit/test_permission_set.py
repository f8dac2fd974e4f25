"""Unit tests for PermissionSet subset containment."""

import pytest

from scopeguard.domain.entities import PermissionSet
from scopeguard.domain.exceptions import InvalidRule

from tests.conftest import rule

SAMPLE_SETS = [
    PermissionSet(),
    PermissionSet([rule()]),
    PermissionSet([rule("io.cozy.files", "ALL"), rule("io.cozy.contacts", ("GET", "POST"))]),
    PermissionSet(
        [
            rule("io.cozy.contacts", ("GET",), ("g1", "g2"), "groups"),
            rule("io.cozy.contacts", ("PUT",), ("g1",), "groups"),
            rule("io.cozy.files", ("GET", "DELETE"), ("doc1",)),
        ]
    ),
]


@pytest.mark.parametrize("permissions", SAMPLE_SETS)
def test_subset_is_reflexive(permissions: PermissionSet) -> None:
    assert permissions.is_subset_of(permissions)
    assert permissions.is_equivalent_to(permissions)


@pytest.mark.parametrize(
    "extra",
    [
        rule("io.cozy.notes"),
        rule("io.cozy.files", "DELETE"),
        rule("io.cozy.files", "GET", ("doc2",)),
        rule("io.cozy.contacts", "GET", ("g3",), "groups"),
    ],
)
def test_adding_uncovered_rule_escalates(extra) -> None:
    base = PermissionSet(
        [
            rule("io.cozy.files", "GET", ("doc1",)),
            rule("io.cozy.contacts", "GET", ("g1", "g2"), "groups"),
        ]
    )
    assert not base.with_rule(extra).is_subset_of(base)
    assert base.is_subset_of(base.with_rule(extra))


def test_unrestricted_parent_accepts_single_document() -> None:
    parent = PermissionSet([rule("io.cozy.files", "GET")])
    child = PermissionSet([rule("io.cozy.files", "GET", ("doc1",))])
    assert child.is_subset_of(parent)


def test_extra_verb_rejected() -> None:
    parent = PermissionSet([rule("io.cozy.files", ("GET", "POST"))])
    child = PermissionSet([rule("io.cozy.files", ("GET", "POST", "DELETE"))])
    assert not child.is_subset_of(parent)


def test_no_coverage_assembled_from_several_parent_rules() -> None:
    parent = PermissionSet([rule("io.cozy.files", "GET"), rule("io.cozy.files", "POST")])
    child = PermissionSet([rule("io.cozy.files", ("GET", "POST"))])
    assert not child.is_subset_of(parent)
    # Split the same way, each child rule finds its own parent rule
    split = PermissionSet([rule("io.cozy.files", "GET"), rule("io.cozy.files", "POST")])
    assert split.is_subset_of(parent)


def test_values_not_assembled_from_several_parent_rules() -> None:
    parent = PermissionSet([rule(values=("a",)), rule(values=("b",))])
    assert not PermissionSet([rule(values=("a", "b"))]).is_subset_of(parent)


def test_empty_child_is_subset_of_anything() -> None:
    assert PermissionSet().is_subset_of(PermissionSet())
    assert PermissionSet().is_subset_of(PermissionSet([rule()]))


def test_nothing_non_empty_is_subset_of_empty_parent() -> None:
    assert not PermissionSet([rule()]).is_subset_of(PermissionSet())


def test_equivalence_ignores_order_and_granularity() -> None:
    a = PermissionSet([rule("io.cozy.files", "ALL"), rule("io.cozy.files", "GET", ("doc1",))])
    b = PermissionSet([rule("io.cozy.files", "ALL")])
    assert a.is_equivalent_to(b)
    assert a != b


def test_layered_grants_allowed() -> None:
    layered = PermissionSet([rule("io.cozy.files", "GET"), rule("io.cozy.files", "DELETE")])
    assert len(layered) == 2
    assert PermissionSet([rule("io.cozy.files", "DELETE", ("x",))]).is_subset_of(layered)


def test_with_rule_and_union_do_not_mutate() -> None:
    base = PermissionSet([rule()])
    grown = base.with_rule(rule("io.cozy.notes"))
    merged = base.union(PermissionSet([rule("io.cozy.contacts")]))
    assert len(base) == 1
    assert len(grown) == 2
    assert [r.type for r in merged] == ["io.cozy.files", "io.cozy.contacts"]


class TestJson:
    def test_round_trip_list(self) -> None:
        permissions = SAMPLE_SETS[3]
        assert PermissionSet.from_json(permissions.to_list()) == permissions

    def test_from_mapping_of_titles(self) -> None:
        permissions = PermissionSet.from_json(
            {
                "files": {"type": "io.cozy.files", "verbs": ["GET"]},
                "contacts": {"type": "io.cozy.contacts", "verbs": ["ALL"], "description": "all"},
            }
        )
        assert [r.type for r in permissions] == ["io.cozy.files", "io.cozy.contacts"]

    def test_from_none_is_empty(self) -> None:
        assert len(PermissionSet.from_json(None)) == 0

    def test_from_invalid_shape(self) -> None:
        with pytest.raises(InvalidRule):
            PermissionSet.from_json("io.cozy.files:GET")
        with pytest.raises(InvalidRule):
            PermissionSet.from_json(["io.cozy.files"])
