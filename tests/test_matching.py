"""Tests for the hypothesis-driven match engine."""

from symdiff.diff.matching import HYPOTHESES, match_declarations
from symdiff.diff.models import (
    Added,
    MovedToModule,
    ProofChanged,
    Removed,
    Renamed,
    SpeciesChanged,
    TypeChanged,
)
from symdiff.diff.traits import Trait
from symdiff.exceptions import AmbiguousMatchWarning, ErrorCode
from symdiff.snapshot.models import DeclKind, Module


def _match(make_snapshot, befores, afters, modules=None):
    old = make_snapshot(*befores, modules=modules)
    new = make_snapshot(*afters, modules=modules)
    return match_declarations(befores, afters, old, new)


class TestHypothesisOrder:
    def test_sizes_never_decrease(self):
        sizes = [len(h.excluded) for h in HYPOTHESES]
        assert sizes == sorted(sizes)

    def test_twelve_hypotheses(self):
        assert len(HYPOTHESES) == 12
        assert len({h.excluded for h in HYPOTHESES}) == 12

    def test_singletons_keep_declared_order(self):
        singles = [next(iter(h.excluded)) for h in HYPOTHESES if len(h.excluded) == 1]
        assert singles == [Trait.NAME, Trait.VALUE, Trait.TYPE, Trait.MODULE, Trait.KIND]

    def test_largest_last(self):
        assert HYPOTHESES[-1].excluded == frozenset({Trait.TYPE, Trait.VALUE, Trait.MODULE})


class TestSingleChanges:
    def test_rename(self, make_decl, make_snapshot):
        result = _match(make_snapshot, [make_decl("foo")], [make_decl("bar")])
        assert result.diffs == [Renamed("foo", "bar", False, "M")]

    def test_namespace_only_rename(self, make_decl, make_snapshot):
        result = _match(make_snapshot, [make_decl("A.foo")], [make_decl("B.foo")])
        assert result.diffs == [Renamed("A.foo", "B.foo", True, "M")]

    def test_value_change_of_definition_is_relevant(self, make_decl, make_snapshot):
        result = _match(make_snapshot, [make_decl("f", value=1)], [make_decl("f", value=2)])
        assert result.diffs == [ProofChanged("f", True, "M")]

    def test_proof_change_of_theorem_is_irrelevant(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("t", value="p1", kind=DeclKind.THEOREM)],
            [make_decl("t", value="p2", kind=DeclKind.THEOREM)],
        )
        assert result.diffs == [ProofChanged("t", False, "M")]

    def test_type_change(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("f", type_expr="Nat")],
            [make_decl("f", type_expr="Int")],
        )
        assert result.diffs == [TypeChanged("f", "M")]

    def test_kind_change(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("f", kind=DeclKind.DEFINITION)],
            [make_decl("f", kind=DeclKind.OPAQUE)],
        )
        assert result.diffs == [
            SpeciesChanged("f", DeclKind.DEFINITION, DeclKind.OPAQUE, "M")
        ]

    def test_module_move(self, make_decl, make_snapshot):
        modules = [Module("M1"), Module("M2")]
        result = _match(
            make_snapshot,
            [make_decl("g", module="M1")],
            [make_decl("g", module="M2")],
            modules=modules,
        )
        assert result.diffs == [MovedToModule("g", "M1", "M2")]


class TestCombinedChanges:
    def test_rename_with_value_change(self, make_decl, make_snapshot):
        result = _match(make_snapshot, [make_decl("foo", value=1)], [make_decl("bar", value=2)])
        assert result.diffs == [Renamed("foo", "bar", False, "M"), ProofChanged("bar", True, "M")]

    def test_type_and_value_change(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("f", type_expr="A", value=1)],
            [make_decl("f", type_expr="B", value=2)],
        )
        assert result.diffs == [TypeChanged("f", "M"), ProofChanged("f", True, "M")]

    def test_rename_and_move(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("foo", module="M1")],
            [make_decl("bar", module="M2")],
            modules=[Module("M1"), Module("M2")],
        )
        assert result.diffs == [
            Renamed("foo", "bar", False, "M2"),
            MovedToModule("bar", "M1", "M2"),
        ]
        assert result.matches[0].hypothesis.excluded == frozenset({Trait.NAME, Trait.MODULE})

    def test_value_change_and_move(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("f", value=1, module="M1")],
            [make_decl("f", value=2, module="M2")],
            modules=[Module("M1"), Module("M2")],
        )
        assert result.diffs == [
            ProofChanged("f", True, "M2"),
            MovedToModule("f", "M1", "M2"),
        ]

    def test_type_change_and_move(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("f", type_expr="A", module="M1")],
            [make_decl("f", type_expr="B", module="M2")],
            modules=[Module("M1"), Module("M2")],
        )
        assert result.diffs == [
            TypeChanged("f", "M2"),
            MovedToModule("f", "M1", "M2"),
        ]

    def test_rename_value_and_move(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("foo", value=1, module="M1")],
            [make_decl("bar", value=2, module="M2")],
            modules=[Module("M1"), Module("M2")],
        )
        assert result.diffs == [
            Renamed("foo", "bar", False, "M2"),
            ProofChanged("bar", True, "M2"),
            MovedToModule("bar", "M1", "M2"),
        ]

    def test_type_value_and_move(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("f", type_expr="A", value=1, module="M1")],
            [make_decl("f", type_expr="B", value=2, module="M2")],
            modules=[Module("M1"), Module("M2")],
        )
        assert result.diffs == [
            TypeChanged("f", "M2"),
            ProofChanged("f", True, "M2"),
            MovedToModule("f", "M1", "M2"),
        ]

    def test_most_specific_hypothesis_wins(self, make_decl, make_snapshot):
        # {name} and {name, value} both explain this pair; only the rename is reported
        result = _match(make_snapshot, [make_decl("foo")], [make_decl("bar")])
        assert len(result.matches) == 1
        assert result.matches[0].hypothesis.excluded == frozenset({Trait.NAME})

    def test_unrelated_declarations_are_added_and_removed(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("old", type_expr="A", value=1)],
            [make_decl("new", type_expr="B", value=2)],
        )
        assert result.diffs == [Added("new", "M"), Removed("old", "M")]
        assert result.matches == []


class TestAmbiguity:
    def test_several_befores_for_one_after(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("a"), make_decl("b")],
            [make_decl("c")],
        )
        ambiguous = [w for w in result.warnings if isinstance(w, AmbiguousMatchWarning)]
        assert len(ambiguous) == 1
        assert ambiguous[0].code is ErrorCode.SD300
        assert ambiguous[0].context["befores"] == ["a", "b"]
        assert ambiguous[0].context["after"] == "c"
        # first registered binding wins
        assert Renamed("a", "c", False, "M") in result.diffs
        assert Removed("b", "M") in result.diffs

    def test_several_afters_for_one_before(self, make_decl, make_snapshot):
        result = _match(
            make_snapshot,
            [make_decl("a")],
            [make_decl("b"), make_decl("c")],
        )
        assert result.diffs == [Renamed("a", "b", False, "M"), Added("c", "M")]
        codes = [w.code for w in result.warnings]
        assert ErrorCode.SD301 in codes

    def test_ambiguity_is_logged_at_info(self, make_decl, make_snapshot, caplog):
        with caplog.at_level("INFO", logger="symdiff"):
            _match(make_snapshot, [make_decl("a"), make_decl("b")], [make_decl("c")])
        records = [r for r in caplog.records if "'c' matches 2 removed declarations" in r.getMessage()]
        assert len(records) == 1
        assert records[0].levelname == "INFO"
        assert records[0].diff_warning["warning_code"] == "SD300"

    def test_shared_bucket_is_logged_when_built(self, make_decl, make_snapshot, caplog):
        # no after reaches the bucket, so no warning, but the sharing is still visible
        with caplog.at_level("DEBUG", logger="symdiff"):
            result = _match(
                make_snapshot,
                [make_decl("a"), make_decl("b")],
                [make_decl("c", type_expr="Other", value="other")],
            )
        assert result.warnings == []
        assert "2 removed declarations share a fingerprint under {name}: a, b" in caplog.text

    def test_no_warning_without_competition(self, make_decl, make_snapshot):
        result = _match(make_snapshot, [make_decl("a")], [make_decl("b")])
        assert result.warnings == []


class TestEdgeCases:
    def test_empty_inputs(self, make_snapshot):
        empty = make_snapshot()
        result = match_declarations([], [], empty, empty)
        assert result.diffs == []
        assert result.matches == []

    def test_only_afters(self, make_decl, make_snapshot):
        result = _match(make_snapshot, [], [make_decl("h")])
        assert result.diffs == [Added("h", "M")]

    def test_only_befores(self, make_decl, make_snapshot):
        result = _match(make_snapshot, [make_decl("h")], [])
        assert result.diffs == [Removed("h", "M")]

    def test_each_declaration_matched_at_most_once(self, make_decl, make_snapshot):
        befores = [make_decl(f"old{i}", value=i) for i in range(20)]
        afters = [make_decl(f"new{i}", value=i) for i in range(20)]
        result = _match(make_snapshot, befores, afters)
        assert len(result.matches) == 20
        assert len({m.before.name for m in result.matches}) == 20
        assert len({m.after.name for m in result.matches}) == 20
        assert all(isinstance(d, Renamed) for d in result.diffs)
