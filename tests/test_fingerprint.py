"""Tests for the trait registry and fingerprint engine."""

import pytest

from symdiff.diff import traits
from symdiff.diff.fingerprint import (
    FINGERPRINT_SEED,
    MASK64,
    fingerprint,
    mix_hash,
    stable_hash,
    trait_values,
)
from symdiff.diff.traits import TRAIT_REGISTRY, Trait, format_traits
from symdiff.snapshot.models import DeclKind


class TestTraitRegistry:
    def test_incomplete_registry_is_rejected(self):
        with pytest.raises(TypeError):
            traits._check_registry(TRAIT_REGISTRY[:-1], traits._ACCESSORS)

    def test_duplicate_registry_entry_is_rejected(self):
        with pytest.raises(TypeError):
            traits._check_registry(TRAIT_REGISTRY + (Trait.NAME,), traits._ACCESSORS)

    def test_missing_accessor_is_rejected(self):
        accessors = {t: f for t, f in traits._ACCESSORS.items() if t is not Trait.KIND}
        with pytest.raises(TypeError):
            traits._check_registry(TRAIT_REGISTRY, accessors)

    def test_registry_order(self):
        assert TRAIT_REGISTRY == (
            Trait.NAME,
            Trait.TYPE,
            Trait.VALUE,
            Trait.KIND,
            Trait.MODULE,
        )

    def test_accessors(self, make_decl, make_snapshot):
        d = make_decl("foo", value=7, kind=DeclKind.THEOREM, module="A.B")
        snap = make_snapshot(d)
        assert Trait.NAME.value_of(d, snap) == "foo"
        assert Trait.TYPE.value_of(d, snap) == ("const", "Nat")
        assert Trait.VALUE.value_of(d, snap) == 7
        assert Trait.KIND.value_of(d, snap) == "theorem"
        assert Trait.MODULE.value_of(d, snap) == "A.B"

    def test_format_traits_uses_registry_order(self):
        assert format_traits(frozenset({Trait.MODULE, Trait.NAME})) == "{name, module}"


class TestStableHash:
    def test_deterministic(self):
        assert stable_hash(("app", "f", 1)) == stable_hash(("app", "f", 1))

    def test_fits_in_64_bits(self):
        assert 0 <= stable_hash("x") <= MASK64

    def test_type_tagged(self):
        assert stable_hash(1) != stable_hash("1")
        assert stable_hash(True) != stable_hash(1)
        assert stable_hash(("a", "b")) != stable_hash("ab")

    def test_nesting_matters(self):
        assert stable_hash((("a",), "b")) != stable_hash(("a", ("b",)))


class TestMixHash:
    def test_order_sensitive(self):
        a, b = stable_hash("a"), stable_hash("b")
        assert mix_hash(b, mix_hash(a, FINGERPRINT_SEED)) != mix_hash(
            a, mix_hash(b, FINGERPRINT_SEED)
        )

    def test_stays_in_range(self):
        assert 0 <= mix_hash(MASK64, MASK64) <= MASK64


class TestFingerprint:
    def test_equal_declarations_agree(self, make_decl, make_snapshot):
        a = make_decl("foo")
        b = make_decl("foo")
        assert fingerprint(a, make_snapshot(a)) == fingerprint(b, make_snapshot(b))

    def test_any_trait_change_changes_full_fingerprint(self, make_decl, make_snapshot):
        base = make_decl("foo")
        snap = make_snapshot(base)
        variants = [
            make_decl("bar"),
            make_decl("foo", value=2),
            make_decl("foo", type_expr=("const", "Int")),
            make_decl("foo", kind=DeclKind.THEOREM),
            make_decl("foo", module="N"),
        ]
        full = fingerprint(base, snap)
        for v in variants:
            assert fingerprint(v, make_snapshot(v)) != full

    def test_independent_of_excluded_values(self, make_decl, make_snapshot):
        a = make_decl("foo", value=1, module="M1")
        b = make_decl("bar", value=99, module="M1")
        excluded = frozenset({Trait.NAME, Trait.VALUE})
        assert fingerprint(a, make_snapshot(a), excluded) == fingerprint(
            b, make_snapshot(b), excluded
        )

    def test_included_difference_still_visible(self, make_decl, make_snapshot):
        a = make_decl("foo", module="M1")
        b = make_decl("bar", module="M2")
        excluded = frozenset({Trait.NAME})
        assert fingerprint(a, make_snapshot(a), excluded) != fingerprint(
            b, make_snapshot(b), excluded
        )

    def test_excluding_everything_gives_seed(self, make_decl, make_snapshot):
        d = make_decl("foo")
        assert fingerprint(d, make_snapshot(d), frozenset(Trait)) == FINGERPRINT_SEED

    def test_trait_values_skip_excluded(self, make_decl, make_snapshot):
        d = make_decl("foo", value=3)
        values = trait_values(d, make_snapshot(d), frozenset({Trait.NAME, Trait.MODULE}))
        assert values == (("const", "Nat"), 3, "definition")
