"""Match engine — pair removed and added declarations into semantic changes.

The algorithm is a greedy, priority-ordered bipartite match that uses hash
equality as its similarity oracle:

  1. Each *hypothesis* names the traits allowed to differ between a
     before and an after; every other trait must be equal.
  2. Hypotheses run smallest-exclusion first, so the most specific
     explanation of a pair always wins.
  3. For one hypothesis, befores are bucketed by their partial
     fingerprint (excluded traits skipped) and every unexplained after
     is looked up in that table.  A hit pairs the two and emits the
     diffs the hypothesis implies; both sides are then out of play.
  4. Whatever is still unexplained at the end is Added or Removed.

Cost is linear in (befores + afters) per hypothesis.  The match is not
globally optimal: when several befores share a bucket the first one
registered wins, and the ambiguity is reported as an
``AmbiguousMatchWarning`` instead of being resolved silently.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence, Set, Tuple

from ..exceptions import AmbiguousMatchWarning, DiffWarning, ErrorCode, FingerprintCollisionWarning
from ..logging_config import get_logger, log_diff_warning
from ..snapshot.models import DeclKind, Declaration, Snapshot
from .fingerprint import fingerprint, trait_values
from .models import (
    Added,
    Diff,
    MovedToModule,
    ProofChanged,
    Removed,
    Renamed,
    SpeciesChanged,
    TypeChanged,
)
from .traits import Trait, TraitSet, format_traits

logger = get_logger(__name__)

Effect = Callable[[Declaration, Declaration], Diff]


# ── Effects: one diff per changed aspect ─────────────────────────────────────


def _last_component(name: str) -> str:
    return name.rsplit(".", 1)[-1]


def _renamed(before: Declaration, after: Declaration) -> Diff:
    return Renamed(
        old_name=before.name,
        new_name=after.name,
        namespace_only=_last_component(before.name) == _last_component(after.name),
        module=after.module,
    )


def _proof_changed(before: Declaration, after: Declaration) -> Diff:
    # theorem bodies are proof-irrelevant
    return ProofChanged(
        name=after.name,
        is_proof_relevant=after.kind is not DeclKind.THEOREM,
        module=after.module,
    )


def _type_changed(before: Declaration, after: Declaration) -> Diff:
    return TypeChanged(name=after.name, module=after.module)


def _moved(before: Declaration, after: Declaration) -> Diff:
    return MovedToModule(name=after.name, old_module=before.module, new_module=after.module)


def _species_changed(before: Declaration, after: Declaration) -> Diff:
    return SpeciesChanged(
        name=after.name, old_kind=before.kind, new_kind=after.kind, module=after.module
    )


# ── Hypotheses ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Hypothesis:
    """A set of traits allowed to differ, and the diffs a match under it implies."""

    excluded: TraitSet
    effects: Tuple[Effect, ...]

    def explain(self, before: Declaration, after: Declaration) -> List[Diff]:
        return [effect(before, after) for effect in self.effects]

    def __str__(self) -> str:
        return format_traits(self.excluded)


def _hyp(*traits: Trait, effects: Tuple[Effect, ...]) -> Hypothesis:
    return Hypothesis(excluded=frozenset(traits), effects=effects)


N, T, V, K, M = Trait.NAME, Trait.TYPE, Trait.VALUE, Trait.KIND, Trait.MODULE

# Declaration order breaks ties between hypotheses of equal size.
_DECLARED: Tuple[Hypothesis, ...] = (
    _hyp(N, effects=(_renamed,)),
    _hyp(V, effects=(_proof_changed,)),
    _hyp(N, V, effects=(_renamed, _proof_changed)),
    _hyp(T, effects=(_type_changed,)),
    _hyp(T, V, effects=(_type_changed, _proof_changed)),
    _hyp(M, effects=(_moved,)),
    _hyp(N, M, effects=(_renamed, _moved)),
    _hyp(V, M, effects=(_proof_changed, _moved)),
    _hyp(T, M, effects=(_type_changed, _moved)),
    _hyp(N, V, M, effects=(_renamed, _proof_changed, _moved)),
    _hyp(T, V, M, effects=(_type_changed, _proof_changed, _moved)),
    _hyp(K, effects=(_species_changed,)),
)

HYPOTHESES: Tuple[Hypothesis, ...] = tuple(sorted(_DECLARED, key=lambda h: len(h.excluded)))


# ── Engine ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Match:
    before: Declaration
    after: Declaration
    hypothesis: Hypothesis


@dataclass
class MatchResult:
    diffs: List[Diff] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    warnings: List[DiffWarning] = field(default_factory=list)


def _ambiguous(
    hypothesis: Hypothesis, candidates: List[Declaration], after: Declaration, code: ErrorCode
) -> AmbiguousMatchWarning:
    names = [c.name for c in candidates]
    if code is ErrorCode.SD300:
        message = (
            f"{after.name!r} matches {len(names)} removed declarations under {hypothesis} "
            f"({', '.join(names)}); pairing with {names[0]!r}"
        )
    else:
        message = (
            f"{after.name!r} matches {names[0]!r} under {hypothesis}, "
            f"which was already paired with another declaration"
        )
    warning = AmbiguousMatchWarning(
        message=message,
        code=code,
        context={"hypothesis": str(hypothesis), "after": after.name, "befores": names},
    )
    log_diff_warning(logger, warning)
    return warning


def match_declarations(
    befores: Sequence[Declaration],
    afters: Sequence[Declaration],
    old: Snapshot,
    new: Snapshot,
    hypotheses: Sequence[Hypothesis] = HYPOTHESES,
) -> MatchResult:
    """Correlate ``befores`` (only in ``old``) with ``afters`` (only in ``new``).

    Args:
        befores: Changed declarations from the old snapshot.
        afters: Changed declarations from the new snapshot.
        old: Snapshot the befores belong to (trait context).
        new: Snapshot the afters belong to (trait context).
        hypotheses: Trait-exclusion hypotheses in the order they are tried.

    Returns:
        A MatchResult holding the diffs (matched changes first, then
        Added, then Removed), the pairs that were matched, and any
        ambiguity warnings.
    """
    result = MatchResult()
    explained_befores: Set[str] = set()
    explained_afters: Set[str] = set()

    for hypothesis in hypotheses:
        if len(explained_befores) == len(befores) or len(explained_afters) == len(afters):
            break

        buckets: Dict[int, List[Declaration]] = {}
        for before in befores:
            if before.name in explained_befores:
                continue
            buckets.setdefault(fingerprint(before, old, hypothesis.excluded), []).append(before)
        for shared in buckets.values():
            if len(shared) > 1:
                logger.debug(
                    "%d removed declarations share a fingerprint under %s: %s",
                    len(shared),
                    hypothesis,
                    ", ".join(d.name for d in shared),
                )

        for after in afters:
            if after.name in explained_afters:
                continue
            candidates = buckets.get(fingerprint(after, new, hypothesis.excluded))
            if not candidates:
                continue

            before = candidates[0]
            if before.name in explained_befores:
                result.warnings.append(
                    _ambiguous(hypothesis, [before], after, ErrorCode.SD301)
                )
                continue
            if len(candidates) > 1:
                result.warnings.append(
                    _ambiguous(hypothesis, candidates, after, ErrorCode.SD300)
                )

            if trait_values(before, old, hypothesis.excluded) != trait_values(
                after, new, hypothesis.excluded
            ):
                warning = FingerprintCollisionWarning(
                    message=(
                        f"{before.name!r} and {after.name!r} share a fingerprint under "
                        f"{hypothesis} but differ in value; not pairing"
                    ),
                    code=ErrorCode.SD200,
                    context={"hypothesis": str(hypothesis), "names": [before.name, after.name]},
                )
                log_diff_warning(logger, warning)
                result.warnings.append(warning)
                continue

            explained_befores.add(before.name)
            explained_afters.add(after.name)
            result.matches.append(Match(before=before, after=after, hypothesis=hypothesis))
            result.diffs.extend(hypothesis.explain(before, after))
            logger.debug("Matched %s -> %s under %s", before.name, after.name, hypothesis)

    for after in afters:
        if after.name not in explained_afters:
            result.diffs.append(Added(name=after.name, module=after.module))
    for before in befores:
        if before.name not in explained_befores:
            result.diffs.append(Removed(name=before.name, module=before.module))

    logger.debug(
        "Match engine: %d matched, %d added, %d removed",
        len(result.matches),
        len(afters) - len(explained_afters),
        len(befores) - len(explained_befores),
    )
    return result
