"""Per-metadata-kind diff producers for snapshot extensions.

Every metadata store in a snapshot (doc strings, attribute tags,
reducibility, ...) is a ``name -> payload`` mapping.  An adapter compares
the old and new store for one metadata kind, looking symbols up through
the ``RenameMap`` so a renamed declaration keeps its metadata history.

Adapters are plain objects registered under a stable string key; the
engine receives the registry explicitly and never branches on the key.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol

from ..exceptions import InvalidConfigError
from ..snapshot.internal import InternalNameClassifier, is_internal_name
from .models import (
    AttributeAdded,
    AttributeChanged,
    AttributeRemoved,
    Diff,
    DocAdded,
    DocChanged,
    DocRemoved,
)
from .rename import RenameMap


class ExtensionAdapter(Protocol):
    """Contract every metadata-kind adapter implements."""

    def diff(
        self,
        old_state: Mapping[str, Any],
        new_state: Mapping[str, Any],
        renames: RenameMap,
        ignore_internal: bool = False,
        classifier: Optional[InternalNameClassifier] = None,
    ) -> List[Diff]: ...


class MappingAdapter:
    """Base adapter: added / removed / changed payload per symbol.

    Subclasses supply the three diff constructors.  A symbol missing from
    the prior state simply has no previous payload, which makes it an
    addition.
    """

    def _added(self, name: str, payload: Any) -> Optional[Diff]:
        raise NotImplementedError

    def _removed(self, name: str, payload: Any) -> Optional[Diff]:
        raise NotImplementedError

    def _changed(self, name: str, old: Any, new: Any) -> Optional[Diff]:
        raise NotImplementedError

    def diff(
        self,
        old_state: Mapping[str, Any],
        new_state: Mapping[str, Any],
        renames: RenameMap,
        ignore_internal: bool = False,
        classifier: Optional[InternalNameClassifier] = None,
    ) -> List[Diff]:
        is_internal = classifier or is_internal_name

        def skip(name: str) -> bool:
            return ignore_internal and is_internal(name)

        diffs: List[Diff] = []
        for name, payload in new_state.items():
            if skip(name):
                continue
            old_key = renames.old_name(name)
            if old_key not in old_state:
                produced = self._added(name, payload)
            elif old_state[old_key] != payload:
                produced = self._changed(name, old_state[old_key], payload)
            else:
                produced = None
            if produced is not None:
                diffs.append(produced)

        for name, payload in old_state.items():
            if skip(name):
                continue
            if renames.new_name(name) not in new_state:
                produced = self._removed(name, payload)
                if produced is not None:
                    diffs.append(produced)

        return diffs


class DocStringAdapter(MappingAdapter):
    """Doc strings: DocAdded / DocChanged / DocRemoved."""

    def _added(self, name: str, payload: Any) -> Diff:
        return DocAdded(name=name)

    def _removed(self, name: str, payload: Any) -> Diff:
        return DocRemoved(name=name)

    def _changed(self, name: str, old: Any, new: Any) -> Diff:
        return DocChanged(name=name)


class TagAttributeAdapter(MappingAdapter):
    """Membership attributes (``@[simp]``, ``instance``, ...): added or removed."""

    def __init__(self, attr_name: str):
        self.attr_name = attr_name

    def _added(self, name: str, payload: Any) -> Diff:
        return AttributeAdded(attr_name=self.attr_name, name=name)

    def _removed(self, name: str, payload: Any) -> Diff:
        return AttributeRemoved(attr_name=self.attr_name, name=name)

    def _changed(self, name: str, old: Any, new: Any) -> None:
        return None

    def __repr__(self) -> str:
        return f"TagAttributeAdapter({self.attr_name!r})"


class ValuedAttributeAdapter(TagAttributeAdapter):
    """Attributes carrying a payload (reducibility status, out-params)."""

    def _changed(self, name: str, old: Any, new: Any) -> Diff:
        return AttributeChanged(attr_name=self.attr_name, name=name, old_value=old, new_value=new)

    def __repr__(self) -> str:
        return f"ValuedAttributeAdapter({self.attr_name!r})"


_TAG_ATTRIBUTES = ("protected", "noncomputable", "instance", "simp", "deprecated", "class")
_VALUED_ATTRIBUTES = ("reducibility", "class_out_param")


def default_adapters() -> Dict[str, ExtensionAdapter]:
    """Fresh registry of the built-in adapters, keyed by metadata-kind id."""
    registry: Dict[str, ExtensionAdapter] = {"docstring": DocStringAdapter()}
    for attr in _TAG_ATTRIBUTES:
        registry[attr] = TagAttributeAdapter(attr)
    for attr in _VALUED_ATTRIBUTES:
        registry[attr] = ValuedAttributeAdapter(attr)
    return registry


def select_adapters(
    keys: List[str], registry: Optional[Dict[str, ExtensionAdapter]] = None
) -> Dict[str, ExtensionAdapter]:
    """Restrict a registry to ``keys``; an empty list keeps every adapter.

    Raises:
        InvalidConfigError: If a key has no registered adapter.
    """
    registry = default_adapters() if registry is None else registry
    if not keys:
        return dict(registry)
    unknown = [k for k in keys if k not in registry]
    if unknown:
        raise InvalidConfigError(
            "extensions",
            ", ".join(unknown),
            f"no adapter registered (known: {', '.join(sorted(registry))})",
        )
    return {k: registry[k] for k in keys}
