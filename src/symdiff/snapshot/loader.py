"""Turn a build artifact into an immutable Snapshot.

The diff engine never touches the filesystem.  Providers sit at the edge
and either hand back a fully-validated ``Snapshot`` or raise
``SnapshotLoadError``.

The shipped ``JsonSnapshotProvider`` reads the exchange format::

    {
      "format": "symdiff-snapshot",
      "version": 1,
      "modules": [{"name": "M", "imports": ["Init"]}],
      "declarations": [
        {"name": "M.foo", "kind": "definition", "module": "M",
         "type": ..., "value": ...}
      ],
      "extensions": {"docstring": {"M.foo": "..."}, "simp": ["M.foo"]}
    }
"""

import json
from pathlib import Path
from typing import Any, Dict, Hashable, List, Mapping, Union

from ..exceptions import ErrorCode, SnapshotLoadError, SnapshotVersionError
from ..logging_config import get_logger
from .models import DeclKind, Declaration, Module, Snapshot

logger = get_logger(__name__)

FORMAT_MARKER = "symdiff-snapshot"
FORMAT_VERSION = 1

_KIND_ALIASES: Dict[str, DeclKind] = {
    "quot": DeclKind.QUOTIENT,
    "quotient_op": DeclKind.QUOTIENT,
    "quotientop": DeclKind.QUOTIENT,
    "ctor": DeclKind.CONSTRUCTOR,
    "rec": DeclKind.RECURSOR,
    "def": DeclKind.DEFINITION,
    "thm": DeclKind.THEOREM,
    "induct": DeclKind.INDUCTIVE,
}


def freeze_expr(value: Any) -> Hashable:
    """Convert a JSON tree into a hashable, comparable value.

    Lists become tuples; objects become tuples of sorted ``(key, value)``
    pairs tagged with ``"{}"`` so they never equal a list of pairs.
    """
    if isinstance(value, list):
        return tuple(freeze_expr(v) for v in value)
    if isinstance(value, dict):
        return ("{}",) + tuple((k, freeze_expr(value[k])) for k in sorted(value))
    return value


def parse_kind(raw: Any) -> DeclKind:
    if not isinstance(raw, str):
        raise ValueError(f"kind must be a string, got {raw!r}")
    key = raw.strip().lower()
    try:
        return DeclKind(key)
    except ValueError:
        pass
    if key in _KIND_ALIASES:
        return _KIND_ALIASES[key]
    raise ValueError(f"unknown declaration kind {raw!r}")


class JsonSnapshotProvider:
    """Load snapshots from JSON documents on disk or already in memory.

    Usage::

        provider = JsonSnapshotProvider()
        old = provider.load("build-old.json")
        new = provider.load(parsed_dict, label="in-memory")
    """

    def load(self, source: Union[str, Path, Mapping[str, Any]], label: str = "") -> Snapshot:
        if isinstance(source, Mapping):
            return self.from_document(source, label or "<memory>")

        path = Path(source)
        label = label or str(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except OSError as e:
            raise SnapshotLoadError(
                label, f"cannot read file: {e.strerror or e}", code=ErrorCode.SD100
            )
        except json.JSONDecodeError as e:
            raise SnapshotLoadError(label, f"invalid JSON at line {e.lineno}: {e.msg}")

        if not isinstance(document, Mapping):
            raise SnapshotLoadError(label, "top-level JSON value must be an object")
        return self.from_document(document, label)

    def from_document(self, document: Mapping[str, Any], label: str) -> Snapshot:
        if document.get("format") != FORMAT_MARKER:
            raise SnapshotLoadError(
                label, f"missing or wrong format marker (expected {FORMAT_MARKER!r})"
            )
        version = document.get("version")
        if version != FORMAT_VERSION:
            raise SnapshotVersionError(label, version, FORMAT_VERSION)

        modules = self._parse_modules(document.get("modules", []), label)
        known_modules = {m.name for m in modules}
        declarations = self._parse_declarations(
            document.get("declarations", []), known_modules, label
        )
        extensions = self._parse_extensions(document.get("extensions", {}), label)

        logger.debug(
            "Loaded snapshot %s: %d declarations, %d modules, %d extensions",
            label,
            len(declarations),
            len(modules),
            len(extensions),
        )
        return Snapshot(
            declarations=declarations,
            modules=tuple(modules),
            extensions=extensions,
            label=label,
        )

    # ── Sections ─────────────────────────────────────────────────────────

    def _parse_modules(self, raw: Any, label: str) -> List[Module]:
        if not isinstance(raw, list):
            raise SnapshotLoadError(label, "'modules' must be a list")
        modules: List[Module] = []
        seen = set()
        for entry in raw:
            if isinstance(entry, str):
                name, imports = entry, []
            elif isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
                name, imports = entry["name"], entry.get("imports", [])
            else:
                raise SnapshotLoadError(label, f"malformed module entry: {entry!r}")
            if name in seen:
                raise SnapshotLoadError(label, f"duplicate module {name!r}")
            if not isinstance(imports, list) or not all(isinstance(i, str) for i in imports):
                raise SnapshotLoadError(label, f"imports of module {name!r} must be a list of names")
            seen.add(name)
            modules.append(Module(name=name, imports=tuple(imports)))
        return modules

    def _parse_declarations(
        self, raw: Any, known_modules: set, label: str
    ) -> Dict[str, Declaration]:
        if not isinstance(raw, list):
            raise SnapshotLoadError(label, "'declarations' must be a list")
        declarations: Dict[str, Declaration] = {}
        for entry in raw:
            if not isinstance(entry, Mapping) or not isinstance(entry.get("name"), str):
                raise SnapshotLoadError(label, f"malformed declaration entry: {entry!r}")
            name = entry["name"]
            if name in declarations:
                raise SnapshotLoadError(
                    label, f"duplicate declaration {name!r}", code=ErrorCode.SD103
                )
            module = entry.get("module")
            if module not in known_modules:
                raise SnapshotLoadError(
                    label, f"declaration {name!r} references unknown module {module!r}"
                )
            try:
                kind = parse_kind(entry.get("kind"))
            except ValueError as e:
                raise SnapshotLoadError(label, f"declaration {name!r}: {e}")
            declarations[name] = Declaration(
                name=name,
                kind=kind,
                type_expr=freeze_expr(entry.get("type")),
                value_expr=freeze_expr(entry.get("value")),
                module=module,
            )
        return declarations

    def _parse_extensions(self, raw: Any, label: str) -> Dict[str, Dict[str, Any]]:
        if not isinstance(raw, Mapping):
            raise SnapshotLoadError(label, "'extensions' must be an object")
        extensions: Dict[str, Dict[str, Any]] = {}
        for key, payload in raw.items():
            if isinstance(payload, list):
                # tag-set: membership only
                extensions[key] = {str(name): True for name in payload}
            elif isinstance(payload, Mapping):
                extensions[key] = {str(name): freeze_expr(v) for name, v in payload.items()}
            else:
                raise SnapshotLoadError(
                    label, f"extension {key!r} must be a list or an object"
                )
        return extensions


def load_snapshot(source: Union[str, Path, Mapping[str, Any]], label: str = "") -> Snapshot:
    """Load a snapshot with the default JSON provider."""
    return JsonSnapshotProvider().load(source, label=label)
