"""Shared test fixtures for symdiff tests."""

import pytest

from symdiff.snapshot.models import DeclKind, Declaration, Module, Snapshot


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def make_decl():
    """Factory for declarations with sensible defaults."""

    def _make(
        name,
        value=1,
        type_expr=("const", "Nat"),
        kind=DeclKind.DEFINITION,
        module="M",
    ):
        return Declaration(
            name=name, kind=kind, type_expr=type_expr, value_expr=value, module=module
        )

    return _make


@pytest.fixture
def make_snapshot():
    """Factory for snapshots; modules default to those the declarations use."""

    def _make(*decls, modules=None, extensions=None, label=""):
        if modules is None:
            names = list(dict.fromkeys(d.module for d in decls))
            modules = [Module(name=n) for n in names]
        return Snapshot(
            declarations={d.name: d for d in decls},
            modules=tuple(modules),
            extensions=extensions or {},
            label=label,
        )

    return _make


@pytest.fixture
def snapshot_document():
    """A small but complete JSON snapshot document."""
    return {
        "format": "symdiff-snapshot",
        "version": 1,
        "modules": [
            {"name": "Init", "imports": []},
            {"name": "Data.List", "imports": ["Init"]},
        ],
        "declarations": [
            {
                "name": "List.length",
                "kind": "definition",
                "module": "Data.List",
                "type": ["pi", "List", "Nat"],
                "value": ["lam", {"body": "rec"}],
            },
            {
                "name": "List.length_nil",
                "kind": "theorem",
                "module": "Data.List",
                "type": ["eq", "0"],
                "value": ["rfl"],
            },
            {"name": "Nat", "kind": "inductive", "module": "Init", "type": "Type", "value": None},
        ],
        "extensions": {
            "docstring": {"List.length": "Length of a list."},
            "simp": ["List.length_nil"],
        },
    }
