"""Module set and direct-import adjacency changes."""

from typing import List

from ..snapshot.models import Snapshot
from .models import Diff, DirectImportAdded, DirectImportRemoved, ModuleAdded, ModuleRemoved


def diff_modules(old: Snapshot, new: Snapshot) -> List[Diff]:
    """Report modules and direct imports added or removed between snapshots.

    Modules are compared by name.  For a module present on both sides its
    import lists are compared as sets; the order of imports is ignored.
    Output follows the new snapshot's module order for additions and the
    old snapshot's for removals.
    """
    old_imports = old.imports_of()
    new_imports = new.imports_of()

    diffs: List[Diff] = []
    for name in old.module_names:
        if name not in new_imports:
            diffs.append(ModuleRemoved(module=name))
    for name in new.module_names:
        if name not in old_imports:
            diffs.append(ModuleAdded(module=name))

    for name in new.module_names:
        if name not in old_imports:
            continue
        before = set(old_imports[name])
        after = set(new_imports[name])
        for imported in dict.fromkeys(new_imports[name]):
            if imported not in before:
                diffs.append(DirectImportAdded(module=name, imported=imported))
        for imported in dict.fromkeys(old_imports[name]):
            if imported not in after:
                diffs.append(DirectImportRemoved(module=name, imported=imported))

    return diffs
