"""Closest-enclosing-directory lookup for linked projects.

The ancestor chain of the working directory is computed once (the
directory itself first, the filesystem root last) and searched in order,
so the walk always terminates at the root whatever its representation
(``/``, ``C:\\``, ``\\\\server\\share\\``).
"""

from __future__ import annotations

from pathlib import PurePath
from typing import List, Mapping, Optional, Type

from railway_cli.errors import NoLinkedProjectError


def ancestor_chain(path: str, flavour: Type[PurePath] = PurePath) -> List[str]:
    """Return *path* followed by each of its parents, ending at the root."""
    pure = flavour(path)
    return [str(pure)] + [str(parent) for parent in pure.parents]


def find_closest_linked_directory(
    projects: Mapping[str, object],
    cwd: str,
    flavour: Type[PurePath] = PurePath,
) -> Optional[str]:
    """Return the nearest ancestor of *cwd* (inclusive) that is a key of *projects*."""
    for candidate in ancestor_chain(cwd, flavour):
        if candidate in projects:
            return candidate
    return None


def require_closest_linked_directory(
    projects: Mapping[str, object],
    cwd: str,
    flavour: Type[PurePath] = PurePath,
) -> str:
    """Like :func:`find_closest_linked_directory` but raise when nothing is linked."""
    found = find_closest_linked_directory(projects, cwd, flavour)
    if found is None:
        raise NoLinkedProjectError()
    return found
