## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
from pathlib import Path

from .errors import SpecNotFound


SPEC_SUFFIX = '.flags'


def _resolve_spec_paths() -> list[Path]:
    parts = [p for p in os.environ.get("FLAGSPEC_PATH", "").split(os.pathsep) if p]
    return [Path(os.path.expanduser(os.path.expandvars(p))) for p in parts]


def iter_spec_candidates(name: str):
    """Resolution order: the path as given, then FLAGSPEC_PATH entries, then the working directory."""
    yield Path(name)
    filename = name if name.endswith(SPEC_SUFFIX) else f"{name}{SPEC_SUFFIX}"
    for root in _resolve_spec_paths():
        yield root / filename
    yield Path.cwd() / filename


def load_spec(name: str) -> tuple[str, str]:
    """Return `(source, filename)` for a specification path or bare name."""
    candidates = list(iter_spec_candidates(name))
    for path in candidates:
        if path.is_file():
            return path.read_text(encoding='utf-8'), str(path)
    raise SpecNotFound(f"Specification `{name}` not found.", name=name, candidates=candidates)
