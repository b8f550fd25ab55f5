from __future__ import annotations

from typing import Mapping

WORKER_VAR_PREFIX = "WORKER_VAR_"


def load_worker_vars(environ: Mapping[str, str], *, prefix: str = WORKER_VAR_PREFIX) -> dict[str, str]:
    """Collect the worker's private configuration pairs.

    Only variables named ``<prefix><NAME>`` are exposed, keyed by ``NAME``.
    Internal binding names (``ASSETS*`` or anything containing ``__``) are
    skipped.
    """
    worker_vars: dict[str, str] = {}
    for name, value in environ.items():
        if not name.startswith(prefix):
            continue
        key = name[len(prefix):]
        if not key or key.startswith("ASSETS") or "__" in key:
            continue
        worker_vars[key] = str(value)
    return worker_vars


__all__ = ["WORKER_VAR_PREFIX", "load_worker_vars"]
