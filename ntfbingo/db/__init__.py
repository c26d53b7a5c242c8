"""Movie stills database for ntf-bingo.

Exports are lazily loaded to avoid import conflicts when running
submodules directly with `python -m ntfbingo.db.<module>`.
"""

__all__ = [
    # models.py
    "MovieEntry",
    "MovieDatabase",
    "make_movie_entry",
    "is_filename_ok",
    # store.py
    "read_db",
    "write_db",
    "write_backup",
    "read_backup",
    # reconcile.py (reconcile() itself: import from ntfbingo.db.reconcile)
    "ReconcileResult",
    "guess_details_from_filename",
    "list_stills",
    # session.py
    "EditSession",
    "Continue",
    "Aborted",
    # scan.py
    "ScanWorkflow",
]


def __getattr__(name: str):
    """Lazy import for module exports."""
    if name in ("MovieEntry", "MovieDatabase", "make_movie_entry", "is_filename_ok"):
        from ntfbingo.db import models
        return getattr(models, name)
    elif name in ("read_db", "write_db", "write_backup", "read_backup"):
        from ntfbingo.db import store
        return getattr(store, name)
    elif name in ("ReconcileResult", "guess_details_from_filename", "list_stills"):
        from ntfbingo.db import reconcile
        return getattr(reconcile, name)
    elif name in ("EditSession", "Continue", "Aborted"):
        from ntfbingo.db import session
        return getattr(session, name)
    elif name == "ScanWorkflow":
        from ntfbingo.db import scan
        return getattr(scan, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
