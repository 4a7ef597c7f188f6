"""Eliza installer (step-driven, re-runnable).

Core design goals:
- Ordered, named steps with applied/skipped/failed results
- Idempotency decided by probing the host (directories, files, tmux)
- Stop at the first failure and propagate its exit code
- Every command logged
"""

__all__ = []
