from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .context import InstallCtx
from .errors import CommandError, InstallCancelled
from .state_store import mark_step_completed

logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StepOutcome:
    status: StepStatus
    detail: str = ""
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def applied(cls, detail: str = "", **data: Any) -> "StepOutcome":
        return cls(StepStatus.APPLIED, detail, data)

    @classmethod
    def skipped(cls, detail: str = "", **data: Any) -> "StepOutcome":
        return cls(StepStatus.SKIPPED, detail, data)


class Step(Protocol):
    """A single named step; idempotent steps probe before acting."""

    step_id: str
    title: str

    def run(self, ctx: InstallCtx) -> StepOutcome:
        ...


@dataclass(frozen=True)
class StepResult:
    step_id: str
    title: str
    status: StepStatus
    detail: str = ""
    data: Dict[str, Any] = field(default_factory=dict)
    returncode: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "step": self.step_id,
            "status": self.status.value,
            "detail": self.detail,
        }
        if self.data:
            d["data"] = dict(self.data)
        if self.returncode is not None:
            d["returncode"] = self.returncode
        return d


@dataclass(frozen=True)
class PipelineResult:
    results: List[StepResult]

    @property
    def ran_steps(self) -> List[str]:
        return [r.step_id for r in self.results if r.status is StepStatus.APPLIED]

    @property
    def skipped_steps(self) -> List[str]:
        return [r.step_id for r in self.results if r.status is StepStatus.SKIPPED]

    @property
    def failed(self) -> Optional[StepResult]:
        for r in self.results:
            if r.status is StepStatus.FAILED:
                return r
        return None

    @property
    def ok(self) -> bool:
        return self.failed is None

    @property
    def exit_code(self) -> int:
        f = self.failed
        if f is None:
            return 0
        return f.returncode or 1


def select_steps(
    steps: Sequence[Step],
    *,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> List[Step]:
    ids = [s.step_id for s in steps]
    for name, value in (("start_at", start_at), ("stop_after", stop_after)):
        if value is not None and value not in ids:
            raise ValueError(f"Unknown {name} step id {value!r}; expected one of {', '.join(ids)}")

    begin = ids.index(start_at) if start_at is not None else 0
    end = ids.index(stop_after) + 1 if stop_after is not None else len(ids)
    if end <= begin:
        raise ValueError(f"stop_after {stop_after!r} comes before start_at {start_at!r}")
    return list(steps[begin:end])


def run_pipeline(
    *,
    ctx: InstallCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order, stopping at the first failure.

    Failures are returned as a FAILED result rather than raised.
    InstallCancelled is not a failure and propagates to the caller.
    """

    results: List[StepResult] = []
    exe = state.setdefault("execution", {})

    for step in select_steps(steps, start_at=start_at, stop_after=stop_after):
        exe["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)

        try:
            outcome = step.run(ctx)
        except InstallCancelled:
            raise
        except Exception as e:
            logger.exception("Step %s failed", step.step_id)
            rc = e.returncode if isinstance(e, CommandError) else None
            result = StepResult(step.step_id, step.title, StepStatus.FAILED, str(e), returncode=rc)
            results.append(result)
            exe.setdefault("errors", []).append({"step": step.step_id, "error": str(e), "returncode": rc})
            break

        result = StepResult(step.step_id, step.title, outcome.status, outcome.detail, outcome.data)
        results.append(result)
        logger.info("Step %s %s %s", step.step_id, outcome.status.value, outcome.detail)
        mark_step_completed(state, step.step_id)

    exe["current_step"] = None
    exe["results"] = [r.to_dict() for r in results]
    return PipelineResult(results=results)
