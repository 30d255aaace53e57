from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Protocol, Sequence

from .config import ProvisionConfig
from .console import Reporter
from .errors import StepFailure
from .preconditions import OsRelease
from .system import System
from .workspace import TempWorkspace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvisionContext:
    config: ProvisionConfig
    system: System
    workspace: TempWorkspace
    reporter: Reporter
    os_release: OsRelease


class Step(Protocol):
    """A single idempotent step: check, then install."""

    step_id: str
    title: str
    fatal: bool

    def is_installed(self, ctx: ProvisionContext) -> bool:
        ...

    def install(self, ctx: ProvisionContext) -> None:
        ...


@dataclass
class PipelineResult:
    ran_steps: List[str] = field(default_factory=list)
    skipped_steps: List[str] = field(default_factory=list)
    warned_steps: List[str] = field(default_factory=list)


def run_pipeline(ctx: ProvisionContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; the first failing fatal step stops the run."""

    result = PipelineResult()

    for step in steps:
        ctx.reporter.header(step.title)

        # Evaluated right before install; earlier steps may have changed the host.
        if step.is_installed(ctx):
            logger.info("Skipping step %s (already installed)", step.step_id)
            ctx.reporter.warning(f"{step.title}: already installed")
            result.skipped_steps.append(step.step_id)
            continue

        logger.info("Running step %s", step.step_id)
        try:
            step.install(ctx)
        except Exception as e:
            if not step.fatal:
                logger.warning("Step %s failed (non-fatal): %s", step.step_id, e)
                ctx.reporter.warning(f"{step.title}: {e}")
                result.warned_steps.append(step.step_id)
                continue
            logger.exception("Step %s failed", step.step_id)
            ctx.reporter.error(f"{step.title} failed: {e}")
            raise StepFailure(step.step_id, str(e)) from e

        result.ran_steps.append(step.step_id)

    return result
