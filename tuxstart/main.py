from __future__ import annotations

import argparse
import logging
from typing import Optional

import yaml

from .config import ProvisionConfig, load_config
from .console import Reporter
from .errors import PreconditionFailure, StepFailure
from .logging_utils import configure_logging, default_log_path
from .pipeline import PipelineResult, ProvisionContext, run_pipeline
from .preconditions import check_not_root, check_os
from .steps import (
    BasePackagesStep,
    DockerStep,
    FastFetchStep,
    NodeJsStep,
    OpenJdkStep,
    VerifyStep,
)
from .system import HostSystem, System
from .workspace import TempWorkspace

logger = logging.getLogger(__name__)


def build_steps():
    return [
        BasePackagesStep(),
        DockerStep(),
        NodeJsStep(),
        OpenJdkStep(),
        FastFetchStep(),
        VerifyStep(),
    ]


def run(
    *,
    config: ProvisionConfig,
    system: System,
    reporter: Reporter,
    workspace: Optional[TempWorkspace] = None,
    steps=None,
) -> PipelineResult:
    """Check preconditions, then run every step inside a fresh workspace."""

    workspace = workspace or TempWorkspace()
    try:
        with workspace:
            reporter.header("Checking system requirements")
            release = check_os(system, config.allowed_os_families)
            check_not_root(system)
            reporter.success(f"Host OK: {release.pretty_name or release.id}")

            ctx = ProvisionContext(
                config=config,
                system=system,
                workspace=workspace,
                reporter=reporter,
                os_release=release,
            )
            return run_pipeline(ctx, build_steps() if steps is None else steps)
    finally:
        if workspace.removed:
            reporter.success("Cleanup complete")
        elif workspace.path is not None:
            reporter.error(f"Could not remove temporary directory {workspace.path}")


def _print_completion(reporter: Reporter, log_path: str) -> None:
    reporter.header("Installation complete")
    reporter.success("All tools were installed successfully!")
    reporter.info(f"Full log available at: {log_path}")
    reporter.info("Recommendations:")
    reporter.info("1. Restart your terminal to apply all changes")
    reporter.info("2. Run `newgrp docker` to use Docker without sudo")
    reporter.info("3. Check Java with `java -version`")


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="tuxstart",
        description="Provision an Ubuntu/Debian development workstation "
        "(build tools, Docker, Node.js, OpenJDK 21, FastFetch).",
    )
    p.parse_args(argv)

    reporter = Reporter()
    try:
        config = load_config()
    except (OSError, ValueError, yaml.YAMLError) as e:
        reporter.error(f"Invalid configuration: {e}")
        return 1
    log_path = configure_logging(default_log_path(config.log_dir))
    system = HostSystem(dry_run=config.dry_run, echo=reporter.command)

    try:
        result = run(config=config, system=system, reporter=reporter)
    except PreconditionFailure as e:
        reporter.error(str(e))
        return 1
    except StepFailure as e:
        logger.error("Aborted at step %s", e.step_id)
        reporter.info(f"Full log available at: {log_path}")
        return 1
    except KeyboardInterrupt:
        reporter.error("Interrupted")
        return 130

    logger.info("Ran=%s skipped=%s warned=%s", result.ran_steps, result.skipped_steps, result.warned_steps)
    _print_completion(reporter, log_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
