from __future__ import annotations


class ProvisionError(RuntimeError):
    pass


class PreconditionFailure(ProvisionError):
    """The host is not one we are willing to provision."""


class StepFailure(ProvisionError):
    def __init__(self, step_id: str, message: str) -> None:
        super().__init__(f"{step_id}: {message}")
        self.step_id = step_id
