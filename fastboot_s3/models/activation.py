from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class OperationOutcome:
    name: str
    key: str
    ok: bool = True
    error: Optional[BaseException] = None


@dataclass
class ActivationResult:
    revision: str
    outcomes: List[OperationOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(o.ok for o in self.outcomes)

    @property
    def failed(self) -> List[OperationOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def outcome(self, name: str) -> Optional[OperationOutcome]:
        for o in self.outcomes:
            if o.name == name:
                return o
        return None


class ActivationError(RuntimeError):
    """
    One or more activation steps failed. Steps that succeeded are not rolled
    back; `result` holds the outcome of every step that was attempted.
    """

    def __init__(self, result: ActivationResult):
        self.result = result
        names = ", ".join(f"{o.name} ({o.key}): {o.error}" for o in result.failed)
        super().__init__(f"Failed to activate revision {result.revision}: {names}")
