"""Base constraint — abstract class implementing the Strategy Pattern.

Each constraint is a standalone, immutable, independently testable unit.
New constraint kinds are added without modifying the engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from permitgate.validators.messages import DEFAULT_MESSAGES, render
from permitgate.validators.models import Violation, ViolationKind


class EvaluationContext:
    """Per-field view handed to constraints during one evaluation.

    Holds the field's path and label, its message overrides, and the
    normalized values of the fields that have already passed.
    """

    def __init__(
        self,
        path: str,
        label: str,
        messages: Optional[Mapping[str, str]] = None,
        siblings: Optional[Mapping[str, Any]] = None,
    ):
        self.path = path
        self.label = label
        self.messages = messages or {}
        self.siblings = siblings if siblings is not None else {}

    def sibling(self, name: str, default: Any = None) -> Any:
        """Normalized value of another field, or ``default`` if it is absent or failed."""
        return self.siblings.get(name, default)

    def has_sibling(self, name: str) -> bool:
        return name in self.siblings

    def violation(
        self,
        code: str,
        kind: ViolationKind,
        value: Any = None,
        **params: Any,
    ) -> Violation:
        """Build a Violation, resolving the message override or the default template."""
        template = self.messages.get(code) or DEFAULT_MESSAGES.get(code, '"{label}" is invalid')
        return Violation(
            field=self.path,
            message=render(template, label=self.label, value=value, **params),
            kind=kind,
            code=code,
            value=value,
        )


class BaseConstraint(BaseModel, ABC):
    """Abstract base for all field constraints.

    Contract:
        - check() is deterministic and side-effect free
        - check() receives the already-converted value, never a missing one
        - check() returns a list of Violation (empty = passed)
    """

    model_config = {"frozen": True}

    @property
    @abstractmethod
    def kind(self) -> ViolationKind:
        """Violation kind reported when this constraint fails."""
        ...

    @property
    def references(self) -> tuple[str, ...]:
        """Sibling fields this constraint reads. Non-empty means evaluated in the second pass."""
        return ()

    @abstractmethod
    def check(self, value: Any, ctx: EvaluationContext) -> list[Violation]:
        """Check a converted value.

        Args:
            value: The field's value after conversion and trimming
            ctx: Path, label, messages and normalized siblings

        Returns:
            List of Violation findings (empty if the value passes)
        """
        ...

    # ── Helper Methods ──

    def _fail(self, ctx: EvaluationContext, code: str, value: Any, **params: Any) -> list[Violation]:
        """Convenience method returning a single-violation list."""
        return [ctx.violation(code, self.kind, value, **params)]
