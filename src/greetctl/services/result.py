"""Result sum type — the universal command contract.

INVARIANT: Every command's ``execute`` returns ``Success`` or ``Failure``,
never both and never by raising. The runner maps the variant to an exit
code; callers branch with ``isinstance`` and ``assert_never``.
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeAlias, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ServiceError(BaseModel):
    """Structured description of a captured fault."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BaseException) -> ServiceError:
        """Describe *exc* by class name and message; ``detail`` names its module."""
        exc_type = type(exc)
        code = exc_type.__name__
        return cls(
            code=code,
            message=str(exc) or code,
            detail={"type": f"{exc_type.__module__}.{exc_type.__qualname__}"},
        )


class Success(BaseModel, Generic[T]):
    """A command finished and produced ``value``.

    Attributes:
        op: Name of the operation (e.g. ``"greet"``).
        value: Operation payload; ``None`` for commands with nothing to return.
    """

    model_config = {"frozen": True}

    ok: Literal[True] = True
    op: str
    value: T


class Failure(BaseModel):
    """A command stopped on a fault captured as ``error``."""

    model_config = {"frozen": True}

    ok: Literal[False] = False
    op: str
    error: ServiceError

    @classmethod
    def from_exception(cls, op: str, exc: BaseException) -> Failure:
        return cls(op=op, error=ServiceError.from_exception(exc))


Result: TypeAlias = Success[T] | Failure
