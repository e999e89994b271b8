"""Accumulating result type for the Blog Builder.

A build should report every independent problem it finds instead of stopping
at the first one. BlogResult carries either a value or a growing list of
errors; once an error has been added the result stays failed.

Usage:
    from common.result import BlogResult

    result = BlogResult()
    for page in pages:
        try:
            ...
        except OSError as e:
            result.err_context(e, f"while building {page}")
    result.unwrap()  # raises BuildFailed listing every error
"""

from typing import Any, Generic, Iterable, List, Optional, TypeVar

from common.errors import BlogError, BuildFailed

T = TypeVar("T")


class ContextError(BlogError):
    """An error wrapped with a description of what was being done."""

    def __init__(self, error: Exception, context: str):
        self.error = error
        self.context = context
        super().__init__(f"{context}: {error}")


class BlogResult(Generic[T]):
    """Either a successful value or the list of errors collected so far."""

    def __init__(self, value: Optional[T] = None, errors: Optional[Iterable[Exception]] = None):
        self.value = value
        self.errors: List[Exception] = list(errors or [])

    @property
    def is_ok(self) -> bool:
        """Whether no error has been recorded."""
        return not self.errors

    def ok(self, value: T) -> "BlogResult[T]":
        """Record the success value; errors already recorded are kept."""
        self.value = value
        return self

    def err(self, error: Exception) -> "BlogResult[T]":
        """Add one error to the result."""
        self.errors.append(error)
        return self

    def err_context(self, error: Exception, context: str) -> "BlogResult[T]":
        """Add one error, wrapped with a description of the failed step."""
        self.errors.append(ContextError(error, context))
        return self

    def errs(self, errors: Iterable[Exception]) -> "BlogResult[T]":
        """Add several errors to the result."""
        self.errors.extend(errors)
        return self

    def merge(self, other: "BlogResult[Any]") -> "BlogResult[T]":
        """Fold the errors of another result into this one."""
        return self.errs(other.errors)

    def unwrap(self) -> T:
        """
        Return the value, or raise BuildFailed with every recorded error.

        :return: The success value
        """
        if self.errors:
            raise BuildFailed(self.errors)
        return self.value

    def __repr__(self) -> str:
        if self.is_ok:
            return f"BlogResult(ok={self.value!r})"
        return f"BlogResult(errors={[str(e) for e in self.errors]!r})"
