"""Custom exceptions for configuration management."""

from typing import Iterable, List, Optional


def _block(title: str, lines: Iterable[str]) -> List[str]:
    return [f"\n{title}:"] + [f"  {line}" for line in lines]


class ConfigurationError(Exception):
    """
    Raised when the YAML file, the environment or a source definition is
    unusable. Fatal at startup: main() prints it and exits with status 1.

    Args:
        message: Primary error message
        errors: Individual problems, printed as a numbered list
        suggestions: Hints for fixing them, printed as bullets
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        super().__init__(self.render())

    def render(self) -> str:
        parts = [self.message]
        if self.errors:
            parts += _block(
                "Validation Errors", (f"{i}. {e}" for i, e in enumerate(self.errors, 1))
            )
        if self.suggestions:
            parts += _block("Suggestions", (f"- {s}" for s in self.suggestions))
        return "\n".join(parts)
