"""Exceptions raised when talking to the wrapped tools."""

from __future__ import annotations


class AgntzError(Exception):
    """Base class for all agntz errors."""


class ExternalToolError(AgntzError):
    """A wrapped tool exited non-zero or reported a failure."""

    def __init__(self, tool: str, message: str, returncode: int | None = None) -> None:
        self.tool = tool
        self.message = message
        self.returncode = returncode
        super().__init__(message)

    def __str__(self) -> str:
        if self.message.strip():
            return self.message
        message = f"{self.tool} failed"
        if self.returncode is not None:
            message += f" with exit code {self.returncode}"
        return message


class ToolNotFoundError(ExternalToolError):
    """The binary for a wrapped tool is not on PATH."""

    def __init__(self, tool: str, binary: str) -> None:
        self.binary = binary
        super().__init__(
            tool,
            f"failed to run {binary} - is {tool} installed? "
            f"Try: agntz tools install {tool}",
        )


class InvalidResponseError(AgntzError):
    """A wrapped tool produced output that does not match the expected schema."""

    def __init__(self, tool: str, detail: str | None = None) -> None:
        self.tool = tool
        self.detail = detail
        super().__init__(f"Invalid response format from {tool}")
