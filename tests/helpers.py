"""Test doubles for the generation adapter and host capabilities."""

import asyncio
from dataclasses import dataclass, field

from proformat.core.types import PaginationOptions
from proformat.exceptions import ClipboardFailure


class StaticAdapter:
    """Adapter that always returns the same text and records its prompts."""

    def __init__(self, text: str | None):
        self.text = text
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        return self.text


class FailingAdapter:
    """Adapter that always raises the given error and records its prompts."""

    def __init__(self, error: Exception | None = None):
        self.error = error or ConnectionError("connection refused")
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        raise self.error


class GatedAdapter:
    """Adapter whose responses are released manually, in any order.

    Each call waits on its own event; ``release(i, text)`` or
    ``fail(i, error)`` resolves the i-th call.
    """

    def __init__(self):
        self.prompts: list[str] = []
        self._gates: list[asyncio.Event] = []
        self._outcomes: dict[int, str | Exception] = {}

    async def generate(self, prompt: str) -> str | None:
        index = len(self.prompts)
        self.prompts.append(prompt)
        gate = asyncio.Event()
        self._gates.append(gate)
        await gate.wait()
        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def release(self, index: int, text: str) -> None:
        self._outcomes[index] = text
        self._gates[index].set()

    def fail(self, index: int, error: Exception) -> None:
        self._outcomes[index] = error
        self._gates[index].set()


@dataclass
class RecordingDownloads:
    saved: list[tuple[str | bytes, str, str]] = field(default_factory=list)
    error: Exception | None = None

    def download(self, payload: str | bytes, mime_type: str, filename: str) -> None:
        if self.error is not None:
            raise self.error
        self.saved.append((payload, mime_type, filename))


@dataclass
class FlakyClipboard:
    refuse: bool = False
    copied: list[str] = field(default_factory=list)

    def write_text(self, text: str) -> None:
        if self.refuse:
            raise ClipboardFailure("clipboard permission denied")
        self.copied.append(text)


@dataclass
class RecordingPrinter:
    regions: list[str] = field(default_factory=list)

    def print_region(self, region_id: str) -> None:
        self.regions.append(region_id)


@dataclass
class StubPaginator:
    ready: bool = True
    error: Exception | None = None
    calls: list[tuple[str, str, PaginationOptions]] = field(default_factory=list)

    def is_ready(self) -> bool:
        return self.ready

    async def save(
        self, content_html: str, filename: str, options: PaginationOptions
    ) -> None:
        if self.error is not None:
            raise self.error
        self.calls.append((content_html, filename, options))


async def wait_until(predicate, timeout: float = 1.0) -> None:
    """Yield to the event loop until ``predicate()`` is true."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached before timeout")
        await asyncio.sleep(0)
