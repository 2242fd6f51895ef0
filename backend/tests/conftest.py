"""Shared fixtures: a scripted generator stub and a recording sleep."""

import asyncio
from typing import List, Sequence, Union

import pytest

from triglot.core.translation.models import ContentBlock, ExchangeOptions, GenerationEvent
from triglot.core.translation.pipeline import TextGenerator

HANG = object()

# One planned attempt: final text, an exception to raise, HANG, or explicit events
Step = Union[str, BaseException, object, Sequence[GenerationEvent]]


class StubGenerator(TextGenerator):
    """Replays one planned step per exchange and records every call."""

    def __init__(self, steps: Sequence[Step], hang_seconds: float = 5.0):
        self.steps: List[Step] = list(steps)
        self.hang_seconds = hang_seconds
        self.calls: List[tuple] = []

    @property
    def provider(self) -> str:
        return "stub"

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def exchange(self, prompt: str, options: ExchangeOptions):
        self.calls.append((prompt, options))
        if not self.steps:
            raise RuntimeError("No planned step left")
        step = self.steps.pop(0) if len(self.steps) > 1 else self.steps[0]

        yield GenerationEvent(type="system", content="stub")

        if step is HANG:
            await asyncio.sleep(self.hang_seconds)
            yield GenerationEvent(type="result", result="too late")
        elif isinstance(step, BaseException):
            raise step
        elif isinstance(step, str):
            yield GenerationEvent(
                type="assistant", content=[ContentBlock(type="text", text=step)]
            )
            yield GenerationEvent(type="result", result=step)
        else:
            for event in step:
                yield event


class RecordingSleep:
    """Stands in for asyncio.sleep and records requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


ANALECTS_OUTPUT = (
    "ANCIENT:\n<s1>学而时习之</s1>\n"
    "MODERN:\n<s1>学习并时常复习它</s1>\n"
    "ENGLISH:\n<s1>Learn and practice it often</s1>"
)
