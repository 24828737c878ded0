"""Sampling gate: decides whether a configured scorer runs at all for one event."""

import random
from collections.abc import Callable
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class NoSampling(BaseModel, frozen=True):
    type: Literal["none"] = "none"


class RatioSampling(BaseModel, frozen=True):
    """Run the scorer for roughly ``rate`` of events.

    ``rate`` is not bounded: values >= 1 always run and
    values <= 0 never run.
    """

    type: Literal["ratio"] = "ratio"
    rate: float


type SamplingConfig = Annotated[NoSampling | RatioSampling, Field(discriminator="type")]


def should_sample(
    config: NoSampling | RatioSampling | None,
    draw: Callable[[], float] = random.random,
) -> bool:
    """Return True if the scorer should execute for this invocation.

    ``draw`` must return a uniform value in [0, 1); it is injectable so tests
    can pin the outcome.
    """
    match config:
        case None | NoSampling():
            return True
        case RatioSampling(rate=rate):
            return draw() < rate
