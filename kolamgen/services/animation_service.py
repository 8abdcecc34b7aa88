"""Staggered reveal timing for drawing a pattern element by element."""

from dataclasses import dataclass, field
from typing import Literal

from ..models.pattern import RenderedPattern
from ..models.render import AnimationSettings

MIN_DURATION_MS = 7500
MAX_DURATION_MS = 15000


def speed_to_duration(speed: int) -> int:
    """Map a 1..10 speed to a total animation time in milliseconds."""
    normalized = (speed - 1) / 9
    return round(MIN_DURATION_MS + (MAX_DURATION_MS - MIN_DURATION_MS) * (1 - normalized))


def duration_to_speed(duration_ms: float) -> int:
    """Inverse of :func:`speed_to_duration`."""
    inverted = (duration_ms - MIN_DURATION_MS) / (MAX_DURATION_MS - MIN_DURATION_MS)
    return round(1 + (1 - inverted) * 9)


@dataclass
class AnimationStep:
    """When one element starts appearing and for how long (milliseconds)."""

    element_id: str
    element_type: Literal["dot", "curve"]
    delay: float
    duration: float
    draw_order: int


@dataclass
class KolamAnimation:
    """Complete reveal schedule for a pattern."""

    pattern_id: str
    steps: list[AnimationStep] = field(default_factory=list)
    total_duration: float = 0.0
    loop: bool = False
    _by_id: dict[str, AnimationStep] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._by_id = {step.element_id: step for step in self.steps}

    def step_for(self, element_id: str) -> AnimationStep:
        """Look up the step for a dot or curve id.

        Raises:
            KeyError: If the element is not part of the plan.
        """
        return self._by_id[element_id]


class AnimationService:
    """Plans the reveal order: dots fade in first-to-last, then curves draw.

    Dots are spread over 90% of the total time, each fading for an equal
    share. Each curve draws over three curve-slots and starts one slot after
    the previous one, so neighbouring curves overlap.
    """

    def plan(self, pattern: RenderedPattern, settings: AnimationSettings) -> KolamAnimation:
        total = speed_to_duration(settings.speed)
        steps: list[AnimationStep] = []
        order = 0

        n_dots = len(pattern.dots)
        for index, dot in enumerate(pattern.dots):
            steps.append(AnimationStep(
                element_id=dot.id,
                element_type="dot",
                delay=index / n_dots * total * 0.9,
                duration=total / n_dots,
                draw_order=order,
            ))
            order += 1

        n_curves = len(pattern.curves)
        if n_curves:
            slot = total / n_curves
            for index, curve in enumerate(pattern.curves):
                steps.append(AnimationStep(
                    element_id=curve.id,
                    element_type="curve",
                    delay=slot * index,
                    duration=slot * 3,
                    draw_order=order,
                ))
                order += 1

        end = max((s.delay + s.duration for s in steps), default=0.0)
        return KolamAnimation(
            pattern_id=pattern.id,
            steps=steps,
            total_duration=end,
            loop=settings.loop,
        )
