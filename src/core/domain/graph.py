"""
Graph — Discretized derivative, integral and area of a function graph

A Graph wraps an externally supplied real function f over a bounded domain
[a, b] and provides fixed-step numerical calculus:
- derivative: forward-difference quotient, O(h) accurate
- integral: left-Riemann running sum from the domain start
- area: definite left-Riemann sum over the full domain
- riemann_partition: lazy, restartable sequence of strips

CRITICAL INVARIANTS:
1. Sample points are a + i·h (index based), never accumulated by repeated
   addition; over [0, 1] with h = 0.1 there are exactly 10 samples
2. The step h is fixed per Graph and must be positive
3. A degenerate domain (b <= a) yields no samples (area 0, empty partition)
4. f is assumed pure and deterministic; results depend on it

FORMULAS:
    derivative(f)(x) = (f(x + h) - f(x)) / h
    integral(f)(x) = Σ f(a + i·h)·h  for a + i·h < x
    area(f) = Σ f(a + i·h)·h  for a + i·h < b

ACCURACY:
    Forward differences are biased by ≈ h·f''(x)/2: for f(x) = x² at x = 0.5
    with h = 0.1 the estimate is 1.1 (exact 1.0). Left-Riemann sums
    underestimate increasing functions: for x² over [0, 1] the area is 0.285
    (exact 1/3). Both biases are consistent, not random.

COST:
    integral(x) costs O((x - a) / h) evaluations of f per query and is not
    memoized; integral_trajectory() computes every cumulative sum in one pass.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Final, Iterator, NamedTuple

from src.core.contracts.descriptors import DrawDescriptor, close_path, line_to, move_to
from src.core.domain.errors import DegenerateInputError
from src.core.domain.scale import ScaleContext, resolve_scale
from src.core.math.numerical_safeguards import (
    reaches_bound,
    validate_finite,
    validate_positive,
)

logger = logging.getLogger(__name__)

# =============================================================================
# CONFIG
# =============================================================================

# Default discretization step (math-space units)
DEFAULT_STEP: Final[float] = 0.1


@dataclass(frozen=True)
class CalculusConfig:
    """Configuration of the discretized calculus routines."""

    # Discretization step h for sampling, derivative and Riemann sums
    step: float = DEFAULT_STEP

    def __post_init__(self) -> None:
        validate_positive(self.step, "step")


# =============================================================================
# TYPES
# =============================================================================

RealFunction = Callable[[float], float]


class RiemannStrip(NamedTuple):
    """One left-Riemann rectangle: [x, x + width] × [0, height]."""

    x: float  # Left edge (math-space)
    width: float  # Step h
    height: float  # f(x), may be negative

    @property
    def signed_area(self) -> float:
        return self.width * self.height


def _sample_positions(start: float, stop: float, step: float) -> Iterator[float]:
    """start + i·step for i = 0, 1, … while below stop."""
    i = 0
    while True:
        x = start + i * step
        if reaches_bound(x, stop, step):
            return
        yield x
        i += 1


class RiemannPartition:
    """
    Lazy, finite, restartable sequence of left-Riemann strips.

    Iterating twice evaluates f twice; nothing is stored.
    """

    def __init__(self, f: RealFunction, start: float, stop: float, step: float):
        self._f = f
        self.start = start
        self.stop = stop
        self.step = step

    def __iter__(self) -> Iterator[RiemannStrip]:
        for x in _sample_positions(self.start, self.stop, self.step):
            yield RiemannStrip(x=x, width=self.step, height=self._f(x))

    def __len__(self) -> int:
        return sum(1 for _ in _sample_positions(self.start, self.stop, self.step))

    def total(self) -> float:
        """Σ height·width over all strips (math-space)."""
        return sum(strip.signed_area for strip in self)


# =============================================================================
# GRAPH
# =============================================================================


class Graph:
    """
    Function graph over a bounded domain with fixed-step calculus.

    Stateless value object: every call recomputes from f, domain and step.
    """

    def __init__(
        self,
        f: RealFunction,
        domain: tuple[float, float],
        step: float | None = None,
        config: CalculusConfig | None = None,
    ):
        """
        Args:
            f: Pure, deterministic real function
            domain: (a, b) with a < b expected (not enforced)
            step: Discretization step (default: config.step)
            config: Calculus configuration (default: CalculusConfig())

        Raises:
            DegenerateInputError: If step is not a finite positive number or
                the domain bounds are not finite
        """
        self.config = config or CalculusConfig()
        resolved_step = self.config.step if step is None else step

        start, end = domain
        try:
            validate_positive(resolved_step, "step")
            validate_finite(start, "domain start")
            validate_finite(end, "domain end")
        except ValueError as e:
            raise DegenerateInputError(str(e)) from e

        self.f = f
        self.domain = (float(start), float(end))
        self.step = float(resolved_step)

    @classmethod
    def across_viewport(
        cls,
        f: RealFunction,
        scale: ScaleContext | None = None,
        step: float | None = None,
    ) -> "Graph":
        """Graph over the visible horizontal extent [-W/(2·unit), W/(2·unit)]."""
        half = resolve_scale(scale).half_extent_x
        return cls(f, (-half, half), step=step)

    def __call__(self, x: float) -> float:
        return self.f(x)

    def __repr__(self) -> str:
        return f"Graph(f={self.f!r}, domain={self.domain}, step={self.step})"

    def _derived(self, f: RealFunction) -> "Graph":
        return Graph(f, self.domain, step=self.step, config=self.config)

    def sample_positions(self) -> Iterator[float]:
        """a + i·h for every sample strictly inside [a, b)."""
        start, end = self.domain
        return _sample_positions(start, end, self.step)

    # -------------------------------------------------------------------------
    # Calculus
    # -------------------------------------------------------------------------

    @property
    def derivative(self) -> "Graph":
        """
        Forward-difference derivative (f(x + h) - f(x)) / h.

        O(h) accurate; the bias grows with h and with the curvature of f.
        """
        f, h = self.f, self.step

        def forward_difference(x: float) -> float:
            return (f(x + h) - f(x)) / h

        return self._derived(forward_difference)

    @property
    def integral(self) -> "Graph":
        """
        Running left-Riemann integral from the domain start.

        Each query recomputes the full sum from a (not memoized). Queries at
        or before a return 0.
        """
        f, h = self.f, self.step
        start = self.domain[0]

        def running_sum(x: float) -> float:
            return sum(f(t) * h for t in _sample_positions(start, x, h))

        return self._derived(running_sum)

    def integral_trajectory(self) -> list[tuple[float, float]]:
        """
        Cumulative left-Riemann sums in one pass.

        Returns:
            [(x_i, integral at x_i)] for every sample position plus the
            domain end; the first value is 0 and the last equals area()
            in math-space. A degenerate domain returns [(a, 0.0)].
        """
        f, h = self.f, self.step
        start, end = self.domain

        trajectory = []
        running = 0.0
        for x in self.sample_positions():
            trajectory.append((x, running))
            running += f(x) * h

        trajectory.append((max(start, end), running))
        return trajectory

    def area(self, scale: ScaleContext | None = None) -> float:
        """
        Definite left-Riemann estimate over the full domain.

        Returns:
            Σ f(x_i)·h × unit² (device units squared)
        """
        return resolve_scale(scale).area(self.riemann_partition().total())

    def riemann_partition(self) -> RiemannPartition:
        """
        Strips {x, width = h, height = f(x)} for x from a to b exclusive.

        A degenerate domain (b <= a) yields an empty sequence.
        """
        start, end = self.domain
        if end <= start:
            logger.debug("Degenerate graph domain %s: empty Riemann partition", self.domain)
        return RiemannPartition(self.f, start, end, self.step)

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def draw(self, scale: ScaleContext | None = None) -> DrawDescriptor:
        """Polyline through (x_i, f(x_i)) for every sample position."""
        ctx = resolve_scale(scale)
        commands = []
        for x in self.sample_positions():
            point = (ctx.length(x), ctx.length(self.f(x)))
            commands.append(line_to(*point) if commands else move_to(*point))
        return DrawDescriptor(shape="graph", commands=tuple(commands))

    def riemann_rectangles(self, scale: ScaleContext | None = None) -> list[DrawDescriptor]:
        """One filled rectangle descriptor per Riemann strip (device units)."""
        ctx = resolve_scale(scale)
        descriptors = []
        for strip in self.riemann_partition():
            left, right = ctx.length(strip.x), ctx.length(strip.x + strip.width)
            top = ctx.length(strip.height)
            descriptors.append(
                DrawDescriptor(
                    shape="riemann_strip",
                    commands=(
                        move_to(left, 0.0),
                        line_to(right, 0.0),
                        line_to(right, top),
                        line_to(left, top),
                        close_path(),
                    ),
                    fill=True,
                    stroke=False,
                )
            )
        return descriptors
