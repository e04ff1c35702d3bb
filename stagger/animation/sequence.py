"""
Staggered animation: many properties driven by one shared progress value.

An AnimatedProperty binds an interval, an easing curve and a tween. Its
value is a pure function of the global progress, recomputed on demand with
no per-property state. StaggeredAnimation groups named properties and
answers compute_all(progress) so the consuming layer decides when to render.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from stagger.animation.easing import CurveSpec, get_easing_function
from stagger.animation.interval import IntervalSpec
from stagger.animation.tween import Tween
from stagger.animation.types import EasingCurve, EasingFunction, IntervalConfigError
from stagger.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnimatedProperty:
    """One named property animating over its own interval."""
    name: str
    interval: IntervalSpec
    tween: Tween
    curve: CurveSpec = EasingCurve.LINEAR
    _shape: EasingFunction = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("AnimatedProperty requires a non-empty name")
        if not isinstance(self.interval, IntervalSpec):
            raise IntervalConfigError(
                f"AnimatedProperty {self.name!r} requires an IntervalSpec, "
                f"got {type(self.interval).__name__}"
            )
        if not isinstance(self.tween, Tween):
            raise TypeError(
                f"AnimatedProperty {self.name!r} requires a Tween, got {type(self.tween).__name__}"
            )
        # Resolve once so an unknown curve name fails at construction.
        object.__setattr__(self, "_shape", get_easing_function(self.curve))

    def local_progress(self, progress: float) -> float:
        return self.interval.transform(progress)

    def eased_progress(self, progress: float) -> float:
        return self._shape(self.interval.transform(progress))

    def value_at(self, progress: float) -> Any:
        """Value of this property at global ``progress``."""
        return self.tween.transform(self.eased_progress(progress))

    @property
    def begin_value(self) -> Any:
        return self.tween.begin

    @property
    def end_value(self) -> Any:
        return self.tween.end


class StaggeredAnimation:
    """
    Ordered collection of uniquely named AnimatedProperty objects.

    Property names are keys: registering a second property under an existing
    name raises ValueError. Layered effects on the same visual attribute use
    distinct names.
    """

    def __init__(self, properties: Optional[List[AnimatedProperty]] = None):
        self._properties: Dict[str, AnimatedProperty] = {}
        for prop in properties or []:
            self.add_property(prop)

    def __len__(self) -> int:
        return len(self._properties)

    def __iter__(self) -> Iterator[AnimatedProperty]:
        return iter(self._properties.values())

    def __contains__(self, name: str) -> bool:
        return name in self._properties

    def __getitem__(self, name: str) -> AnimatedProperty:
        return self._properties[name]

    @property
    def names(self) -> List[str]:
        return list(self._properties)

    def add_property(self, prop: AnimatedProperty) -> AnimatedProperty:
        """Register a property.

        Raises:
            ValueError: If a property with the same name already exists
        """
        if prop.name in self._properties:
            raise ValueError(f"Property {prop.name!r} is already registered")
        self._properties[prop.name] = prop
        logger.debug(
            "[ANIM] Registered property %s over [%.3f, %.3f]",
            prop.name, prop.interval.start, prop.interval.end,
        )
        return prop

    def animate(self, name: str, begin: Any, end: Any,
                start: float = 0.0, stop: float = 1.0,
                curve: CurveSpec = EasingCurve.LINEAR,
                tween: Optional[Tween] = None) -> AnimatedProperty:
        """
        Convenience builder: add ``name`` animating ``begin`` -> ``end`` over
        ``[start, stop]``. The tween type is chosen from the values unless
        ``tween`` is given explicitly.
        """
        prop = AnimatedProperty(
            name=name,
            interval=IntervalSpec(start, stop),
            tween=tween if tween is not None else Tween.for_values(begin, end),
            curve=curve,
        )
        return self.add_property(prop)

    def remove_property(self, name: str) -> bool:
        return self._properties.pop(name, None) is not None

    def value_of(self, name: str, progress: float) -> Any:
        return self._properties[name].value_at(progress)

    def compute_all(self, progress: float) -> Dict[str, Any]:
        """Map every property name to its value at global ``progress``."""
        return {name: prop.value_at(progress) for name, prop in self._properties.items()}

    def begin_values(self) -> Dict[str, Any]:
        return {name: prop.begin_value for name, prop in self._properties.items()}

    def end_values(self) -> Dict[str, Any]:
        return {name: prop.end_value for name, prop in self._properties.items()}

    def active_at(self, progress: float) -> List[str]:
        """Names of properties whose interval contains ``progress``."""
        return [name for name, prop in self._properties.items() if prop.interval.contains(progress)]

    def overlapping_pairs(self) -> List[Tuple[str, str]]:
        """Pairs of property names whose intervals overlap in time."""
        props = list(self._properties.values())
        pairs = []
        for i, first in enumerate(props):
            for second in props[i + 1:]:
                if first.interval.overlaps(second.interval):
                    pairs.append((first.name, second.name))
        return pairs

    @property
    def span(self) -> Optional[IntervalSpec]:
        """Smallest interval covering every property, or None when empty."""
        if not self._properties:
            return None
        start = min(p.interval.start for p in self._properties.values())
        end = max(p.interval.end for p in self._properties.values())
        return IntervalSpec(start, end)
