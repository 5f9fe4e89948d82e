"""
Data models for the adjustment pipeline.

All adjustment values are immutable: every edit produces a new object, so a
committed value and a transient (live) value can be rendered side by side
without aliasing.
"""

from dataclasses import dataclass, field, fields, replace, asdict
from typing import Dict, Any, Tuple, Iterable, Mapping, Union

from ..exceptions import InvalidAdjustment


# Fixed (center, range) in hue degrees for the selective colour bands
HSL_BANDS: Dict[str, Tuple[float, float]] = {
    'red': (0.0, 90.0),
    'orange': (30.0, 90.0),
    'yellow': (60.0, 90.0),
    'green': (120.0, 150.0),
    'aqua': (180.0, 90.0),
    'blue': (240.0, 150.0),
    'purple': (285.0, 120.0),
    'magenta': (330.0, 90.0),
}

HSL_COMPONENTS = ('h', 's', 'l')

CURVE_CHANNELS = ('rgb', 'red', 'green', 'blue')


def _check_range(owner: str, key: str, value: float, low: float, high: float):
    if not low <= value <= high:
        raise InvalidAdjustment(
            f"{owner} '{key}' value {value} out of range [{low}, {high}]"
        )


def _to_number(owner: str, key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidAdjustment(f"{owner} '{key}' value {value!r} is not a number") from None


def _check_mapping(owner: str, value: Any) -> Mapping:
    if not isinstance(value, Mapping):
        raise InvalidAdjustment(f"{owner} must be a mapping, got {type(value).__name__}")
    return value


def _check_names(owner: str, names: Iterable[str], known: Iterable[str]):
    unknown = set(names) - set(known)
    if unknown:
        raise InvalidAdjustment(f"Unknown {owner}: {', '.join(sorted(map(str, unknown)))}")


@dataclass(frozen=True)
class BasicFilters:
    """Global slider values. Each field has an identity value at which its
    operator leaves the image unchanged."""
    # CSS-equivalent group (percent)
    brightness: float = 100.0
    contrast: float = 100.0
    saturation: float = 100.0
    sepia: float = 0.0

    # Pixel-level group
    exposure: float = 0.0
    highlights: float = 0.0
    shadows: float = 0.0
    whites: float = 0.0
    blacks: float = 0.0
    temperature: float = 0.0
    vibrance: float = 0.0
    dehaze: float = 0.0

    # Detail and effects
    sharpen: float = 0.0
    grain: float = 0.0
    haze: float = 0.0
    haze_spread: float = 50.0  # warmth of the haze tint, 50 = neutral

    IDENTITY = {
        'brightness': 100.0, 'contrast': 100.0, 'saturation': 100.0, 'sepia': 0.0,
        'exposure': 0.0, 'highlights': 0.0, 'shadows': 0.0, 'whites': 0.0,
        'blacks': 0.0, 'temperature': 0.0, 'vibrance': 0.0, 'dehaze': 0.0,
        'sharpen': 0.0, 'grain': 0.0, 'haze': 0.0, 'haze_spread': 50.0,
    }

    RANGES = {
        'brightness': (0.0, 200.0),
        'contrast': (0.0, 200.0),
        'saturation': (0.0, 200.0),
        'sepia': (0.0, 100.0),
        'exposure': (-100.0, 100.0),
        'highlights': (-100.0, 100.0),
        'shadows': (-100.0, 100.0),
        'whites': (-100.0, 100.0),
        'blacks': (-100.0, 100.0),
        'temperature': (-100.0, 100.0),
        'vibrance': (-100.0, 100.0),
        'dehaze': (-100.0, 100.0),
        'sharpen': (0.0, 100.0),
        'grain': (0.0, 100.0),
        'haze': (0.0, 100.0),
        'haze_spread': (0.0, 100.0),
    }

    def __post_init__(self):
        for name, (low, high) in self.RANGES.items():
            _check_range('Filter', name, getattr(self, name), low, high)

    def is_identity(self, *names: str) -> bool:
        """True when every named field (all fields if none given) is at identity."""
        names = names or tuple(self.IDENTITY)
        for name in names:
            if name not in self.IDENTITY:
                raise InvalidAdjustment(f"Unknown filter '{name}'")
            if getattr(self, name) != self.IDENTITY[name]:
                return False
        return True

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'BasicFilters':
        _check_names('filters', _check_mapping('Filters', data), cls.IDENTITY)
        return cls(**{key: _to_number('Filter', key, value) for key, value in data.items()})

    def with_values(self, **changes: Any) -> 'BasicFilters':
        """Copy with the named sliders changed."""
        _check_names('filters', changes, self.IDENTITY)
        return replace(self, **{key: _to_number('Filter', key, value)
                                for key, value in changes.items()})


@dataclass(frozen=True)
class HSLColor:
    """Hue/saturation/lightness shift for one colour band (-100 to +100 each)."""
    h: float = 0.0
    s: float = 0.0
    l: float = 0.0

    def __post_init__(self):
        for name in ('h', 's', 'l'):
            _check_range('HSL component', name, getattr(self, name), -100.0, 100.0)

    def is_identity(self) -> bool:
        return self.h == 0 and self.s == 0 and self.l == 0


@dataclass(frozen=True)
class HSLFilters:
    """Per-band HSL adjustments for the eight fixed hue bands."""
    red: HSLColor = field(default_factory=HSLColor)
    orange: HSLColor = field(default_factory=HSLColor)
    yellow: HSLColor = field(default_factory=HSLColor)
    green: HSLColor = field(default_factory=HSLColor)
    aqua: HSLColor = field(default_factory=HSLColor)
    blue: HSLColor = field(default_factory=HSLColor)
    purple: HSLColor = field(default_factory=HSLColor)
    magenta: HSLColor = field(default_factory=HSLColor)

    def band(self, name: str) -> HSLColor:
        if name not in HSL_BANDS:
            raise InvalidAdjustment(
                f"Unknown HSL band '{name}', expected one of {', '.join(HSL_BANDS)}"
            )
        return getattr(self, name)

    def items(self) -> Iterable[Tuple[str, HSLColor]]:
        return ((name, getattr(self, name)) for name in HSL_BANDS)

    def is_identity(self) -> bool:
        return all(color.is_identity() for _, color in self.items())

    def with_band(self, name: str, **changes: float) -> 'HSLFilters':
        _check_names('HSL components', changes, HSL_COMPONENTS)
        values = {key: _to_number('HSL component', key, value) for key, value in changes.items()}
        return replace(self, **{name: replace(self.band(name), **values)})

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {name: asdict(color) for name, color in self.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, float]]) -> 'HSLFilters':
        bands = {}
        for name, values in _check_mapping('HSL section', data).items():
            if name not in HSL_BANDS:
                raise InvalidAdjustment(
                    f"Unknown HSL band '{name}', expected one of {', '.join(HSL_BANDS)}"
                )
            _check_names('HSL components', _check_mapping(f"HSL band '{name}'", values),
                         HSL_COMPONENTS)
            bands[name] = HSLColor(**{k: _to_number('HSL component', k, v)
                                      for k, v in values.items()})
        return cls(**bands)


@dataclass(frozen=True)
class CurvePoint:
    """A tone curve control point, both coordinates in [0, 255]."""
    x: float
    y: float

    def __post_init__(self):
        _check_range('Curve point', 'x', self.x, 0.0, 255.0)
        _check_range('Curve point', 'y', self.y, 0.0, 255.0)


PointLike = Union[CurvePoint, Tuple[float, float], Mapping[str, float]]


def _to_point(point: PointLike) -> CurvePoint:
    if isinstance(point, CurvePoint):
        return point
    try:
        if isinstance(point, Mapping):
            x, y = point['x'], point['y']
        else:
            x, y = point
    except (KeyError, TypeError, ValueError):
        raise InvalidAdjustment(
            f"Curve point {point!r} must be an (x, y) pair or a mapping with 'x' and 'y'"
        ) from None
    return CurvePoint(_to_number('Curve point', 'x', x), _to_number('Curve point', 'y', y))


@dataclass(frozen=True)
class Curve:
    """Control points of a tone curve as edited (duplicates x allowed)."""
    points: Tuple[CurvePoint, ...] = (CurvePoint(0.0, 0.0), CurvePoint(255.0, 255.0))

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> 'Curve':
        if isinstance(points, (str, bytes, Mapping)) or not isinstance(points, Iterable):
            raise InvalidAdjustment(f"Curve points must be a list, got {type(points).__name__}")
        return cls(tuple(_to_point(p) for p in points))

    def is_default(self) -> bool:
        """True for exactly the two points (0, 0) and (255, 255)."""
        return (len(self.points) == 2
                and self.points[0].x == 0 and self.points[0].y == 0
                and self.points[1].x == 255 and self.points[1].y == 255)

    def to_list(self):
        return [{'x': p.x, 'y': p.y} for p in self.points]


@dataclass(frozen=True)
class CurvesState:
    """The master ``rgb`` curve and the three per-channel curves."""
    rgb: Curve = field(default_factory=Curve)
    red: Curve = field(default_factory=Curve)
    green: Curve = field(default_factory=Curve)
    blue: Curve = field(default_factory=Curve)

    def channel(self, name: str) -> Curve:
        if name not in CURVE_CHANNELS:
            raise InvalidAdjustment(
                f"Unknown curve channel '{name}', expected one of {', '.join(CURVE_CHANNELS)}"
            )
        return getattr(self, name)

    def is_default(self) -> bool:
        return all(getattr(self, name).is_default() for name in CURVE_CHANNELS)

    def to_dict(self):
        return {name: getattr(self, name).to_list() for name in CURVE_CHANNELS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Iterable[PointLike]]) -> 'CurvesState':
        curves = {}
        for name, points in _check_mapping('Curves section', data).items():
            if name not in CURVE_CHANNELS:
                raise InvalidAdjustment(
                    f"Unknown curve channel '{name}', expected one of {', '.join(CURVE_CHANNELS)}"
                )
            curves[name] = Curve.from_points(points)
        return cls(**curves)


@dataclass(frozen=True)
class Adjustments:
    """The complete set of global adjustments applied by the pipeline."""
    filters: BasicFilters = field(default_factory=BasicFilters)
    hsl: HSLFilters = field(default_factory=HSLFilters)
    curves: CurvesState = field(default_factory=CurvesState)

    def is_identity(self) -> bool:
        return (self.filters.is_identity()
                and self.hsl.is_identity()
                and self.curves.is_default())

    def with_filters(self, **changes: float) -> 'Adjustments':
        return replace(self, filters=self.filters.with_values(**changes))

    def with_hsl_band(self, name: str, **changes: float) -> 'Adjustments':
        return replace(self, hsl=self.hsl.with_band(name, **changes))

    def with_curve(self, channel: str, points: Iterable[PointLike]) -> 'Adjustments':
        self.curves.channel(channel)
        return replace(self, curves=replace(self.curves, **{channel: Curve.from_points(points)}))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for JSON/YAML serialization."""
        return {
            'filters': self.filters.to_dict(),
            'hsl': self.hsl.to_dict(),
            'curves': self.curves.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Adjustments':
        """Create from a (possibly partial) dictionary."""
        _check_names('adjustment sections', _check_mapping('Adjustments', data),
                     (f.name for f in fields(cls)))
        return cls(
            filters=BasicFilters.from_dict(data.get('filters') or {}),
            hsl=HSLFilters.from_dict(data.get('hsl') or {}),
            curves=CurvesState.from_dict(data.get('curves') or {}),
        )
