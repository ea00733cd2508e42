"""Solver configuration with clamping and change notification.

Dataclass fields carry their valid range in metadata; assignments outside the
range are clamped rather than rejected.
"""
import copy
import threading
from dataclasses import MISSING, dataclass, field, fields
from fractions import Fraction

TIMESTEPS = (1 / 15, 1 / 30, 1 / 60, 1 / 90, 1 / 120)


def config_field(default, *, min=None, max=None, choices=None, label=None,
                 description=""):
    metadata = {"description": description}
    if label:
        metadata["label"] = label
    if min is not None:
        metadata["min"] = min
    if max is not None:
        metadata["max"] = max
    if choices is not None:
        metadata["choices"] = tuple(choices)
    return field(default=default, metadata=metadata)


def parse_timestep(value):
    if isinstance(value, str):
        return float(Fraction(value.strip()))
    return float(value)


def parse_bool(value):
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ('1', 'true', 'yes', 'on'):
            return True
        if text in ('0', 'false', 'no', 'off', ''):
            return False
        raise ValueError("Cannot interpret '{}' as a boolean".format(value))
    return bool(value)


def _coerce(f, value):
    if f.type in (bool, 'bool'):
        return parse_bool(value)

    choices = f.metadata.get('choices')
    if choices is not None:
        if all(isinstance(c, (int, float)) for c in choices):
            # snap to the closest allowed value
            value = parse_timestep(value)
            return min(choices, key=lambda c: abs(c - value))
        if value not in choices:
            raise ValueError("{} must be one of {}, got {!r}".format(
                f.name, choices, value))
        return value

    if f.type in (int, 'int'):
        value = int(round(value))
    elif f.type in (float, 'float'):
        value = float(value)

    if 'min' in f.metadata:
        value = max(f.metadata['min'], value)
    if 'max' in f.metadata:
        value = min(f.metadata['max'], value)
    return value


@dataclass
class config_base:
    """Base class for configs with automatic clamping and change notification.

    Example:
        @dataclass
        class my_config(config_base):
            strength: float = config_field(1.0, min=0.0, max=10.0)

    Listeners registered with watch() are called after every accepted change,
    outside the lock.
    """

    def __post_init__(self):
        object.__setattr__(self, '_listeners', set())
        object.__setattr__(self, '_lock', threading.Lock())
        for f in fields(self):
            object.__setattr__(self, f.name, _coerce(f, getattr(self,
                                                                f.name)))
        object.__setattr__(self, '_initialized', True)

    def __setattr__(self, name, value):
        if name.startswith('_'):
            object.__setattr__(self, name, value)
            return

        declared = {f.name: f for f in fields(self)}
        if name not in declared:
            raise AttributeError(
                "Cannot set undeclared attribute '{}' on {}".format(
                    name, self.__class__.__name__))

        value = _coerce(declared[name], value)
        if not hasattr(self, '_initialized'):
            object.__setattr__(self, name, value)
            return

        with self._lock:
            changed = getattr(self, name) != value
            object.__setattr__(self, name, value)
            listeners = list(self._listeners)

        if changed:
            for listener in listeners:
                listener(name, value)

    def watch(self, callback, attribute=None):
        """Call callback(value) when attribute changes, or callback(name, value)
        on any change when attribute is None. Returns a function that stops
        watching."""
        if attribute is None:
            listener = callback
        else:
            if attribute not in {f.name for f in fields(self)}:
                raise AttributeError("Attribute '{}' not found in {}".format(
                    attribute, self.__class__.__name__))

            def listener(name, value):
                if name == attribute:
                    callback(value)

        with self._lock:
            self._listeners.add(listener)

        def unwatch():
            with self._lock:
                self._listeners.discard(listener)

        return unwatch

    def info(self):
        result = {}
        for f in fields(self):
            result[f.name] = {
                **f.metadata,
                "type": f.type,
                "default": f.default if f.default is not MISSING else None,
                "value": getattr(self, f.name),
            }
            result[f.name].setdefault(
                "label", ' '.join(p.capitalize() for p in f.name.split('_')))
        return result

    def snapshot(self):
        clone = copy.copy(self)
        object.__setattr__(clone, '_listeners', set())
        object.__setattr__(clone, '_lock', threading.Lock())
        return clone


@dataclass
class solver_config(config_base):
    iterations: int = config_field(32, min=16, max=128,
                                   description="Jacobi iterations per frame")
    scale: float = config_field(
        0.5, min=0.1, max=2.0,
        description="Grid resolution relative to the display size")
    color_decay: float = config_field(0.01, min=0.0, max=0.02,
                                      description="Dye fading rate")
    boundaries: bool = config_field(True,
                                    description="Reflective walls at the grid edges")
    timestep: float = config_field(1 / 60, choices=TIMESTEPS,
                                   description="Simulation timestep")
    radius: float = config_field(0.25, min=0.1, max=1.0,
                                 description="Force site radius")
    smoothing: float = config_field(0.8, min=0.0, max=0.95,
                                    description="Pointer smoothing factor")
    force_strength: float = config_field(
        1000.0, min=0.0, max=10000.0,
        description="Cells per unit time injected per unit of impulse")
    simulate: bool = config_field(True, description="Advance the simulation")
