"""Core utilities: serialization, ids, timestamps."""

from .serialization import (
    serialize_roadmap,
    deserialize_roadmap,
    dumps_roadmap,
    save_roadmap_json,
    load_roadmap_json,
)
from .ids import IdGenerator, UuidIdGenerator, CounterIdGenerator
from .clock import Clock, utc_now_iso, fixed_clock

__all__ = [
    "serialize_roadmap",
    "deserialize_roadmap",
    "dumps_roadmap",
    "save_roadmap_json",
    "load_roadmap_json",
    "IdGenerator",
    "UuidIdGenerator",
    "CounterIdGenerator",
    "Clock",
    "utc_now_iso",
    "fixed_clock",
]
