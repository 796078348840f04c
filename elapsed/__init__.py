from .cache import Component, ComponentCache, OutOfOrderInsertion, StaleChain
from .core import Chain, Elapsed
from .instants import local_now, localize, midnight
from .units import TimeUnit, UnrecognizedUnit
from .util import NOW_PHRASE

__all__ = [
    "Elapsed",
    "Chain",
    "TimeUnit",
    "Component",
    "ComponentCache",
    "UnrecognizedUnit",
    "OutOfOrderInsertion",
    "StaleChain",
    "local_now",
    "localize",
    "midnight",
    "NOW_PHRASE",
]
