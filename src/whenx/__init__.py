"""whenx: batched, multi-property reactive models for Python."""

from importlib.metadata import version as _version

__version__ = _version("whenx")

from whenx._tick import flush, get_pending_count, set_deferrer
from whenx.exceptions import WhenxError, UnknownPropertyError, UnknownListenerError
from whenx.markers import OPTIONAL, UNSET, OptionalMarker
from whenx.model import Model, set_marshal
from whenx.registry import ListenerRegistry
from whenx.scheduler import Scheduler
from whenx.store import PropertyStore
from whenx.when import Trigger
# textual NOT auto-imported — opt-in only

__all__ = [
    "Model",
    "Trigger",
    "OPTIONAL",
    "OptionalMarker",
    "UNSET",
    "flush",
    "get_pending_count",
    "set_deferrer",
    "set_marshal",
    "Scheduler",
    "ListenerRegistry",
    "PropertyStore",
    "WhenxError",
    "UnknownPropertyError",
    "UnknownListenerError",
]
