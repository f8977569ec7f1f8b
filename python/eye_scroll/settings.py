"""
User-facing feature settings.

Settings are owned by the host (persisted by SessionStore) and handed to
the engine, which only ever reads them. Out-of-range sensitivities are
clamped, never rejected.
"""

import logging
import math
from dataclasses import asdict, dataclass, replace

from . import config

logger = logging.getLogger(__name__)


def clamp_sensitivity(value) -> int:
    """Clamp a sensitivity to [SENSITIVITY_MIN, SENSITIVITY_MAX].

    Non-numeric or non-finite values fall back to DEFAULT_SENSITIVITY.
    """
    try:
        value = float(value)
    except (TypeError, ValueError):
        return config.DEFAULT_SENSITIVITY
    if not math.isfinite(value):
        return config.DEFAULT_SENSITIVITY
    value = int(round(value))
    return max(config.SENSITIVITY_MIN, min(config.SENSITIVITY_MAX, value))


def _toggle(name, value) -> bool:
    """Feature toggle from a bool or 0/1; anything else is off."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    logger.warning(f"Ignoring invalid {name} value {value!r}, using off")
    return False


@dataclass(frozen=True)
class Settings:
    """Feature toggles and sensitivities (1..10)."""
    auto_scroll: bool = False
    single_blink: bool = False
    double_blink: bool = False
    gaze_sensitivity: int = config.DEFAULT_SENSITIVITY
    blink_sensitivity: int = config.DEFAULT_SENSITIVITY

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "auto_scroll", _toggle("auto_scroll", self.auto_scroll))
        object.__setattr__(self, "single_blink", _toggle("single_blink", self.single_blink))
        object.__setattr__(self, "double_blink", _toggle("double_blink", self.double_blink))
        object.__setattr__(self, "gaze_sensitivity",
                           clamp_sensitivity(self.gaze_sensitivity))
        object.__setattr__(self, "blink_sensitivity",
                           clamp_sensitivity(self.blink_sensitivity))

    @property
    def any_enabled(self) -> bool:
        return self.auto_scroll or self.single_blink or self.double_blink

    def merged(self, changes) -> "Settings":
        """Return a copy with the known keys of *changes* applied.

        Unknown keys are ignored (logged at DEBUG) so that settings written
        by a newer version still load.
        """
        known = {k: v for k, v in dict(changes).items() if k in _FIELDS}
        unknown = set(dict(changes)) - set(known)
        if unknown:
            logger.debug(f"Ignoring unknown settings keys: {sorted(unknown)}")
        return replace(self, **known)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data) -> "Settings":
        """Build settings from a (possibly partial) mapping over defaults."""
        return cls().merged(data or {})


_FIELDS = frozenset(Settings.__dataclass_fields__)
