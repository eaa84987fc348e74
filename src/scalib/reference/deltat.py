"""
scalib.reference.deltat
-----------------------
Delta T = TT - UT, in seconds.

The Sun and Star pipelines evaluate their series at jd + delta_t/86400; the
model used is injectable. The default is the Stephenson-Houlden parabola

    delta_t = -15 + (jd - 2382148)^2 / 41048480   [s]

which is centred on 1810 and adequate for the arcsecond-level target of this
package over historical dates.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Protocol


class DeltaTModel(Protocol):
    """Delta T = TT - UT, in seconds."""

    def delta_t_seconds_jd(self, jd: float) -> float:
        """Delta T at the (UT) Julian Day `jd`."""
        ...

    def info(self) -> Dict[str, object]: ...


@dataclass(frozen=True)
class StephensonHouldenDeltaT:
    a: float = -15.0
    jd0: float = 2382148.0
    scale: float = 41048480.0

    def delta_t_seconds_jd(self, jd: float) -> float:
        d = jd - self.jd0
        return self.a + (d * d) / self.scale

    def info(self) -> Dict[str, object]:
        return {"type": "stephenson-houlden", "a": self.a, "jd0": self.jd0, "scale": self.scale}


@dataclass(frozen=True)
class ConstantDeltaT:
    value: float  # seconds

    def delta_t_seconds_jd(self, jd: float) -> float:
        return self.value

    def info(self) -> Dict[str, object]:
        return {"type": "constant", "value": self.value}


DEFAULT_DELTA_T: DeltaTModel = StephensonHouldenDeltaT()
