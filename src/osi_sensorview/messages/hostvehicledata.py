"""Host vehicle data handed to sensor models as input."""
from __future__ import annotations

from osi_sensorview.messages.base import OsiMessage, wire
from osi_sensorview.messages.common import BaseMoving


class HostVehicleData(OsiMessage):
    """What the host vehicle knows about itself.

    Sourced from location sensors, internal sensors and ECU bus data.

    Attributes
    ----------
    location:
        Estimated position and motion of the host vehicle.
    location_rmse:
        Root mean squared error of :attr:`location`.
    """

    location: BaseMoving | None = wire(1, default=None)
    location_rmse: BaseMoving | None = wire(2, default=None)
