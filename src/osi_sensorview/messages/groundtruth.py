"""Ground truth and moving objects.

Only the part of the OSI ground truth the sensor view itself relies on is
modelled: version, timestamp, the host vehicle reference and the moving
objects among which the host vehicle must appear.  Tag 4 and tags above 5
remain free for the rest of the ground-truth content.
"""
from __future__ import annotations

from osi_sensorview.messages.base import OsiMessage, wire
from osi_sensorview.messages.common import BaseMoving, Identifier, InterfaceVersion, Timestamp


class MovingObject(OsiMessage):
    """A simulated moving object (vehicle, pedestrian, animal ...)."""

    id: Identifier | None = wire(1, default=None)
    base: BaseMoving | None = wire(2, default=None)


class GroundTruth(OsiMessage):
    """Simulation-internal world state in global coordinates.

    Attributes
    ----------
    version:
        Interface version of the producer.
    timestamp:
        Simulation time the ground truth applies to.
    host_vehicle_id:
        ID of the host vehicle among :attr:`moving_object`.
    moving_object:
        All moving objects, the host vehicle included.
    """

    version: InterfaceVersion | None = wire(1, default=None)
    timestamp: Timestamp | None = wire(2, default=None)
    host_vehicle_id: Identifier | None = wire(3, default=None)
    moving_object: tuple[MovingObject, ...] = wire(5, default=())

    def find_moving_object(self, identifier: Identifier) -> MovingObject | None:
        """Return the moving object carrying *identifier*, or None."""
        for candidate in self.moving_object:
            if candidate.id is not None and candidate.id.value == identifier.value:
                return candidate
        return None
