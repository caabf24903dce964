"""Reader contracts shared by every consist encoding.

A reader is bound to its source when constructed and fills in a model
instance handed to `parse`. The loader only ever sees `ConsistReader`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from consist_formats.models.consist import TrainConfig, Vehicle


class ConsistReader(ABC):
    @abstractmethod
    def parse(self, train_config: TrainConfig) -> None:
        """Populate `train_config` in place."""


class VehicleReader(ABC):
    @abstractmethod
    def parse(self, vehicle: Vehicle) -> None:
        """Populate `vehicle` in place."""
