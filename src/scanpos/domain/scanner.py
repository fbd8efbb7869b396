"""Scanner port.

A scanner is a device that turns barcodes into text.  The core only
consumes the decoded strings; how they are produced is the adapter's
business.  Starting an adapter acquires its device and stopping it
releases the device.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

DecodedCallback = Callable[[str], None]


class ScannerAdapter(ABC):

    @abstractmethod
    def start(self, on_decoded: DecodedCallback) -> None:
        """Acquire the device and deliver each decoded barcode to *on_decoded*."""

    @abstractmethod
    def stop(self) -> None:
        """Release the device.

        Must be safe to call when the adapter was never started, and
        safe to call more than once.
        """

    @property
    @abstractmethod
    def active(self) -> bool:
        """True between a ``start()`` and the next ``stop()``."""
