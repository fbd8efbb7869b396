"""Keyboard-wedge scanner adapter.

Most handheld barcode scanners present themselves as a keyboard (or a
serial port) and "type" each decoded code followed by Enter.  This
adapter reads those lines from a text stream, either one it is handed
(stdin) or a device path it opens on ``start()`` and closes on
``stop()``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from scanpos.domain.exceptions import ScannerError
from scanpos.domain.scanner import DecodedCallback, ScannerAdapter

LOGGER = logging.getLogger(__name__)


class LineScanner(ScannerAdapter):

    def __init__(
        self,
        stream: TextIO | None = None,
        device: Path | None = None,
        encoding: str = "utf-8",
    ) -> None:
        if (stream is None) == (device is None):
            raise ValueError("Pass exactly one of stream or device")
        self._stream = stream
        self._device = device
        self._encoding = encoding
        self._handle: TextIO | None = None
        self._offset = 0
        self._callback: DecodedCallback | None = None

    # --- ScannerAdapter interface ---------------------------------------------

    def start(self, on_decoded: DecodedCallback) -> None:
        if self._device is not None and self._handle is None:
            try:
                self._handle = open(self._device, encoding=self._encoding)
            except OSError as exc:
                raise ScannerError(f"Cannot open scanner device {self._device}: {exc}") from exc
            # Regular files resume where the previous session stopped
            if self._offset and self._handle.seekable():
                self._handle.seek(self._offset)
            LOGGER.debug("Opened scanner device %s", self._device)
        self._callback = on_decoded

    def stop(self) -> None:
        self._callback = None
        if self._handle is None:
            return
        try:
            if self._handle.seekable():
                self._offset = self._handle.tell()
        except OSError:
            self._offset = 0
        finally:
            self._handle.close()
            self._handle = None
            LOGGER.debug("Released scanner device %s", self._device)

    @property
    def active(self) -> bool:
        return self._callback is not None

    # --- Reading --------------------------------------------------------------

    def pump(self) -> bool:
        """Read the next non-blank line and deliver it.

        Returns False once the input is exhausted.
        """
        if self._callback is None:
            raise ScannerError("Scanner is not started")
        stream = self._handle if self._device is not None else self._stream
        while True:
            line = stream.readline()
            if not line:
                return False
            code = line.strip()
            if code:
                break
        # The callback may stop this scanner; the stream is not touched after it.
        self._callback(code)
        return True
