################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
"""Bounded copy of a core image from a stream into a file descriptor.

Cores can be arbitrarily large and arrive through a pipe that cannot be
seeked, so they are never held in memory: a single fixed size staging buffer
is filled from the input and drained into the output in turns.
"""
import os

from oslo_log import log as logging

from dumpctl.common import constants
from dumpctl import exception

LOG = logging.getLogger(__name__)


class TransferBuffer(object):
    """Fixed capacity byte staging area.

    Data always starts at offset 0 and spans bytes_in_buf bytes; the free
    space follows it. The buffer never grows, callers drain it with eat()
    before feeding it again.
    """

    def __init__(self, capacity=constants.COPY_BUFFER_SIZE):
        if capacity <= 0:
            raise ValueError("capacity must be positive, got %r" % capacity)
        # NOTE: not zeroed between uses, only bytes_in_buf is meaningful
        self._buf = bytearray(capacity)
        self.bytes_in_buf = 0

    @property
    def capacity(self):
        return len(self._buf)

    def space_view(self):
        """Writable view over the free region, for receiving new bytes."""
        return memoryview(self._buf)[self.bytes_in_buf:]

    def space(self):
        return len(self._buf) - self.bytes_in_buf

    def data_view(self):
        """Read-only view over the buffered bytes, for writing them out."""
        return memoryview(self._buf)[:self.bytes_in_buf].toreadonly()

    def data(self):
        return self.bytes_in_buf

    def feed(self, n):
        """Commit n bytes written into the space region."""
        if n < 0 or n > self.space():
            raise ValueError("cannot feed %d bytes, only %d free"
                             % (n, self.space()))
        self.bytes_in_buf += n

    def eat(self, n):
        """Drop the first n bytes of data, moving the rest to the front."""
        if n < 0 or n > self.bytes_in_buf:
            raise ValueError("cannot eat %d bytes, only %d buffered"
                             % (n, self.bytes_in_buf))
        remaining = self.bytes_in_buf - n
        self._buf[:remaining] = self._buf[n:self.bytes_in_buf]
        self.bytes_in_buf = remaining


def copy_stream_to_fd(out_fd, in_stream,
                      buffer_size=constants.COPY_BUFFER_SIZE,
                      max_errors=constants.MAX_COPY_ERRORS):
    """Copy in_stream into out_fd until the stream reports end of file.

    Reads and writes alternate through one TransferBuffer so a writer slower
    than the reader never makes memory use grow. Failed or empty reads and
    writes are retried; once more than max_errors of them have happened in
    total, CopyFailed is raised.

    Parameters
    ----------
    out_fd : int
        Destination file descriptor
    in_stream : binary file object
        Source supporting readinto(), e.g. sys.stdin.buffer
    buffer_size : int
        Capacity of the staging buffer
    max_errors : int
        Number of failed reads and writes tolerated

    Returns
    -------
    int
        Number of bytes written to out_fd
    """
    buf = TransferBuffer(buffer_size)
    errors = 0
    read_bytes = 0
    written_bytes = 0
    done_reading = False

    while True:
        if errors > max_errors:
            raise exception.CopyFailed(errors=errors, written=written_bytes)

        if not done_reading and buf.space():
            try:
                with buf.space_view() as space:
                    rl = in_stream.readinto(space)
            except OSError as e:
                LOG.warning("Error reading input core file: %s", e)
                errors += 1
                continue

            if rl is None:
                # non-blocking stream with nothing available yet
                LOG.warning("Error: read returned no data, will retry")
                errors += 1
                continue

            if rl == 0:
                done_reading = True
            else:
                buf.feed(rl)
                read_bytes += rl

        while buf.data():
            try:
                with buf.data_view() as data:
                    wl = os.write(out_fd, data)
            except OSError as e:
                LOG.warning("Error: write failed due to %s", e.strerror or e)
                errors += 1
                break

            if wl == 0:
                LOG.warning("Error: write returned zero bytes written, will retry")
                errors += 1
                break

            buf.eat(wl)
            written_bytes += wl

            # if we've got space to read, do that again
            if buf.space() and not done_reading:
                break

        if done_reading and not buf.data():
            LOG.debug("Copied %d bytes (%d read) with %d errors",
                      written_bytes, read_bytes, errors)
            return written_bytes
