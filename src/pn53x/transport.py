# -*- coding: latin-1 -*-
# -----------------------------------------------------------------------------
# Copyright 2012, 2017 Stephen Tiedemann <stephen.tiedemann@gmail.com>
#
# Licensed under the EUPL, Version 1.1 or - as soon they
# will be approved by the European Commission - subsequent
# versions of the EUPL (the "Licence");
# You may not use this work except in compliance with the
# Licence.
# You may obtain a copy of the Licence at:
#
# https://joinup.ec.europa.eu/software/page/eupl
#
# Unless required by applicable law or agreed to in
# writing, software distributed under the Licence is
# distributed on an "AS IS" basis,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either
# express or implied.
# See the Licence for the specific language governing
# permissions and limitations under the Licence.
# -----------------------------------------------------------------------------
#
# Transport layer for host to chip communication.
#
# A transport moves complete frames between host and chip. The bus
# level primitives are supplied by the caller as plain objects:
#
#   line:   set_level(level), get_level(), wait_for_level(level, timeout)
#   bus:    read(count), write(data)
#   stream: peek(offset), read(count), write(data)
#
# SerialStream and I2CBus implement the stream and bus contracts on top
# of pyserial and smbus2.
#
from .error import CommunicationError, Timeout, UnexpectedStatus
from .error import Unimplemented

import time
from binascii import hexlify

try:
    import serial
except ImportError:  # pragma: no cover
    raise ImportError("missing serial module, try 'pip install pyserial'")

try:
    import smbus2
except ImportError:  # pragma: no cover
    raise ImportError("missing smbus2 module, try 'pip install smbus2'")

import logging
log = logging.getLogger(__name__)


def poll(func, attempts, interval):
    """Call *func* up to *attempts* times and return the first result
    that is not None. Sleep *interval* seconds between attempts. Return
    None if all attempts were used up.

    """
    for attempt in range(attempts):
        result = func()
        if result is not None:
            return result
        if attempt + 1 < attempts:
            time.sleep(interval)


class Transport(object):
    """Frame level access to the chip. Drivers use exactly three
    operations: :meth:`write_frame`, :meth:`read_frame` and
    :meth:`wakeup`.

    """
    TYPE = None

    def write_frame(self, frame):
        cname = self.__class__.__module__ + '.' + self.__class__.__name__
        raise NotImplementedError(cname + ".write_frame")

    def read_frame(self, max_size):
        cname = self.__class__.__module__ + '.' + self.__class__.__name__
        raise NotImplementedError(cname + ".read_frame")

    def wakeup(self):
        cname = self.__class__.__module__ + '.' + self.__class__.__name__
        raise NotImplementedError(cname + ".wakeup")

    def close(self):
        pass


class I2C(Transport):
    """Status polling transport. The chip signals a pending response
    by pulling the IRQ line to *ready_level* and prefixes every read
    with a status byte that is nonzero when the response is available.

    The wait for the IRQ line is bounded by *ready_timeout* seconds but
    expiry is only logged, the read proceeds anyway and the status byte
    decides. Up to *max_attempts* reads are made with *poll_interval*
    seconds between them before :exc:`~pn53x.error.UnexpectedStatus` is
    raised.

    """
    TYPE = "I2C"

    ready_timeout = 15.0
    ready_level = 0
    max_attempts = 100
    poll_interval = 0.01

    def __init__(self, bus, irq=None, ready_timeout=None, ready_level=None,
                 max_attempts=None, poll_interval=None):
        self.bus = bus
        self.irq = irq
        if ready_timeout is not None:
            self.ready_timeout = ready_timeout
        if ready_level is not None:
            self.ready_level = ready_level
        if max_attempts is not None:
            self.max_attempts = max_attempts
        if poll_interval is not None:
            self.poll_interval = poll_interval

    def wakeup(self):
        pass

    def close(self):
        if hasattr(self.bus, "close"):
            self.bus.close()

    def write_frame(self, frame):
        log.log(logging.DEBUG-1, ">>> %s", hexlify(frame).decode())
        self.bus.write(bytearray(frame))

    def read_frame(self, max_size):
        if self.irq is not None:
            if not self.irq.wait_for_level(self.ready_level,
                                           self.ready_timeout):
                log.warning("no ready signal within %.3f s, read anyway",
                            self.ready_timeout)

        def read_status_and_data():
            data = bytearray(self.bus.read(max_size + 1))
            if len(data) > 0 and data[0] != 0:
                return data
            log.log(logging.DEBUG-1, "chip is busy")

        data = poll(read_status_and_data, self.max_attempts,
                    self.poll_interval)

        if data is None:
            log.error("no ready status after %d reads", self.max_attempts)
            raise UnexpectedStatus("status byte zero after {0} reads"
                                   .format(self.max_attempts))

        frame = data[1:]
        log.log(logging.DEBUG-1, "<<< %s", hexlify(frame).decode())
        return frame


class HSU(Transport):
    """Buffered stream transport for the high speed uart. The frame
    length is learned by peeking at the length byte, an acknowledge
    frame is always 6 bytes.

    After reset the chip enters a low power mode from which it wakes up
    only after a long preamble. :meth:`wakeup` sends the preamble and
    arranges for it to be repeated in front of the next *wakeup_writes*
    frames.

    """
    TYPE = "HSU"
    WAKEUP = bytearray.fromhex('5555') + bytearray(14)

    wakeup_writes = 2

    def __init__(self, stream, wakeup_writes=None):
        self.stream = stream
        if wakeup_writes is not None:
            self.wakeup_writes = wakeup_writes
        self._wakeup_pending = 0

    def wakeup(self):
        log.debug("send wakeup preamble")
        self.stream.write(self.WAKEUP)
        self._wakeup_pending = self.wakeup_writes

    def close(self):
        if hasattr(self.stream, "close"):
            self.stream.close()

    def write_frame(self, frame):
        frame = bytearray(frame)
        if self._wakeup_pending > 0:
            frame = self.WAKEUP + frame
        log.log(logging.DEBUG-1, ">>> %s", hexlify(frame).decode())
        self.stream.write(frame)
        if self._wakeup_pending > 0:
            self._wakeup_pending -= 1

    def read_frame(self, max_size):
        length = self.stream.peek(3)
        if length == 0:
            frame = bytearray(self.stream.read(6))
        else:
            frame = bytearray(self.stream.read(5 + length + 2))
        log.log(logging.DEBUG-1, "<<< %s", hexlify(frame).decode())
        return frame


class SPI(Transport):
    TYPE = "SPI"

    def __init__(self, *args, **kwargs):
        raise Unimplemented("the SPI transport is not supported")


class SerialStream(object):
    """Byte stream with look ahead on top of a pyserial port."""

    def __init__(self, port, baudrate=115200, timeout=1.0):
        self.tty = serial.Serial(port, baudrate, timeout=timeout)
        self._buffer = bytearray()

    @property
    def port(self):
        return self.tty.port if self.tty else ''

    def _fill(self, count):
        while len(self._buffer) < count:
            data = self.tty.read(count - len(self._buffer))
            if not data:
                log.debug("serial read timeout on %s", self.port)
                raise Timeout("no data received on {0}".format(self.port))
            self._buffer += bytearray(data)

    def peek(self, offset):
        self._fill(offset + 1)
        return self._buffer[offset]

    def read(self, count):
        self._fill(count)
        data, self._buffer = self._buffer[0:count], self._buffer[count:]
        return data

    def write(self, data):
        self.tty.reset_input_buffer()
        self._buffer = bytearray()
        try:
            self.tty.write(bytes(data))
        except serial.SerialTimeoutException:
            raise Timeout("serial write timeout on {0}".format(self.port))

    def close(self):
        if self.tty is not None:
            self.tty.reset_output_buffer()
            self.tty.close()
            self.tty = None


class I2CBus(object):
    """Raw read and write transfers to the chip's I2C slave address
    through an smbus2 bus. A failed transfer, for example when no chip
    answers at the address, raises
    :exc:`~pn53x.error.CommunicationError`.

    """
    def __init__(self, bus, address=0x24):
        self.smbus = smbus2.SMBus(bus)
        self.address = address

    def read(self, count):
        msg = smbus2.i2c_msg.read(self.address, count)
        self._transfer(msg)
        return bytearray(list(msg))

    def write(self, data):
        msg = smbus2.i2c_msg.write(self.address, list(data))
        self._transfer(msg)

    def _transfer(self, msg):
        try:
            self.smbus.i2c_rdwr(msg)
        except OSError as error:
            log.debug("i2c transfer to 0x%02X failed: %s", self.address, error)
            raise CommunicationError("i2c transfer to 0x{0:02X} failed: {1}"
                                     .format(self.address, error))

    def close(self):
        if self.smbus is not None:
            self.smbus.close()
            self.smbus = None
