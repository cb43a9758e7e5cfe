# -*- coding: latin-1 -*-
# -----------------------------------------------------------------------------
# Copyright 2009, 2017 Stephen Tiedemann <stephen.tiedemann@gmail.com>
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
"""Encoding and decoding of PN53x host interface frames. A normal
information frame is laid out as ::

  00 00FF LEN LCS <payload> DCS 00

where LEN is the number of payload bytes, LCS the length checksum such
that LEN + LCS is zero modulo 256, and DCS the data checksum such that
the sum of all payload bytes plus DCS is zero modulo 256. The
acknowledge frame is the fixed sequence ``00 00FF 00FF 00``. Extended
information frames (LEN=FF, LCS=FF) are not supported.

"""
from .error import InvalidFrame, Unimplemented

from binascii import hexlify

import logging
log = logging.getLogger(__name__)

SOF = bytearray.fromhex('0000FF')
ACK = bytearray.fromhex('0000FF00FF00')
ERROR_FRAME_SIZE = 8
MAX_PAYLOAD_SIZE = 253


def frame_size(payload_length):
    """Return the number of wire bytes for a frame that carries
    *payload_length* bytes (preamble, start code, length, length
    checksum, payload, data checksum and postamble).

    """
    return 5 + payload_length + 2


def encode(payload):
    """Return the wire frame for *payload*. Payloads of 254 or more
    bytes would require an extended frame and raise
    :exc:`~pn53x.error.Unimplemented`.

    """
    payload = bytearray(payload)
    if len(payload) > MAX_PAYLOAD_SIZE:
        raise Unimplemented("extended frame for {0} byte payload"
                            .format(len(payload)))
    length = len(payload)
    head = SOF + bytearray([length, (0x100 - length) & 0xFF])
    tail = bytearray([(0x100 - sum(payload)) & 0xFF, 0x00])
    return head + payload + tail


def is_ack(frame):
    return bytearray(frame[0:len(ACK)]) == ACK


def decode(frame):
    """Validate the wire *frame* and return its payload. An acknowledge
    frame returns an empty bytearray. Any structural, checksum or
    postamble mismatch raises :exc:`~pn53x.error.InvalidFrame`. Bytes
    following the postamble are ignored.

    """
    frame = bytearray(frame)

    if frame[0:3] != SOF:
        log.error("invalid frame start sequence")
        raise InvalidFrame("invalid start sequence {0}".format(
            hexlify(frame[0:3]).decode()))

    if len(frame) < 6:
        log.error("frame is too short")
        raise InvalidFrame("frame is too short")

    length = frame[3]
    if length == 0 and frame[4] != 0x00:
        # An empty information frame has LCS 00, everything else with
        # LEN 00 must be the acknowledge frame.
        if frame[4:6] != b'\xFF\x00':
            log.error("invalid ack frame")
            raise InvalidFrame("invalid ack frame {0}".format(
                hexlify(frame[0:6]).decode()))
        return bytearray()

    if frame[4] != (0x100 - length) & 0xFF:
        log.error("frame length checksum error")
        raise InvalidFrame("length checksum error")

    if len(frame) < frame_size(length):
        log.error("frame length value mismatch")
        raise InvalidFrame("expected {0} bytes, got {1}".format(
            frame_size(length), len(frame)))

    payload = frame[5:5+length]
    if (frame[5+length] + sum(payload)) & 0xFF != 0:
        log.error("frame data checksum error")
        raise InvalidFrame("data checksum error")

    if frame[5+length+1] != 0x00:
        log.error("invalid frame postamble")
        raise InvalidFrame("invalid postamble")

    return payload
