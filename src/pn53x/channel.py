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
"""The command channel runs a single host command exchange: the
command frame is written, the chip acknowledges reception with an ack
frame (or rejects the command with an error frame) and later delivers
the response frame. Exchanges are strictly sequential, a new command
must not be sent before the previous response was read.

"""
from . import frame
from .error import DeviceError, UnexpectedResponse

from binascii import hexlify

import logging
log = logging.getLogger(__name__)

HOST_TO_CHIP = 0xD4
CHIP_TO_HOST = 0xD5

CMD = {
    0x00: "Diagnose",
    0x02: "GetFirmwareVersion",
    0x04: "GetGeneralStatus",
    0x06: "ReadRegister",
    0x08: "WriteRegister",
    0x0C: "ReadGPIO",
    0x0E: "WriteGPIO",
    0x10: "SetSerialBaudrate",
    0x12: "SetParameters",
    0x14: "SAMConfiguration",
    0x16: "PowerDown",
    0x32: "RFConfiguration",
    0x4A: "InListPassiveTarget",
    0x40: "InDataExchange",
    0x42: "InCommunicateThru",
    0x44: "InDeselect",
    0x52: "InRelease",
    0x54: "InSelect",
    0x60: "InAutoPoll",
}


class CommandChannel(object):
    def __init__(self, transport):
        self.transport = transport

    def send_command(self, cmd_code, cmd_data, max_size):
        """Send the command *cmd_code* with parameter bytes *cmd_data* and
        return the response data bytes, at most *max_size*, that follow
        the response code.

        **Exceptions**

        * :exc:`~pn53x.error.InvalidFrame` if the ack or response frame
          is malformed.

        * :exc:`~pn53x.error.DeviceError` if the chip answered with an
          error frame instead of an ack.

        * :exc:`~pn53x.error.UnexpectedResponse` if the response frame
          does not answer *cmd_code* or carries too much data.

        """
        self.write_command(cmd_code, cmd_data)
        self.read_ack()
        return self.read_response(cmd_code, max_size)

    def send_command_exact(self, cmd_code, cmd_data, size):
        """Same as :meth:`send_command` but the response must have
        exactly *size* data bytes.

        """
        self.write_command(cmd_code, cmd_data)
        self.read_ack()
        return self.read_response_exact(cmd_code, size)

    def write_command(self, cmd_code, cmd_data):
        cmd_data = bytearray(cmd_data)
        log.debug("%s %s", CMD.get(cmd_code, "0x%02X" % cmd_code),
                  hexlify(cmd_data).decode())
        payload = bytearray([HOST_TO_CHIP, cmd_code]) + cmd_data
        self.transport.write_frame(frame.encode(payload))

    def read_ack(self):
        # An error frame has one byte more than an ack, reading that
        # much lets both decode completely.
        data = self.transport.read_frame(frame.ERROR_FRAME_SIZE)
        if frame.is_ack(data):
            return

        payload = frame.decode(data)
        if len(payload) == 0:
            log.error("received empty frame instead of ack")
            raise UnexpectedResponse("empty frame instead of ack")

        log.error("received error frame instead of ack")
        raise DeviceError(payload[0])

    def read_response(self, cmd_code, max_size):
        payload = frame.decode(self.transport.read_frame(
            frame.frame_size(max_size + 2)))

        if len(payload) < 2 or payload[0] != CHIP_TO_HOST:
            log.error("invalid frame identifier")
            raise UnexpectedResponse("invalid frame identifier")

        if payload[1] != (cmd_code + 1) & 0xFF:
            log.error("unexpected response code")
            raise UnexpectedResponse("expected response code 0x{0:02X} "
                                     "but got 0x{1:02X}"
                                     .format(cmd_code + 1, payload[1]))

        if len(payload) - 2 > max_size:
            log.error("response data exceeds %d bytes", max_size)
            raise UnexpectedResponse("response data exceeds {0} bytes"
                                     .format(max_size))

        return payload[2:]

    def read_response_exact(self, cmd_code, size):
        data = self.read_response(cmd_code, size)
        if len(data) != size:
            log.error("expected %d response bytes but got %d",
                      size, len(data))
            raise UnexpectedResponse("expected {0} response bytes but got {1}"
                                     .format(size, len(data)))
        return data

    def send_ack(self):
        # Terminates the command the chip is currently processing.
        self.transport.write_frame(frame.ACK)
