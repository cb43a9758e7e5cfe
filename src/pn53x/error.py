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
"""Exceptions raised by the PN53x host driver.

- Error

  - CommunicationError

    - InvalidFrame
    - DeviceError (ErrorFrame)
    - UnexpectedResponse
    - InvalidResponse
    - Timeout

      - UnexpectedStatus

  - InvalidArgument
  - InvalidState
  - Unimplemented

"""

ERR = {
    0x01: "Time out, the Target has not answered",
    0x02: "Checksum error during RF communication",
    0x03: "Parity error during RF communication",
    0x04: "Erroneous bit count in anticollision",
    0x05: "Framing error during Mifare operation",
    0x06: "Abnormal bit collision in 106 kbps anticollision",
    0x07: "Insufficient communication buffer size",
    0x09: "RF buffer overflow detected by CIU",
    0x0a: "RF field not activated in time by active mode peer",
    0x0b: "Protocol error during RF communication",
    0x0d: "Overheated - antenna drivers deactivated",
    0x0e: "Internal buffer overflow",
    0x10: "Invalid command parameter",
    0x12: "Unsupported command from Initiator",
    0x13: "Format error during RF communication",
    0x14: "Mifare authentication error",
    0x23: "ISO/IEC14443-3 UID check byte is wrong",
    0x25: "Command invalid in current DEP state",
    0x26: "Operation not allowed in this configuration",
    0x27: "Command is not acceptable in the current context",
    0x29: "Released by Initiator while operating as Target",
    0x2A: "ISO/IEC14443-3B, the ID of the card does not match",
    0x2B: "ISO/IEC14443-3B, card previously activated has disappeared",
    0x2C: "NFCID3i and NFCID3t mismatch in DEP 212/424 kbps passive",
    0x2D: "An over-current event has been detected",
    0x2E: "NAD missing in DEP frame",
    0x7f: "Invalid command syntax - received error frame",
    0xff: "Insufficient data received from executing chip command",
}


class Error(Exception):
    """Base class for all exceptions raised by the driver."""


class CommunicationError(Error):
    """Base class for errors in the host to chip communication."""


class InvalidFrame(CommunicationError):
    """A frame failed structural validation: wrong start code, length
    or data checksum mismatch, missing postamble or truncated data.

    """


class DeviceError(CommunicationError):
    """The chip reported an error, either with an error frame in place
    of the acknowledgement or with a nonzero status byte in a command
    response. The chip error code is available as :attr:`errno` and
    the corresponding description as :attr:`strerr`.

    """
    def __init__(self, errno, strerr=None):
        if strerr is None:
            strerr = ERR.get(errno, "Unknown error code")
        super(DeviceError, self).__init__(errno, strerr)
        self.errno, self.strerr = errno, strerr

    def __str__(self):
        return "Error 0x{0:02X}: {1}".format(self.errno, self.strerr)


ErrorFrame = DeviceError


class UnexpectedResponse(CommunicationError):
    """The response frame carried a wrong frame identifier, a wrong
    response code or an unexpected number of bytes.

    """


class InvalidResponse(CommunicationError):
    """Response data could not be decoded into the expected structure."""


class Timeout(CommunicationError):
    """The chip did not become ready in time."""


class UnexpectedStatus(Timeout):
    """Status polling was exhausted without the chip reporting ready."""


class InvalidArgument(Error, ValueError):
    """A caller supplied value is outside the protocol range."""


class InvalidState(Error):
    """The command is not allowed in the current chip power mode."""


class Unimplemented(Error, NotImplementedError):
    """The requested feature is intentionally not supported."""
