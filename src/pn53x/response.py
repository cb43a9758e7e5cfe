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
"""Decoders for chip command response data."""
from .error import InvalidResponse

import binascii

BIT_RATES = {0x00: 106000, 0x01: 212000, 0x02: 424000}


def bit_rate(code):
    """Return the bit rate in bits per second for the chip's bit rate
    *code* or raise :exc:`~pn53x.error.InvalidResponse`.

    """
    try:
        return BIT_RATES[code]
    except KeyError:
        raise InvalidResponse("invalid bit rate code 0x{0:02X}".format(code))


class FirmwareVersion(object):
    """Response of the GetFirmwareVersion command."""

    def __init__(self, ic, version, revision, support):
        self.ic = ic
        self.version = version
        self.revision = revision
        self.support = support

    @classmethod
    def decode(cls, data):
        if len(data) != 4:
            raise InvalidResponse("firmware version needs 4 bytes, got {0}"
                                  .format(len(data)))
        return cls(*bytearray(data))

    @property
    def supports_iso14443_type_a(self):
        return bool(self.support & 0x01)

    @property
    def supports_iso14443_type_b(self):
        return bool(self.support & 0x02)

    @property
    def supports_iso18092(self):
        return bool(self.support & 0x04)

    def __eq__(self, other):
        if not isinstance(other, FirmwareVersion):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __hash__(self):
        return hash((self.ic, self.version, self.revision, self.support))

    def __str__(self):
        return "PN5{0:02x}v{1}.{2}".format(self.ic, self.version,
                                          self.revision)


class SamStatus(object):
    """The SAM status byte reported by GetGeneralStatus."""

    def __init__(self, status):
        self.status = status

    @property
    def neg_pulse_detected(self):
        """A negative pulse was detected on the CLAD line."""
        return bool(self.status & 0x01)

    @property
    def external_rf_off(self):
        """An external RF field was detected and switched off."""
        return bool(self.status & 0x02)

    @property
    def timeout_after_sig_act_irq(self):
        """A timeout occurred after the SigActIRQ signal fell."""
        return bool(self.status & 0x04)

    @property
    def clad_line_level(self):
        """Current level of the CLAD line, 0 or 1."""
        return self.status >> 7 & 1

    def __eq__(self, other):
        if not isinstance(other, SamStatus):
            return NotImplemented
        return self.status == other.status

    def __hash__(self):
        return hash(self.status)

    def __str__(self):
        return "0x{0:02X}".format(self.status)


class TargetInfo(object):
    def __init__(self, logical_number, bit_rate_reception,
                 bit_rate_transmission, modulation_type):
        self.logical_number = logical_number
        self.bit_rate_reception = bit_rate_reception
        self.bit_rate_transmission = bit_rate_transmission
        self.modulation_type = modulation_type

    @classmethod
    def decode(cls, data):
        tg, br_rx, br_tx, modulation = bytearray(data[0:4])
        return cls(tg, bit_rate(br_rx), bit_rate(br_tx), modulation)

    def __eq__(self, other):
        if not isinstance(other, TargetInfo):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __hash__(self):
        return hash((self.logical_number, self.bit_rate_reception,
                     self.bit_rate_transmission, self.modulation_type))

    def __str__(self):
        return "Tg{0} rx={1} tx={2} type=0x{3:02X}".format(
            self.logical_number, self.bit_rate_reception,
            self.bit_rate_transmission, self.modulation_type)


class GeneralStatus(object):
    """Response of the GetGeneralStatus command. The chip reports the
    last error code, whether the RF field is on, up to two targets
    currently handled and the SAM status.

    """
    def __init__(self, error_code, field_present, targets, sam_status):
        self.error_code = error_code
        self.field_present = field_present
        self.targets = targets
        self.sam_status = sam_status

    @classmethod
    def decode(cls, data):
        data = bytearray(data)
        if len(data) < 4:
            raise InvalidResponse("general status needs at least 4 bytes")

        error_code, field_present, count = data[0], data[1] != 0, data[2]
        if count not in (0, 1, 2):
            raise InvalidResponse("invalid number of targets {0}"
                                  .format(count))

        if len(data) < 3 + 4 * count + 1:
            raise InvalidResponse("general status for {0} targets needs "
                                  "{1} bytes".format(count, 4 + 4 * count))

        targets = [TargetInfo.decode(data[3+4*i:7+4*i]) for i in range(count)]
        sam_status = SamStatus(data[3 + 4 * count])
        return cls(error_code, field_present, targets, sam_status)

    def __eq__(self, other):
        if not isinstance(other, GeneralStatus):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __hash__(self):
        return hash((self.error_code, self.field_present,
                     tuple(self.targets), self.sam_status))

    def __str__(self):
        return "err=0x{0:02X} field={1} targets=[{2}] sam={3}".format(
            self.error_code, self.field_present,
            ', '.join(str(tg) for tg in self.targets), self.sam_status)


class ListedTarget(object):
    """Raw response of InListPassiveTarget for a Type A target at 106
    kbps. The UID is the NFCID1 found after the SENS_RES and SEL_RES
    bytes.

    """
    def __init__(self, data):
        self.data = bytearray(data)

    @property
    def count(self):
        return self.data[0] if len(self.data) > 0 else 0

    @property
    def target_number(self):
        return self.data[1] if self.count > 0 else None

    @property
    def sens_res(self):
        return self.data[2:4] if self.count > 0 else None

    @property
    def sel_res(self):
        return self.data[4] if self.count > 0 else None

    @property
    def uid(self):
        if self.count > 0 and len(self.data) > 5:
            return self.data[6:6+self.data[5]]

    def __str__(self):
        return binascii.hexlify(self.data).decode().upper()
