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
"""Mifare Classic card operations. A Mifare Classic 1K card has 16
sectors of 4 blocks with 16 bytes each. The last block of a sector is
the sector trailer that holds the keys and access bits. Reading a block
requires a prior authentication for its sector.

All commands are sent through :meth:`pn53x.device.Device.data_exchange`.

"""
from .error import InvalidArgument, UnexpectedResponse

from binascii import hexlify

import logging
log = logging.getLogger(__name__)

MIFARE_AUTH_A = 0x60
MIFARE_AUTH_B = 0x61
MIFARE_READ = 0x30

DEFAULT_KEY = bytearray(b'\xFF' * 6)
BLOCKS_PER_SECTOR = 4
BLOCK_SIZE = 16


def trailer_block(sector):
    return sector * BLOCKS_PER_SECTOR + BLOCKS_PER_SECTOR - 1


def is_trailer_block(block):
    return block % BLOCKS_PER_SECTOR == BLOCKS_PER_SECTOR - 1


class MifareCard(object):
    """A Mifare Classic card with *uid* reachable through *device*. The
    card does not own the device, it only uses it for the duration of
    each operation.

    """
    def __init__(self, uid, device):
        self.uid = bytearray(uid)
        self.device = device

    def __str__(self):
        return "Mifare Classic ID={0}".format(hexlify(self.uid).decode())

    def authenticate(self, block, key=DEFAULT_KEY, key_type="A",
                     target_number=1):
        """Authenticate the sector that contains *block* with the 6 byte
        *key* used as key A or key B according to *key_type*. An
        authentication failure is reported by the chip and raises
        :exc:`~pn53x.error.DeviceError`.

        """
        if len(key) != 6:
            raise InvalidArgument("mifare key must be 6 bytes")
        if key_type not in ("A", "B"):
            raise InvalidArgument("key type must be 'A' or 'B'")

        auth = MIFARE_AUTH_A if key_type == "A" else MIFARE_AUTH_B
        log.debug("authenticate block {0} with key {1}".format(
            block, key_type))

        data = bytearray([auth, block]) + bytearray(key) + self.uid
        data = self.device.data_exchange(data, target_number)
        if len(data) != 0:
            log.debug("invalid response %s", hexlify(data).decode())
            raise UnexpectedResponse("authentication returned {0} bytes"
                                     .format(len(data)))

    def read(self, block, target_number=1):
        """Read the 16 byte *block*. The sector must have been
        authenticated before.

        """
        log.debug("read block {0}".format(block))
        data = bytearray([MIFARE_READ, block, 0x00, 0x00])
        return self.device.data_exchange(data, target_number, BLOCK_SIZE)
