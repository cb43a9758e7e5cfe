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
"""Device session for a PN532 chip. The session owns the transport and
command channel and keeps track of the chip power mode. After a reset
the PN532 is in LowVBat mode and accepts no regular command until a
SAMConfiguration brings it to Normal mode, which is what :meth:`on`
does.

==========  ==========================================
mode        entered by
==========  ==========================================
None        construction (uninitialized)
LowVBat     :meth:`Device.reset`
Normal      :meth:`Device.wakeup` from LowVBat
PowerDown   not entered, :meth:`Device.off` is a stub
==========  ==========================================

The session is not thread-safe. Callers that share a device between
threads must serialize access.

"""
from . import response
from .channel import CommandChannel
from .error import DeviceError, InvalidArgument, InvalidState, Unimplemented

import time

import logging
log = logging.getLogger(__name__)


class PowerMode(object):
    LowVBat = "LowVBat"
    Normal = "Normal"
    PowerDown = "PowerDown"


class Device(object):
    default_power_mode = PowerMode.LowVBat
    reset_hold = 0.01
    settle_time = 0.01

    # The longest standard frame payload minus the D4 00 00 prefix.
    line_test_size = 250

    def __init__(self, transport, reset=None):
        self.transport = transport
        self.channel = CommandChannel(transport)
        self.reset_line = reset
        self.power_mode = None

    def __str__(self):
        return "PN532 on {0} in {1} mode".format(
            self.transport.TYPE, self.power_mode)

    def on(self):
        self.reset()
        self.wakeup()

    def off(self):
        """Bring the chip into PowerDown mode. This is not implemented,
        the PowerDown command and its wakeup sources are not managed by
        the session.

        """
        raise Unimplemented("power down is not supported")

    def reset(self):
        if self.reset_line is not None:
            log.debug("pulse reset line")
            self.reset_line.set_level(0)
            time.sleep(self.reset_hold)
            self.reset_line.set_level(1)
        self.power_mode = self.default_power_mode
        time.sleep(self.settle_time)

    def wakeup(self):
        if self.power_mode is None:
            raise InvalidState("device must be reset before wakeup")
        self.transport.wakeup()
        if self.power_mode == PowerMode.LowVBat:
            self.sam_configuration("normal")
            self.power_mode = PowerMode.Normal
            log.debug("chip is now in normal mode")

    def close(self):
        # Cancel a command that may still be in progress and give the
        # chip time to process the ack.
        try:
            self.channel.send_ack()
            time.sleep(self.settle_time)
        finally:
            self.transport.close()

    def _command(self, cmd_code, cmd_data, max_size):
        self._check_normal_mode()
        return self.channel.send_command(cmd_code, cmd_data, max_size)

    def _command_exact(self, cmd_code, cmd_data, size):
        self._check_normal_mode()
        return self.channel.send_command_exact(cmd_code, cmd_data, size)

    def _check_normal_mode(self):
        if self.power_mode != PowerMode.Normal:
            log.error("command refused in %s mode", self.power_mode)
            raise InvalidState("chip is in {0} mode, call on() first"
                               .format(self.power_mode))

    def sam_configuration(self, mode="normal", timeout=None, irq=True):
        """Send a SAMConfiguration command. Only the *normal* mode is
        supported and *timeout* must be None. The *irq* flag makes the
        chip drive the IRQ line when a response is ready.

        """
        if mode == "virtual":
            raise Unimplemented("SAM virtual card mode is not supported")
        if mode != "normal":
            raise InvalidArgument("invalid SAM mode {0!r}".format(mode))
        if timeout is not None:
            raise Unimplemented("SAM configuration timeout is not supported")
        data = bytearray([0x01, 0x00, int(bool(irq))])
        self.channel.send_command_exact(0x14, data, 0)

    def self_test(self, kind, data=None):
        """Run a Diagnose command. The *kind* is ``line`` to send *data*
        (by default the longest possible standard frame) and compare the
        echo, ``rom`` for the ROM checksum test or ``ram`` for the RAM
        test. Returns True if the test passed.

        """
        if kind == "line":
            if data is None:
                data = bytearray(range(self.line_test_size))
            data = bytearray(data)
            echo = self._command(0x00, b'\x00' + data, len(data) + 1)
            return echo == b'\x00' + data
        if kind == "rom":
            return self._command_exact(0x00, b'\x01', 1)[0] == 0
        if kind == "ram":
            return self._command_exact(0x00, b'\x02', 1)[0] == 0
        raise InvalidArgument("unknown self test {0!r}".format(kind))

    def firmware_version(self):
        data = self._command_exact(0x02, b'', 4)
        return response.FirmwareVersion.decode(data)

    def general_status(self):
        data = self._command(0x04, b'', 12)
        return response.GeneralStatus.decode(data)

    def list_passive_targets(self):
        """Search for one Type A target at 106 kbps and return the raw
        response as a :class:`~pn53x.response.ListedTarget`.

        """
        data = self._command(0x4A, b'\x01\x00', 64)
        return response.ListedTarget(data)

    def deselect(self, target_number):
        """Deselect the target with *target_number*, or all targets if
        *target_number* is 0.

        """
        if target_number not in (0, 1, 2):
            raise InvalidArgument("target number must be 0, 1 or 2")
        status = self._command_exact(0x44, bytearray([target_number]), 1)
        if status[0] != 0x00:
            raise DeviceError(status[0] & 0x3F)

    def data_exchange(self, data, target_number=1, max_response_size=64):
        """Send *data* to the target selected by *target_number* and
        return the target response data. A chip status other than
        success raises :exc:`~pn53x.error.DeviceError`.

        """
        if target_number not in (1, 2):
            raise InvalidArgument("target number must be 1 or 2")
        cmd_data = bytearray([target_number]) + bytearray(data)
        data = self._command(0x40, cmd_data, max_response_size + 1)
        if len(data) == 0 or data[0] & 0x3F != 0:
            raise DeviceError(data[0] & 0x3F if data else 0xFF)
        return data[1:]
