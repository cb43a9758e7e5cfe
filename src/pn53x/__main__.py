# -*- coding: latin-1 -*-
# -----------------------------------------------------------------------------
# Copyright 2016 Stephen Tiedemann <stephen.tiedemann@gmail.com>
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
import pn53x
import pn53x.error
import pn53x.transport

import re
import sys
import logging
import platform
import argparse

description = """

The pn53x module is a host driver for NXP PN532 contactless reader
chips connected through a serial (HSU) or I2C interface. Executing it
as a module opens the chip at PATH, brings it into normal mode and
prints the firmware version and general status.

PATH is either 'tty:<port>' (for example 'tty:USB0' or
'tty:/dev/serial0') or 'i2c:<bus>[:<address>]' (for example 'i2c:1' or
'i2c:1:0x24').

"""

PATH = re.compile(r'^(tty|i2c):([^:]+)(?::(0x[0-9a-fA-F]+|\d+)|)$')


def open_device(path, args):
    """Return an unpowered :class:`pn53x.Device` for *path*."""
    match = PATH.match(path)
    if match is None:
        raise pn53x.error.InvalidArgument("invalid path {0!r}".format(path))

    if match.group(1) == "tty":
        port = match.group(2)
        if not port.startswith('/'):
            port = "/dev/tty" + port
        stream = pn53x.transport.SerialStream(port, args.baudrate)
        transport = pn53x.transport.HSU(stream)
    else:
        if not match.group(2).isdigit():
            raise pn53x.error.InvalidArgument(
                "invalid i2c bus {0!r}".format(match.group(2)))
        address = int(match.group(3), 0) if match.group(3) else 0x24
        bus = pn53x.transport.I2CBus(int(match.group(2)), address)
        transport = pn53x.transport.I2C(
            bus, ready_timeout=args.ready_timeout,
            max_attempts=args.max_attempts)

    return pn53x.Device(transport)


def main(args):
    print("This is the %s version of pn53x run in Python %s\non %s" %
          (pn53x.__version__, platform.python_version(), platform.platform()))

    logging.basicConfig()
    log_levels = (logging.WARN, logging.INFO, logging.DEBUG, logging.DEBUG-1)
    log_level = log_levels[min(args.verbose, len(log_levels) - 1)]
    logging.getLogger('pn53x').setLevel(log_level)

    try:
        device = open_device(args.path, args)
    except (IOError, pn53x.error.Error) as error:
        print("can not open %s: %s" % (args.path, error))
        return 1

    try:
        device.on()
        print("** found %s" % device.firmware_version())
        print("** status %s" % device.general_status())
        for kind in args.self_test:
            result = "passed" if device.self_test(kind) else "failed"
            print("** %s test %s" % (kind, result))
    except (IOError, pn53x.error.Error) as error:
        print("communication with %s failed: %s" % (args.path, error))
        return 1
    finally:
        try:
            device.close()
        except (IOError, pn53x.error.Error) as error:
            print("can not close %s: %s" % (args.path, error))

    return 0


parser = argparse.ArgumentParser(
    prog="python -m pn53x", description=description,
    formatter_class=argparse.RawDescriptionHelpFormatter)

parser.add_argument(
    "path", help="tty:<port> or i2c:<bus>[:<address>]")

parser.add_argument(
    "--baudrate", type=int, default=115200,
    help="serial baud rate (default: %(default)s)")

parser.add_argument(
    "--ready-timeout", type=float, default=15.0, metavar="SECONDS",
    help="i2c wait for the chip ready signal (default: %(default)s)")

parser.add_argument(
    "--max-attempts", type=int, default=100,
    help="i2c status byte polling attempts (default: %(default)s)")

parser.add_argument(
    "--self-test", action="append", default=[],
    choices=("line", "rom", "ram"),
    help="run a chip self test, may be given more than once")

parser.add_argument(
    "--verbose", "-v", action="count", default=0,
    help="be verbose. Multiple -v options increase the verbosity.")

if __name__ == '__main__':
    sys.exit(main(parser.parse_args()))
