# -*- coding: latin-1 -*-
import pn53x.__main__
import pn53x.response
from pn53x.error import InvalidArgument, Timeout

import argparse
import pytest
from mock import call, MagicMock

import logging
logging.basicConfig(level=logging.WARN)
logging_level = logging.getLogger().getEffectiveLevel()
logging.getLogger("pn53x").setLevel(logging_level)


def parse(*argv):
    return pn53x.__main__.parser.parse_args(argv)


class TestArguments(object):
    def test_defaults(self):
        args = parse("tty:USB0")
        assert args == argparse.Namespace(
            path="tty:USB0", baudrate=115200, ready_timeout=15.0,
            max_attempts=100, self_test=[], verbose=0)

    def test_options(self):
        args = parse("i2c:1", "--ready-timeout", "0.5", "--max-attempts",
                     "10", "--self-test", "rom", "--self-test", "ram", "-vv")
        assert args.ready_timeout == 0.5
        assert args.max_attempts == 10
        assert args.self_test == ["rom", "ram"]
        assert args.verbose == 2

    def test_invalid_self_test(self):
        with pytest.raises(SystemExit):
            parse("i2c:1", "--self-test", "rf")


class TestOpenDevice(object):
    @pytest.mark.parametrize("path, port", [
        ("tty:USB0", "/dev/ttyUSB0"),
        ("tty:AMA0", "/dev/ttyAMA0"),
        ("tty:/dev/serial0", "/dev/serial0"),
    ])
    def test_tty(self, mocker, path, port):
        stream = mocker.patch('pn53x.transport.SerialStream', autospec=True)
        device = pn53x.__main__.open_device(path, parse(path))
        assert stream.mock_calls == [call(port, 115200)]
        assert isinstance(device.transport, pn53x.transport.HSU)
        assert device.transport.stream is stream.return_value
        assert device.power_mode is None

    @pytest.mark.parametrize("path, bus, address", [
        ("i2c:1", 1, 0x24),
        ("i2c:0:0x48", 0, 0x48),
        ("i2c:3:36", 3, 36),
    ])
    def test_i2c(self, mocker, path, bus, address):
        i2cbus = mocker.patch('pn53x.transport.I2CBus', autospec=True)
        args = parse(path, "--ready-timeout", "2", "--max-attempts", "5")
        device = pn53x.__main__.open_device(path, args)
        assert i2cbus.mock_calls == [call(bus, address)]
        assert isinstance(device.transport, pn53x.transport.I2C)
        assert device.transport.bus is i2cbus.return_value
        assert device.transport.ready_timeout == 2.0
        assert device.transport.max_attempts == 5

    @pytest.mark.parametrize("path", [
        "usb:072f:2200", "tty", "i2c:x", "i2c:1:0xZZ", "tty:USB0:1:2",
    ])
    def test_invalid_path(self, path):
        with pytest.raises(InvalidArgument):
            pn53x.__main__.open_device(path, parse("tty:USB0"))


class TestMain(object):
    @pytest.fixture()
    def device(self, mocker):
        device = MagicMock()
        device.firmware_version.return_value = \
            pn53x.response.FirmwareVersion(0x32, 1, 6, 7)
        device.general_status.return_value = \
            pn53x.response.GeneralStatus(0, False, [],
                                         pn53x.response.SamStatus(0))
        device.self_test.return_value = True
        mocker.patch('pn53x.__main__.open_device', return_value=device)
        return device

    def test_success(self, device, capsys):
        args = parse("tty:USB0", "--self-test", "rom")
        assert pn53x.__main__.main(args) == 0
        assert device.mock_calls == [
            call.on(), call.firmware_version(), call.general_status(),
            call.self_test("rom"), call.close()]
        out = capsys.readouterr().out
        assert "** found PN532v1.6" in out
        assert "** rom test passed" in out

    def test_communication_failure(self, device, capsys):
        device.firmware_version.side_effect = Timeout("no data received")
        assert pn53x.__main__.main(parse("tty:USB0")) == 1
        assert device.mock_calls == [
            call.on(), call.firmware_version(), call.close()]
        assert "communication with tty:USB0 failed" in capsys.readouterr().out

    def test_open_failure(self, mocker, capsys):
        mocker.patch('pn53x.__main__.open_device',
                     side_effect=IOError("no such device"))
        assert pn53x.__main__.main(parse("tty:USB9")) == 1
        assert "can not open tty:USB9" in capsys.readouterr().out

    def test_i2c_chip_not_answering(self, mocker, capsys):
        mocker.patch('pn53x.device.time.sleep', autospec=True)
        smbus2 = mocker.patch('pn53x.transport.smbus2')
        smbus2.SMBus.return_value.i2c_rdwr.side_effect = \
            OSError(121, "Remote I/O error")
        assert pn53x.__main__.main(parse("i2c:1")) == 1
        out = capsys.readouterr().out
        assert "communication with i2c:1 failed" in out
        assert "can not close i2c:1" in out
        assert smbus2.SMBus.return_value.close.call_count == 1

    def test_close_failure(self, device, capsys):
        device.close.side_effect = IOError("device disconnected")
        assert pn53x.__main__.main(parse("tty:USB0")) == 0
        assert "can not close tty:USB0" in capsys.readouterr().out
