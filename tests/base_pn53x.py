# -*- coding: latin-1 -*-
import pytest
from mock import MagicMock

import pn53x.transport


def HEX(s):
    return bytearray.fromhex(s)


def STD_FRAME(data):
    LEN = bytearray([len(data)])
    LCS = bytearray([256 - sum(LEN) & 255])
    DCS = bytearray([256 - sum(data) & 255])
    return HEX('0000ff') + LEN + LCS + data + DCS + HEX('00')


def CMD(hexstr):
    return STD_FRAME(HEX('D4' + hexstr))


def RSP(hexstr):
    return STD_FRAME(HEX('D5' + hexstr))


def ACK():
    return HEX('0000FF00FF00')


def NAK():
    return HEX('0000FFFF0000')


def ERR():
    return HEX('0000FF01FF7F8100')


@pytest.fixture()
def transport():
    transport = MagicMock(spec=pn53x.transport.Transport)
    transport.TYPE = "HSU"
    transport.write_frame.return_value = None
    return transport
