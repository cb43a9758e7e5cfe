# -*- coding: latin-1 -*-
import pn53x.response
from pn53x.response import FirmwareVersion, GeneralStatus, SamStatus
from pn53x.response import TargetInfo, ListedTarget
from pn53x.error import InvalidResponse

import pytest

from base_pn53x import HEX


class TestFirmwareVersion(object):
    def test_decode(self):
        version = FirmwareVersion.decode(HEX('32010607'))
        assert version == FirmwareVersion(0x32, 1, 6, 7)
        assert version.ic == 0x32
        assert version.version == 1
        assert version.revision == 6
        assert version.support == 7
        assert version.supports_iso14443_type_a is True
        assert version.supports_iso14443_type_b is True
        assert version.supports_iso18092 is True
        assert str(version) == "PN532v1.6"

    @pytest.mark.parametrize("support, type_a, type_b, iso18092", [
        (0x00, False, False, False),
        (0x01, True, False, False),
        (0x02, False, True, False),
        (0x04, False, False, True),
        (0x05, True, False, True),
    ])
    def test_support_flags(self, support, type_a, type_b, iso18092):
        version = FirmwareVersion(0x32, 1, 6, support)
        assert version.supports_iso14443_type_a is type_a
        assert version.supports_iso14443_type_b is type_b
        assert version.supports_iso18092 is iso18092

    @pytest.mark.parametrize("data", [
        HEX(''), HEX('320106'), HEX('3201060700'),
    ])
    def test_decode_wrong_length(self, data):
        with pytest.raises(InvalidResponse):
            FirmwareVersion.decode(data)


class TestBitRate(object):
    @pytest.mark.parametrize("code, value", [
        (0x00, 106000), (0x01, 212000), (0x02, 424000),
    ])
    def test_bit_rate(self, code, value):
        assert pn53x.response.bit_rate(code) == value

    @pytest.mark.parametrize("code", [0x03, 0x10, 0xFF])
    def test_invalid_bit_rate(self, code):
        with pytest.raises(InvalidResponse):
            pn53x.response.bit_rate(code)


class TestSamStatus(object):
    def test_no_bits_set(self):
        status = SamStatus(0x00)
        assert status.neg_pulse_detected is False
        assert status.external_rf_off is False
        assert status.timeout_after_sig_act_irq is False
        assert status.clad_line_level == 0

    @pytest.mark.parametrize("byte, pulse, rf_off, timeout, clad", [
        (0x01, True, False, False, 0),
        (0x02, False, True, False, 0),
        (0x04, False, False, True, 0),
        (0x80, False, False, False, 1),
        (0x87, True, True, True, 1),
        (0x78, False, False, False, 0),
    ])
    def test_bits(self, byte, pulse, rf_off, timeout, clad):
        status = SamStatus(byte)
        assert status.neg_pulse_detected is pulse
        assert status.external_rf_off is rf_off
        assert status.timeout_after_sig_act_irq is timeout
        assert status.clad_line_level == clad


class TestGeneralStatus(object):
    def test_decode_without_targets(self):
        status = GeneralStatus.decode(HEX('00 00 00 80'))
        assert status.error_code == 0
        assert status.field_present is False
        assert status.targets == []
        assert status.sam_status == SamStatus(0x80)
        assert status.sam_status.clad_line_level == 1

    def test_decode_with_one_target(self):
        status = GeneralStatus.decode(HEX('14 01 01 01000010 00'))
        assert status.error_code == 0x14
        assert status.field_present is True
        assert status.targets == [TargetInfo(1, 106000, 106000, 0x10)]

    def test_decode_with_two_targets(self):
        status = GeneralStatus.decode(HEX('00 01 02 01010210 02020100 04'))
        assert status.targets == [
            TargetInfo(1, 212000, 424000, 0x10),
            TargetInfo(2, 424000, 212000, 0x00),
        ]
        assert status.sam_status.timeout_after_sig_act_irq is True
        assert str(status) == (
            "err=0x00 field=True targets=[Tg1 rx=212000 tx=424000 type=0x10, "
            "Tg2 rx=424000 tx=212000 type=0x00] sam=0x04")

    def test_decode_with_three_targets(self):
        data = HEX('00 01 03 01000010 02000010 03000010 00')
        with pytest.raises(InvalidResponse):
            GeneralStatus.decode(data)

    def test_decode_with_invalid_bit_rate(self):
        with pytest.raises(InvalidResponse):
            GeneralStatus.decode(HEX('00 01 01 01030010 00'))

    @pytest.mark.parametrize("data", [
        HEX('000000'), HEX('00 01 01 01000010'), HEX('00 01 02 01000010 00'),
    ])
    def test_decode_truncated(self, data):
        with pytest.raises(InvalidResponse):
            GeneralStatus.decode(data)


class TestListedTarget(object):
    def test_one_target(self):
        target = ListedTarget(HEX('01 01 0004 08 04 a1b2c3d4'))
        assert target.count == 1
        assert target.target_number == 1
        assert target.sens_res == HEX('0004')
        assert target.sel_res == 0x08
        assert target.uid == HEX('a1b2c3d4')
        assert str(target) == "010100040804A1B2C3D4"

    def test_seven_byte_uid(self):
        target = ListedTarget(HEX('01 01 0044 00 07 04a1b2c3d4e5f6'))
        assert target.uid == HEX('04a1b2c3d4e5f6')

    def test_no_target(self):
        target = ListedTarget(HEX('00'))
        assert target.count == 0
        assert target.target_number is None
        assert target.sens_res is None
        assert target.sel_res is None
        assert target.uid is None


@pytest.mark.parametrize("value", [
    FirmwareVersion(0x32, 1, 6, 7),
    SamStatus(0x80),
    TargetInfo(1, 106000, 106000, 0x10),
    GeneralStatus(0, True, [TargetInfo(1, 106000, 106000, 0x10)],
                  SamStatus(0)),
])
@pytest.mark.parametrize("other", [None, 0x80, "PN532v1.6", b'\x32'])
def test_compare_with_other_type(value, other):
    assert (value == other) is False
    assert (value != other) is True


@pytest.mark.parametrize("first, second", [
    (FirmwareVersion(0x32, 1, 6, 7), FirmwareVersion(0x32, 1, 6, 7)),
    (SamStatus(0x80), SamStatus(0x80)),
    (TargetInfo(1, 106000, 212000, 0x10),
     TargetInfo(1, 106000, 212000, 0x10)),
    (GeneralStatus(0, False, [], SamStatus(0)),
     GeneralStatus(0, False, [], SamStatus(0))),
])
def test_equal_values_hash_equal(first, second):
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1
