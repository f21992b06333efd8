"""Tests for MPS7Record decoding and encoding."""

from datetime import datetime, timezone
import io
import struct

import pytest
from mps7log.proto import MPS7Record, RecordType, Truncated, UnrecognizedRecordType

STAMP = bytes([0x3B, 0x9A, 0xCA, 0x00])  # 1_000_000_000
USER_12 = bytes([0, 0, 0, 0, 0, 0, 0, 12])


class TestMPS7RecordValid:
    """Tests for valid MPS7Record cases."""

    def test_credit_byte_layout(self):
        """Test decoding a credit record from literal bytes."""
        data = bytes([RecordType.CREDIT]) + STAMP + USER_12 + struct.pack(">d", 8.99)
        record = MPS7Record.from_stream(io.BytesIO(data))

        assert record.kind is RecordType.CREDIT
        assert record.timestamp == 1_000_000_000
        assert record.user_id == 12
        assert struct.pack(">d", record.amount) == struct.pack(">d", 8.99)

    def test_credit_roundtrip(self):
        """Test that an encoded credit decodes to an equal record."""
        original = MPS7Record(
            kind=RecordType.CREDIT, timestamp=1_000_000_000, user_id=12, amount=8.99
        )
        data = original.to_bytes()
        restored = MPS7Record.from_bytes(data)

        assert len(data) == 21
        assert restored == original
        assert struct.pack(">d", restored.amount) == struct.pack(">d", original.amount)

    def test_debit_amount_is_bit_pattern(self):
        """Test that the amount is a reinterpretation, not an integer cast."""
        data = bytes([RecordType.DEBIT]) + STAMP + USER_12 + bytes.fromhex("4013f5c28f5c28f6")
        record = MPS7Record.from_bytes(data)

        assert record.kind is RecordType.DEBIT
        assert record.amount == 4.99

    @pytest.mark.parametrize("kind", [RecordType.START_AUTOPAY, RecordType.END_AUTOPAY])
    def test_autopay_has_no_amount(self, kind):
        """Test that autopay records stop after the 13 byte prefix."""
        fd = io.BytesIO(bytes([kind]) + STAMP + USER_12 + b"\xaa\xbb")
        record = MPS7Record.from_stream(fd)

        assert record.kind is kind
        assert record.user_id == 12
        assert record.amount is None
        assert record.size == 13
        assert fd.read() == b"\xaa\xbb"

    def test_time_is_utc(self):
        """Test the timestamp as a datetime."""
        record = MPS7Record(kind=RecordType.END_AUTOPAY, timestamp=1_000_000_000, user_id=12)

        assert record.time == datetime(2001, 9, 9, 1, 46, 40, tzinfo=timezone.utc)

    def test_str(self):
        """Test the printable form of records."""
        credit = MPS7Record(kind=RecordType.CREDIT, timestamp=5, user_id=12, amount=8.99)
        start = MPS7Record(kind=RecordType.START_AUTOPAY, timestamp=5, user_id=12)

        assert str(credit) == "Credit, 5, 12, 8.990000"
        assert str(start) == "StartAutopay, 5, 12, -"


class TestMPS7RecordInvalid:
    """Tests for invalid MPS7Record cases."""

    def test_truncated_prefix(self):
        """Test that a short prefix is reported as such."""
        with pytest.raises(Truncated) as excinfo:
            MPS7Record.from_stream(io.BytesIO(bytes([RecordType.DEBIT]) + STAMP))

        assert excinfo.value.stage == "record prefix"
        assert excinfo.value.got == 5

    def test_truncated_amount(self):
        """Test that a short amount field is told apart from a short prefix."""
        data = bytes([RecordType.DEBIT]) + STAMP + USER_12 + b"\x40\x13"

        with pytest.raises(Truncated) as excinfo:
            MPS7Record.from_stream(io.BytesIO(data))
        assert excinfo.value.stage == "record amount"

        with pytest.raises(Truncated, match="record amount"):
            MPS7Record.from_bytes(data)

    def test_unrecognized_type(self):
        """Test that tags outside 0..3 are rejected."""
        data = bytes([7]) + STAMP + USER_12

        with pytest.raises(UnrecognizedRecordType, match="7") as excinfo:
            MPS7Record.from_stream(io.BytesIO(data))

        assert excinfo.value.tag == 7

    @pytest.mark.parametrize("kind", [RecordType.DEBIT, RecordType.CREDIT])
    def test_money_record_requires_amount(self, kind):
        """Test that a debit or credit cannot be built without an amount."""
        with pytest.raises(ValueError, match="requires an amount"):
            MPS7Record(kind=kind, timestamp=1, user_id=1)

    @pytest.mark.parametrize("kind", [RecordType.START_AUTOPAY, RecordType.END_AUTOPAY])
    def test_autopay_rejects_amount(self, kind):
        """Test that an autopay event cannot carry an amount."""
        with pytest.raises(ValueError, match="carries no amount"):
            MPS7Record(kind=kind, timestamp=1, user_id=1, amount=5.0)

    def test_zero_amount_is_kept(self):
        """Test that a real zero amount survives encoding."""
        record = MPS7Record(kind=RecordType.CREDIT, timestamp=1, user_id=1, amount=0.0)
        restored = MPS7Record.from_bytes(record.to_bytes())

        assert restored.amount == 0.0
        assert restored.amount is not None
