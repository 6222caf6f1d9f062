#!/usr/bin/python3
# -*- encoding: utf-8 -*-

import os

import pytest

import Contrac.Codec as Codec
from Contrac.Errors import CapacityError, FormatError


def test_encode_known_values():
    assert Codec.encode(b"") == ""
    assert Codec.encode(b"f") == "Zg=="
    assert Codec.encode(b"fo") == "Zm8="
    assert Codec.encode(b"foobar") == "Zm9vYmFy"


def test_decode_known_values():
    assert Codec.decode("") == b""
    assert Codec.decode("Zg==") == b"f"
    assert Codec.decode(b"Zm9vYmFy") == b"foobar"


def test_size_calculators():
    assert Codec.encoded_size(0) == 1
    assert Codec.encoded_size(1) == 5
    assert Codec.encoded_size(3) == 5
    assert Codec.encoded_size(4) == 9
    assert Codec.encoded_size(16) == 25
    assert Codec.encoded_size(32) == 45

    assert Codec.decoded_size(0) == 1
    assert Codec.decoded_size(4) == 4
    assert Codec.decoded_size(24) == 19
    assert Codec.decoded_size(44) == 34


def test_size_calculators_bound_real_sizes():
    for size in range(0, 1025):
        text = Codec.encode(bytes(size))
        assert len(text) + 1 <= Codec.encoded_size(size)
        assert size + 1 <= Codec.decoded_size(len(text))


def test_round_trip_random_data():
    for size in (0, 1, 2, 3, 16, 31, 32, 33, 255, 1024):
        data = os.urandom(size)
        assert Codec.decode(Codec.encode(data)) == data


def test_round_trip_with_calculated_capacity():
    data = os.urandom(100)
    text = Codec.encode(data, Codec.encoded_size(len(data)))
    assert Codec.decode(text, Codec.decoded_size(len(text))) == data


def test_encode_capacity_too_small_is_an_error():
    with pytest.raises(CapacityError):
        Codec.encode(bytes(16), 24)

    assert len(Codec.encode(bytes(16), 25)) == 24


def test_decode_capacity_too_small_is_an_error():
    with pytest.raises(CapacityError):
        Codec.decode("Zm9vYmFy", 6)

    assert Codec.decode("Zm9vYmFy", 7) == b"foobar"


def test_capacity_error_is_a_format_error():
    assert issubclass(CapacityError, FormatError)
    assert issubclass(FormatError, ValueError)


@pytest.mark.parametrize("text", ["Zm9v!mFy", "Zm9", "Zg=", "é"])
def test_decode_rejects_malformed_input(text):
    with pytest.raises(FormatError):
        Codec.decode(text)


def test_decode_exact():
    assert Codec.decode_exact("AAAAAAAAAAAAAAAAAAAAAA==", 16) == bytes(16)

    with pytest.raises(FormatError):
        Codec.decode_exact("AAAAAAAAAAAAAAAAAAAAAA=", 16)

    # right length, but decodes to 17 bytes
    with pytest.raises(FormatError):
        Codec.decode_exact("AAAAAAAAAAAAAAAAAAAAAAA=", 16)
