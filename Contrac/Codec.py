#!/usr/bin/python3
# -*- encoding: utf-8 -*-

import base64
import binascii

from Contrac.Errors import CapacityError, FormatError


# sizes include one slot for a terminator
def encoded_size(binary_size):
    return ((binary_size + 2) // 3) * 4 + 1


def decoded_size(base64_size):
    return ((base64_size + 3) // 4) * 3 + 1


def encode(data, capacity=None):
    """Base64 encode data (RFC 4648, padded).

    If capacity is given the encoded text plus terminator must fit into it,
    otherwise CapacityError is raised. Nothing is ever truncated.
    """
    text = binascii.b2a_base64(bytes(data), newline=False).decode("ascii")

    if capacity is not None and len(text) + 1 > capacity:
        raise CapacityError("Base64 output needs %d bytes, capacity is %d."
                            % (len(text) + 1, capacity))

    return text


def decode(text, capacity=None):
    if isinstance(text, str):
        try:
            text = text.encode("ascii")
        except UnicodeEncodeError as e:
            raise FormatError("Base64 input is not ASCII.") from e

    try:
        data = base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise FormatError("Invalid base64 input: %s" % e) from e

    if capacity is not None and len(data) + 1 > capacity:
        raise CapacityError("Binary output needs %d bytes, capacity is %d."
                            % (len(data) + 1, capacity))

    return data


def decode_exact(text, size):
    # fixed-size keys: check the text length first, then the decoded length
    expected = encoded_size(size) - 1
    if len(text) != expected:
        raise FormatError("Base64 value has incorrect size of %d. Should be %d."
                          % (len(text), expected))

    data = decode(text)
    if len(data) != size:
        raise FormatError("Base64 value decodes to %d bytes. Should be %d."
                          % (len(data), size))

    return data
