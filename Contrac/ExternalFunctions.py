#!/usr/bin/python3
# -*- encoding: utf-8 -*-

import hashlib
import hmac as hmac_i
import secrets

import hkdf as hkdf_i

from Contrac.Errors import EntropyError


def hkdf(key, salt, info, output_length):
    f = hkdf_i.Hkdf(salt, key, hash=hashlib.sha256)
    return f.expand(info, output_length)


def hmac(salt, data):
    return hmac_i.new(salt, data, hashlib.sha256).digest()


def truncate(data, len):
    return data[:len]


def compare(left, right):
    return hmac_i.compare_digest(bytes(left), bytes(right))


def crng(output_length, rng=None):
    """Draw output_length bytes from a cryptographically secure source.

    rng is any callable taking a length and returning that many bytes,
    secrets.token_bytes when not given. Failures surface as EntropyError.
    """
    if rng is None:
        rng = secrets.token_bytes

    try:
        data = rng(output_length)
    except (OSError, NotImplementedError) as e:
        raise EntropyError("Error generating random bytes: %s" % e) from e

    if data is None or len(data) != output_length:
        raise EntropyError("Random source returned %s bytes, expected %d."
                           % (None if data is None else len(data), output_length))

    return bytes(data)


def wipe(buffer):
    # only mutable buffers can be cleared, bytes objects are left to the gc
    if isinstance(buffer, bytearray):
        buffer[:] = bytes(len(buffer))
    elif isinstance(buffer, memoryview) and not buffer.readonly:
        buffer[:] = bytes(buffer.nbytes)
