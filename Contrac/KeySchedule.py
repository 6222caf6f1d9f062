#!/usr/bin/python3
# -*- encoding: utf-8 -*-

import Contrac.Codec as Codec
import Contrac.ExternalFunctions as ExtFunc
import Contrac.TimeIndex as TimeIndex
from Contrac.Errors import DerivationError, FormatError

TK_SIZE = 32
TK_SIZE_BASE64 = Codec.encoded_size(TK_SIZE) - 1

DTK_SIZE = 16
DTK_SIZE_BASE64 = Codec.encoded_size(DTK_SIZE) - 1

RPI_SIZE = 16
RPI_SIZE_BASE64 = Codec.encoded_size(RPI_SIZE) - 1

# labels are NUL terminated on the wire
DTK_INFO_PREFIX = "CT-DTK".encode("utf-8") + b"\x00"
RPI_INFO_PREFIX = "CT-RPI".encode("utf-8") + b"\x00"

DTK_SALT = bytes(4)


def tracing_key(rng=None):
    return ExtFunc.crng(TK_SIZE, rng)


def daily_tracing_key(tk, dn):
    # dtk_i <- HKDF(tk, NULL, (UTF8("CT-DTK") || D_i), 16)
    if len(tk) != TK_SIZE:
        raise FormatError("Tracing key must be %d bytes." % TK_SIZE)
    TimeIndex.check_day_number(dn)

    info = DTK_INFO_PREFIX + dn.to_bytes(4, 'little')
    try:
        dtk = ExtFunc.hkdf(bytes(tk), DTK_SALT, info, DTK_SIZE)
    except Exception as e:
        raise DerivationError("Error generating daily key: %s" % e) from e

    if len(dtk) != DTK_SIZE:
        raise DerivationError("Daily key has incorrect size of %d bytes." % len(dtk))

    return dtk


def rolling_proximity_identifier(dtk, tin):
    # RPI_{i,j} <- Truncate(HMAC(dtk_i, (UTF8("CT-RPI") || TIN_j)), 16)
    if len(dtk) != DTK_SIZE:
        raise FormatError("Daily key must be %d bytes." % DTK_SIZE)
    TimeIndex.check_time_interval_number(tin)

    try:
        hmac = ExtFunc.hmac(bytes(dtk), RPI_INFO_PREFIX + bytes([tin]))
    except Exception as e:
        raise DerivationError("Error generating rolling proximity id: %s" % e) from e

    return ExtFunc.truncate(hmac, RPI_SIZE)


class DailyKey(object):
    """A 16 byte daily tracing key together with its day number.

    The key bytes live in a bytearray so wipe() can clear them in place.
    When used as a diagnosis key the day number is the one disclosed by the
    reporting party and is never recomputed.
    """

    def __init__(self, dtk=None, dn=0):
        if dtk is None:
            dtk = bytes(DTK_SIZE)
        if len(dtk) != DTK_SIZE:
            raise FormatError("Daily key must be %d bytes, got %d." % (DTK_SIZE, len(dtk)))

        self._dtk = bytearray(dtk)
        self._dn = TimeIndex.check_day_number(dn)

    @classmethod
    def derive(cls, tk, dn):
        return cls(daily_tracing_key(tk, dn), dn)

    @classmethod
    def from_base64(cls, dtk_base64, dn):
        return cls(Codec.decode_exact(dtk_base64, DTK_SIZE), dn)

    @property
    def key(self):
        return bytes(self._dtk)

    @property
    def day_number(self):
        return self._dn

    def base64(self):
        encoded = Codec.encode(self._dtk, DTK_SIZE_BASE64 + 1)
        if len(encoded) != DTK_SIZE_BASE64:
            raise FormatError("Base64 daily key has incorrect size of %d bytes." % len(encoded))
        return encoded

    def wipe(self):
        ExtFunc.wipe(self._dtk)
        self._dn = 0

    def __eq__(self, other):
        if not isinstance(other, DailyKey):
            return NotImplemented
        return self._dn == other._dn and ExtFunc.compare(self._dtk, other._dtk)

    __hash__ = None

    def __repr__(self):
        return "DailyKey(dn=%d)" % self._dn


class RollingIdentifier(object):
    """A 16 byte rolling proximity identifier and its time interval number.

    For an observed beacon the interval is the one at which it was captured.
    Equality only looks at the identifier bytes.
    """

    def __init__(self, rpi=None, tin=0):
        if rpi is None:
            rpi = bytes(RPI_SIZE)
        if len(rpi) != RPI_SIZE:
            raise FormatError("Rolling proximity id must be %d bytes, got %d." % (RPI_SIZE, len(rpi)))

        self._rpi = bytearray(rpi)
        self._tin = TimeIndex.check_time_interval_number(tin)

    @classmethod
    def derive(cls, dtk, tin):
        if isinstance(dtk, DailyKey):
            dtk = dtk._dtk
        return cls(rolling_proximity_identifier(dtk, tin), tin)

    @classmethod
    def from_base64(cls, rpi_base64, tin):
        return cls(Codec.decode_exact(rpi_base64, RPI_SIZE), tin)

    @property
    def identifier(self):
        return bytes(self._rpi)

    @property
    def time_interval_number(self):
        return self._tin

    def base64(self):
        encoded = Codec.encode(self._rpi, RPI_SIZE_BASE64 + 1)
        if len(encoded) != RPI_SIZE_BASE64:
            raise FormatError("Base64 proximity id has incorrect size of %d bytes." % len(encoded))
        return encoded

    def wipe(self):
        ExtFunc.wipe(self._rpi)
        self._tin = 0

    def __eq__(self, other):
        if not isinstance(other, RollingIdentifier):
            return NotImplemented
        return ExtFunc.compare(self._rpi, other._rpi)

    __hash__ = None

    def __repr__(self):
        return "RollingIdentifier(tin=%d)" % self._tin
