#!/usr/bin/python3
# -*- encoding: utf-8 -*-

import enum
import time

import Contrac.Codec as Codec
import Contrac.ExternalFunctions as ExtFunc
import Contrac.KeySchedule as KeySch
import Contrac.Log as Log
import Contrac.TimeIndex as TimeIndex
from Contrac.Errors import ContracError, FormatError, StateError
from Contrac.KeySchedule import DailyKey, RollingIdentifier


class Status(enum.IntFlag):
    EMPTY = 0
    SECRET = 1 << 0
    DAILY = 1 << 1
    INTERVAL = 1 << 2
    INITIALISED = SECRET | DAILY | INTERVAL


class TracingState(object):
    """Tracing key plus the daily key and rolling identifier derived from it.

    Status only advances when a derivation succeeds, so a failed set_day()
    or set_interval() leaves the previously derived keys in place.

    rng is a callable returning n secure random bytes, clock returns the
    current epoch seconds and log is a diagnostic sink (see Contrac.Log).
    Not safe for concurrent use without external locking.
    """

    def __init__(self, rng=None, clock=None, log=None):
        self._rng = rng
        self._clock = clock or time.time
        self._log = Log.get_logger(__name__, log)

        self._tk = bytearray(KeySch.TK_SIZE)
        self._dtk = DailyKey()
        self._rpi = RollingIdentifier()
        self._status = Status.EMPTY

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.wipe()
        return False

    @property
    def status(self):
        return self._status

    @property
    def is_initialised(self):
        return (self._status & Status.INITIALISED) == Status.INITIALISED

    def generate_secret(self):
        # tk <- CRNG(32)
        try:
            tk = KeySch.tracing_key(self._rng)
        except ContracError as e:
            self._log.error("tracing_key_generation_failed", error=str(e))
            raise

        self._assign_secret(tk)

    def set_secret(self, tk):
        if len(tk) != KeySch.TK_SIZE:
            self._log.error("tracing_key_wrong_size", size=len(tk), expected=KeySch.TK_SIZE)
            raise FormatError("Tracing key must be %d bytes, got %d." % (KeySch.TK_SIZE, len(tk)))

        self._assign_secret(tk)

    def set_secret_base64(self, tk_base64):
        try:
            tk = Codec.decode_exact(tk_base64, KeySch.TK_SIZE)
        except FormatError as e:
            self._log.error("tracing_key_base64_invalid", error=str(e))
            raise

        self._assign_secret(tk)

    def _assign_secret(self, tk):
        # keys derived from a different tracing key are no longer valid
        if not (self._status & Status.SECRET and ExtFunc.compare(self._tk, tk)):
            self._dtk.wipe()
            self._rpi.wipe()
            self._status &= ~(Status.DAILY | Status.INTERVAL)

        self._tk[:] = tk
        self._status |= Status.SECRET

    def set_day(self, dn):
        if not self._status & Status.SECRET:
            self._log.error("daily_key_without_tracing_key", dn=dn)
            raise StateError("A tracing key must be set before the day number.")

        try:
            dtk = DailyKey.derive(self._tk, dn)
        except ContracError as e:
            self._log.error("daily_key_generation_failed", dn=dn, error=str(e))
            raise

        self._dtk.wipe()
        self._dtk = dtk
        self._status |= Status.DAILY
        self._log.debug("daily_key_set", dn=dn)

    def set_interval(self, tin):
        if not self._status & Status.DAILY:
            self._log.error("proximity_id_without_daily_key", tin=tin)
            raise StateError("A daily key must be set before the time interval number.")

        try:
            rpi = RollingIdentifier.derive(self._dtk, tin)
        except ContracError as e:
            self._log.error("proximity_id_generation_failed", tin=tin, error=str(e))
            raise

        self._rpi.wipe()
        self._rpi = rpi
        self._status |= Status.INTERVAL
        self._log.debug("proximity_id_set", dn=self._dtk.day_number, tin=tin)

    def sync_to_now(self):
        """Bring the derived keys in line with the clock.

        Generates a tracing key if none is set. Keys are only derived again
        when the day or interval changed, or were never set. Returns True if
        a new rolling identifier was produced.
        """
        if not self._status & Status.SECRET:
            # no tracing key has been set, so generate a random one
            self.generate_secret()

        tepoch = self._clock()

        dn_now = TimeIndex.day_number(tepoch)
        dn_stored = self._dtk.day_number
        if dn_now != dn_stored or not self._status & Status.DAILY:
            self.set_day(dn_now)

        tin_now = TimeIndex.time_interval_number(tepoch)
        tin_stored = self._rpi.time_interval_number
        if tin_now != tin_stored or dn_now != dn_stored or not self._status & Status.INTERVAL:
            self.set_interval(tin_now)
            return True

        return False

    @property
    def secret(self):
        return bytes(self._tk) if self._status & Status.SECRET else None

    def secret_base64(self):
        if not self._status & Status.SECRET:
            return None

        encoded = Codec.encode(self._tk, KeySch.TK_SIZE_BASE64 + 1)
        if len(encoded) != KeySch.TK_SIZE_BASE64:
            self._log.error("tracing_key_base64_wrong_size", size=len(encoded))
            raise FormatError("Base64 tracing key has incorrect size of %d bytes." % len(encoded))
        return encoded

    @property
    def daily_key(self):
        return self._dtk.key if self._status & Status.DAILY else None

    def daily_key_base64(self):
        return self._dtk.base64() if self._status & Status.DAILY else None

    @property
    def day_number(self):
        return self._dtk.day_number if self._status & Status.DAILY else None

    def diagnosis_key(self):
        # independent copy, safe to hand out for disclosure
        if not self._status & Status.DAILY:
            return None
        return DailyKey(self._dtk.key, self._dtk.day_number)

    @property
    def identifier(self):
        return self._rpi.identifier if self._status & Status.INTERVAL else None

    def identifier_base64(self):
        return self._rpi.base64() if self._status & Status.INTERVAL else None

    @property
    def time_interval_number(self):
        return self._rpi.time_interval_number if self._status & Status.INTERVAL else None

    def wipe(self):
        ExtFunc.wipe(self._tk)
        self._dtk.wipe()
        self._rpi.wipe()
        self._status = Status.EMPTY
