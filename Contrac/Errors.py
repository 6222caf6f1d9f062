#!/usr/bin/python3
# -*- encoding: utf-8 -*-


class ContracError(Exception):
    pass


# secure random provider could not supply bytes
class EntropyError(ContracError):
    pass


# HKDF/HMAC failed or produced an unexpected length
class DerivationError(ContracError):
    pass


# malformed base64 input, wrong decoded length or wrong encoded length
class FormatError(ContracError, ValueError):
    pass


# output would not fit in the capacity given by the caller
class CapacityError(FormatError):
    pass


# operation requested before the state it depends on was set
class StateError(ContracError):
    pass
