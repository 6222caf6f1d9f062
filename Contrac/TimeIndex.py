#!/usr/bin/python3
# -*- encoding: utf-8 -*-

import time

import numpy

SECONDS_PER_DAY = 60 * 60 * 24
SECONDS_PER_INTERVAL = 60 * 10

# number of 10 minute intervals per day
INTERVAL_MAX = SECONDS_PER_DAY // SECONDS_PER_INTERVAL

DAY_NUMBER_MAX = 0xFFFFFFFF


def day_number(uetime):
    if uetime < 0:
        raise ValueError("Epoch time must not be negative.")
    return int(numpy.uint32(check_day_number(int(uetime) // SECONDS_PER_DAY)))


def time_interval_number(uetime):
    dn = day_number(uetime)
    seconds_of_day_number = numpy.uint32(int(uetime) - dn * SECONDS_PER_DAY)

    # falls in interval [0, 143]
    tin = numpy.clip(seconds_of_day_number // SECONDS_PER_INTERVAL, 0, INTERVAL_MAX - 1)
    return int(tin)


def check_day_number(dn):
    if not 0 <= dn <= DAY_NUMBER_MAX:
        raise ValueError("Day number %d out of range." % dn)
    return dn


def check_time_interval_number(tin):
    if not 0 <= tin < INTERVAL_MAX:
        raise ValueError("Time interval number %d out of range." % tin)
    return tin


# extras

def dntin2uetime(day, tin):
    return (day * SECONDS_PER_DAY) + (tin * SECONDS_PER_INTERVAL)


def epoch2str(uetime):
    return time.strftime("%Y-%m-%d %H:%M:%S", time.gmtime(uetime))
