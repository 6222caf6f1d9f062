#!/usr/bin/python3
# -*- encoding: utf-8 -*-

import collections

import Contrac.Log as Log
import Contrac.TimeIndex as TimeIndex
from Contrac.Containers import KeyContainer
from Contrac.KeySchedule import RollingIdentifier


class MatchRecord(collections.namedtuple("MatchRecord", ["day_number", "time_interval_number"])):
    __slots__ = ()

    @property
    def uetime(self):
        # "recover" date and time from Day Number and Time Interval Number
        return TimeIndex.dntin2uetime(self.day_number, self.time_interval_number)


class MatchList(KeyContainer):
    """Results of matching; the only container that can be cleared."""

    item_type = MatchRecord

    def clear(self):
        self._items.clear()

    wipe = clear

    def find_matches(self, beacons, diagnosis_keys, log=None):
        return find_matches(self, beacons, diagnosis_keys, log)


def find_matches(matches, beacons, diagnosis_keys, log=None):
    """Append a MatchRecord for every beacon a diagnosis key could have produced.

    Every diagnosis key is expanded into its rolling identifiers for all
    intervals of the day and each one is compared against every beacon.
    A byte match only counts when the beacon was captured in the same
    interval. matches is never cleared here, so repeated calls accumulate.
    """
    log = Log.get_logger(__name__, log)

    for dtk in diagnosis_keys:
        # generate all possible RPIs for this dtk and compare against the beacons
        for tin in range(TimeIndex.INTERVAL_MAX):
            generated = RollingIdentifier.derive(dtk, tin)

            for rpi in beacons:
                if rpi != generated:
                    continue

                if rpi.time_interval_number != tin:
                    log.debug("beacon_interval_mismatch", dn=dtk.day_number, tin=tin,
                              captured_tin=rpi.time_interval_number)
                    continue

                matches.append(MatchRecord(dtk.day_number, tin))

            generated.wipe()

    log.debug("matching_complete", diagnosis_keys=len(diagnosis_keys),
              beacons=len(beacons), matches=len(matches))

    return matches
