#!/usr/bin/python3
# -*- encoding: utf-8 -*-

from Contrac.Containers import DailyKeyList, RollingIdentifierList
from Contrac.KeySchedule import DailyKey, RollingIdentifier
from Contrac.Match import MatchList, MatchRecord, find_matches

OBSERVED = [(55, 1), (12, 15), (0, 5), (8787, 101), (1175, 142), (1175, 67), (187, 51), (12, 93)]


def make_beacons(tk, pairs):
    beacons = RollingIdentifierList()
    for dn, tin in pairs:
        beacons.append(RollingIdentifier.derive(DailyKey.derive(tk, dn), tin))
    return beacons


def make_diagnosis_keys(tk, days):
    diagnosis_keys = DailyKeyList()
    for dn in days:
        diagnosis_keys.add_diagnosis(DailyKey.derive(tk, dn).key, dn)
    return diagnosis_keys


def test_find_matches(tk):
    beacons = make_beacons(tk, OBSERVED)
    diagnosis_keys = make_diagnosis_keys(tk, [1175, 12])

    matches = MatchList()
    matches.find_matches(beacons, diagnosis_keys)

    assert len(matches) == 4
    assert set(matches) == {(12, 15), (1175, 142), (1175, 67), (12, 93)}
    # diagnosis key order, then interval order
    assert list(matches) == [(1175, 67), (1175, 142), (12, 15), (12, 93)]


def test_no_diagnosis_keys_means_no_matches(tk):
    matches = find_matches(MatchList(), make_beacons(tk, OBSERVED), DailyKeyList())
    assert len(matches) == 0


def test_no_beacons_means_no_matches(tk):
    matches = find_matches(MatchList(), RollingIdentifierList(), make_diagnosis_keys(tk, [12]))
    assert len(matches) == 0


def test_keys_from_another_device_do_not_match(tk):
    other_tk = bytes(range(32))
    matches = find_matches(MatchList(), make_beacons(tk, OBSERVED), make_diagnosis_keys(other_tk, [12, 1175]))
    assert len(matches) == 0


def test_matches_accumulate(tk):
    beacons = make_beacons(tk, OBSERVED)
    diagnosis_keys = make_diagnosis_keys(tk, [12])

    matches = MatchList()
    matches.find_matches(beacons, diagnosis_keys)
    matches.find_matches(beacons, diagnosis_keys)
    assert list(matches) == [(12, 15), (12, 93), (12, 15), (12, 93)]

    matches.clear()
    matches.find_matches(beacons, diagnosis_keys)
    assert len(matches) == 2


def test_wrong_capture_interval_is_not_a_match(tk, recording_log):
    rpi = RollingIdentifier.derive(DailyKey.derive(tk, 12), 15)
    beacons = RollingIdentifierList()
    beacons.add_beacon(rpi.identifier, 16)

    matches = find_matches(MatchList(), beacons, make_diagnosis_keys(tk, [12]), log=recording_log)

    assert len(matches) == 0
    assert "beacon_interval_mismatch" in recording_log.names("debug")
    level, event, kw = recording_log.events[0]
    assert kw == {"dn": 12, "tin": 15, "captured_tin": 16}


def test_match_record_time():
    match = MatchRecord(12, 15)
    assert match.day_number == 12
    assert match.time_interval_number == 15
    assert match.uetime == 12 * 86400 + 15 * 600


def test_plain_lists_are_accepted(tk):
    beacons = list(make_beacons(tk, [(3, 7)]))
    diagnosis_keys = [DailyKey.derive(tk, 3)]
    assert find_matches([], beacons, diagnosis_keys) == [(3, 7)]
