#!/usr/bin/python3
# -*- encoding: utf-8 -*-

import json
import sys

import Contrac.Log as Log
import Contrac.TimeIndex as TimeIndex
from Contrac.Containers import DailyKeyList, RollingIdentifierList
from Contrac.Errors import ContracError
from Contrac.Match import MatchList
from Contrac.TracingState import TracingState

USAGE = """usage: %s <command> [<args>]

    generate                                 print a new tracing key
    keys <tk_base64> <dn> [<tin>]            print the daily key and rolling proximity id
    now <tk_base64>                          print the keys for the current time
    match <beacons.json> <diagnosis.json>    check captured beacons against diagnosis keys
"""


def cmd_generate(args):
    with TracingState() as state:
        state.generate_secret()
        print(state.secret_base64())
    return 0


def cmd_keys(args):
    if len(args) not in (2, 3):
        return None

    with TracingState() as state:
        state.set_secret_base64(args[0])
        state.set_day(int(args[1]))
        print("dtk=%s dn=%d" % (state.daily_key_base64(), state.day_number))

        if len(args) == 3:
            state.set_interval(int(args[2]))
            print("rpi=%s tin=%d" % (state.identifier_base64(), state.time_interval_number))
    return 0


def cmd_now(args):
    if len(args) != 1:
        return None

    with TracingState() as state:
        state.set_secret_base64(args[0])
        state.sync_to_now()

        tepoch = TimeIndex.dntin2uetime(state.day_number, state.time_interval_number)
        print("dtk=%s dn=%d" % (state.daily_key_base64(), state.day_number))
        print("rpi=%s tin=%d @ %s" % (state.identifier_base64(), state.time_interval_number,
                                      TimeIndex.epoch2str(tepoch)))
    return 0


def load_beacons(filename, beacons):
    with open(filename, 'r') as fd:
        for entry in json.load(fd):
            beacons.add_beacon_base64(entry['rpi'], int(entry['tin']))


def load_diagnosis_keys(filename, diagnosis_keys):
    with open(filename, 'r') as fd:
        for entry in json.load(fd):
            diagnosis_keys.add_diagnosis_base64(entry['dtk'], int(entry['dn']))


def cmd_match(args):
    if len(args) != 2:
        return None

    beacons = RollingIdentifierList()
    diagnosis_keys = DailyKeyList()

    try:
        load_beacons(args[0], beacons)
        load_diagnosis_keys(args[1], diagnosis_keys)

        matches = MatchList()
        matches.find_matches(beacons, diagnosis_keys)
    finally:
        beacons.wipe()
        diagnosis_keys.wipe()

    for match in matches:
        print("MATCH: dn=%d tin=%d %s"
              % (match.day_number, match.time_interval_number, TimeIndex.epoch2str(match.uetime)))
    print("%d match(es)" % len(matches))
    return 0


COMMANDS = {
    'generate': cmd_generate,
    'keys': cmd_keys,
    'now': cmd_now,
    'match': cmd_match,
}


def main(argv=None):
    if argv is None:
        argv = sys.argv

    Log.configure_logging()
    log = Log.get_logger(__name__)

    if len(argv) < 2 or argv[1] not in COMMANDS:
        print(USAGE % argv[0], file=sys.stderr)
        return 1

    try:
        result = COMMANDS[argv[1]](argv[2:])
    except (ContracError, ValueError, TypeError, KeyError, OSError) as e:
        log.error("command_failed", command=argv[1], error=str(e))
        print("error: %s" % e, file=sys.stderr)
        return 1

    if result is None:
        print(USAGE % argv[0], file=sys.stderr)
        return 1

    return result


if __name__ == '__main__':
    sys.exit(main())
