#!/usr/bin/python3
# -*- encoding: utf-8 -*-

from Contrac.KeySchedule import DailyKey, RollingIdentifier


class KeyContainer(object):
    """Ordered, append-only collection of items of a single type.

    Items are owned by the container once appended.
    """

    item_type = object

    def __init__(self, items=()):
        self._items = []
        for item in items:
            self.append(item)

    def append(self, item):
        if not isinstance(item, self.item_type):
            raise TypeError("%s only holds %s items, not %s"
                            % (type(self).__name__, self.item_type.__name__, type(item).__name__))
        self._items.append(item)

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return "%s(count=%d)" % (type(self).__name__, len(self._items))

    def wipe(self):
        for item in self._items:
            item.wipe()


class DailyKeyList(KeyContainer):
    # diagnosis keys received from reporting parties

    item_type = DailyKey

    def add_diagnosis(self, dtk, dn):
        self.append(DailyKey(dtk, dn))

    def add_diagnosis_base64(self, dtk_base64, dn):
        self.append(DailyKey.from_base64(dtk_base64, dn))


class RollingIdentifierList(KeyContainer):
    # beacons captured locally, tagged with their capture interval

    item_type = RollingIdentifier

    def add_beacon(self, rpi, tin):
        self.append(RollingIdentifier(rpi, tin))

    def add_beacon_base64(self, rpi_base64, tin):
        self.append(RollingIdentifier.from_base64(rpi_base64, tin))
