"48-bit hardware addresses"

from functools import total_ordering

from mininet.util import macColonHex

from mn_sweep.simulator import ConfigurationError


@total_ordering
class Mac48Address(object):

    next_mac = 1  # start for address allocation

    def __init__(self, mac):
        """mac: colon-hex string (e.g. '00:00:00:00:00:01') or
           unsigned int"""
        if isinstance(mac, Mac48Address):
            self.value = mac.value
        elif isinstance(mac, int):
            if not 0 <= mac <= 0xffffffffffff:
                raise ConfigurationError('MAC address out of range: %s' % mac)
            self.value = mac
        else:
            self.value = self.parse(mac)

    @staticmethod
    def parse(mac):
        pieces = str(mac).strip().split(':')
        if len(pieces) != 6:
            raise ConfigurationError('Invalid MAC address: %s' % mac)
        value = 0
        for piece in pieces:
            try:
                byte = int(piece, 16)
            except ValueError:
                raise ConfigurationError('Invalid MAC address: %s' % mac)
            if len(piece) > 2 or byte > 0xff:
                raise ConfigurationError('Invalid MAC address: %s' % mac)
            value = (value << 8) | byte
        return value

    @classmethod
    def allocate(cls):
        "Next unused address: 00:00:00:00:00:01, 00:00:00:00:00:02, ..."
        mac = cls(cls.next_mac)
        cls.next_mac += 1
        return mac

    @classmethod
    def reset_allocation(cls):
        cls.next_mac = 1

    def is_broadcast(self):
        return self.value == 0xffffffffffff

    def __eq__(self, other):
        if not isinstance(other, Mac48Address):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other):
        if not isinstance(other, Mac48Address):
            return NotImplemented
        return self.value < other.value

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return macColonHex(self.value)

    def __repr__(self):
        return "Mac48Address('%s')" % self


BROADCAST = Mac48Address('ff:ff:ff:ff:ff:ff')
