"802.11 frames as seen by the measurement: type, addresses and size"

from itertools import count

WIFI_MAC_DATA = 'DATA'
WIFI_MAC_MGT_BEACON = 'MGT_BEACON'

# header + LLC/SNAP + FCS added to every data payload
DATA_OVERHEAD = 24 + 8 + 4
ACK_SIZE = 14
BEACON_SIZE = 80


class WifiMacHeader(object):

    def __init__(self, type_, addr1, addr2=None):
        """type_: WIFI_MAC_DATA or WIFI_MAC_MGT_BEACON
           addr1: receiver address
           addr2: transmitter address"""
        self.type = type_
        self.addr1 = addr1
        self.addr2 = addr2

    def is_data(self):
        return self.type == WIFI_MAC_DATA

    def __repr__(self):
        return '%s %s -> %s' % (self.type, self.addr2, self.addr1)


class Packet(object):

    uids = count()

    def __init__(self, size, header=None, payload=None):
        """size: bytes
           payload: application packet carried by a data frame"""
        self.uid = next(self.uids)
        self.size = size
        self.header = header
        self.payload = payload

    def __repr__(self):
        return 'Packet(uid=%d, size=%d, %s)' % (self.uid, self.size,
                                                self.header)
