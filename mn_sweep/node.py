"""
    mn-sweep: simulated wifi nodes.

    Node_wifi: a named node with a position, wifi devices and the
    applications packets are handed to
    AP: access point
    Station: mobile station
"""

import math

from mn_sweep.mobility import ConstantPositionMobilityModel


class Node_wifi(object):

    def __init__(self, name, position='0,0,0', **params):
        """name: name of node
           position: initial position, 'x,y,z' or [x, y, z]
           params: additional parameters (e.g. mac)"""
        self.name = name
        self.params = params
        self.mobility = ConstantPositionMobilityModel(position)
        self.devices = []
        self.applications = []

    def add_device(self, device):
        self.devices.append(device)

    def add_application(self, app):
        self.applications.append(app)

    def get_device(self, index=0):
        return self.devices[index]

    @property
    def address(self):
        return self.devices[0].address

    @property
    def position(self):
        return self.mobility.get_position()

    def setPosition(self, pos):
        "Set Position"
        self.mobility.set_position(pos)

    def get_distance_to(self, dst):
        """Get the distance between two nodes
        :param self: source node
        :param dst: destination node"""
        pos_src = self.position
        pos_dst = dst.position
        x = (pos_src[0] - pos_dst[0]) ** 2
        y = (pos_src[1] - pos_dst[1]) ** 2
        z = (pos_src[2] - pos_dst[2]) ** 2
        return round(math.sqrt(x + y + z), 2)

    def receive(self, packet, from_):
        "Packet delivered by one of our devices"
        for app in self.applications:
            app.receive(packet, from_)

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.name)

    def __str__(self):
        return self.name


class Station(Node_wifi):
    "A mobile station"
    pass


class AP(Node_wifi):
    "An access point"
    pass
