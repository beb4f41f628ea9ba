"""
    mn-sweep: wifi devices and the channel between them.

    A device sends one frame at a time from a drop-tail queue. The medium
    is held for DIFS + mean backoff + frame airtime, plus SIFS and an ACK
    for unicast data. The frame is handed to its receiver(s) when that
    exchange ends, unless the channel's error model corrupts it; unicast
    data failures are retried up to max_retries times.
"""

from collections import deque

from mininet.log import debug

from mn_sweep.address import Mac48Address, BROADCAST
from mn_sweep.mac import WifiMacHeader, Packet, WIFI_MAC_DATA, \
    WIFI_MAC_MGT_BEACON, DATA_OVERHEAD, ACK_SIZE, BEACON_SIZE


class WifiChannel(object):

    def __init__(self, error_model=None):
        self.devices = []
        self.error_model = error_model

    def add(self, device):
        self.devices.append(device)

    def get_receivers(self, frame, sender):
        addr1 = frame.header.addr1
        return [device for device in self.devices if device is not sender
                and (addr1.is_broadcast() or device.address == addr1)]

    def deliver(self, frame, sender):
        """Hand frame to the device(s) it is addressed to
           returns: True if at least one device received it"""
        receivers = self.get_receivers(frame, sender)
        if not receivers:
            return False
        if self.error_model and self.error_model.is_corrupt(frame):
            debug('%s lost on the channel\n' % frame)
            return False
        for device in receivers:
            device.receive(frame)
        return True


class WifiNetDevice(object):

    max_queue_size = 500
    max_retries = 7
    beacon_interval = 0.1024

    def __init__(self, sim, node, phy, manager, channel, mac=None):
        """sim: simulator
           node: node the device belongs to
           phy: WifiPhy
           manager: remote station manager choosing rate and power
           channel: WifiChannel shared with the peers
           mac: address (allocated if not given)"""
        self.sim = sim
        self.node = node
        self.phy = phy
        self.manager = manager
        self.channel = channel
        self.address = Mac48Address(mac) if mac else Mac48Address.allocate()
        self.queue = deque()
        self.current = None
        self.busy = False
        self.retries = 0
        self.tx_frames = 0
        self.rx_frames = 0
        self.drops = 0
        manager.setup_phy(phy)
        channel.add(self)
        node.add_device(self)

    def start_beacons(self):
        self.sim.schedule_now(self.send_beacon)

    def send_beacon(self):
        header = WifiMacHeader(WIFI_MAC_MGT_BEACON, BROADCAST, self.address)
        # management frames go ahead of queued data
        self.queue.appendleft(Packet(BEACON_SIZE, header))
        self.start_transmission()
        self.sim.schedule(self.beacon_interval, self.send_beacon)

    def send(self, packet, dest):
        "Queue an application packet for dest"
        if len(self.queue) >= self.max_queue_size:
            self.drops += 1
            debug('%s: queue full, dropping %s\n' % (self.node.name, packet))
            return False
        header = WifiMacHeader(WIFI_MAC_DATA, dest, self.address)
        self.queue.append(Packet(packet.size + DATA_OVERHEAD, header,
                                 payload=packet))
        self.start_transmission()
        return True

    @staticmethod
    def needs_ack(frame):
        return frame.header.is_data() and not frame.header.addr1.is_broadcast()

    def start_transmission(self):
        if self.busy:
            return
        if self.current is None:
            if not self.queue:
                return
            self.current = self.queue.popleft()
        frame = self.current
        if frame.header.is_data():
            tx_vector = self.manager.get_data_tx_vector(frame.header.addr1)
        else:
            tx_vector = self.manager.get_basic_tx_vector()
        self.busy = True
        self.tx_frames += 1
        duration = self.phy.difs + self.phy.backoff + \
            self.phy.send(frame, tx_vector)
        if self.needs_ack(frame):
            ack_vector = self.manager.get_basic_tx_vector()
            duration += self.phy.sifs + \
                self.phy.calculate_tx_duration(ACK_SIZE, ack_vector)
        self.sim.schedule(duration, self.end_transmission, frame)

    def end_transmission(self, frame):
        self.busy = False
        delivered = self.channel.deliver(frame, self)
        if self.needs_ack(frame):
            dest = frame.header.addr1
            if delivered:
                self.manager.report_data_ok(dest)
                self.finish()
            else:
                self.manager.report_data_failed(dest)
                self.retries += 1
                if self.retries > self.max_retries:
                    debug('%s: giving up on %s after %d retries\n'
                         % (self.node.name, frame, self.max_retries))
                    self.manager.report_final_data_failed(dest)
                    self.drops += 1
                    self.finish()
        else:
            self.finish()
        self.start_transmission()

    def finish(self):
        self.retries = 0
        self.current = None

    def receive(self, frame):
        self.rx_frames += 1
        if frame.header.is_data():
            self.node.receive(frame.payload, frame.header.addr2)

    def __repr__(self):
        return '<WifiNetDevice %s %s>' % (self.node.name, self.address)
