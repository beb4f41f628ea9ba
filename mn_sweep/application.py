"""
    mn-sweep: traffic applications.

    OnOffApplication: constant bit rate source (always "on")
    PacketSink: counts what arrives; every packet fires rx(packet, from_)
"""

from mininet.log import debug

from mn_sweep.mac import Packet
from mn_sweep.simulator import ConfigurationError
from mn_sweep.trace import TracedCallback
from mn_sweep.util import parse_data_rate, format_data_rate


class Application(object):

    def __init__(self, sim, node):
        self.sim = sim
        self.node = node
        self.running = False
        node.add_application(self)

    def start(self, at):
        "Start the application at the given simulated time"
        self.sim.schedule(max(at - self.sim.now, 0), self.start_application)

    def stop(self, at):
        self.sim.schedule(max(at - self.sim.now, 0), self.stop_application)

    def start_application(self):
        self.running = True

    def stop_application(self):
        self.running = False

    def receive(self, packet, from_):
        pass


class OnOffApplication(Application):

    def __init__(self, sim, node, remote, data_rate='54Mb/s',
                 packet_size=1420):
        """remote: address the packets are sent to
           data_rate: e.g. '54Mb/s' or bit/s
           packet_size: bytes per packet"""
        Application.__init__(self, sim, node)
        self.remote = remote
        self.data_rate = parse_data_rate(data_rate)
        if self.data_rate <= 0 or packet_size <= 0:
            raise ConfigurationError('OnOffApplication needs a positive '
                                     'data rate and packet size')
        self.packet_size = packet_size
        self.interval = packet_size * 8.0 / self.data_rate
        self.event = None
        self.tx_packets = 0
        self.tx_bytes = 0

    def start_application(self):
        debug('%s: sending %s to %s\n' % (self.node.name,
                                          format_data_rate(self.data_rate),
                                          self.remote))
        Application.start_application(self)
        self.send_packet()

    def stop_application(self):
        Application.stop_application(self)
        self.sim.cancel(self.event)
        self.event = None

    def send_packet(self):
        if not self.running:
            return
        packet = Packet(self.packet_size)
        self.node.get_device().send(packet, self.remote)
        self.tx_packets += 1
        self.tx_bytes += packet.size
        self.event = self.sim.schedule(self.interval, self.send_packet)


class PacketSink(Application):

    def __init__(self, sim, node):
        Application.__init__(self, sim, node)
        self.total_rx = 0
        self.rx = TracedCallback('Rx')

    def receive(self, packet, from_):
        if not self.running:
            return
        self.total_rx += packet.size
        self.rx(packet, from_)
