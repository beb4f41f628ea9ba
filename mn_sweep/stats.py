"""
    mn-sweep: average transmitted power and throughput against position.

    NodeStatistics listens to the AP's rate/power changes and transmitted
    frames and to the bytes the STA receives. SweepController samples it
    every steps_time seconds: one (x, throughput) and one (x, power) point
    per tick, after which the accumulators are cleared, the STA is moved
    steps_size meters along x and the next tick is scheduled.

    Power is integrated in the linear domain: each data frame adds
    10 ** (dBm / 10) * airtime, so energy / steps_time is the average
    transmitted power over the interval.
"""

from mininet.log import debug, info

from mn_sweep.address import BROADCAST
from mn_sweep.mac import WIFI_MAC_DATA
from mn_sweep.phy import WifiTxVector, WIFI_PREAMBLE_LONG
from mn_sweep.simulator import InvariantError, ConfigurationError
from mn_sweep.util import db_to_linear, format_data_rate

# bytes per packet generated at the AP
PACKET_SIZE = 1420


class DurationTable(object):
    """Airtime of a fixed-size packet for every data rate the phy can
       use. Built once per run and never modified."""

    def __init__(self, entries):
        """entries: (duration in seconds, data rate in bit/s) pairs"""
        self.entries = tuple((float(duration), int(rate))
                             for duration, rate in entries)
        rates = [rate for _, rate in self.entries]
        if len(set(rates)) != len(rates):
            raise InvariantError('Duplicate data rate in duration table: %s'
                                 % rates)

    @classmethod
    def from_phy(cls, phy, packet_size=PACKET_SIZE):
        entries = []
        for i in range(phy.get_n_modes()):
            mode = phy.get_mode(i)
            tx_vector = WifiTxVector(mode, WIFI_PREAMBLE_LONG,
                                     phy.channel_width)
            rate = mode.get_data_rate(phy.channel_width)
            duration = phy.calculate_tx_duration(packet_size, tx_vector)
            debug('%d %s %s\n' % (i, duration, format_data_rate(rate)))
            entries.append((duration, rate))
        return cls(entries)

    def get_calc_tx_time(self, rate):
        for duration, entry_rate in self.entries:
            if rate == entry_rate:
                return duration
        raise InvariantError('No transmission time for data rate %s'
                             % format_data_rate(rate))

    def rates(self):
        return [rate for _, rate in self.entries]

    def __len__(self):
        return len(self.entries)


class LinkState(object):
    "Last known transmit power (dBm) and data rate (bit/s) per destination"

    def __init__(self):
        self.current_power = {}
        self.current_rate = {}

    def seed(self, dest, power, rate):
        self.current_power[dest] = power
        self.current_rate[dest] = rate

    def set_power(self, dest, power):
        self.current_power[dest] = power

    def set_rate(self, dest, rate):
        self.current_rate[dest] = rate

    def get_power(self, dest):
        if dest not in self.current_power:
            raise ConfigurationError('No transmit power known for %s' % dest)
        return self.current_power[dest]

    def get_rate(self, dest):
        if dest not in self.current_rate:
            raise ConfigurationError('No data rate known for %s' % dest)
        return self.current_rate[dest]


class Dataset(object):
    "Ordered (x, y) points, appended once per tick"

    def __init__(self, title=''):
        self.title = title
        self.points = []

    def add(self, x, y):
        self.points.append((x, y))

    @property
    def xs(self):
        return [x for x, _ in self.points]

    @property
    def ys(self):
        return [y for _, y in self.points]

    def __iter__(self):
        return iter(self.points)

    def __len__(self):
        return len(self.points)

    def __repr__(self):
        return '<Dataset %r: %d points>' % (self.title, len(self))


class NodeStatistics(object):

    def __init__(self, aps, stas, packet_size=PACKET_SIZE):
        """aps: AP devices (the first one is measured)
           stas: STA devices it transmits to
           packet_size: bytes used to build the duration table"""
        device = aps[0]
        phy = device.phy
        self.time_table = DurationTable.from_phy(phy, packet_size)
        self.link_state = LinkState()
        rate = phy.get_mode(0).get_data_rate(phy.channel_width)
        power = phy.tx_power_end
        for sta in stas:
            self.link_state.seed(sta.address, power, rate)
        self.link_state.seed(BROADCAST, power, rate)
        self.total_energy = 0.0
        self.total_time = 0.0
        self.bytes_total = 0
        self.output = Dataset('Throughput [Mbits/s]')
        self.output_power = Dataset('Transmitted power [W]')

    def phy_callback(self, packet):
        "A frame started to be transmitted; only data frames count"
        if packet.header.type == WIFI_MAC_DATA:
            self.add_data_frame(packet.header.addr1)

    def add_data_frame(self, dest):
        power = self.link_state.get_power(dest)
        airtime = self.time_table.get_calc_tx_time(
            self.link_state.get_rate(dest))
        self.total_energy += db_to_linear(power) * airtime
        self.total_time += airtime

    def power_callback(self, old_power, new_power, dest):
        self.link_state.set_power(dest, new_power)

    def rate_callback(self, old_rate, new_rate, dest):
        self.link_state.set_rate(dest, new_rate)

    def rx_callback(self, packet, from_):
        self.bytes_total += packet.size

    def reset(self):
        self.bytes_total = 0
        self.total_energy = 0.0
        self.total_time = 0.0

    def sample(self, x, steps_time):
        """Turn what was accumulated over steps_time seconds into one
           throughput and one power point at x, then start over
           returns: (throughput in Mbit/s, average power)"""
        mbs = (self.bytes_total * 8.0) / (1000000 * steps_time)
        atp = self.total_energy / steps_time
        self.reset()
        self.output.add(x, mbs)
        self.output_power.add(x, atp)
        return mbs, atp

    def connect(self, ap_device, sink):
        """Subscribe to the AP's manager and phy and to the STA's sink
           returns: the (trace source, listener id) pairs"""
        manager = ap_device.manager
        return [(manager.power_change,
                 manager.power_change.connect(self.power_callback)),
                (manager.rate_change,
                 manager.rate_change.connect(self.rate_callback)),
                (ap_device.phy.phy_tx_begin,
                 ap_device.phy.phy_tx_begin.connect(self.phy_callback)),
                (sink.rx, sink.rx.connect(self.rx_callback))]

    def get_datafile(self):
        return self.output

    def get_power_datafile(self):
        return self.output_power


class SweepController(object):

    IDLE = 'idle'
    SAMPLING = 'sampling'
    TERMINATED = 'terminated'

    def __init__(self, sim, statistics, node, steps_size, steps_time):
        """sim: simulator the ticks are scheduled on
           statistics: NodeStatistics being sampled
           node: station moved along x
           steps_size: meters added to x every tick
           steps_time: seconds between ticks"""
        if steps_time <= 0:
            raise ConfigurationError('steps_time must be positive: %s'
                                     % steps_time)
        self.sim = sim
        self.statistics = statistics
        self.node = node
        self.steps_size = steps_size
        self.steps_time = steps_time
        self.state = self.IDLE
        self.ticks = 0

    def start(self, delay):
        "First tick after delay seconds"
        self.sim.schedule(delay, self.advance_position)

    def advance_position(self):
        if self.state == self.TERMINATED:
            return
        self.state = self.SAMPLING
        mobility = self.node.mobility
        pos = list(mobility.get_position())
        self.statistics.sample(pos[0], self.steps_time)
        self.ticks += 1
        pos[0] += self.steps_size
        mobility.set_position(pos)
        info('At time %ss setting new position to %s\n'
             % (self.sim.now, mobility.get_position_str(pos)))
        self.sim.schedule(self.steps_time, self.advance_position)

    def terminate(self):
        self.state = self.TERMINATED


def power_callback(sim, old_power, new_power, dest):
    "Logs power changes; connect with functools.partial(power_callback, sim)"
    debug('%s %s Old power=%s New power=%s\n'
          % (sim.now, dest, old_power, new_power))


def rate_callback(sim, old_rate, new_rate, dest):
    debug('%s %s Old rate=%s New rate=%s\n'
          % (sim.now, dest, format_data_rate(old_rate),
             format_data_rate(new_rate)))
