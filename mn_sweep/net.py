"""
    mn-sweep: power and throughput sweeps over a simulated WiFi link

    Mininet_sweep builds one AP and one station, sends constant bit rate
    traffic from the AP to the station and moves the station along x
    every steps_time seconds, sampling throughput and average transmitted
    power at each position.

    Example:

        net = Mininet_sweep(manager='parf', steps=10, steps_size=1)
        net.addAccessPoint('ap1', position='0,0,0')
        net.addStation('sta1', position='-1,3,0')
        net.build()
        stats = net.run()
"""

from functools import partial

from mininet.log import info, debug, warn

from mn_sweep import VERSION
from mn_sweep.application import OnOffApplication, PacketSink
from mn_sweep.device import WifiChannel, WifiNetDevice
from mn_sweep.error_model import RateErrorModel
from mn_sweep.manager import ConstantRateWifiManager, get_manager, managers
from mn_sweep.node import AP, Station
from mn_sweep.phy import WifiPhy
from mn_sweep.simulator import Simulator, ConfigurationError
from mn_sweep.stats import NodeStatistics, SweepController, \
    power_callback, rate_callback

# traffic starts here; the first sample covers [0.5, 0.5 + steps_time]
APP_START = 0.5


class Mininet_sweep(object):

    def __init__(self, standard='a', manager='parf', max_power=-40.0,
                 min_power=-70.0, power_levels=30, rts_threshold=2346,
                 packet_size=1420, data_rate='54Mb/s', steps=1,
                 steps_size=0.1, steps_time=1.0, error_rate=0.0, seed=None,
                 channel_width=None, data_mode=None, accessPoint=AP,
                 station=Station):
        """Create a sweep scenario.
           standard: 802.11 standard ('a', 'b' or 'g')
           manager: rate/power manager of the AP ('parf' or 'constant')
           max_power: highest AP transmit power (dBm)
           min_power: lowest AP transmit power (dBm)
           power_levels: number of AP power levels
           rts_threshold: RTS/CTS threshold (bytes)
           packet_size: bytes per CBR packet
           data_rate: CBR rate from AP to station
           steps: number of samples/position changes
           steps_size: meters the station moves along x per step
           steps_time: seconds per step
           error_rate: probability that a frame is lost
           seed: seed for the error model
           channel_width: MHz, the first width of the standard if not given
           data_mode: mode used by the 'constant' manager
           (e.g. 'OfdmRate6Mbps'), its fastest mode if not given"""
        if min_power > max_power:
            raise ConfigurationError('min_power (%s) above max_power (%s)'
                                     % (min_power, max_power))
        if power_levels < 1:
            raise ConfigurationError('power_levels must be at least 1')
        if steps < 0:
            raise ConfigurationError('steps must not be negative: %s' % steps)
        if steps_time <= 0:
            raise ConfigurationError('steps_time must be positive: %s'
                                     % steps_time)
        if data_mode and manager != ConstantRateWifiManager.name:
            raise ConfigurationError('data_mode needs the constant manager')
        self.standard = standard
        self.manager = manager
        self.max_power = float(max_power)
        self.min_power = float(min_power)
        self.power_levels = int(power_levels)
        self.rts_threshold = rts_threshold
        self.packet_size = packet_size
        self.data_rate = data_rate
        self.steps = int(steps)
        self.steps_size = float(steps_size)
        self.steps_time = float(steps_time)
        self.error_rate = error_rate
        self.seed = seed
        self.channel_width = channel_width
        self.data_mode = data_mode
        self.accessPoint = accessPoint
        self.station = station
        self.aps = []
        self.stations = []
        self.nameToNode = {}
        self.sim = None
        self.statistics = None
        self.controller = None
        self.apps = []
        self.built = False

    def __getitem__(self, key):
        "net[name] operator: Return node with given name"
        return self.nameToNode[key]

    def addAccessPoint(self, name, cls=None, **params):
        """Add AccessPoint.
           name: name of the access point
           cls: custom class (optional)
           params: position, mac
           returns: added access point"""
        params.setdefault('position', '0,0,0')
        if not cls:
            cls = self.accessPoint
        ap = cls(name, **params)
        self.aps.append(ap)
        self.nameToNode[name] = ap
        return ap

    def addStation(self, name, cls=None, **params):
        """Add Station.
           name: name of the station
           cls: custom class (optional)
           params: position, mac
           returns: added station"""
        params.setdefault('position', '-1,3,0')
        if not cls:
            cls = self.station
        sta = cls(name, **params)
        self.stations.append(sta)
        self.nameToNode[name] = sta
        return sta

    def build(self):
        "Build devices, traffic and measurement for one AP and one station"
        if len(self.aps) != 1 or len(self.stations) != 1:
            raise ConfigurationError('A sweep needs exactly one access point '
                                     'and one station (got %d and %d)'
                                     % (len(self.aps), len(self.stations)))
        ap, sta = self.aps[0], self.stations[0]
        self.sim = Simulator()
        error_model = None
        if self.error_rate:
            error_model = RateErrorModel(self.error_rate, self.seed)
        channel = WifiChannel(error_model)

        info('*** Configuring wifi nodes (802.11%s, %s)\n'
             % (self.standard, self.manager))
        ap_phy = WifiPhy(self.standard, channel_width=self.channel_width,
                         tx_power_start=self.min_power,
                         tx_power_end=self.max_power,
                         tx_power_levels=self.power_levels)
        params = {}
        if self.data_mode:
            params['data_mode'] = self.data_mode
        ap_manager = get_manager(self.manager,
                                 default_power_level=self.power_levels - 1,
                                 rts_cts_threshold=self.rts_threshold,
                                 **params)
        ap_device = WifiNetDevice(self.sim, ap, ap_phy, ap_manager, channel,
                                  mac=ap.params.get('mac'))
        sta_phy = WifiPhy(self.standard, channel_width=self.channel_width,
                          tx_power_start=self.max_power,
                          tx_power_end=self.max_power)
        sta_manager = ConstantRateWifiManager(
            rts_cts_threshold=self.rts_threshold)
        sta_device = WifiNetDevice(self.sim, sta, sta_phy, sta_manager,
                                   channel, mac=sta.params.get('mac'))
        debug('%s %s\n%s %s\n' % (ap, ap_device.address,
                                  sta, sta_device.address))

        info('*** Configuring traffic\n')
        source = OnOffApplication(self.sim, ap, sta_device.address,
                                  data_rate=self.data_rate,
                                  packet_size=self.packet_size)
        sink = PacketSink(self.sim, sta)
        self.apps = [source, sink]

        self.statistics = NodeStatistics([ap_device], [sta_device],
                                         self.packet_size)
        self.statistics.connect(ap_device, sink)
        ap_manager.power_change.connect(partial(power_callback, self.sim))
        ap_manager.rate_change.connect(partial(rate_callback, self.sim))

        self.controller = SweepController(self.sim, self.statistics, sta,
                                          self.steps_size, self.steps_time)
        ap_device.start_beacons()
        self.built = True

    @property
    def simu_time(self):
        "End of the run, half a step after the last tick is due"
        last_tick = APP_START + self.steps * self.steps_time
        return max((self.steps + 1) * self.steps_time,
                   last_tick + self.steps_time / 2.0)

    def run(self):
        """Run the sweep
           returns: NodeStatistics holding both series"""
        if not self.built:
            self.build()
        if self.steps == 0:
            warn('*** steps = 0: finishing without running the simulation\n')
            return self.statistics
        info('*** mn-sweep %s: %d steps of %sm every %ss (%ss)\n'
             % (VERSION, self.steps, self.steps_size, self.steps_time,
                self.simu_time))
        for app in self.apps:
            app.start(APP_START)
            app.stop(self.simu_time)
        self.controller.start(APP_START + self.steps_time)
        self.sim.stop(self.simu_time)
        self.sim.run()
        self.controller.terminate()
        self.sim.destroy()
        info('*** Done: %d samples\n' % self.controller.ticks)
        return self.statistics

    @property
    def adapts_power(self):
        return managers[self.manager].adapts_power
