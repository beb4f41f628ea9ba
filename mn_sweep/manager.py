"""
    mn-sweep: remote station managers.

    A manager picks the data rate and transmit power used towards each
    destination and reports every change through its power_change and
    rate_change trace sources:

        power_change(old_dbm, new_dbm, address)
        rate_change(old_bps, new_bps, address)

    Implemented managers:
        ConstantRateWifiManager: fixed mode and power level
        ParfWifiManager: Power Adaptation with Rate Fallback
            (Akella et al., "Self-management in chaotic wireless
            deployments", 2007)
"""

from mininet.log import debug

from mn_sweep.phy import WifiTxVector, WIFI_PREAMBLE_LONG
from mn_sweep.simulator import ConfigurationError
from mn_sweep.trace import TracedCallback


class RemoteStation(object):

    def __init__(self, address, rate_index, power_level):
        self.address = address
        self.rate_index = rate_index
        self.prev_rate_index = rate_index
        self.power_level = power_level
        self.prev_power_level = power_level


class WifiRemoteStationManager(object):

    name = 'base'
    adapts_power = False

    def __init__(self, default_power_level=None, rts_cts_threshold=2346):
        """default_power_level: power level used when nothing else was
           chosen; defaults to the highest level of the phy
           rts_cts_threshold: frames larger than this would be protected by
           RTS/CTS (kept for reference, RTS/CTS is not simulated)"""
        self.phy = None
        self.supported = []
        self.stations = {}
        self.default_power_level = default_power_level
        self.rts_cts_threshold = rts_cts_threshold
        self.power_change = TracedCallback('PowerChange')
        self.rate_change = TracedCallback('RateChange')

    def setup_phy(self, phy):
        self.phy = phy
        self.supported = sorted(phy.modes,
                                key=lambda mode: mode.get_data_rate(
                                    phy.channel_width))
        if self.default_power_level is None:
            self.default_power_level = phy.tx_power_levels - 1
        if not 0 <= self.default_power_level < phy.tx_power_levels:
            raise ConfigurationError('Power level %s out of range [0, %d]'
                                     % (self.default_power_level,
                                        phy.tx_power_levels - 1))

    def get_rate(self, index):
        return self.supported[index].get_data_rate(self.phy.channel_width)

    def get_power(self, level):
        return self.phy.get_power_dbm(level)

    def create_station(self, address):
        return RemoteStation(address, 0, self.default_power_level)

    def lookup(self, address):
        if address not in self.stations:
            station = self.create_station(address)
            self.stations[address] = station
            power = self.get_power(station.power_level)
            rate = self.get_rate(station.rate_index)
            self.power_change(power, power, address)
            self.rate_change(rate, rate, address)
        return self.stations[address]

    def get_data_tx_vector(self, address):
        station = self.lookup(address)
        if station.rate_index != station.prev_rate_index:
            self.rate_change(self.get_rate(station.prev_rate_index),
                             self.get_rate(station.rate_index), address)
            station.prev_rate_index = station.rate_index
        if station.power_level != station.prev_power_level:
            self.power_change(self.get_power(station.prev_power_level),
                              self.get_power(station.power_level), address)
            station.prev_power_level = station.power_level
        return WifiTxVector(self.supported[station.rate_index],
                            WIFI_PREAMBLE_LONG, self.phy.channel_width,
                            station.power_level)

    def get_basic_tx_vector(self):
        "Lowest rate, default power: beacons and acks"
        return WifiTxVector(self.supported[0], WIFI_PREAMBLE_LONG,
                            self.phy.channel_width, self.default_power_level)

    def report_data_ok(self, address):
        pass

    def report_data_failed(self, address):
        pass

    def report_final_data_failed(self, address):
        pass


class ConstantRateWifiManager(WifiRemoteStationManager):

    name = 'constant'

    def __init__(self, data_mode=None, **kwargs):
        """data_mode: mode name (e.g. 'OfdmRate54Mbps'); the fastest mode
           of the phy if not given"""
        WifiRemoteStationManager.__init__(self, **kwargs)
        self.data_mode = data_mode
        self.rate_index = None

    def setup_phy(self, phy):
        WifiRemoteStationManager.setup_phy(self, phy)
        if self.data_mode is None:
            self.rate_index = len(self.supported) - 1
        else:
            mode = phy.get_mode_by_name(self.data_mode)
            self.rate_index = self.supported.index(mode)

    def create_station(self, address):
        return RemoteStation(address, self.rate_index,
                             self.default_power_level)


class ParfRemoteStation(RemoteStation):

    def __init__(self, address, rate_index, power_level):
        RemoteStation.__init__(self, address, rate_index, power_level)
        self.n_attempt = 0
        self.n_success = 0
        self.n_retry = 0
        self.using_recovery_rate = False
        self.using_recovery_power = False


class ParfWifiManager(WifiRemoteStationManager):

    name = 'parf'
    adapts_power = True

    def __init__(self, success_threshold=10, attempt_threshold=15,
                 **kwargs):
        """success_threshold: consecutive successes before raising the
           rate (or lowering the power at the highest rate)
           attempt_threshold: attempts before doing the same"""
        WifiRemoteStationManager.__init__(self, **kwargs)
        self.success_threshold = success_threshold
        self.attempt_threshold = attempt_threshold
        self.min_power = 0
        self.max_power = None

    def setup_phy(self, phy):
        WifiRemoteStationManager.setup_phy(self, phy)
        self.max_power = self.default_power_level

    def create_station(self, address):
        return ParfRemoteStation(address, len(self.supported) - 1,
                                 self.max_power)

    def report_data_failed(self, address):
        station = self.lookup(address)
        station.n_retry += 1
        station.n_success = 0

        if station.using_recovery_rate:
            if station.n_retry == 1 and station.rate_index != 0:
                station.rate_index -= 1
                station.using_recovery_rate = False
            station.n_attempt = 0
        elif station.using_recovery_power:
            if station.n_retry == 1 and station.power_level < self.max_power:
                station.power_level += 1
                station.using_recovery_power = False
            station.n_attempt = 0
        else:
            # every second consecutive failure
            if (station.n_retry - 1) % 2 == 1:
                if station.power_level == self.max_power:
                    if station.rate_index != 0:
                        station.rate_index -= 1
                else:
                    station.power_level += 1
            if station.n_retry >= 2:
                station.n_attempt = 0
        debug('parf %s: failure, rate index %d, power level %d\n'
              % (address, station.rate_index, station.power_level))

    def report_data_ok(self, address):
        station = self.lookup(address)
        station.n_attempt += 1
        station.n_success += 1
        station.n_retry = 0
        station.using_recovery_rate = False
        station.using_recovery_power = False

        if station.n_success == self.success_threshold \
                or station.n_attempt == self.attempt_threshold:
            station.n_attempt = 0
            station.n_success = 0
            if station.rate_index < len(self.supported) - 1:
                station.rate_index += 1
                station.using_recovery_rate = True
            elif station.power_level > self.min_power:
                station.power_level -= 1
                station.using_recovery_power = True

    def report_final_data_failed(self, address):
        station = self.lookup(address)
        station.n_retry = 0
        station.n_attempt = 0


managers = {'constant': ConstantRateWifiManager,
            'parf': ParfWifiManager}


def get_manager(name, **params):
    if name not in managers:
        raise ConfigurationError('Unknown station manager: %s (use one of '
                                 '%s)' % (name, ', '.join(sorted(managers))))
    return managers[name](**params)
