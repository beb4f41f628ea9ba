"""
    mn-sweep: 802.11 a/b/g physical layer.

    Only what the measurement needs is modelled: the set of modes each
    standard supports, their data rates at a given channel width, frame
    airtime and the transmit power levels. Propagation and reception are
    not modelled here.
"""

from mininet.log import debug

from mn_sweep.simulator import ConfigurationError
from mn_sweep.trace import TracedCallback

DSSS = 'DSSS'
OFDM = 'OFDM'
ERP_OFDM = 'ERP_OFDM'

WIFI_PREAMBLE_LONG = 'long'
WIFI_PREAMBLE_SHORT = 'short'


def ceil_div(a, b):
    return -(-a // b)


class WifiMode(object):
    """mode: name, modulation class, data rate (bit/s) on a 20 MHz channel
       and data bits per OFDM symbol (None for DSSS)"""

    def __init__(self, name, modulation, data_rate, ndbps=None):
        self.name = name
        self.modulation = modulation
        self.data_rate = data_rate
        self.ndbps = ndbps

    def get_data_rate(self, channel_width=20):
        if self.modulation == DSSS:
            return self.data_rate
        return self.data_rate * channel_width // 20

    def __repr__(self):
        return 'WifiMode(%s)' % self.name


def _ofdm_modes(prefix, modulation):
    # (Mbit/s at 20 MHz, data bits per symbol)
    rates = [(6, 24), (9, 36), (12, 48), (18, 72),
             (24, 96), (36, 144), (48, 192), (54, 216)]
    return [WifiMode('%sRate%dMbps' % (prefix, rate), modulation,
                     rate * 1000000, ndbps)
            for rate, ndbps in rates]


DSSS_MODES = [WifiMode('DsssRate1Mbps', DSSS, 1000000),
              WifiMode('DsssRate2Mbps', DSSS, 2000000),
              WifiMode('DsssRate5_5Mbps', DSSS, 5500000),
              WifiMode('DsssRate11Mbps', DSSS, 11000000)]


class WifiTxVector(object):

    def __init__(self, mode, preamble=WIFI_PREAMBLE_LONG, channel_width=20,
                 power_level=0):
        self.mode = mode
        self.preamble = preamble
        self.channel_width = channel_width
        self.power_level = power_level

    def __repr__(self):
        return 'WifiTxVector(%s, %s, %sMHz, level=%s)' % (
            self.mode.name, self.preamble, self.channel_width,
            self.power_level)


class WifiPhy(object):
    """standard: 'a', 'b' or 'g'
       channel: channel number
       channel_width: MHz (a: 20, 10 or 5; b: 22; g: 20)
       tx_power_start/tx_power_end: dBm of the lowest/highest power level
       tx_power_levels: number of power levels"""

    standards = {
        'a': {'modes': _ofdm_modes('Ofdm', OFDM), 'widths': [20, 10, 5],
              'slot': {20: 9, 10: 13, 5: 21},
              'sifs': {20: 16, 10: 32, 5: 64}, 'cw_min': 15, 'channel': 36},
        'b': {'modes': DSSS_MODES, 'widths': [22],
              'slot': {22: 20}, 'sifs': {22: 10}, 'cw_min': 31, 'channel': 1},
        'g': {'modes': DSSS_MODES + _ofdm_modes('ErpOfdm', ERP_OFDM),
              'widths': [20], 'slot': {20: 9}, 'sifs': {20: 10}, 'cw_min': 15,
              'channel': 1},
    }
    freq_2ghz = dict(zip(range(1, 12),
                         [2.412, 2.417, 2.422, 2.427, 2.432, 2.437,
                          2.442, 2.447, 2.452, 2.457, 2.462]))
    freq_5ghz = dict(zip([36, 40, 44, 48, 52, 56, 60, 64, 149, 153, 157, 161],
                         [5.18, 5.2, 5.22, 5.24, 5.26, 5.28, 5.30, 5.32,
                          5.745, 5.765, 5.785, 5.805]))

    def __init__(self, standard='a', channel=None, channel_width=None,
                 tx_power_start=16.0206, tx_power_end=16.0206,
                 tx_power_levels=1):
        if standard not in self.standards:
            raise ConfigurationError('Unknown standard: %s (use one of %s)'
                                     % (standard,
                                        ', '.join(sorted(self.standards))))
        params = self.standards[standard]
        self.standard = standard
        self.modes = list(params['modes'])
        if channel_width is None:
            channel_width = params['widths'][0]
        if channel_width not in params['widths']:
            raise ConfigurationError('802.11%s does not support %sMHz '
                                     'channels' % (standard, channel_width))
        self.channel_width = channel_width
        self.channel = channel if channel is not None else params['channel']
        self.freq = self.get_freq(self.channel)
        if tx_power_levels < 1:
            raise ConfigurationError('tx_power_levels must be >= 1')
        self.tx_power_start = float(tx_power_start)
        self.tx_power_end = float(tx_power_end)
        self.tx_power_levels = int(tx_power_levels)
        self.phy_tx_begin = TracedCallback('PhyTxBegin')

    def get_freq(self, channel):
        "Gets frequency (GHz) based on channel number"
        table = self.freq_5ghz if self.standard == 'a' else self.freq_2ghz
        if int(channel) not in table:
            raise ConfigurationError('Channel %s is not valid for 802.11%s'
                                     % (channel, self.standard))
        return table[int(channel)]

    def get_n_modes(self):
        return len(self.modes)

    def get_mode(self, index):
        return self.modes[index]

    def get_mode_by_name(self, name):
        for mode in self.modes:
            if mode.name == name:
                return mode
        raise ConfigurationError('Mode %s is not supported by 802.11%s'
                                 % (name, self.standard))

    def get_power_dbm(self, level):
        if self.tx_power_levels == 1:
            return self.tx_power_start
        return self.tx_power_start + \
            (self.tx_power_end - self.tx_power_start) * level / \
            (self.tx_power_levels - 1)

    @property
    def slot(self):
        return self.standards[self.standard]['slot'][self.channel_width] * 1e-6

    @property
    def sifs(self):
        return self.standards[self.standard]['sifs'][self.channel_width] * 1e-6

    @property
    def difs(self):
        return self.sifs + 2 * self.slot

    @property
    def backoff(self):
        "Mean backoff of a first transmission attempt"
        return self.standards[self.standard]['cw_min'] * self.slot / 2.0

    def calculate_tx_duration(self, size, tx_vector):
        """Airtime in seconds of a size-byte frame sent with tx_vector
           size: frame size in bytes"""
        mode = tx_vector.mode
        if mode.modulation == DSSS:
            if tx_vector.preamble == WIFI_PREAMBLE_SHORT \
                    and mode.data_rate != 1000000:
                preamble, header = 72, 24
            else:
                preamble, header = 144, 48
            payload = ceil_div(size * 8 * 1000000, mode.data_rate)
            duration = preamble + header + payload
        else:
            # half and quarter rate channels stretch every OFDM timing
            scale = 20 // tx_vector.channel_width
            symbols = ceil_div(16 + 8 * size + 6, mode.ndbps)
            duration = (16 + 4 + symbols * 4) * scale
            if self.freq < 5:
                duration += 6  # signal extension, 2.4 GHz band only
        return duration * 1e-6

    def send(self, packet, tx_vector):
        "Start of a transmission"
        debug('%s: tx %s with %s\n' % (self.standard, packet, tx_vector))
        self.phy_tx_begin(packet)
        return self.calculate_tx_duration(packet.size, tx_vector)
