"Utility functions for mn-sweep"

import math
import re

from mn_sweep.simulator import ConfigurationError

RATE_UNITS = {'': 1, 'k': 10 ** 3, 'm': 10 ** 6, 'g': 10 ** 9}


def db_to_linear(db):
    "Logarithmic (dB/dBm) value to linear scale"
    return 10.0 ** (db / 10.0)


def linear_to_db(value):
    return 10.0 * math.log10(value)


def parse_data_rate(rate):
    """Data rate in bit/s from an int or from strings such as
       '54Mb/s', '54Mbps', '5.5Mb/s', '500kb/s' or '1000000'"""
    if isinstance(rate, (int, float)):
        return int(rate)
    match = re.match(r'^\s*([0-9]*\.?[0-9]+)\s*([kKmMgG]?)(b/s|bps)?\s*$',
                     str(rate))
    if not match:
        raise ConfigurationError('Invalid data rate: %s' % rate)
    value, unit = match.group(1), match.group(2).lower()
    return int(round(float(value) * RATE_UNITS[unit]))


def format_data_rate(bps):
    for unit, factor in (('Gbps', 10 ** 9), ('Mbps', 10 ** 6),
                         ('kbps', 10 ** 3)):
        if bps >= factor:
            return '%g%s' % (float(bps) / factor, unit)
    return '%dbps' % bps


def parse_position(pos):
    "[x, y, z] floats from a list/tuple or from a 'x,y,z' string"
    if isinstance(pos, str):
        pos = pos.split(',')
    pos = [float(x) for x in pos]
    if len(pos) == 2:
        pos.append(0.0)
    if len(pos) != 3:
        raise ConfigurationError('Position must have 3 coordinates: %s'
                                 % pos)
    return pos
