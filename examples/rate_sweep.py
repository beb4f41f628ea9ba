#!/usr/bin/env python

"""Throughput of every mode and channel width of a standard with a
constant rate AP. There is no propagation model, so only the mode and
channel width change the result; the station sits 50 m from the AP.

    rate_sweep.py --standard a --min-expected 4 --max-expected 40"""

import sys
from optparse import OptionParser

from mininet.log import setLogLevel, info, output, error
from mn_sweep.net import Mininet_sweep
from mn_sweep.phy import WifiPhy
from mn_sweep.simulator import ConfigurationError
from mn_sweep.util import format_data_rate


def measure(standard, mode, width, simulation_time):
    "Throughput (Mb/s) of one mode over simulation_time seconds"
    net = Mininet_sweep(standard=standard, manager='constant',
                        data_mode=mode.name, channel_width=width,
                        steps=1, steps_size=0, steps_time=simulation_time)
    net.addAccessPoint('ap1', position='0,0,0')
    net.addStation('sta1', position='50,0,0')
    net.build()
    return net.run().get_datafile().ys[0]


def topology(args):
    parser = OptionParser()
    parser.add_option('--standard', dest='standard', default='a',
                      choices=sorted(WifiPhy.standards))
    parser.add_option('--time', dest='simulation_time', type='float',
                      default=1.0, help='seconds measured per mode')
    parser.add_option('--min-expected', dest='min_expected', type='float',
                      default=0.0, help='fail if the lowest throughput is '
                      'below this value (Mb/s)')
    parser.add_option('--max-expected', dest='max_expected', type='float',
                      default=0.0, help='fail if the highest throughput is '
                      'above this value (Mb/s)')
    options, _ = parser.parse_args(args[1:])

    params = WifiPhy.standards[options.standard]
    results = []
    info('*** Sweeping %d modes of 802.11%s\n'
         % (len(params['modes']), options.standard))
    output('Mode\t\t\tChannel width\tThroughput\n')
    for width in params['widths']:
        for mode in params['modes']:
            try:
                throughput = measure(options.standard, mode, width,
                                     options.simulation_time)
            except ConfigurationError as e:
                error('*** %s\n' % e)
                sys.exit(1)
            results.append(throughput)
            output('%s (%s)\t%d MHz\t\t%.2f Mbit/s\n'
                   % (mode.name, format_data_rate(mode.get_data_rate(width)),
                      width, throughput))

    if min(results) < options.min_expected:
        error('*** Obtained throughput %.2f is below %.2f\n'
              % (min(results), options.min_expected))
        sys.exit(1)
    if options.max_expected > 0 and max(results) > options.max_expected:
        error('*** Obtained throughput %.2f is above %.2f\n'
              % (max(results), options.max_expected))
        sys.exit(1)


if __name__ == '__main__':
    setLogLevel('output')
    topology(sys.argv)
