"""
    mn-sweep command line.

    Runs one sweep and writes throughput-<output>.plt (and, for managers
    that adapt power, power-<output>.plt); with --plot the same series
    are also saved as PNG figures.

        mn-sweep --manager parf --steps 20 --steps-size 1 --sta -1,3,0
"""

import sys
from optparse import OptionParser

from mininet.log import setLogLevel, info, error, LEVELS

from mn_sweep import VERSION
from mn_sweep.manager import managers
from mn_sweep.net import Mininet_sweep
from mn_sweep.phy import WifiPhy
from mn_sweep.plot import GnuplotWriter, PlotSeries
from mn_sweep.simulator import ConfigurationError


def parse_options(argv=None):
    parser = OptionParser(usage='%prog [options]',
                          version='%prog ' + VERSION)
    parser.add_option('--standard', dest='standard', default='a',
                      choices=sorted(WifiPhy.standards),
                      help='802.11 standard: %s [default: %%default]'
                      % '|'.join(sorted(WifiPhy.standards)))
    parser.add_option('--manager', dest='manager', default='parf',
                      choices=sorted(managers),
                      help='AP rate/power manager: %s [default: %%default]'
                      % '|'.join(sorted(managers)))
    parser.add_option('--max-power', dest='max_power', type='float',
                      default=-40.0, help='maximum AP power in dBm '
                      '[default: %default]')
    parser.add_option('--min-power', dest='min_power', type='float',
                      default=-70.0, help='minimum AP power in dBm '
                      '[default: %default]')
    parser.add_option('--power-levels', dest='power_levels', type='int',
                      default=30, help='number of AP power levels '
                      '[default: %default]')
    parser.add_option('--rts-threshold', dest='rts_threshold', type='int',
                      default=2346, help='RTS threshold [default: %default]')
    parser.add_option('--steps', dest='steps', type='int', default=1,
                      help='number of position changes [default: %default]')
    parser.add_option('--steps-size', dest='steps_size', type='float',
                      default=0.1, help='meters added to x at each step '
                      '[default: %default]')
    parser.add_option('--steps-time', dest='steps_time', type='float',
                      default=1.0, help='seconds between steps '
                      '[default: %default]')
    parser.add_option('--ap', dest='ap', default='0,0,0',
                      help='AP position x,y,z [default: %default]')
    parser.add_option('--sta', dest='sta', default='-1,3,0',
                      help='station initial position x,y,z '
                      '[default: %default]')
    parser.add_option('--error-rate', dest='error_rate', type='float',
                      default=0.0, help='frame loss probability '
                      '[default: %default]')
    parser.add_option('--seed', dest='seed', type='int', default=None,
                      help='seed of the frame loss model')
    parser.add_option('--output', dest='output',
                      default='power-adaptation',
                      help='name used in output files [default: %default]')
    parser.add_option('--plot', dest='plot', action='store_true',
                      default=False, help='also save PNG figures')
    parser.add_option('-v', '--verbosity', dest='verbosity', default='info',
                      choices=list(LEVELS.keys()),
                      help='|'.join(LEVELS.keys()) + ' [default: %default]')
    options, args = parser.parse_args(argv)
    if args:
        parser.error('unexpected arguments: %s' % ' '.join(args))
    return options


def run(options):
    net = Mininet_sweep(standard=options.standard, manager=options.manager,
                        max_power=options.max_power,
                        min_power=options.min_power,
                        power_levels=options.power_levels,
                        rts_threshold=options.rts_threshold,
                        steps=options.steps, steps_size=options.steps_size,
                        steps_time=options.steps_time,
                        error_rate=options.error_rate, seed=options.seed)

    info('*** Creating nodes\n')
    net.addAccessPoint('ap1', position=options.ap)
    net.addStation('sta1', position=options.sta)

    info('*** Building sweep\n')
    net.build()

    info('*** Running sweep\n')
    statistics = net.run()

    info('*** Writing results\n')
    files = GnuplotWriter().write_statistics(statistics, options.output,
                                             power=net.adapts_power)
    if options.plot:
        files += PlotSeries().plot_statistics(statistics, options.output,
                                              power=net.adapts_power)
    return files


def main(argv=None):
    options = parse_options(argv)
    setLogLevel(options.verbosity)
    try:
        run(options)
    except ConfigurationError as e:
        error('*** %s\n' % e)
        sys.exit(1)


if __name__ == '__main__':
    main()
