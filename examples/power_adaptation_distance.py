#!/usr/bin/env python

'Moving a station away from an AP that adapts its power with PARF'

import sys

from mininet.log import setLogLevel, info, output
from mn_sweep.net import Mininet_sweep
from mn_sweep.plot import GnuplotWriter, PlotSeries


def topology(args):
    "Ten one-meter steps; use -c for a constant power AP, -p to plot"
    manager = 'constant' if '-c' in args else 'parf'
    net = Mininet_sweep(manager=manager, max_power=17, min_power=0,
                        power_levels=18, steps=10, steps_size=1,
                        steps_time=1)

    info("*** Creating nodes\n")
    net.addAccessPoint('ap1', mac='00:00:00:00:00:01', position='0,0,0')
    net.addStation('sta1', mac='00:00:00:00:00:02', position='5,0,0')

    info("*** Building sweep\n")
    net.build()

    info("*** Running sweep\n")
    stats = net.run()

    output('position\tthroughput (Mb/s)\tpower (W)\n')
    for (x, mbs), (_, atp) in zip(stats.get_datafile(),
                                  stats.get_power_datafile()):
        output('%s\t\t%.2f\t\t\t%.3e\n' % (x, mbs, atp))

    name = 'power-adaptation-%s' % manager
    GnuplotWriter().write_statistics(stats, name, power=net.adapts_power)
    if '-p' in args:
        PlotSeries().plot_statistics(stats, name, power=net.adapts_power)


if __name__ == '__main__':
    setLogLevel('info')
    topology(sys.argv)
