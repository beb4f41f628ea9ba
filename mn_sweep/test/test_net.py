#!/usr/bin/env python

"""Package: mn_sweep
   Test complete sweeps, from topology to written results."""

import os
import shutil
import tempfile
import unittest

from mininet.log import setLogLevel

from mn_sweep.cli import main
from mn_sweep.net import Mininet_sweep
from mn_sweep.plot import GnuplotWriter, PlotSeries
from mn_sweep.simulator import ConfigurationError
from mn_sweep.stats import Dataset


def sweep(steps=4, steps_size=1, steps_time=1, sta='-1,3,0', **params):
    net = Mininet_sweep(steps=steps, steps_size=steps_size,
                        steps_time=steps_time, **params)
    net.addAccessPoint('ap1', position='0,0,0')
    net.addStation('sta1', position=sta)
    net.build()
    return net, net.run()


class testSweep(unittest.TestCase):
    "One AP sending to one moving station"

    def testConstantRate(self):
        net, stats = sweep(manager='constant')
        self.assertEqual(stats.get_datafile().xs, [-1.0, 0.0, 1.0, 2.0])
        self.assertEqual(stats.get_power_datafile().xs,
                         [-1.0, 0.0, 1.0, 2.0])
        for mbs in stats.get_datafile().ys:
            self.assertTrue(10 < mbs < 54)
        # every frame at -40 dBm, at most the whole second on air
        for atp in stats.get_power_datafile().ys:
            self.assertTrue(0 < atp < 1e-4)
        self.assertEqual(net['sta1'].position, (3.0, 3.0, 0.0))
        self.assertEqual(net.controller.ticks, 4)

    def testParfLowersPower(self):
        net, stats = sweep(manager='parf')
        powers = stats.get_power_datafile().ys
        self.assertEqual(len(powers), 4)
        self.assertTrue(powers[0] > powers[-1] > 0)
        self.assertTrue(net.adapts_power)

    def testLossyChannel(self):
        net, stats = sweep(manager='constant', error_rate=1.0)
        self.assertEqual(stats.get_datafile().ys, [0.0] * 4)
        self.assertTrue(net['ap1'].get_device().drops > 0)

    def testRepeatable(self):
        _, first = sweep(manager='parf', error_rate=0.3, seed=7)
        _, second = sweep(manager='parf', error_rate=0.3, seed=7)
        self.assertEqual(first.get_datafile().points,
                         second.get_datafile().points)
        self.assertEqual(first.get_power_datafile().points,
                         second.get_power_datafile().points)

    def testShortSteps(self):
        "Steps of half a second or less still give one sample per step"
        for steps, steps_time in ((4, 0.5), (4, 0.25), (1, 0.4)):
            net, stats = sweep(steps=steps, steps_time=steps_time,
                               manager='constant')
            self.assertEqual(len(stats.get_datafile()), steps)
            self.assertEqual(len(stats.get_power_datafile()), steps)
            self.assertEqual(net.controller.ticks, steps)
            self.assertTrue(stats.get_datafile().ys[-1] > 0)

    def testSinglePoint(self):
        "One step: one sample at the start, the station ends one step on"
        net, stats = sweep(steps=1, steps_size=0.1, manager='constant')
        self.assertEqual(stats.get_datafile().xs, [-1.0])
        self.assertEqual(stats.get_power_datafile().xs, [-1.0])
        x, y, z = net['sta1'].position
        self.assertAlmostEqual(x, -0.9)
        self.assertEqual((y, z), (3.0, 0.0))

    def testThroughputIgnoresDistance(self):
        "No propagation model: only x of the samples depends on position"
        _, near = sweep(steps=2, sta='-1,3,0', manager='constant')
        _, far = sweep(steps=2, sta='50,0,0', manager='constant')
        self.assertEqual(near.get_datafile().ys, far.get_datafile().ys)
        self.assertEqual(far.get_datafile().xs, [50.0, 51.0])

    def testZeroSteps(self):
        "Nothing is simulated and both series stay empty"
        net, stats = sweep(steps=0)
        self.assertEqual(len(stats.get_datafile()), 0)
        self.assertEqual(len(stats.get_power_datafile()), 0)
        self.assertEqual(net.sim.executed, 0)

    def testTopology(self):
        net = Mininet_sweep()
        net.addAccessPoint('ap1')
        self.assertRaises(ConfigurationError, net.build)

    def testParameters(self):
        self.assertRaises(ConfigurationError, Mininet_sweep,
                          min_power=0, max_power=-10)
        self.assertRaises(ConfigurationError, Mininet_sweep, steps=-1)
        self.assertRaises(ConfigurationError, Mininet_sweep,
                          data_mode='OfdmRate6Mbps')


class testOutput(unittest.TestCase):
    "Gnuplot scripts, figures and the command line"

    def setUp(self):
        self.cwd = os.getcwd()
        self.tmpdir = tempfile.mkdtemp()
        os.chdir(self.tmpdir)
        self.dataset = Dataset('Throughput [Mbits/s]')
        self.dataset.add(-1.0, 25.5)
        self.dataset.add(0.0, 24.0)

    def tearDown(self):
        os.chdir(self.cwd)
        shutil.rmtree(self.tmpdir)

    def testGnuplot(self):
        script = GnuplotWriter().generate(self.dataset, 'x.eps', 'Title',
                                          'Throughput (Mb/s)')
        lines = script.splitlines()
        self.assertEqual(lines[1], 'set output "x.eps"')
        self.assertEqual(lines[-3:], ['-1.0 25.5', '0.0 24.0', 'e'])

    def testFigure(self):
        filename = PlotSeries().plot(self.dataset, 'throughput-x.png',
                                     'Title', 'Throughput (Mb/s)')
        self.assertTrue(os.path.exists(filename))

    def testCommandLine(self):
        main(['--steps', '2', '--manager', 'constant', '--output', 'c',
              '-v', 'warning'])
        self.assertTrue(os.path.exists('throughput-c.plt'))
        self.assertFalse(os.path.exists('power-c.plt'))
        main(['--steps', '2', '--output', 'p', '-v', 'warning'])
        self.assertTrue(os.path.exists('throughput-p.plt'))
        self.assertTrue(os.path.exists('power-p.plt'))

    def testCommandLineError(self):
        with self.assertRaises(SystemExit) as cm:
            main(['--min-power', '0', '--max-power', '-10', '-v', 'critical'])
        self.assertEqual(cm.exception.code, 1)


if __name__ == '__main__':
    setLogLevel('warning')
    unittest.main()
