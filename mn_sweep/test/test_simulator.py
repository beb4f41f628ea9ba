#!/usr/bin/env python

"""Package: mn_sweep
   Test the event clock, trace sources, addresses and unit helpers."""

import unittest

from mininet.log import setLogLevel

from mn_sweep.address import Mac48Address, BROADCAST
from mn_sweep.simulator import Simulator, ConfigurationError
from mn_sweep.trace import TracedCallback
from mn_sweep.util import db_to_linear, linear_to_db, parse_data_rate, \
    format_data_rate, parse_position


class testSimulator(unittest.TestCase):

    def setUp(self):
        self.sim = Simulator()
        self.log = []

    def record(self, name):
        self.log.append((self.sim.now, name))

    def testTimeOrder(self):
        self.sim.schedule(2.0, self.record, 'b')
        self.sim.schedule(1.0, self.record, 'a')
        self.sim.run()
        self.assertEqual(self.log, [(1.0, 'a'), (2.0, 'b')])

    def testSameTimeRunsInScheduleOrder(self):
        for name in 'abc':
            self.sim.schedule(1.0, self.record, name)
        self.sim.run()
        self.assertEqual([name for _, name in self.log], ['a', 'b', 'c'])

    def testCancel(self):
        event = self.sim.schedule(1.0, self.record, 'a')
        self.sim.schedule(2.0, self.record, 'b')
        self.sim.cancel(event)
        self.sim.run()
        self.assertEqual(self.log, [(2.0, 'b')])

    def testStop(self):
        def tick():
            self.record('tick')
            self.sim.schedule(1.0, tick)
        self.sim.schedule(1.0, tick)
        self.sim.stop(3.5)
        self.sim.run()
        self.assertEqual(len(self.log), 3)
        self.assertEqual(self.sim.now, 3.5)
        self.assertTrue(self.sim.is_finished())

    def testPast(self):
        self.assertRaises(ConfigurationError, self.sim.schedule, -1,
                          self.record, 'a')


class testTracedCallback(unittest.TestCase):

    def testConnectDisconnect(self):
        calls = []
        source = TracedCallback('Test')
        first = source.connect(lambda *args: calls.append(('first', args)))
        second = lambda *args: calls.append(('second', args))
        source.connect(second)
        source(1, 2)
        self.assertEqual(calls, [('first', (1, 2)), ('second', (1, 2))])
        self.assertTrue(source.disconnect(first))
        self.assertTrue(source.disconnect(second))
        self.assertFalse(source.disconnect(second))
        self.assertEqual(len(source), 0)
        source(3)
        self.assertEqual(len(calls), 2)


class testMac48Address(unittest.TestCase):

    def testParse(self):
        mac = Mac48Address('00:00:00:00:00:0A')
        self.assertEqual(mac.value, 10)
        self.assertEqual(str(mac), '00:00:00:00:00:0a')
        self.assertEqual(mac, Mac48Address(10))
        self.assertTrue(BROADCAST.is_broadcast())
        self.assertFalse(mac.is_broadcast())

    def testInvalid(self):
        for mac in ('00:00:00:00:00', '00:00:00:00:00:zz',
                    '00:00:00:00:00:100', 2 ** 48):
            self.assertRaises(ConfigurationError, Mac48Address, mac)

    def testAllocate(self):
        first = Mac48Address.allocate()
        second = Mac48Address.allocate()
        self.assertEqual(second.value, first.value + 1)
        self.assertTrue(first < second)


class testUtil(unittest.TestCase):

    def testDbConversions(self):
        self.assertAlmostEqual(db_to_linear(-40), 1e-4)
        self.assertAlmostEqual(db_to_linear(0), 1.0)
        self.assertAlmostEqual(linear_to_db(db_to_linear(-17.5)), -17.5)

    def testDataRate(self):
        self.assertEqual(parse_data_rate('54Mb/s'), 54000000)
        self.assertEqual(parse_data_rate('54Mbps'), 54000000)
        self.assertEqual(parse_data_rate('5.5Mb/s'), 5500000)
        self.assertEqual(parse_data_rate('500kb/s'), 500000)
        self.assertEqual(parse_data_rate(1000), 1000)
        self.assertRaises(ConfigurationError, parse_data_rate, 'fast')
        self.assertEqual(format_data_rate(54000000), '54Mbps')
        self.assertEqual(format_data_rate(5500000), '5.5Mbps')
        self.assertEqual(format_data_rate(500), '500bps')

    def testPosition(self):
        self.assertEqual(parse_position('-1,3,0'), [-1.0, 3.0, 0.0])
        self.assertEqual(parse_position([1, 2]), [1.0, 2.0, 0.0])
        self.assertRaises(ConfigurationError, parse_position, '1')


if __name__ == '__main__':
    setLogLevel('warning')
    unittest.main()
