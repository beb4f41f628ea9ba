#!/usr/bin/env python

"""Package: mn_sweep
   Test the phy mode tables and the rate/power managers."""

import unittest

from mininet.log import setLogLevel

from mn_sweep.address import Mac48Address
from mn_sweep.manager import ConstantRateWifiManager, ParfWifiManager, \
    get_manager
from mn_sweep.phy import WifiPhy, WifiTxVector, WIFI_PREAMBLE_SHORT
from mn_sweep.simulator import ConfigurationError

STA = Mac48Address('00:00:00:00:00:02')


class testWifiPhy(unittest.TestCase):

    def testPowerLevels(self):
        phy = WifiPhy('a', tx_power_start=-70, tx_power_end=-40,
                      tx_power_levels=31)
        self.assertEqual(phy.get_power_dbm(0), -70.0)
        self.assertEqual(phy.get_power_dbm(30), -40.0)
        self.assertEqual(phy.get_power_dbm(15), -55.0)

    def testErpOfdm(self):
        "ERP-OFDM adds the 6us signal extension"
        phy = WifiPhy('g')
        mode = phy.get_mode_by_name('ErpOfdmRate6Mbps')
        duration = phy.calculate_tx_duration(1420, WifiTxVector(mode))
        self.assertAlmostEqual(duration, 1926e-6)

    def testShortPreamble(self):
        phy = WifiPhy('b')
        mode = phy.get_mode_by_name('DsssRate11Mbps')
        duration = phy.calculate_tx_duration(
            1420, WifiTxVector(mode, WIFI_PREAMBLE_SHORT, 22))
        self.assertAlmostEqual(duration, (96 + 1033) * 1e-6)

    def testSignalExtensionFollowsBand(self):
        "Same OFDM frame: +6us on a 2.4 GHz channel, none at 5 GHz"
        g = WifiPhy('g', channel=6)
        a = WifiPhy('a', channel=36)
        self.assertEqual(g.freq, 2.437)
        self.assertEqual(a.freq, 5.18)
        vector = WifiTxVector(g.get_mode_by_name('ErpOfdmRate54Mbps'))
        self.assertAlmostEqual(g.calculate_tx_duration(1420, vector),
                               238e-6)
        vector = WifiTxVector(a.get_mode_by_name('OfdmRate54Mbps'))
        self.assertAlmostEqual(a.calculate_tx_duration(1420, vector),
                               232e-6)

    def testTimings(self):
        phy = WifiPhy('a')
        self.assertAlmostEqual(phy.difs, 34e-6)
        self.assertAlmostEqual(phy.backoff, 67.5e-6)

    def testInvalid(self):
        self.assertRaises(ConfigurationError, WifiPhy, 'n')
        self.assertRaises(ConfigurationError, WifiPhy, 'b', channel_width=20)
        self.assertRaises(ConfigurationError, WifiPhy, 'a', channel=1)
        self.assertRaises(ConfigurationError,
                          WifiPhy('a').get_mode_by_name, 'DsssRate1Mbps')


class ManagerTestCommon(object):
    "Records the traces fired by self.manager"

    def setUp(self):
        self.phy = WifiPhy('a', tx_power_start=-70, tx_power_end=-40,
                           tx_power_levels=30)
        self.manager = self.createManager()
        self.manager.setup_phy(self.phy)
        self.powers = []
        self.rates = []
        self.manager.power_change.connect(
            lambda old, new, dest: self.powers.append((old, new)))
        self.manager.rate_change.connect(
            lambda old, new, dest: self.rates.append((old, new)))


class testConstantRate(ManagerTestCommon, unittest.TestCase):

    @staticmethod
    def createManager():
        return ConstantRateWifiManager(data_mode='OfdmRate12Mbps')

    def testFixed(self):
        vector = self.manager.get_data_tx_vector(STA)
        self.assertEqual(vector.mode.name, 'OfdmRate12Mbps')
        self.assertEqual(vector.power_level, 29)
        self.assertEqual(self.rates, [(12000000, 12000000)])
        self.assertEqual(self.powers, [(-40.0, -40.0)])
        for _ in range(20):
            self.manager.report_data_ok(STA)
            self.manager.report_data_failed(STA)
        self.manager.get_data_tx_vector(STA)
        self.assertEqual(len(self.rates), 1)
        self.assertEqual(len(self.powers), 1)


class testParf(ManagerTestCommon, unittest.TestCase):

    @staticmethod
    def createManager():
        return ParfWifiManager()

    def testStartsAtMaximum(self):
        vector = self.manager.get_data_tx_vector(STA)
        self.assertEqual(vector.mode.name, 'OfdmRate54Mbps')
        self.assertEqual(vector.power_level, 29)
        self.assertEqual(self.rates, [(54000000, 54000000)])
        self.assertEqual(self.powers, [(-40.0, -40.0)])

    def testLowersPowerAfterSuccesses(self):
        self.manager.get_data_tx_vector(STA)
        for _ in range(10):
            self.manager.report_data_ok(STA)
        vector = self.manager.get_data_tx_vector(STA)
        self.assertEqual(vector.power_level, 28)
        self.assertEqual(self.powers[-1],
                         (-40.0, self.phy.get_power_dbm(28)))
        self.assertEqual(len(self.rates), 1)

    def testRecoveryPower(self):
        "A failure right after lowering the power restores it"
        self.manager.get_data_tx_vector(STA)
        for _ in range(10):
            self.manager.report_data_ok(STA)
        self.manager.report_data_failed(STA)
        self.assertEqual(self.manager.get_data_tx_vector(STA).power_level,
                         29)

    def testRateFallback(self):
        "Two failures at full power drop the rate"
        self.manager.get_data_tx_vector(STA)
        self.manager.report_data_failed(STA)
        self.assertEqual(self.manager.lookup(STA).rate_index, 7)
        self.manager.report_data_failed(STA)
        vector = self.manager.get_data_tx_vector(STA)
        self.assertEqual(vector.mode.name, 'OfdmRate48Mbps')
        self.assertEqual(self.rates[-1], (54000000, 48000000))

    def testRaisesRateAfterSuccesses(self):
        self.manager.get_data_tx_vector(STA)
        self.manager.report_data_failed(STA)
        self.manager.report_data_failed(STA)
        for _ in range(10):
            self.manager.report_data_ok(STA)
        self.assertEqual(self.manager.lookup(STA).rate_index, 7)
        self.assertTrue(self.manager.lookup(STA).using_recovery_rate)


class testGetManager(unittest.TestCase):

    def testNames(self):
        self.assertTrue(get_manager('parf').adapts_power)
        self.assertFalse(get_manager('constant').adapts_power)
        self.assertRaises(ConfigurationError, get_manager, 'minstrel')


if __name__ == '__main__':
    setLogLevel('warning')
    unittest.main()
