"mn-sweep: power and throughput sweeps over a simulated WiFi link"

VERSION = "1.0"
