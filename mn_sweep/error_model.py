"Frame loss models applied by the channel"

from numpy.random import RandomState

from mn_sweep.simulator import ConfigurationError


class RateErrorModel(object):
    """Corrupts each frame independently with probability error_rate
       seed: seed of the random stream, for repeatable runs"""

    def __init__(self, error_rate=0.0, seed=None):
        if not 0.0 <= error_rate <= 1.0:
            raise ConfigurationError('error_rate must be within [0, 1]: %s'
                                     % error_rate)
        self.error_rate = error_rate
        self.random = RandomState(seed)

    def is_corrupt(self, packet):
        if self.error_rate == 0.0:
            return False
        return self.random.rand() < self.error_rate
