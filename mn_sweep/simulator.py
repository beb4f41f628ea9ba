"""
    mn-sweep: discrete-event clock used by every simulated component.

    Events are kept in a heap ordered by (time, sequence). The sequence
    number grows with each insertion, so events scheduled for the same
    instant run in the order they were scheduled.
"""

import heapq
from itertools import count

from mininet.log import debug


class SweepException(Exception):
    pass


class InvariantError(SweepException):
    "Internal consistency broken; the run cannot continue"
    pass


class ConfigurationError(SweepException):
    "Invalid topology or parameters"
    pass


class EventId(object):

    def __init__(self, time, seq):
        self.time = time
        self.seq = seq
        self.cancelled = False

    def __repr__(self):
        return 'EventId(time=%s, seq=%s)' % (self.time, self.seq)


class Event(object):

    def __init__(self, event_id, fn, args, kwargs):
        self.id = event_id
        self.fn = fn
        self.args = args
        self.kwargs = kwargs

    def __lt__(self, other):
        if self.id.time == other.id.time:
            return self.id.seq < other.id.seq
        return self.id.time < other.id.time

    def invoke(self):
        self.fn(*self.args, **self.kwargs)


class Simulator(object):

    def __init__(self):
        self.now = 0.0
        self.queue = []
        self.seq = count()
        self.stopped = False
        self.executed = 0

    def schedule(self, delay, fn, *args, **kwargs):
        """Run fn(*args, **kwargs) after delay seconds.
           returns: EventId that can be passed to cancel()"""
        if delay < 0:
            raise ConfigurationError('Cannot schedule an event in the past '
                                     '(delay=%s)' % delay)
        event_id = EventId(self.now + delay, next(self.seq))
        heapq.heappush(self.queue, Event(event_id, fn, args, kwargs))
        return event_id

    def schedule_now(self, fn, *args, **kwargs):
        return self.schedule(0, fn, *args, **kwargs)

    @staticmethod
    def cancel(event_id):
        if event_id is not None:
            event_id.cancelled = True

    def stop(self, delay=0):
        "Schedule the end of the run"
        return self.schedule(delay, self._stop)

    def _stop(self):
        debug('Simulator stopped at %ss\n' % self.now)
        self.stopped = True

    def is_finished(self):
        return self.stopped or not self.queue

    def run(self):
        while not self.stopped and self.queue:
            event = heapq.heappop(self.queue)
            if event.id.cancelled:
                continue
            self.now = event.id.time
            event.invoke()
            self.executed += 1
        debug('%d events executed, %d still pending\n'
              % (self.executed, len(self.queue)))

    def destroy(self):
        self.queue = []
        self.stopped = True
