"""
    mn-sweep: node positions.

    Nodes keep the position they were given until something moves them;
    every move is reported through the course_change trace source.
"""

from mininet.log import debug

from mn_sweep.trace import TracedCallback
from mn_sweep.util import parse_position


class ConstantPositionMobilityModel(object):

    def __init__(self, position=(0.0, 0.0, 0.0)):
        self.position = parse_position(position)
        self.course_change = TracedCallback('CourseChange')

    @staticmethod
    def get_position_str(pos):
        return '%s,%s,%s' % (round(pos[0], 2), round(pos[1], 2),
                             round(pos[2], 2))

    def get_position(self):
        return tuple(self.position)

    def set_position(self, pos):
        """pos: [x, y, z] or 'x,y,z'"""
        self.position = parse_position(pos)
        debug('new position %s\n' % self.get_position_str(self.position))
        self.course_change(self)
