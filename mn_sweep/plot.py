"""
    mn-sweep: writes the sample series once the run is over.

    GnuplotWriter: gnuplot scripts with the points inline
        (throughput-<name>.plt, power-<name>.plt)
    PlotSeries: the same series as matplotlib figures (<prefix>-<name>.png)
"""

import warnings

import matplotlib.pyplot as plt
from mininet.log import info

XLABEL = 'Position (m)'


class GnuplotWriter(object):

    def __init__(self, terminal='postscript eps color enhanced'):
        self.terminal = terminal

    def generate(self, dataset, output, title, ylabel, xlabel=XLABEL):
        "Gnuplot script for dataset, plotting to output (e.g. x.eps)"
        lines = ['set terminal %s' % self.terminal,
                 'set output "%s"' % output,
                 'set title "%s"' % title,
                 'set xlabel "%s"' % xlabel,
                 'set ylabel "%s"' % ylabel,
                 'plot "-"  title "%s" with linespoints' % dataset.title]
        lines += ['%s %s' % (x, y) for x, y in dataset]
        lines.append('e')
        return '\n'.join(lines) + '\n'

    def write(self, filename, dataset, output, title, ylabel):
        with open(filename, 'w') as f:
            f.write(self.generate(dataset, output, title, ylabel))
        info('*** Wrote %s (%d points)\n' % (filename, len(dataset)))
        return filename

    def write_statistics(self, statistics, name, power=True):
        """Throughput script and, if power is set, power script
           returns: the files written"""
        files = [self.write('throughput-%s.plt' % name,
                            statistics.get_datafile(),
                            'throughput-%s.eps' % name,
                            'Throughput (AP -> STA) versus position',
                            'Throughput (Mb/s)')]
        if power:
            files.append(self.write('power-%s.plt' % name,
                                    statistics.get_power_datafile(),
                                    'power-%s.eps' % name,
                                    'Average transmitted power (AP -> STA) '
                                    'versus position', 'Power (W)'))
        return files


class PlotSeries(object):

    def __init__(self, show=False):
        """show: open windows instead of only saving files"""
        warnings.filterwarnings("ignore")
        self.show = show
        if not show:
            plt.switch_backend('Agg')

    def plot(self, dataset, filename, title, ylabel, xlabel=XLABEL):
        fig, ax = plt.subplots(figsize=(9, 6))
        ax.plot(dataset.xs, dataset.ys, marker='o', label=dataset.title)
        ax.set_title(title)
        ax.set_xlabel(xlabel)
        ax.set_ylabel(ylabel)
        ax.grid(True)
        ax.legend()
        fig.savefig(filename)
        info('*** Saved %s\n' % filename)
        if self.show:
            plt.show()
        plt.close(fig)
        return filename

    def plot_statistics(self, statistics, name, power=True):
        files = [self.plot(statistics.get_datafile(),
                           'throughput-%s.png' % name,
                           'Throughput (AP -> STA)', 'Throughput (Mb/s)')]
        if power:
            files.append(self.plot(statistics.get_power_datafile(),
                                   'power-%s.png' % name,
                                   'Average transmitted power (AP -> STA)',
                                   'Power (W)'))
        return files
