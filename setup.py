#!/usr/bin/env python

"Setuptools params"

from setuptools import setup
from os.path import join

# Get version number from source tree
import sys
sys.path.append( '.' )
from mn_sweep import VERSION

scripts = [ join( 'bin', filename ) for filename in [ 'mn-sweep' ] ]

modname = distname = 'mn-sweep'

setup(
    name=distname,
    version=VERSION,
    description='Power and throughput sweeps over a simulated WiFi link',
    packages=['mn_sweep', 'mn_sweep.test'],
    long_description="""
        mn-sweep moves a station along a line away from an access point
        and records, at every position, the throughput received and the
        average power the access point transmitted with, under a fixed
        or a power-adapting (PARF) rate manager.
        """,
    classifiers=[
          "License :: OSI Approved :: BSD License",
          "Programming Language :: Python",
          "Development Status :: 4 - Beta",
          "Intended Audience :: Science/Research",
          "Topic :: System :: Networking",
    ],
    keywords='wifi 802.11 simulation power adaptation PARF',
    license='BSD',
    install_requires=[
        'setuptools', 'mininet', 'matplotlib', 'numpy'
    ],
    extras_require={
        'test': ['pytest']
    },
    scripts=scripts,
)
