'''
ontime

Created on Dec 12, 2022

Extract subsets of ONT (Nanopore) reads based on their start time
'''
from setuptools import setup

# local imports
import ontime

# ------ Setup instructions -------------------------------------------------

setup_kwargs = {"name": "ontime",
                "version": ontime.__version__,
                "description": "extract subsets of nanopore reads based on time",
                "long_description": __doc__,
                "author": "the ontime developers",
                "license": "GPL3",
                "platforms": "Linux",
                "python_requires": ">=3.8",
                "packages": ["ontime",
                             "ontime.lib",
                             "ontime.pipeline"],
                "install_requires": ["pysam>=0.16",
                                     "numpy"],
                "extras_require": {"test": ["pytest"]},
                "entry_points": {"console_scripts":
                                 ["ontime = ontime.ontime_run:main"]}}

def main():
    setup(**setup_kwargs)

if __name__ == '__main__':
    main()
