#!/usr/bin/env python
'''
Created on Dec 12, 2022

ontime: extract subsets of nanopore reads based on their start time

Copyright (C) 2022 the ontime developers

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <http://www.gnu.org/licenses/>.
'''
from ontime import __version__

__license__ = "GPL"
__status__ = "beta"

import os
import sys
import logging
import argparse
import xml.etree.ElementTree as etree

# local imports
import ontime.lib.config as config
from ontime.lib.base import detect_read_family, remove_output, parse_bool, \
    parse_string_none, indent_xml
from ontime.lib.duration import is_duration
from ontime.lib.errors import OntimeError
from ontime.lib.timestamps import is_timestamp
from ontime.pipeline.select_reads import open_source, select_reads, \
    show_time_range

def check_path_exists(s):
    if not os.path.exists(s):
        raise argparse.ArgumentTypeError("'%s' does not exist" % (s))
    return s

def parse_compression_format(s):
    fmt = s.lower()
    if fmt not in config.COMPRESSION_FORMATS:
        raise argparse.ArgumentTypeError("%s is not a valid output format" % (s))
    return fmt

def parse_level(s):
    try:
        level = int(s)
    except ValueError:
        level = None
    if (level is None or level < config.MIN_COMPRESS_LEVEL or
        level > config.MAX_COMPRESS_LEVEL):
        raise argparse.ArgumentTypeError("Compression level %s not in the "
                                         "range %d-%d" %
                                         (s, config.MIN_COMPRESS_LEVEL,
                                          config.MAX_COMPRESS_LEVEL))
    return level

def validate_time(s):
    if is_timestamp(s) or is_duration(s):
        return s
    raise argparse.ArgumentTypeError("%s is not a recognised time format" % (s))

# short and long forms of the options taking a time value
TIME_OPTIONS = {"-f": "--from", "--from": "--from",
                "-t": "--to", "--to": "--to"}

def join_time_values(args):
    """
    argparse mistakes negative durations such as '-2h' for options, so
    attach every time value to its option ('--to=-2h')
    """
    joined = []
    arg_iter = iter(args)
    for arg in arg_iter:
        value = next(arg_iter, None) if arg in TIME_OPTIONS else None
        if value is None:
            joined.append(arg)
        else:
            joined.append("%s=%s" % (TIME_OPTIONS[arg], value))
    return joined


class RunConfig(object):

    attrs = (("output_file", str, config.STDIO_PATH),
             ("output_type", parse_string_none, None),
             ("compress_level", int, config.DEFAULT_COMPRESS_LEVEL),
             ("earliest", parse_string_none, None),
             ("latest", parse_string_none, None),
             ("show", parse_bool, False))

    def __init__(self):
        self.input_file = None
        for attrname, attrtype, attrdefault in self.attrs:
            setattr(self, attrname, None)

    def from_xml(self, xmlfile):
        tree = etree.parse(xmlfile)
        root = tree.getroot()
        self.input_file = root.findtext('input_file')
        for attrname, attrtype, attrdefault in self.attrs:
            val = root.findtext(attrname)
            if val is None:
                setattr(self, attrname, attrdefault)
            else:
                setattr(self, attrname, attrtype(val))

    def to_xml(self):
        root = etree.Element(config.RUNCONFIG_XML_ROOT)
        elem = etree.SubElement(root, "input_file")
        elem.text = self.input_file
        for attrname, attrtype, attrdefault in self.attrs:
            val = getattr(self, attrname)
            elem = etree.SubElement(root, attrname)
            elem.text = str(val)
        indent_xml(root)
        return etree.tostring(root, encoding="unicode")

    @staticmethod
    def get_argument_parser():
        parser = argparse.ArgumentParser(
            usage="%(prog)s [options] <input>",
            description="Extract subsets of ONT (Nanopore) reads based "
            "on their start time")
        parser.add_argument("input_file", nargs="?", default=None,
                            type=check_path_exists, metavar="FILE",
                            help="Input FASTA/FASTQ (optionally compressed) "
                            "or SAM/BAM/CRAM file")
        parser.add_argument('--version', action='version',
                            version='%s' % __version__)
        parser.add_argument("--config-file", dest="config_file",
                            default=None,
                            help="Load parameters from a XML file "
                            "generated during a previous run")
        parser.add_argument("--write-config", dest="write_config",
                            default=None, metavar="FILE",
                            help="Save the run parameters to a XML file")
        parser.add_argument("-v", "--verbose", dest="verbose",
                            action="store_true", default=False,
                            help="enable verbose logging output "
                            "[default=%(default)s]")
        parser.add_argument("-o", "--output", dest="output_file",
                            default=config.STDIO_PATH, metavar="FILE",
                            help="Output file name [default: stdout]")
        parser.add_argument("-O", "--output-type", dest="output_type",
                            type=parse_compression_format, default=None,
                            metavar="u|b|g|l",
                            help="u: uncompressed; b: Bzip2; g: Gzip; "
                            "l: Lzma.  The format is inferred from the "
                            "output file extension when not given, and is "
                            "uncompressed when writing to stdout")
        parser.add_argument("-L", "--compress-level", dest="compress_level",
                            type=parse_level,
                            default=config.DEFAULT_COMPRESS_LEVEL,
                            metavar="1-9",
                            help="Compression level to use if compressing "
                            "output [default=%(default)s]")
        parser.add_argument("-f", "--from", dest="earliest",
                            type=validate_time, default=None,
                            metavar="DATE/DURATION",
                            help="Earliest start time; otherwise the "
                            "earliest time is used.  This can be a "
                            "timestamp (e.g. 2022-11-20T18:00:00Z) or a "
                            "duration from the start (e.g. 2h30m).  "
                            "Negative durations (e.g. -1h) count back from "
                            "the latest start time")
        parser.add_argument("-t", "--to", dest="latest",
                            type=validate_time, default=None,
                            metavar="DATE/DURATION",
                            help="Latest start time; otherwise the latest "
                            "time is used.  See --from for examples")
        parser.add_argument("-s", "--show", dest="show",
                            action="store_true", default=False,
                            help="Show the earliest and latest start times "
                            "in the input and exit")
        return parser

    def from_args(self, args, parser=None):
        if parser is None:
            parser = self.get_argument_parser()
        args = parser.parse_args(args=join_time_values(args))
        # parse config file options/args
        if args.config_file is not None:
            self.from_xml(args.config_file)
        # reset logging to verbose
        if args.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        if self.input_file is None:
            if args.input_file is None:
                parser.error("input file not specified in config file or "
                             "command line")
            self.input_file = args.input_file
        # set rest of options, overriding if attribute is undefined
        # or set to something other than the default
        for attrname, attrtype, attrdefault in self.attrs:
            if ((getattr(self, attrname) is None) or
                (getattr(args, attrname) != attrdefault)):
                setattr(self, attrname, getattr(args, attrname))
        if args.write_config is not None:
            with open(args.write_config, "w") as f:
                f.write(self.to_xml())

    def check_config(self):
        config_passed = True
        if not os.path.isfile(self.input_file):
            logging.error("input file '%s' is not valid" % (self.input_file))
            config_passed = False
        family, container = detect_read_family(self.input_file)
        if family is None:
            logging.error("input file '%s' is not a recognised FASTA, FASTQ, "
                          "SAM, BAM or CRAM file" % (self.input_file))
            config_passed = False
        if ((self.output_type is not None) and
            (self.output_type not in config.COMPRESSION_FORMATS)):
            logging.error("%s is not a valid output format" % (self.output_type))
            config_passed = False
        if not (config.MIN_COMPRESS_LEVEL <= self.compress_level <=
                config.MAX_COMPRESS_LEVEL):
            logging.error("Compression level %d not in the range %d-%d" %
                          (self.compress_level, config.MIN_COMPRESS_LEVEL,
                           config.MAX_COMPRESS_LEVEL))
            config_passed = False
        for attrname in ("earliest", "latest"):
            spec = getattr(self, attrname)
            if spec is not None and not (is_timestamp(spec) or
                                         is_duration(spec)):
                logging.error("%s is not a recognised time format" % (spec))
                config_passed = False
        if family == config.ALIGNMENT_FAMILY and self.output_type is not None:
            logging.warning("Ignoring output compression for %s output" %
                            (container.upper()))
        return config_passed


def run_ontime(runconfig):
    """
    main function for running ontime
    """
    logging.info("Running ontime version %s" % (__version__))
    logging.debug("Run configuration: input=%s output=%s output_type=%s "
                  "compress_level=%s from=%s to=%s show=%s" %
                  (runconfig.input_file, runconfig.output_file,
                   runconfig.output_type, runconfig.compress_level,
                   runconfig.earliest, runconfig.latest, runconfig.show))
    if not runconfig.check_config():
        logging.error("Invalid run configuration, aborting.")
        return config.JOB_ERROR
    source = open_source(runconfig.input_file)
    if runconfig.show:
        try:
            first_timestamp, last_timestamp = show_time_range(source)
        except OntimeError as e:
            logging.error("[FAILED] %s" % (e))
            return config.JOB_ERROR
        print("earliest\t%s" % (first_timestamp.isoformat()))
        print("latest\t%s" % (last_timestamp.isoformat()))
        return config.JOB_SUCCESS
    try:
        select_reads(source, runconfig.earliest, runconfig.latest,
                     runconfig.output_file,
                     compression_format=runconfig.output_type,
                     level=runconfig.compress_level)
    except OntimeError as e:
        logging.error("[FAILED] %s" % (e))
        # only remove output that this run created
        if e.output_created:
            remove_output(runconfig.output_file)
        return config.JOB_ERROR
    logging.info("Finished run.")
    return config.JOB_SUCCESS


def main(argv=None):
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    if argv is None:
        argv = sys.argv[1:]
    runconfig = RunConfig()
    runconfig.from_args(argv)
    return run_ontime(runconfig)

if __name__ == '__main__':
    sys.exit(main())
