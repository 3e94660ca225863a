'''
Created on Dec 14, 2022

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
import logging
import contextlib

import ontime.lib.config as config
from ontime.lib.base import detect_read_family
from ontime.lib.errors import OntimeError, EmptyInput
from ontime.lib.fastx import FastxSource
from ontime.lib.alignment import AlignmentSource
from ontime.lib.window import resolve_window, filter_timestamps

# pipeline phases used to label errors
COLLECTION = "collection"
BOUND_RESOLUTION = "bound resolution"
FILTERING = "filtering"
EXTRACTION = "extraction"

@contextlib.contextmanager
def phase(name):
    try:
        yield
    except OntimeError as e:
        if e.phase is None:
            e.phase = name
        raise

def open_source(path):
    """
    returns the FastxSource or AlignmentSource that handles 'path',
    chosen from its file extension
    """
    family, container = detect_read_family(path)
    if family == config.FASTX_FAMILY:
        return FastxSource(path)
    elif family == config.ALIGNMENT_FAMILY:
        return AlignmentSource(path, container)
    raise ValueError("cannot determine the read format of '%s'" % (path))

def collect_start_times(source):
    with phase(COLLECTION):
        timestamps = source.start_times()
        if len(timestamps) == 0:
            raise EmptyInput(source.path)
    return timestamps

def time_range(timestamps):
    return min(timestamps), max(timestamps)

def show_time_range(source):
    """
    returns the earliest and latest start time of the reads in 'source'
    """
    return time_range(collect_start_times(source))

def select_reads(source, earliest, latest, output_file,
                 compression_format=None,
                 level=config.DEFAULT_COMPRESS_LEVEL):
    """
    write the reads of 'source' whose start time lies between 'earliest'
    and 'latest' (timestamps, durations or None) to 'output_file'.

    the input is read twice: once to collect start times and once to
    extract the reads.  returns the number of reads written
    """
    timestamps = collect_start_times(source)
    first_timestamp, last_timestamp = time_range(timestamps)
    logging.info("Found %d reads with start times from %s to %s" %
                 (len(timestamps), first_timestamp.isoformat(),
                  last_timestamp.isoformat()))
    with phase(BOUND_RESOLUTION):
        window = resolve_window(earliest, latest, first_timestamp,
                                last_timestamp)
    logging.info("Keeping reads that started between %s and %s" %
                 (window.earliest.isoformat(), window.latest.isoformat()))
    with phase(FILTERING):
        reads_to_keep, nb_reads_to_keep = filter_timestamps(timestamps, window)
    logging.info("%d of %d reads fall in the time window" %
                 (nb_reads_to_keep, len(reads_to_keep)))
    with phase(EXTRACTION):
        with source.open_sink(output_file, compression_format, level) as outfh:
            try:
                nb_reads_written = source.extract_reads_in_timeframe_into(
                    reads_to_keep, nb_reads_to_keep, outfh)
            except OntimeError as e:
                e.output_created = True
                raise
    logging.debug("Wrote %d reads to %s" % (nb_reads_written, output_file))
    return nb_reads_written
