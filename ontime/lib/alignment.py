'''
Created on Jan 9, 2023

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

import pysam

import ontime.lib.config as config
from ontime.lib.errors import MissingTimestamp, IndexMismatch, \
    AlignmentParseError, OutputError
from ontime.lib.timestamps import alignment_start_time


def iter_reads(bamfh, path):
    """
    iterate over all reads of an open AlignmentFile in file order,
    converting htslib errors into AlignmentParseError.  fetch() is used
    with until_eof so that files without @SQ lines or an index can be read
    """
    try:
        it = bamfh.fetch(until_eof=True)
    except (OSError, ValueError, NotImplementedError) as e:
        raise AlignmentParseError(path, e) from e
    while True:
        try:
            read = next(it)
        except StopIteration:
            return
        except (OSError, ValueError) as e:
            raise AlignmentParseError(path, e) from e
        yield read


class AlignmentSource(object):
    """
    SAM/BAM/CRAM input.  the start time of each read is held in the
    'st' tag and kept reads are re-encoded by the pysam writer
    """
    family = config.ALIGNMENT_FAMILY

    def __init__(self, path, container="bam"):
        self.path = path
        self.container = container

    def __repr__(self):
        return "AlignmentSource(%r, container=%r)" % (self.path, self.container)

    def open(self):
        try:
            # unaligned nanopore reads usually come without @SQ lines
            return pysam.AlignmentFile(self.path, "r", check_sq=False)
        except (OSError, ValueError) as e:
            raise AlignmentParseError(self.path, e) from e

    def start_times(self):
        start_times = []
        bamfh = self.open()
        try:
            for i, read in enumerate(iter_reads(bamfh, self.path)):
                start_time = alignment_start_time(read)
                if start_time is None:
                    raise MissingTimestamp(i)
                start_times.append(start_time)
        finally:
            bamfh.close()
        logging.debug("Parsed start times of %d reads from %s" %
                      (len(start_times), self.path))
        return start_times

    @contextlib.contextmanager
    def open_sink(self, output_file, compression_format=None,
                  level=config.DEFAULT_COMPRESS_LEVEL):
        """
        open a writer in the same container format as the input.  the
        input header is copied to the output when the writer opens.
        compression settings do not apply to alignment output
        """
        mode = config.ALIGNMENT_WRITE_MODES[self.container]
        bamfh = self.open()
        try:
            outfh = pysam.AlignmentFile(output_file, mode, template=bamfh)
        except (OSError, ValueError) as e:
            raise OutputError(output_file, e) from e
        finally:
            bamfh.close()
        try:
            yield outfh
        finally:
            outfh.close()

    def extract_reads_in_timeframe_into(self, reads_to_keep, nb_reads_keep,
                                        outfh):
        """
        write the reads flagged in 'reads_to_keep' to the AlignmentFile
        'outfh'.  the whole input is always scanned
        """
        nb_reads_written = 0
        bamfh = self.open()
        try:
            for i, read in enumerate(iter_reads(bamfh, self.path)):
                if i >= len(reads_to_keep):
                    raise IndexMismatch(nb_reads_keep, nb_reads_written,
                                        "input has more than the %d reads "
                                        "seen while collecting start times" %
                                        (len(reads_to_keep)))
                if reads_to_keep[i]:
                    outfh.write(read)
                    nb_reads_written += 1
        finally:
            bamfh.close()
        if nb_reads_written != nb_reads_keep:
            raise IndexMismatch(nb_reads_keep, nb_reads_written)
        return nb_reads_written
