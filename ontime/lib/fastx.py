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

import ontime.lib.config as config
from ontime.lib.base import open_compressed, open_output
from ontime.lib.errors import MissingTimestamp, IndexMismatch, FastxParseError
from ontime.lib.timestamps import fastx_start_time


class FastxRecord(object):
    """
    a FASTA or FASTQ record kept exactly as it appears in the file.
    'header' is the first line without its '>'/'@' marker and line
    ending, 'lines' are the raw lines of the record and 'line_number'
    is the 1-based line where the record starts
    """
    __slots__ = ("header", "lines", "line_number")

    def __init__(self, header, lines, line_number):
        self.header = header
        self.lines = lines
        self.line_number = line_number

    def to_bytes(self):
        return b"".join(self.lines)


def parse_fastx(line_iter):
    """
    generator that yields FastxRecord objects from an iterator over the
    lines (bytes) of a FASTA or FASTQ file.  FASTQ records must span
    exactly four lines; FASTA sequences may be wrapped
    """
    linenum = 0
    pending = None
    while True:
        if pending is None:
            line = next(line_iter, None)
            if line is None:
                return
            linenum += 1
        else:
            line = pending
            pending = None
        # blank lines between records are dropped
        if not line.strip():
            continue
        start = linenum
        marker = line[:1]
        header = line[1:].rstrip(b"\r\n")
        if marker == b"@":
            lines = [line]
            for i in range(3):
                nextline = next(line_iter, None)
                if nextline is None:
                    raise FastxParseError("truncated FASTQ record", start)
                linenum += 1
                lines.append(nextline)
            if lines[2][:1] != b"+":
                raise FastxParseError("expected '+' separator line", start)
            seq = lines[1].rstrip(b"\r\n")
            qual = lines[3].rstrip(b"\r\n")
            if len(seq) != len(qual):
                raise FastxParseError("sequence and quality lengths differ "
                                      "(%d != %d)" % (len(seq), len(qual)),
                                      start)
            yield FastxRecord(header, lines, start)
        elif marker == b">":
            lines = [line]
            for nextline in line_iter:
                linenum += 1
                if nextline[:1] == b">":
                    pending = nextline
                    break
                lines.append(nextline)
            yield FastxRecord(header, lines, start)
        else:
            raise FastxParseError("expected '@' or '>' at the start of a "
                                  "record", start)


class FastxSource(object):
    """
    FASTA/FASTQ input (optionally gzip, bzip2 or xz compressed).  reads
    are forwarded to the output byte for byte
    """
    family = config.FASTX_FAMILY

    def __init__(self, path):
        self.path = path

    def __repr__(self):
        return "FastxSource(%r)" % (self.path)

    def start_times(self):
        """
        returns a list with the start time of each read, in file order
        """
        start_times = []
        with open_compressed(self.path) as fh:
            for i, rec in enumerate(parse_fastx(iter(fh))):
                start_time = fastx_start_time(rec.header)
                if start_time is None:
                    raise MissingTimestamp(i, rec.line_number)
                start_times.append(start_time)
        logging.debug("Parsed start times of %d reads from %s" %
                      (len(start_times), self.path))
        return start_times

    def open_sink(self, output_file, compression_format=None,
                  level=config.DEFAULT_COMPRESS_LEVEL):
        return open_output(output_file, compression_format, level)

    def extract_reads_in_timeframe_into(self, reads_to_keep, nb_reads_keep,
                                        outfh):
        """
        write the reads flagged in 'reads_to_keep' to 'outfh'.  the scan
        stops as soon as 'nb_reads_keep' reads have been written
        """
        nb_reads_written = 0
        if nb_reads_keep > 0:
            with open_compressed(self.path) as fh:
                for i, rec in enumerate(parse_fastx(iter(fh))):
                    if i >= len(reads_to_keep):
                        break
                    if not reads_to_keep[i]:
                        continue
                    outfh.write(rec.to_bytes())
                    nb_reads_written += 1
                    if nb_reads_written == nb_reads_keep:
                        break
        if nb_reads_written != nb_reads_keep:
            raise IndexMismatch(nb_reads_keep, nb_reads_written)
        return nb_reads_written
