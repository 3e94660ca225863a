'''
Created on Dec 13, 2022

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


class OntimeError(Exception):
    """
    base class for all errors raised while selecting reads.  'phase'
    names the pipeline step (collection, bound resolution, filtering,
    extraction) that failed and is filled in by the pipeline.
    'output_created' is set when the error happened after the output
    file was opened
    """
    def __init__(self, msg):
        Exception.__init__(self, msg)
        self.msg = msg
        self.phase = None
        self.output_created = False

    def __str__(self):
        if self.phase is None:
            return self.msg
        return "%s: %s" % (self.phase, self.msg)


class MissingTimestamp(OntimeError):
    def __init__(self, position, line_number=None):
        if line_number is None:
            msg = "Missing start time in record %d" % (position)
        else:
            msg = ("Missing start time in record %d starting at line %d" %
                   (position, line_number))
        OntimeError.__init__(self, msg)
        self.position = position
        self.line_number = line_number


class MalformedDuration(OntimeError):
    def __init__(self, s):
        OntimeError.__init__(self, "'%s' is not a recognised duration" % (s))
        self.input = s


class TemporalOverflow(OntimeError):
    def __init__(self, msg="time arithmetic overflowed the representable range"):
        OntimeError.__init__(self, msg)


class InvertedWindow(OntimeError):
    def __init__(self, earliest, latest):
        OntimeError.__init__(self, "earliest timestamp is after the latest "
                             "(%s > %s)" % (earliest.isoformat(),
                                            latest.isoformat()))
        self.earliest = earliest
        self.latest = latest


class EmptyInput(OntimeError):
    def __init__(self, path):
        OntimeError.__init__(self, "No reads found in input file '%s'" % (path))
        self.path = path


class IndexMismatch(OntimeError):
    def __init__(self, expected, written, reason=None):
        msg = ("Some expected indices were not in the input file "
               "(expected %d reads, wrote %d)" % (expected, written))
        if reason is not None:
            msg = "%s: %s" % (msg, reason)
        OntimeError.__init__(self, msg)
        self.expected = expected
        self.written = written


class FastxParseError(OntimeError):
    def __init__(self, msg, line_number):
        OntimeError.__init__(self, "Failed to parse record at line %d: %s" %
                             (line_number, msg))
        self.line_number = line_number


class AlignmentParseError(OntimeError):
    def __init__(self, path, cause):
        OntimeError.__init__(self, "Failed to parse alignment file '%s': %s" %
                             (path, cause))
        self.path = path


class OutputError(OntimeError):
    def __init__(self, path, cause):
        OntimeError.__init__(self, "Failed to create the output file '%s': %s" %
                             (path, cause))
        self.path = path
