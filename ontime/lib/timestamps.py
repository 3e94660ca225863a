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
import re
from datetime import datetime

import ontime.lib.config as config

# start time embedded in the header of nanopore FASTA/FASTQ reads
FASTX_START_TIME_RE = re.compile(
    rb"start_time=(?P<time>[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z?)")
FASTX_START_TIME_FMT = "%Y-%m-%dT%H:%M:%S"

RFC3339_RE = re.compile(r"""
    ^(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})
    [Tt]
    (?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})
    (?:\.(?P<fraction>[0-9]+))?
    (?:[Zz]|(?P<offset_sign>[+-])(?P<offset_hour>[0-9]{2}):(?P<offset_minute>[0-9]{2}))
    \Z""", re.VERBOSE)

def parse_timestamp(s):
    """
    parse an RFC 3339 timestamp (e.g. 2021-07-08T17:47:25.558027+01:00)
    and return a naive datetime, or None if 's' is not a valid timestamp.

    the UTC offset is required and validated but then discarded, so the
    returned value holds the wall-clock time as written
    """
    m = RFC3339_RE.match(s)
    if m is None:
        return None
    if m.group("offset_sign") is not None:
        if (int(m.group("offset_hour")) > 23 or
            int(m.group("offset_minute")) > 59):
            return None
    fraction = m.group("fraction")
    microsecond = 0 if fraction is None else int(fraction[:6].ljust(6, "0"))
    try:
        return datetime(int(m.group("year")), int(m.group("month")),
                        int(m.group("day")), int(m.group("hour")),
                        int(m.group("minute")), int(m.group("second")),
                        microsecond)
    except ValueError:
        return None

def is_timestamp(s):
    return parse_timestamp(s) is not None

def fastx_start_time(header):
    """
    return the 'start_time=' value of a FASTA/FASTQ header (bytes) as a
    naive datetime, or None if it is missing or not a valid date-time
    """
    m = FASTX_START_TIME_RE.search(header)
    if m is None:
        return None
    value = m.group("time").decode("ascii").rstrip("Z")
    try:
        return datetime.strptime(value, FASTX_START_TIME_FMT)
    except ValueError:
        return None

def alignment_start_time(read):
    """
    return the start time stored in the 'st' tag of an aligned read, or
    None if the tag is missing, not a string or not a valid timestamp
    """
    try:
        value, value_type = read.get_tag(config.START_TIME_TAG,
                                         with_value_type=True)
    except KeyError:
        return None
    if value_type != config.START_TIME_TAG_TYPE or not isinstance(value, str):
        return None
    return parse_timestamp(value)
