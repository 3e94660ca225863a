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
from datetime import timedelta

from ontime.lib.errors import MalformedDuration, TemporalOverflow

# components must appear in this order, each at most once, with no
# trailing whitespace
DURATION_RE = re.compile(r"""
    ^(?P<sign>-)?
    (?:(?P<weeks>[0-9]+)(?:weeks|week|w)\s*)?
    (?:(?P<days>[0-9]+)(?:days|day|d)\s*)?
    (?:(?P<hours>[0-9]+)(?:hours|hour|hrs|hr|h)\s*)?
    (?:(?P<minutes>[0-9]+)(?:minutes|minute|mins|min|m)\s*)?
    (?:(?P<seconds>[0-9]+)(?:seconds|second|secs|sec|s)\s*)?
    (?<!\s)\Z""", re.IGNORECASE | re.VERBOSE)

DURATION_UNITS = ("weeks", "days", "hours", "minutes", "seconds")

def parse_duration(s):
    """
    convert a duration string such as '1d2h', '11h30m' or '-2min' into
    a timedelta.  a leading '-' negates the whole duration
    """
    m = DURATION_RE.match(s)
    if m is None:
        raise MalformedDuration(s)
    kwargs = {}
    for unit in DURATION_UNITS:
        value = m.group(unit)
        if value is not None:
            kwargs[unit] = int(value)
    if not kwargs:
        raise MalformedDuration(s)
    try:
        duration = timedelta(**kwargs)
    except OverflowError:
        raise TemporalOverflow("duration '%s' is too large" % (s))
    if m.group("sign"):
        duration = -duration
    return duration

def is_duration(s):
    try:
        parse_duration(s)
    except (MalformedDuration, TemporalOverflow):
        return False
    return True
