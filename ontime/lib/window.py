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
from datetime import timedelta

import numpy as np

from ontime.lib.duration import parse_duration
from ontime.lib.errors import InvertedWindow, TemporalOverflow
from ontime.lib.timestamps import parse_timestamp


class Window(object):
    """
    inclusive [earliest, latest] range of read start times
    """
    __slots__ = ("earliest", "latest")

    def __init__(self, earliest, latest):
        if latest < earliest:
            raise InvertedWindow(earliest, latest)
        self.earliest = earliest
        self.latest = latest

    def __contains__(self, t):
        return self.earliest <= t <= self.latest

    def __repr__(self):
        return ("Window(earliest=%s, latest=%s)" %
                (self.earliest.isoformat(), self.latest.isoformat()))


def resolve_bound(spec, first_timestamp, last_timestamp, default):
    """
    turn a user supplied bound into a timestamp.  'spec' is either None
    (use 'default'), an RFC 3339 timestamp, or a duration.  negative
    durations count back from 'last_timestamp' and all other durations
    count forward from 'first_timestamp'
    """
    if spec is None:
        return default
    t = parse_timestamp(spec)
    if t is not None:
        return t
    duration = parse_duration(spec)
    anchor = last_timestamp if duration < timedelta(0) else first_timestamp
    try:
        return anchor + duration
    except OverflowError:
        raise TemporalOverflow("adding '%s' to %s is out of range" %
                               (spec, anchor.isoformat()))


def resolve_window(earliest_spec, latest_spec, first_timestamp, last_timestamp):
    earliest = resolve_bound(earliest_spec, first_timestamp, last_timestamp,
                             default=first_timestamp)
    latest = resolve_bound(latest_spec, first_timestamp, last_timestamp,
                           default=last_timestamp)
    logging.debug("Resolved earliest=%s (from %r) latest=%s (from %r)" %
                  (earliest.isoformat(), earliest_spec,
                   latest.isoformat(), latest_spec))
    return Window(earliest, latest)


def filter_timestamps(timestamps, window):
    """
    returns a boolean numpy array marking the timestamps that fall in
    'window' (bounds included) along with the number of marked entries
    """
    to_keep = np.zeros(len(timestamps), dtype=bool)
    nb_reads_to_keep = 0
    for i, t in enumerate(timestamps):
        if t in window:
            to_keep[i] = True
            nb_reads_to_keep += 1
    return to_keep, nb_reads_to_keep
