'''
Created on Dec 14, 2022
'''
import unittest
from datetime import datetime

import numpy as np

from ..window import Window, resolve_bound, resolve_window, filter_timestamps
from ..errors import InvertedWindow, MalformedDuration, TemporalOverflow

T12 = datetime(2022, 12, 12, 12, 0, 0)
T14 = datetime(2022, 12, 12, 14, 0, 0)
T18 = datetime(2022, 12, 12, 18, 0, 0)

class TestWindow(unittest.TestCase):

    def test_inverted(self):
        self.assertRaises(InvertedWindow, Window, T18, T12)

    def test_single_instant(self):
        w = Window(T14, T14)
        self.assertTrue(T14 in w)
        self.assertFalse(T12 in w)

    def test_inverted_message(self):
        try:
            Window(T18, T12)
        except InvertedWindow as e:
            self.assertTrue("earliest timestamp is after the latest" in str(e))
        else:
            self.fail("InvertedWindow not raised")


class TestResolveBound(unittest.TestCase):

    def test_default(self):
        self.assertEqual(resolve_bound(None, T12, T18, default=T12), T12)
        self.assertEqual(resolve_bound(None, T12, T18, default=T18), T18)

    def test_timestamp(self):
        self.assertEqual(resolve_bound("2022-12-12T13:00:00Z", T12, T18, T12),
                         datetime(2022, 12, 12, 13, 0, 0))

    def test_positive_duration_from_first(self):
        self.assertEqual(resolve_bound("1m", T12, T18, T18),
                         datetime(2022, 12, 12, 12, 1, 0))

    def test_negative_duration_from_last(self):
        self.assertEqual(resolve_bound("-2min", T12, T18, T18),
                         datetime(2022, 12, 12, 17, 58, 0))

    def test_zero_duration_from_first(self):
        self.assertEqual(resolve_bound("0s", T12, T18, T18), T12)

    def test_malformed(self):
        self.assertRaises(MalformedDuration, resolve_bound, "1h -30m",
                          T12, T18, T12)

    def test_overflow(self):
        last = datetime(9999, 12, 31, 23, 0, 0)
        self.assertRaises(TemporalOverflow, resolve_bound, "1d",
                          last, last, last)
        first = datetime(1, 1, 1, 1, 0, 0)
        self.assertRaises(TemporalOverflow, resolve_bound, "-1d",
                          first, first, first)


class TestResolveWindow(unittest.TestCase):

    def test_no_specs(self):
        w = resolve_window(None, None, T12, T18)
        self.assertEqual((w.earliest, w.latest), (T12, T18))

    def test_latest_relative_to_start(self):
        w = resolve_window(None, "1m", T12, T18)
        self.assertEqual((w.earliest, w.latest),
                         (T12, datetime(2022, 12, 12, 12, 1, 0)))

    def test_both_relative(self):
        w = resolve_window("1m", "-2m", T12, T18)
        self.assertEqual((w.earliest, w.latest),
                         (datetime(2022, 12, 12, 12, 1, 0),
                          datetime(2022, 12, 12, 17, 58, 0)))

    def test_absolute(self):
        w = resolve_window("2022-12-12T13:00:00Z", "2022-12-12T15:00:00Z",
                           T12, T18)
        self.assertEqual((w.earliest, w.latest),
                         (datetime(2022, 12, 12, 13, 0, 0),
                          datetime(2022, 12, 12, 15, 0, 0)))

    def test_earliest_after_latest(self):
        self.assertRaises(InvertedWindow, resolve_window, "1w", None, T12, T18)
        self.assertRaises(InvertedWindow, resolve_window, None, "-1w", T12, T18)

    def test_window_past_the_data_is_valid(self):
        w = resolve_window("400h", "500h", T12, T18)
        self.assertTrue(w.earliest > T18)


class TestFilterTimestamps(unittest.TestCase):

    def test_inclusive_bounds(self):
        timestamps = [T18, T12, T14]
        mask, count = filter_timestamps(timestamps, Window(T12, T14))
        self.assertEqual(list(mask), [False, True, True])
        self.assertEqual(count, 2)

    def test_mask_matches_window(self):
        timestamps = [datetime(2022, 12, 12, h, m, 0)
                      for h in range(10, 20) for m in (0, 30)]
        w = Window(datetime(2022, 12, 12, 12, 30, 0),
                   datetime(2022, 12, 12, 16, 0, 0))
        mask, count = filter_timestamps(timestamps, w)
        self.assertEqual(len(mask), len(timestamps))
        self.assertEqual(mask.dtype, np.bool_)
        for i, t in enumerate(timestamps):
            self.assertEqual(bool(mask[i]), w.earliest <= t <= w.latest)
        self.assertEqual(count, int(mask.sum()))

    def test_nothing_matches(self):
        mask, count = filter_timestamps([T12, T18], Window(T14, T14))
        self.assertEqual(count, 0)
        self.assertFalse(mask.any())

    def test_empty(self):
        mask, count = filter_timestamps([], Window(T12, T18))
        self.assertEqual(len(mask), 0)
        self.assertEqual(count, 0)


if __name__ == "__main__":
    unittest.main()
