'''
Created on Jan 9, 2023
'''
import os
import shutil
import tempfile
import unittest
from datetime import datetime

import numpy as np
import pysam

from ..alignment import AlignmentSource
from ..errors import MissingTimestamp, IndexMismatch, AlignmentParseError

SAM_HEADER = "@HD\tVN:1.6\tSO:unknown\n@CO\tbasecalled reads\n"

def sam_record(name, tag="st:Z:2022-12-12T18:00:00.000+00:00"):
    fields = [name, "4", "*", "0", "0", "*", "*", "0", "0", "ACGT", "IIII"]
    if tag is not None:
        fields.append(tag)
    return "\t".join(fields) + "\n"

READS = (sam_record("s0", "st:Z:2022-12-12T18:00:00.000+00:00") +
         sam_record("s2", "st:Z:2022-12-12T14:00:00.000+00:00") +
         sam_record("s1", "st:Z:2022-12-12T12:00:00.000+00:00"))

def read_names(f):
    with pysam.AlignmentFile(f, "r", check_sq=False) as fh:
        return [r.query_name for r in fh.fetch(until_eof=True)]

class TestAlignmentSource(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def write_sam(self, text, name="reads.sam"):
        f = os.path.join(self.tmp_dir, name)
        with open(f, "w") as fh:
            fh.write(text)
        return f

    def write_bam(self, text):
        samfile = self.write_sam(text, "tmp.sam")
        bamfile = os.path.join(self.tmp_dir, "reads.bam")
        samfh = pysam.AlignmentFile(samfile, "r", check_sq=False)
        bamfh = pysam.AlignmentFile(bamfile, "wb", template=samfh)
        for r in samfh.fetch(until_eof=True):
            bamfh.write(r)
        bamfh.close()
        samfh.close()
        return bamfile

    def extract(self, source, mask, nb_reads_keep, output_file):
        with source.open_sink(output_file) as outfh:
            return source.extract_reads_in_timeframe_into(mask, nb_reads_keep,
                                                          outfh)

    def test_start_times(self):
        source = AlignmentSource(self.write_sam(SAM_HEADER + READS), "sam")
        self.assertEqual(source.start_times(),
                         [datetime(2022, 12, 12, 18, 0, 0),
                          datetime(2022, 12, 12, 14, 0, 0),
                          datetime(2022, 12, 12, 12, 0, 0)])

    def test_start_times_bam(self):
        source = AlignmentSource(self.write_bam(SAM_HEADER + READS), "bam")
        self.assertEqual(len(source.start_times()), 3)

    def test_sam_without_sq_lines(self):
        for header in ("", "@HD\tVN:1.6\n", "@HD\tVN:1.6\n@RG\tID:run1\n"):
            source = AlignmentSource(self.write_sam(header + READS), "sam")
            self.assertEqual(len(source.start_times()), 3)
            output_file = os.path.join(self.tmp_dir, "out.sam")
            n = self.extract(source, np.array([False, False, True]), 1,
                             output_file)
            self.assertEqual(n, 1)
            self.assertEqual(read_names(output_file), ["s1"])

    def test_no_reads(self):
        source = AlignmentSource(self.write_sam(SAM_HEADER), "sam")
        self.assertEqual(source.start_times(), [])

    def test_missing_tag(self):
        text = SAM_HEADER + sam_record("s0") + sam_record("s1", None)
        source = AlignmentSource(self.write_sam(text), "sam")
        try:
            source.start_times()
        except MissingTimestamp as e:
            self.assertEqual(e.position, 1)
        else:
            self.fail("MissingTimestamp not raised")

    def test_non_string_tag(self):
        text = SAM_HEADER + sam_record("s0", "st:i:1670870349")
        source = AlignmentSource(self.write_sam(text), "sam")
        self.assertRaises(MissingTimestamp, source.start_times)

    def test_timestamp_without_offset(self):
        text = SAM_HEADER + sam_record("s0", "st:Z:2022-12-12T18:00:00")
        source = AlignmentSource(self.write_sam(text), "sam")
        self.assertRaises(MissingTimestamp, source.start_times)

    def test_unreadable(self):
        f = os.path.join(self.tmp_dir, "reads.bam")
        with open(f, "wb") as fh:
            fh.write(b"\x1f\x8b\x08\x04garbage")
        source = AlignmentSource(f, "bam")
        self.assertRaises(AlignmentParseError, source.start_times)

    def test_extract_sam(self):
        source = AlignmentSource(self.write_sam(SAM_HEADER + READS), "sam")
        output_file = os.path.join(self.tmp_dir, "out.sam")
        n = self.extract(source, np.array([True, False, True]), 2, output_file)
        self.assertEqual(n, 2)
        self.assertEqual(read_names(output_file), ["s0", "s1"])
        with pysam.AlignmentFile(output_file, "r", check_sq=False) as fh:
            self.assertEqual(fh.header.to_dict()["CO"], ["basecalled reads"])
            r = next(fh.fetch(until_eof=True))
            self.assertEqual(r.get_tag("st"), "2022-12-12T18:00:00.000+00:00")

    def test_extract_bam(self):
        source = AlignmentSource(self.write_bam(SAM_HEADER + READS), "bam")
        output_file = os.path.join(self.tmp_dir, "out.bam")
        n = self.extract(source, np.array([False, True, False]), 1, output_file)
        self.assertEqual(n, 1)
        with open(output_file, "rb") as fh:
            self.assertEqual(fh.read(2), b"\x1f\x8b")
        self.assertEqual(read_names(output_file), ["s2"])

    def test_header_written_when_nothing_kept(self):
        source = AlignmentSource(self.write_sam(SAM_HEADER + READS), "sam")
        output_file = os.path.join(self.tmp_dir, "out.sam")
        n = self.extract(source, np.zeros(3, dtype=bool), 0, output_file)
        self.assertEqual(n, 0)
        self.assertEqual(read_names(output_file), [])
        with open(output_file) as fh:
            lines = fh.read().splitlines()
        self.assertTrue(lines[0].startswith("@HD"))
        self.assertTrue("@CO\tbasecalled reads" in lines)

    def test_more_reads_than_mask(self):
        source = AlignmentSource(self.write_sam(SAM_HEADER + READS), "sam")
        output_file = os.path.join(self.tmp_dir, "out.sam")
        self.assertRaises(IndexMismatch, self.extract, source,
                          np.array([True, True]), 2, output_file)

    def test_fewer_reads_than_expected(self):
        source = AlignmentSource(self.write_sam(SAM_HEADER + READS), "sam")
        output_file = os.path.join(self.tmp_dir, "out.sam")
        self.assertRaises(IndexMismatch, self.extract, source,
                          np.array([True, True, True]), 4, output_file)


if __name__ == "__main__":
    unittest.main()
