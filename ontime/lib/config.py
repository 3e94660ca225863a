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
# return codes
JOB_SUCCESS = 0
JOB_ERROR = 1

# auxiliary tag holding the read start time in SAM/BAM/CRAM records
START_TIME_TAG = "st"
# SAM value type expected for the start time tag
START_TIME_TAG_TYPE = "Z"

# record families
FASTX_FAMILY = "fastx"
ALIGNMENT_FAMILY = "alignment"

# input extensions understood for each record family.  compression
# extensions are stripped before the family is looked up
FASTX_EXTS = ('.fa', '.fasta', '.fna', '.fas', '.fq', '.fastq')
ALIGNMENT_EXTS = {'.sam': "sam",
                  '.bam': "bam",
                  '.cram': "cram"}
# pysam write modes per alignment container.  'h' makes sure the
# header is written for plain SAM output
ALIGNMENT_WRITE_MODES = {"sam": "wh",
                         "bam": "wb",
                         "cram": "wc"}

# output compression
NO_COMPRESSION = "u"
BZIP2_COMPRESSION = "b"
GZIP_COMPRESSION = "g"
LZMA_COMPRESSION = "l"
COMPRESSION_FORMATS = (NO_COMPRESSION, BZIP2_COMPRESSION,
                       GZIP_COMPRESSION, LZMA_COMPRESSION)
COMPRESSION_EXTS = {'.gz': GZIP_COMPRESSION,
                    '.bz': BZIP2_COMPRESSION,
                    '.bz2': BZIP2_COMPRESSION,
                    '.lzma': LZMA_COMPRESSION,
                    '.xz': LZMA_COMPRESSION}
# leading bytes used to sniff compressed input
COMPRESSION_MAGIC = ((b'\x1f\x8b', GZIP_COMPRESSION),
                     (b'BZh', BZIP2_COMPRESSION),
                     (b'\xfd7zXZ\x00', LZMA_COMPRESSION))
MIN_COMPRESS_LEVEL = 1
MAX_COMPRESS_LEVEL = 9
DEFAULT_COMPRESS_LEVEL = 6

# standard input/output placeholder
STDIO_PATH = "-"

# run configuration file
RUNCONFIG_XML_ROOT = "ontime"
