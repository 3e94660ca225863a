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
import os
import sys
import gzip
import bz2
import lzma
import contextlib

import ontime.lib.config as config
from ontime.lib.errors import OutputError

def parse_bool(s):
    return True if s[0].lower() == "t" else False

def parse_string_none(s):
    return None if s == "None" else s

def indent_xml(elem, level=0):
    i = "\n" + level*"  "
    if len(elem):
        if not elem.text or not elem.text.strip():
            elem.text = i + "  "
        if not elem.tail or not elem.tail.strip():
            elem.tail = i
        for child in elem:
            indent_xml(child, level+1)
        if not child.tail or not child.tail.strip():
            child.tail = i
    else:
        if level and (not elem.tail or not elem.tail.strip()):
            elem.tail = i

def split_compression_ext(f):
    """
    returns (path without compression extension, compression format)
    """
    root, ext = os.path.splitext(f)
    fmt = config.COMPRESSION_EXTS.get(ext.lower())
    if fmt is None:
        return f, config.NO_COMPRESSION
    return root, fmt

def detect_format(f):
    """
    infer the output compression format from the file extension
    """
    if f == config.STDIO_PATH:
        return config.NO_COMPRESSION
    return split_compression_ext(f)[1]

def detect_read_family(f):
    """
    returns the record family and the alignment container (None for
    FASTA/FASTQ) of file 'f' based on its extension, or (None, None) if
    the extension is not recognised
    """
    root = split_compression_ext(f)[0]
    ext = os.path.splitext(root)[1].lower()
    if ext in config.FASTX_EXTS:
        return config.FASTX_FAMILY, None
    if ext in config.ALIGNMENT_EXTS:
        return config.ALIGNMENT_FAMILY, config.ALIGNMENT_EXTS[ext]
    return None, None

def sniff_format(f):
    with open(f, "rb") as fh:
        magic = fh.read(6)
    for prefix, fmt in config.COMPRESSION_MAGIC:
        if magic.startswith(prefix):
            return fmt
    return config.NO_COMPRESSION

def open_compressed(f):
    """
    open 'f' for reading in binary mode, transparently decompressing
    gzip, bzip2 and xz files
    """
    compression_format = sniff_format(f)
    if compression_format == config.GZIP_COMPRESSION:
        fh = gzip.open(f, "rb")
    elif compression_format == config.BZIP2_COMPRESSION:
        fh = bz2.BZ2File(f, "rb")
    elif compression_format == config.LZMA_COMPRESSION:
        fh = lzma.LZMAFile(f, "rb")
    else:
        fh = open(f, "rb")
    return fh

def get_compressed_writer(fh, compression_format, level):
    if compression_format == config.GZIP_COMPRESSION:
        return gzip.GzipFile(fileobj=fh, mode="wb", compresslevel=level)
    elif compression_format == config.BZIP2_COMPRESSION:
        return bz2.BZ2File(fh, "wb", compresslevel=level)
    elif compression_format == config.LZMA_COMPRESSION:
        return lzma.LZMAFile(fh, "wb", preset=level)
    return None

@contextlib.contextmanager
def open_output(f, compression_format=None,
                level=config.DEFAULT_COMPRESS_LEVEL):
    """
    context manager yielding a binary file object that writes to 'f'
    (or stdout when 'f' is '-'), compressed with 'compression_format'.
    when no format is given it is inferred from the extension of 'f'.
    the compressor is finalized and the stream flushed on exit
    """
    if compression_format is None:
        compression_format = detect_format(f)
    if f == config.STDIO_PATH:
        rawfh = sys.stdout.buffer
    else:
        try:
            rawfh = open(f, "wb")
        except OSError as e:
            raise OutputError(f, e) from e
    outfh = get_compressed_writer(rawfh, compression_format, level)
    try:
        yield rawfh if outfh is None else outfh
    finally:
        try:
            if outfh is not None:
                outfh.close()
        finally:
            if rawfh is sys.stdout.buffer:
                rawfh.flush()
            else:
                rawfh.close()

def remove_output(f):
    if f != config.STDIO_PATH and os.path.exists(f):
        os.remove(f)
