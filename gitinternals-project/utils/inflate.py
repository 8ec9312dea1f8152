# What it does: Turns a zlib-compressed object file into a forward-only cursor over its decompressed bytes
# How it does: Compressed chunks are pulled from the file only when the decompressed buffer runs dry, and each round inflates at most one chunk of output, so large blobs are never inflated in one go.
# Readers can ask for text up to a delimiter (NUL or newline) or for an exact number of raw bytes, in any order, which is what the binary tree format needs
# What data structure it uses: Queue / Buffer (a bytearray consumed from the front)

import re
import zlib

from .errors import DecodeError, DecompressionError

CHUNK_SIZE = 8192
LINE_DELIMITER_RE = re.compile(b'[\0\n]')
NUL_RE = re.compile(b'\0')


def decode_text(raw):
    return raw.decode('utf-8', errors='replace')


class InflatedStream:
    """
    Lazily decompressed view of a compressed byte source.
    `source` is any binary file-like object with a read(n) method.
    """

    def __init__(self, source, chunk_size=CHUNK_SIZE):
        self._source = source
        self._chunk_size = chunk_size
        self._inflater = zlib.decompressobj()
        self._buffer = bytearray()
        self._pos = 0
        self._finished = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        close = getattr(self._source, 'close', None)
        if close is not None:
            close()

    def _next_chunk(self): # Input not yet inflated from the previous round goes first
        tail = self._inflater.unconsumed_tail
        if tail:
            return tail
        return self._source.read(self._chunk_size)

    def _fill(self): # Inflates at most one chunk more into the buffer, returns False once nothing is left
        if self._finished:
            return False
        while True:
            chunk = self._next_chunk()
            try:
                if chunk:
                    data = self._inflater.decompress(chunk, self._chunk_size)
                else:
                    data = self._inflater.flush()
            except zlib.error as e:
                raise DecompressionError(f"Invalid compressed data: {e}") from e

            if self._inflater.eof or not chunk:
                if not self._inflater.eof:
                    raise DecompressionError("Compressed data ended unexpectedly")
                self._finished = True

            if data:
                # Drop what has already been consumed before growing the buffer
                del self._buffer[:self._pos]
                self._pos = 0
                self._buffer.extend(data)
                return True
            if self._finished:
                return False

    def at_end(self):
        if self._pos < len(self._buffer):
            return False
        return not self._fill()

    def _read_until(self, delimiter_re):
        out = bytearray()
        while not self.at_end():
            match = delimiter_re.search(self._buffer, self._pos)
            if match:
                end = match.start()
                out += self._buffer[self._pos:end]
                self._pos = end + 1
                return decode_text(bytes(out))
            out += self._buffer[self._pos:]
            self._pos = len(self._buffer)
        return decode_text(bytes(out))

    def read_line(self): # Text up to the next NUL or newline, delimiter consumed
        return self._read_until(LINE_DELIMITER_RE)

    def read_until_nul(self):
        return self._read_until(NUL_RE)

    def read_bytes(self, n):
        out = bytearray()
        while len(out) < n:
            if self.at_end():
                raise DecodeError(f"Unexpected end of data: wanted {n} bytes, got {len(out)}")
            take = min(n - len(out), len(self._buffer) - self._pos)
            out += self._buffer[self._pos:self._pos + take]
            self._pos += take
        return bytes(out)
