"""Path checks and interactive prompts for the compressor's settings."""

import os
import re
import sys

_IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".bmp"})
_INT_PREFIX = re.compile(r"[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_WORD = re.compile(r"\S+")


def is_absolute_path(path):
    """True for ``/...`` paths, or ``X:\\...`` / ``X:/...`` on Windows."""
    if os.name == "nt":
        return len(path) > 2 and path[1] == ":" and path[2] in "\\/"
    return path.startswith("/")


def get_extension(path):
    """Lower-cased text from the last dot of ``path``, or ``""``."""
    dot = path.rfind(".")
    return "" if dot < 0 else path[dot:].lower()


def is_valid_image_extension(path):
    return get_extension(path) in _IMAGE_EXTENSIONS


def is_valid_gif_extension(path):
    return get_extension(path) == ".gif"


def file_exists(path):
    """True if ``path`` can be opened for reading."""
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


class Prompter:
    """Asks for each setting on a text stream until a valid answer is given."""

    def __init__(self, input_stream=None, output_stream=None):
        self._in = input_stream if input_stream is not None else sys.stdin
        self._out = output_stream if output_stream is not None else sys.stdout
        self._buffer = ""

    # -- stream handling -------------------------------------------------

    def _say(self, text):
        self._out.write(text)
        self._out.flush()

    def _fill(self):
        line = self._in.readline()
        if not line:
            return False
        self._buffer += line
        return True

    def _word(self):
        while True:
            stripped = self._buffer.lstrip()
            if stripped:
                break
            self._buffer = ""
            if not self._fill():
                raise EOFError("input ended before a value was read")
        match = _WORD.match(stripped)
        self._buffer = stripped[match.end():]
        return match.group()

    def _number(self, pattern, convert):
        word = self._word()
        match = pattern.match(word)
        if not match:
            self._buffer = word + self._buffer
            return None
        self._buffer = word[match.end():] + self._buffer
        return convert(match.group())

    def _discard_line(self):
        newline = self._buffer.find("\n")
        if newline >= 0:
            self._buffer = self._buffer[newline + 1:]
        else:
            self._buffer = ""
            self._in.readline()

    def _ignore_char(self):
        if not self._buffer:
            self._fill()
        self._buffer = self._buffer[1:]

    def _getline(self):
        if not self._buffer and not self._fill():
            return ""
        newline = self._buffer.find("\n")
        if newline < 0:
            line, self._buffer = self._buffer, ""
        else:
            line, self._buffer = self._buffer[:newline], self._buffer[newline + 1:]
        return line

    # -- prompts -----------------------------------------------------------

    def input_path(self):
        """An absolute path to an existing image file."""
        while True:
            self._say("Masukkan path gambar input absolut: ")
            path = self._word()
            if not is_absolute_path(path):
                self._say("Path harus absolut.\n")
            elif not file_exists(path):
                self._say("File tidak ditemukan.\n")
            elif not is_valid_image_extension(path):
                self._say("Jenis file tidak valid untuk gambar input.\n")
            else:
                return path

    def method(self):
        """An error method number from 1 to 5."""
        while True:
            self._say(
                "Pilih metode error (1. Variance, 2. MAD, 3. MaxDiff, 4. Entropy, 5. SSIM): "
            )
            value = self._number(_INT_PREFIX, int)
            if value is None or not 1 <= value <= 5:
                self._discard_line()
                self._say("Pilihan tidak valid. Harap masukkan angka antara 1 hingga 5.\n")
            else:
                return value

    def threshold(self, method):
        """A non-negative error threshold."""
        while True:
            self._say("Masukkan threshold (>= 0): ")
            value = self._number(_FLOAT_PREFIX, float)
            if value is None:
                self._discard_line()
                self._say("Threshold di luar range.\n")
            elif value < 0:
                self._say("Threshold di luar range.\n")
            else:
                return value

    def min_size(self):
        """A positive minimum block size."""
        while True:
            self._say("Masukkan ukuran blok minimum (positif): ")
            value = self._number(_INT_PREFIX, int)
            if value is None or value <= 0:
                self._discard_line()
                self._say("Ukuran blok minimum harus berupa bilangan bulat positif.\n")
            else:
                return value

    def output_image_path(self):
        """An absolute path with an image extension."""
        while True:
            self._say("Masukkan path output gambar hasil: ")
            path = self._word()
            if not is_absolute_path(path):
                self._say("Path harus absolut.\n")
            elif not is_valid_image_extension(path):
                self._say("Jenis file tidak valid untuk gambar output.\n")
            else:
                return path

    def gif_path(self):
        """An absolute ``.gif`` path, or ``""`` when no animation is wanted."""
        self._say("Masukkan path output GIF proses (kosongkan jika tidak ingin GIF): ")
        self._ignore_char()
        path = self._getline()
        if not path:
            return path

        while not is_absolute_path(path) or not is_valid_gif_extension(path):
            if not is_absolute_path(path):
                self._say("Path harus absolut.\n")
            else:
                self._say("Ekstensi GIF harus .gif\n")
            self._say("Masukkan ulang path output GIF (atau kosongkan): ")
            path = self._getline()
            if not path:
                break
        return path