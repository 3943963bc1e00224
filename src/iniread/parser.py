# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/21 22:41:12
# @Author : Kariko Lin

"""Line-oriented INI reading.

Each line is trimmed first, then recognized as one of:

    - blank                     => skipped
    - `; ...` or `# ...`        => comment, skipped
    - `key = value`             => assignment, split on the FIRST `=`
    - `[name]`                  => section header
    - anything else             => `IniSyntaxError`

Assignment is tried before section header, so `[a]=b` is a key `[a]`.
There's no value after-comment (`key = val ; note` keeps `val ; note`).
"""

import logging
from abc import abstractmethod
from enum import Enum
from io import StringIO, TextIOBase
from typing import Iterator

from chardet import detect as guess_codec

from .abstract import FileHandler
from .model import IniFile

__all__ = [
    'IniSyntaxError', 'LineKind', 'scan_lines', 'classify',
    'IniParser', 'IniDescParser'
]

DESC_SECTION = '[description]'


class IniSyntaxError(ValueError):
    """A non-blank, non-comment line that is neither `[section]` nor `k=v`."""
    def __init__(self, line: int, source: str) -> None:
        super().__init__(line, source)
        self.line = line
        self.source = source

    def __str__(self) -> str:
        return f'invalid INI syntax on line {self.line}: {self.source}'


class LineKind(int, Enum):
    BLANK = 0
    COMMENT = 1
    ASSIGN = 2
    SECTION = 3
    INVALID = -1


# Unicode `White_Space` chars only.
# `str.strip()` would also eat `\x1c`-`\x1f`.
SPACES = ' \t\n\v\f\r\x85\xa0' + ''.join(map(chr, (
    0x1680, *range(0x2000, 0x200b), 0x2028, 0x2029, 0x202f, 0x205f, 0x3000
)))


def scan_lines(buf: TextIOBase) -> Iterator[tuple[int, str]]:
    """Yields `(lineno, trimmed_line)`, lineno 1-based.

    The last line is yielded as well even without a trailing newline.
    Only `\\n` ends a line; open files with `newline='\\n'` to keep it so.
    """
    lineno = 0
    while i := buf.readline():
        lineno += 1
        yield lineno, i.strip(SPACES)


def classify(line: str) -> tuple[LineKind, tuple[str, ...]]:
    """Recognizes an already trimmed line.

    Returns the kind and its payload:
    `(key, value)` for `ASSIGN`, `(name,)` for `SECTION`, `()` otherwise.
    """
    if not line:
        return LineKind.BLANK, ()
    if line[0] in (';', '#'):
        return LineKind.COMMENT, ()
    # key must not be empty, i.e. `=val` is not an assignment.
    if line.find('=') > 0:
        key, val = line.split('=', 1)
        return LineKind.ASSIGN, (key.strip(SPACES), val.strip(SPACES))
    if len(line) >= 2 and line[0] == '[' and line[-1] == ']':
        return LineKind.SECTION, (line[1:-1].strip(SPACES),)
    return LineKind.INVALID, ()


def _decode_file(filename) -> StringIO:
    with open(filename, 'rb') as fp:
        raw = fp.read()

    codec = guess_codec(raw)
    if (
        codec is None or codec['encoding'] is None
        or codec['confidence'] < 0.8
    ):
        codec = {'encoding': 'utf-8'}

    # fallbacks
    try:
        buf = raw.decode(codec['encoding'])
    except UnicodeDecodeError:
        buf = raw.decode('gbk')
    return StringIO(buf, newline='\n')


class _IniReader[T](FileHandler[T]):
    @staticmethod
    @abstractmethod
    def new() -> T:
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def merge(ins: T, part: T) -> None:
        raise NotImplementedError

    def _readinto(self, buf: TextIOBase, ins: T) -> None:
        # `ins` is only touched once the whole stream got decoded,
        # or when a syntax error stops the reading.
        part = self.new()
        try:
            self.readstream(buf, part)
        except IniSyntaxError:
            self.merge(ins, part)
            raise
        self.merge(ins, part)

    def read(self, ins: T | None = None) -> T:
        """读取实例指定的文件。`ins`不为`None`时，结果写入`ins`。

        解码失败时，前一次读到的内容会被丢弃，不会混进`ins`。
        注：文件不存在等`OSError`照常抛出。
        """
        if ins is None:
            ins = self.new()
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(
                self._fn, 'r', encoding=self._codec, newline='\n'
            ) as fp:
                self._readinto(fp, ins)
        except UnicodeDecodeError as e:
            logging.warning(
                f'Failed to decode `{self._fn}` as {self._codec}, '
                f'guessing its codec instead.\n  {e}')
            self._readinto(_decode_file(self._fn), ins)
        logging.debug(f'Loaded `{self._fn}`.')
        return ins


class IniParser(_IniReader[IniFile]):
    @staticmethod
    def readstream(buf: TextIOBase, ins: IniFile | None = None) -> IniFile:
        """读取解码好的字符串流。

        遇到无法识别的行即抛出`IniSyntaxError`，不做任何恢复；
        在此之前读到的内容仍保留在`ins`里。
        """
        if ins is None:
            ins = IniFile()
        this_sect = ''
        for lineno, i in scan_lines(buf):
            match classify(i):
                case LineKind.ASSIGN, (key, val):
                    ins.section(this_sect)[key] = val
                case LineKind.SECTION, (name,):
                    this_sect = name
                    ins.section(this_sect)
                case LineKind.INVALID, _:
                    raise IniSyntaxError(lineno, i)
        return ins

    @staticmethod
    def new() -> IniFile:
        return IniFile()

    @staticmethod
    def merge(ins: IniFile, part: IniFile) -> None:
        for name, sect in part.items():
            ins.section(name).update(sect)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


class IniDescParser(_IniReader[dict[str, str]]):
    """只读取`[description]`小节（不区分大小写）。

    该小节之前的内容一概跳过，不作语法检查；
    该小节之后，遇到第一个非键值对的行（一般是下一个小节）就停止。
    """
    @staticmethod
    def readstream(
        buf: TextIOBase,
        ins: dict[str, str] | None = None
    ) -> dict[str, str]:
        if ins is None:
            ins = {}
        found = False
        for _, i in scan_lines(buf):
            kind, payload = classify(i)
            if kind in (LineKind.BLANK, LineKind.COMMENT):
                continue
            if not found:
                found = i.lower() == DESC_SECTION
                continue
            if kind is not LineKind.ASSIGN:
                # next section, stop.
                break
            key, val = payload
            ins[key] = val
        if not found:
            logging.debug('No [description] section found.')
        return ins

    @staticmethod
    def new() -> dict[str, str]:
        return {}

    @staticmethod
    def merge(ins: dict[str, str], part: dict[str, str]) -> None:
        ins.update(part)

    def __str__(self) -> str:
        return "INI description: " + super().__str__() + f"({self._codec})"
