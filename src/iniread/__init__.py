# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/21 22:05:19
# @Author : Kariko Lin

import logging
from io import TextIOBase
from os import PathLike

from .model import IniFile, IniSection
from .parser import IniDescParser, IniParser, IniSyntaxError

__all__ = [
    'IniFile', 'IniSection', 'IniParser', 'IniDescParser', 'IniSyntaxError',
    'load', 'load_file', 'load_desc', 'load_mod_desc'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')


def load(buf: TextIOBase) -> IniFile:
    """Loads and returns an `IniFile` from a decoded stream."""
    return IniParser.readstream(buf)


def load_file(
    filename: str | PathLike[str], encoding: str | None = None
) -> IniFile:
    return IniParser(filename, encoding).read()


def load_desc(buf: TextIOBase) -> dict[str, str]:
    return IniDescParser.readstream(buf)


def load_mod_desc(
    filename: str | PathLike[str], encoding: str | None = None
) -> dict[str, str]:
    """读取模型描述信息，即`[description]`小节的键值对。

    找不到该小节时返回空字典。
    """
    return IniDescParser(filename, encoding).read()
