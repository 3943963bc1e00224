# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/10/21 22:10:37
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from io import TextIOBase
from os import PathLike
from typing import TypeVar

T = TypeVar('T')


class FileHandler[T](metaclass=ABCMeta):
    """Reader bound to a single file path."""
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None
    ) -> None:
        self._fn = filename
        self._codec = encoding

    @staticmethod
    @abstractmethod
    def readstream(buf: TextIOBase, ins: T | None = None) -> T:
        raise NotImplementedError

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    def __str__(self) -> str:
        return str(self._fn)
