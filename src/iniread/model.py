# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/21 22:18:05
# @Author : Kariko Lin

"""
Basically INI Structure: a file of sections, a section of `str: str` pairs.

For reading, just see `iniread.parser`.
"""

from collections.abc import Mapping, MutableMapping
from io import TextIOBase
from os import PathLike
from typing import Iterator


class IniSection(MutableMapping[str, str]):
    """INI 小节字典。

    同一小节内重复的键不报错，后者覆盖前者。
    所有键值对均*应该*是`str: str`类型（哪怕值为空串），
    但由于 Python 的动态类型性质，运行时并不会对此作出限制。
    """
    def __init__(self, pairs_to_import: Mapping[str, str] | None = None):
        self.__raw: dict[str, str] = {}
        if pairs_to_import:
            self.update(pairs_to_import)

    def __getitem__(self, key: str) -> str:
        return self.__raw[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.__raw[key] = value

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return self.__raw.__repr__()

    def to_dict(self) -> dict[str, str]:
        return self.__raw.copy()


def _atoi(name: str) -> int | None:
    # base-10 only: no whitespace, no `_` separators, no non-ASCII digits.
    digits = name[1:] if name[:1] in ('+', '-') else name
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    return int(name)


class IniFile(MutableMapping[str, IniSection]):
    """INI 文件表示。支持以下形式的小节和键值对：

        ```ini
        ; comments start with ';' or '#'
        key = val  # 游离的键值对，归入名为 "" 的小节。

        [section]
        key233 = val666
        [section]  ; 重复声明的小节会被合并
        key233 = val114514
        ```

    小节之间的顺序没有实际意义。
    """
    def __init__(self) -> None:
        self.__raw: dict[str, IniSection] = {}

    def __getitem__(self, key: str) -> IniSection:
        return self.__raw[key]

    def __setitem__(
        self,
        key: str,
        value: IniSection | Mapping[str, str]
    ) -> None:
        # shouldn't keep ptr to external dict in key setting operation.
        self.__raw[key] = (
            value if isinstance(value, IniSection)
            else IniSection(value)
        )

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return self.__raw.__repr__()

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {k: v.to_dict() for k, v in self.__raw.items()}

    def section(self, name: str) -> IniSection:
        """Returns the named section, created if it does not exist yet."""
        if name not in self.__raw:
            self.__raw[name] = IniSection()
        return self.__raw[name]

    def get_section(self, name: str) -> IniSection | None:
        """Same as `section()` but never creates; `None` if absent."""
        return self.__raw.get(name)

    def find_value(self, section: str, key: str) -> tuple[str | None, bool]:
        """Looks up `key` in `section`.

        Returns:
            - if found: `(value, True)`
            - if either the section or the key is missing: `(None, False)`
        """
        if (sect := self.__raw.get(section)) is None or key not in sect:
            return None, False
        return sect[key], True

    def timer_sections(self) -> dict[int, str]:
        """收集名称为纯数字的小节，按`int(name): name`返回。

        每次调用都会重新生成一个新字典，不会保留上一次的结果。
        像`5`与`+5`这样数值相同的小节名，后遍历到的覆盖前者。
        """
        ret: dict[int, str] = {}
        for name in self.__raw:
            if (i := _atoi(name)) is not None:
                ret[i] = name
        return ret

    def time_section_count(self) -> int:
        """纯数字小节的数量。需要具体映射请改用`self.timer_sections()`。"""
        return len(self.timer_sections())

    def load(self, buf: TextIOBase) -> 'IniFile':
        """Reads INI data from a decoded stream into self."""
        from .parser import IniParser
        return IniParser.readstream(buf, self)

    def load_file(
        self, filename: str | PathLike[str],
        encoding: str | None = None
    ) -> 'IniFile':
        """Reads INI data from a file on disk into self."""
        from .parser import IniParser
        return IniParser(filename, encoding).read(self)
