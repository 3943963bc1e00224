"""Tests for IniFile / IniSection accessors and numeric sections."""

from io import StringIO

from iniread import IniFile, IniSection, load


def test_section_creates_on_access():
    ini = IniFile()
    sect = ini.section('Foo')
    assert isinstance(sect, IniSection)
    assert 'Foo' in ini
    sect['bar'] = 'baz'
    assert ini.section('Foo') is sect
    assert ini == {'Foo': {'bar': 'baz'}}


def test_get_section_does_not_create():
    ini = IniFile()
    assert ini.get_section('Foo') is None
    assert 'Foo' not in ini
    ini.section('Foo')
    assert ini.get_section('Foo') == {}


def test_find_value():
    ini = load(StringIO('[Foo]\nbar = baz\n'))
    assert ini.find_value('Foo', 'bar') == ('baz', True)
    assert ini.find_value('Foo', 'nope') == (None, False)
    assert ini.find_value('Nope', 'bar') == (None, False)
    # lookups never create sections
    assert 'Nope' not in ini


def test_setitem_copies_plain_dict():
    ini = IniFile()
    raw = {'a': '1'}
    ini['S'] = raw
    raw['a'] = '2'
    assert isinstance(ini['S'], IniSection)
    assert ini['S']['a'] == '1'


def test_time_section_count():
    ini = load(StringIO('[1]\na=1\n[2]\n[abc]\n'))
    assert ini.time_section_count() == 2
    assert ini.timer_sections() == {1: '1', 2: '2'}


def test_timer_sections_rebuilt_per_call():
    first = load(StringIO('[1]\n[2]\n[abc]\n'))
    kept = first.timer_sections()
    second = load(StringIO('[5]\n'))
    assert second.time_section_count() == 1
    assert second.timer_sections() == {5: '5'}
    # the earlier result belongs to its caller
    assert kept == {1: '1', 2: '2'}


def test_timer_sections_integer_rules():
    ini = IniFile()
    for name in ('-3', '+7', '1_0', ' 4', '', '12a', '٣'):
        ini.section(name)
    assert ini.timer_sections() == {-3: '-3', 7: '+7'}


def test_timer_sections_collision_overwrites():
    ini = IniFile()
    ini.section('5')
    ini.section('05')
    assert ini.timer_sections() == {5: '05'}
    assert ini.time_section_count() == 1


def test_to_dict():
    ini = load(StringIO('k=v\n[S]\na=b\n'))
    assert ini.to_dict() == {'': {'k': 'v'}, 'S': {'a': 'b'}}
    assert type(ini.to_dict()['S']) is dict
