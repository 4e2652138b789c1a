"""Tests for the pacman output parsers."""

from __future__ import annotations

from models import Classification, DetailRecord
from parsers import parse_detail_block, parse_package_list


QI_OUTPUT = """\
Name            : python-requests
Version         : 2.31.0-1
Description     : Python HTTP for Humans
Architecture    : any
URL             : https://requests.readthedocs.io/
Licenses        : Apache-2.0
Groups          : None
Provides        : None
Depends On      : python-charset-normalizer  python-idna  python-urllib3
Optional Deps   : python-chardet: alternative character encoding library
                  python-pysocks: SOCKS proxy support [installed]
Required By     : python-pip  yt-dlp
Optional For    : None
Conflicts With  : None
Replaces        : None
Installed Size  : 552.81 KiB
Packager        : Someone <someone@archlinux.org>
Build Date      : Tue 01 Aug 2023 10:00:00 AM UTC
Install Date    : Wed 02 Aug 2023 10:00:00 AM UTC
Install Reason  : Installed as a dependency for another package
Install Script  : No
Validated By    : Signature

"""


def test_package_list_yields_name_and_version() -> None:
    records = parse_package_list("foo 1.0-1\nbar 2.0-3\n", Classification.EXPLICIT)
    assert [(r.name, r.version) for r in records] == [("foo", "1.0-1"), ("bar", "2.0-3")]
    assert all(r.classification is Classification.EXPLICIT for r in records)
    assert all(r.details is None for r in records)


def test_package_list_skips_short_lines() -> None:
    text = "foo 1.0\n\nlonely\n   \nbar\t2.0\n"
    records = parse_package_list(text, Classification.FOREIGN)
    assert [r.name for r in records] == ["foo", "bar"]


def test_package_list_ignores_extra_fields() -> None:
    records = parse_package_list("foo 1.0 extra junk", Classification.DEPENDENCY)
    assert len(records) == 1
    assert records[0].version == "1.0"


def test_detail_block_quirk_scenario() -> None:
    details = parse_detail_block("Depends On  : libx libY\nURL : http://x\n")
    assert details.depends_on == ["libx libY"]
    assert details.url == "http://x"
    assert details.name == ""
    assert details.required_by == []


def test_detail_block_full_output() -> None:
    details = parse_detail_block(QI_OUTPUT)
    assert details.name == "python-requests"
    assert details.version == "2.31.0-1"
    assert details.description == "Python HTTP for Humans"
    assert details.url == "https://requests.readthedocs.io/"
    assert details.depends_on == ["python-charset-normalizer  python-idna  python-urllib3"]
    assert details.optional_dependencies == [
        "python-chardet: alternative character encoding library "
        "python-pysocks: SOCKS proxy support [installed]",
    ]
    assert details.required_by == ["python-pip", "yt-dlp"]
    assert details.optional_for == ["None"]
    assert details.installed_size == "552.81 KiB"
    assert details.install_reason == "Installed as a dependency for another package"


def test_detail_block_missing_keys_stay_empty() -> None:
    assert parse_detail_block("") == DetailRecord()
    assert parse_detail_block("garbage without colon\nUnknown Key : value\n") == DetailRecord()


def test_detail_block_value_keeps_later_colons() -> None:
    details = parse_detail_block("Description : a tool: does things\n")
    assert details.description == "a tool: does things"


def test_continuation_extends_split_lists() -> None:
    details = parse_detail_block("Required By : a b\n              c d\nVersion : 1\n   ignored\n")
    assert details.required_by == ["a", "b", "c", "d"]
    assert details.version == "1"


def test_empty_list_value_gives_empty_list() -> None:
    details = parse_detail_block("Depends On :\nRequired By :   \n")
    assert details.depends_on == []
    assert details.required_by == []


def test_wrapped_depends_on_stays_one_token() -> None:
    details = parse_detail_block("Depends On : a  b\n             c  d\nURL : x\n")
    assert details.depends_on == ["a  b c  d"]
    assert details.url == "x"


def test_wrapped_value_after_empty_first_line() -> None:
    details = parse_detail_block("Optional Deps :\n                foo: bar\n")
    assert details.optional_dependencies == ["foo: bar"]


def test_line_without_colon_ends_list_field() -> None:
    details = parse_detail_block("Required By : a\nnocolon\n   z\n")
    assert details.required_by == ["a"]
