import io

import pytest

from compname.providers import HostNameProvider, StaticProvider
from compname.reporter import HostNameReporter, format_name


def report(provider):
    out = io.BytesIO()
    code = HostNameReporter(provider, file=out).run()
    return code, out.getvalue()


@pytest.mark.parametrize("name, expected", [
    ("MacBook-Pro", '"MacBook-Pro"'),
    ("Living room", '"Living room"'),
    ("", '""'),
    (None, '""'),
])
def test_format_name(name, expected):
    assert format_name(name) == expected


def test_reports_name():
    assert report(StaticProvider("MacBook-Pro")) == (0, b'"MacBook-Pro"\n')


def test_reports_non_ascii_name_as_utf8():
    assert report(StaticProvider("José-PC")) == (0, '"José-PC"\n'.encode("utf-8"))


@pytest.mark.parametrize("value", [None, "", b"\xff\xfe", b"host\x00", "x" * 256])
def test_unavailable_name_prints_empty_quotes(value):
    assert report(StaticProvider(value)) == (0, b'""\n')


def test_invalid_name_from_custom_provider():

    class BrokenProvider(HostNameProvider):
        def get_computer_name(self):
            return "bad\x00name"

    assert report(BrokenProvider()) == (0, b'""\n')


def test_same_output_on_repeated_runs():
    provider = StaticProvider("MacBook-Pro")
    assert report(provider) == report(provider)
