import pytest

from site_api.utils import spam


@pytest.mark.parametrize(
    "message,expected",
    [
        ("", 0),
        ("no links here", 0),
        ("see https://example.com and http://example.org", 2),
        ("HTTP://A HTTPS://B hTtPs://C", 3),
        ("ftp://example.com www.example.com", 0),
    ],
)
def test__count_links(message: str, expected: int) -> None:
    assert spam.count_links(message) == expected


@pytest.mark.parametrize(
    "message,expected",
    [
        ("Hi, I'd like to talk about a project.", False),
        ("https://a " * 5, False),
        ("https://a " * 6, True),
        ("Buy VIAGRA now", True),
        ("escorts available", True),
        ("Forex signals", True),
        ("cryptocurrency", True),
        ("pornography", True),
        ("Loans", True),
        ("an Investment opportunity", True),
    ],
)
def test__is_spam(message: str, expected: bool) -> None:
    assert spam.is_spam(message) is expected
