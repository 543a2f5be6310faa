import pytest

from eetf_codec.casing import split_words, to_camel_case, to_snake_case


@pytest.mark.parametrize('name, words', [
    ('Ok', ['Ok']),
    ('AnOption', ['An', 'Option']),
    ('an_option', ['an', 'option']),
    ('an-option', ['an', 'option']),
    ('HTTPServer', ['HTTP', 'Server']),
    ('AN_OPTION', ['AN', 'OPTION']),
    ('Utf8Text', ['Utf8', 'Text']),
    ('', []),
])
def test_split_words(name: str, words: list[str]) -> None:
    assert split_words(name) == words


@pytest.mark.parametrize('name, expected', [
    ('Ok', 'ok'),
    ('Error', 'error'),
    ('AnOption', 'an_option'),
    ('an_option', 'an_option'),
    ('AN_OPTION', 'an_option'),
    ('HTTPServer', 'http_server'),
])
def test_to_snake_case(name: str, expected: str) -> None:
    assert to_snake_case(name) == expected


@pytest.mark.parametrize('name, expected', [
    ('ok', 'Ok'),
    ('an_option', 'AnOption'),
    ('AnOption', 'AnOption'),
    ('an-option', 'AnOption'),
    ('HTTP_SERVER', 'HttpServer'),
])
def test_to_camel_case(name: str, expected: str) -> None:
    assert to_camel_case(name) == expected


def test_camel_case_is_stable_after_snake_case() -> None:
    for name in ['Ok', 'AnOption', 'SomeLongVariantName', 'Utf8Text']:
        assert to_camel_case(to_snake_case(name)) == name
