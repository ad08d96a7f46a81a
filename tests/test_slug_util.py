import pytest

from jobsolution.utils.rating_util import mean_rating, round_half_up
from jobsolution.utils.slug_util import company_slug, slugify, transliterate


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Яндекс", "yandeks"),
        ("Сбербанк России", "sberbank-rossii"),
        ("Ёлка & Йогурт", "yolka-yogurt"),
        ("Щука, Объём", "schuka-obyom"),
        ("  Acme   Corp.  ", "acme-corp"),
        ("Café Müller", "cafe-muller"),
        ("!!!", ""),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_transliterate_keeps_case():
    assert transliterate("Москва") == "Moskva"
    assert transliterate("Жук") == "Zhuk"


def test_company_slug_appends_id():
    assert company_slug("Тинькофф Банк", 7) == "tinkoff-bank-7"
    assert company_slug("***", 12) == "12"


def test_round_half_up():
    assert round_half_up(0.25) == 0.3
    assert round_half_up(4.25) == 4.3
    assert round_half_up(3.333, 2) == 3.33
    assert round_half_up(2.675, 2) == 2.68


def test_mean_rating():
    assert mean_rating([]) == 0.0
    assert mean_rating([4, 5]) == 4.5
    assert mean_rating([4, 4, 5]) == 4.3
