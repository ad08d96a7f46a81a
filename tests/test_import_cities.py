import pytest

from jobsolution.models.city_model import City
from jobsolution.scripts.import_cities import ImportFormatError, import_cities, main, resolve_columns


def test_resolve_columns_accepts_russian_headers():
    assert resolve_columns(["Город", " Регион", "Страна "]) == {"name": 0, "region": 1, "country": 2}
    with pytest.raises(ImportFormatError):
        resolve_columns(["name", "region"])


def test_import_cities(db):
    lines = [
        "country;name;region",
        "Россия;Москва;Москва",
        "Россия;Сочи;",
        "Россия;;Тверская область",
        "",
        "Россия;Москва;Москва",
        "Россия;Сочи;Сочи",
    ]
    result = import_cities(db, lines)

    assert result.read == 5
    assert result.inserted == 2
    assert result.duplicates == 2
    assert result.skipped == 1
    sochi = db.query(City).filter(City.name == "Сочи").one()
    assert sochi.region == "Сочи"
    assert sochi.country == "Россия"


def test_import_rejects_bad_header(db):
    with pytest.raises(ImportFormatError):
        import_cities(db, ["city;country", "Kazan;Russia"])
    with pytest.raises(ImportFormatError):
        import_cities(db, [])
    assert db.query(City).count() == 0


def test_main_reads_file(db, tmp_path):
    path = tmp_path / "cities.csv"
    path.write_text("name;region;country\nKazan;Tatarstan;Russia\n", encoding="utf-8")
    assert main([str(path)]) == 0
    assert db.query(City).filter(City.name == "Kazan").count() == 1

    bad = tmp_path / "bad.csv"
    bad.write_text("name;country_code\nKazan;RU\n", encoding="utf-8")
    assert main([str(bad)]) == 1
    assert main([str(tmp_path / "missing.csv")]) == 1
