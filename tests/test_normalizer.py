from vehicle_data.normalizer import (
    descriptor_from_registry,
    parse_int,
    parse_years,
    sorted_trims,
    sorted_unique,
    trim_label,
    unique_trims,
)


def test_registry_result_maps_to_descriptor():
    desc = descriptor_from_registry({
        "Make": "HONDA", "Model": "ACCORD", "ModelYear": "2003",
        "EngineCylinders": "6", "DisplacementL": "3.0", "DisplacementCC": "2998",
        "BodyClass": "Coupe", "FuelTypePrimary": "Gasoline",
        "TransmissionStyle": "", "TransmissionSpeeds": "5", "DriveType": "FWD",
    })
    assert desc.make == "HONDA"
    assert desc.year == 2003
    assert desc.cylinders == 6
    assert desc.displacement == "3.0L"
    assert desc.transmission == "5"
    assert desc.engine == ""
    assert "engine" in desc.unknown_fields()


def test_engine_falls_back_to_configuration_and_cc():
    desc = descriptor_from_registry({"Make": "FORD", "EngineConfiguration": "V-Shaped", "DisplacementCC": "4951"})
    assert desc.engine == "V-Shaped"
    assert desc.displacement == "4951cc"
    assert desc.year == 0


def test_engine_model_preferred_over_configuration():
    desc = descriptor_from_registry({"Model": "F-150", "EngineModel": "Coyote", "EngineConfiguration": "V-Shaped"})
    assert desc.engine == "Coyote"


def test_secondary_fields_only_is_not_a_vehicle():
    assert descriptor_from_registry({"EngineModel": "J35A4", "BodyClass": "Sedan"}) is None
    assert descriptor_from_registry({"Make": "", "Model": None, "ModelYear": ""}) is None
    assert descriptor_from_registry(None) is None


def test_non_numeric_cylinders_default_to_zero():
    desc = descriptor_from_registry({"Make": "TESLA", "EngineCylinders": "Electric", "ModelYear": "abc"})
    assert desc.cylinders == 0
    assert desc.year == 0


def test_missing_fields_are_empty_strings_not_none():
    desc = descriptor_from_registry({"Make": "KIA", "BodyClass": None})
    for name, value in desc.to_dict().items():
        assert value is not None, name


def test_parse_int():
    assert parse_int("2020") == 2020
    assert parse_int(" 6 ") == 6
    assert parse_int("") == 0
    assert parse_int(None) == 0
    assert parse_int(True) == 0


def test_sorted_unique_is_deduped_and_locale_sorted():
    out = sorted_unique(["Toyota", "audi", "BMW", "Toyota", "Škoda", "Saab", "toyota"])
    assert out == ["audi", "BMW", "Saab", "Škoda", "Toyota", "toyota"]
    assert len(out) == len(set(out))


def test_sorted_unique_skips_non_strings():
    assert sorted_unique(["Ford", None, 3, "Fiat"]) == ["Fiat", "Ford"]


def test_trim_label_resolution():
    assert trim_label({"engine": "2.0L", "trim_engine": "x"}) == "2.0L"
    assert trim_label({"trim_engine": "1.6 TDI"}) == "1.6 TDI"
    assert trim_label({"engine": None}) == ""
    assert trim_label("3.5L V6") == "3.5L V6"


def test_unique_trims_first_occurrence_wins():
    rows = unique_trims([
        {"engine": "2.0L", "hp": 150},
        {"engine": "2.0L", "hp": 999},
        {"engine": "3.5L"},
        {"trim": "no label"},
    ])
    assert [r.engine for r in rows] == ["2.0L", "3.5L"]
    assert rows[0].fields["hp"] == 150


def test_sorted_trims_orders_by_label():
    rows = sorted_trims([{"engine": "3.5L"}, {"trim_engine": "1.8L"}, {"engine": "3.5L", "x": 1}])
    assert [r.engine for r in rows] == ["1.8L", "3.5L"]
    assert "x" not in rows[1].fields


def test_parse_years_skips_garbage():
    assert parse_years([{"year": "2019"}, {"year": "n/a"}, {"year": 2020}, {}]) == [2019, 2020]
