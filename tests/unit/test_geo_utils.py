import pytest

from senda.utils.geo import distance_km, matches_search, normalize_text, split_address
from senda.utils.validation import format_cuit, is_valid_cuit


class TestDistance:
    def test_same_point_is_zero(self):
        assert distance_km(-31.6106, -60.6973, -31.6106, -60.6973) == 0

    def test_santa_fe_to_rosario(self):
        # Santa Fe capital -> Rosario, roughly 150 km in a straight line
        assert distance_km(-31.6333, -60.7000, -32.9468, -60.6393) == pytest.approx(
            146, abs=5
        )


class TestNormalizeText:
    def test_strips_accents_and_case(self):
        assert normalize_text("Aristóbulo NUÑEZ") == "aristobulo nunez"

    def test_plain_text_unchanged(self):
        assert normalize_text("comedor") == "comedor"


class TestSplitAddress:
    @pytest.mark.parametrize(
        "full,street,number",
        [
            ("San Martín 2345", "San Martín", "2345"),
            ("Av. Freyre 1200B", "Av. Freyre", "1200B"),
            ("Pasaje Mitre S/N", "Pasaje Mitre", "S/N"),
            ("  Calle 9 de Julio 54  ", "Calle 9 de Julio", "54"),
            ("Bulevar Gálvez", "Bulevar Gálvez", ""),
        ],
    )
    def test_split(self, full, street, number):
        assert split_address(full) == {"street": street, "number": number}

    def test_empty(self):
        assert split_address("") == {"street": "", "number": ""}


class TestMatchesSearch:
    def test_direct_match_ignores_accents(self):
        assert matches_search("nino", "Hogar del Niño", "Santa Fe")

    def test_semantic_tag_match(self):
        assert matches_search(
            "hambre", "Comedor Los Pibes", "Santa Fe", semantic_tags=["comedor"]
        )

    def test_no_match(self):
        assert not matches_search("biblioteca", "Club Atlético", "Rosario")


class TestCuit:
    def test_valid(self):
        assert is_valid_cuit("20-12345678-9")
        assert is_valid_cuit("20 12345678 9")
        assert is_valid_cuit("20123456789")

    @pytest.mark.parametrize("value", ["", "20-1234567-9", "20-12345678-X"])
    def test_invalid(self, value):
        assert not is_valid_cuit(value)

    def test_format(self):
        assert format_cuit("20123456789") == "20-12345678-9"
        assert format_cuit("123") == "123"
