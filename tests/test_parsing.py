"""
Tests for product-name parsing.
"""

import math
import unittest

import pandas as pd

from product_identity.parsing import (
    components_to_dict,
    create_standardized_name,
    extract_brand_with_source,
    extract_package_count,
    extract_product_type,
    extract_volume,
    normalize_product_name,
    parse_dataframe,
    parse_product_name,
    tokenize_product_name,
)


class TestVolumeExtraction(unittest.TestCase):
    """Test cases for volume extraction and unit conversion."""

    def test_millilitres(self):
        info = extract_volume("Avua Cachaca Prata- 750mL")
        self.assertEqual(info.value, 750.0)
        self.assertEqual(info.unit, "ml")
        self.assertEqual(info.standardized_ml, 750.0)
        self.assertEqual(info.matched_text, "750mL")

    def test_bare_m_is_millilitres(self):
        info = extract_volume("AVUA PRATA CACHACA 6PK 750M")
        self.assertEqual(info.unit, "ml")
        self.assertEqual(info.standardized_ml, 750.0)

    def test_decimal_litres(self):
        info = extract_volume("Grey Goose Vodka 1.75L")
        self.assertEqual(info.unit, "l")
        self.assertEqual(info.standardized_ml, 1750.0)

        info = extract_volume("Jack Daniel's 1 Liter")
        self.assertEqual(info.standardized_ml, 1000.0)

    def test_ounces(self):
        info = extract_volume("Coors Light 12oz")
        self.assertEqual(info.unit, "oz")
        self.assertAlmostEqual(info.standardized_ml, 12 * 29.5735)

        info = extract_volume("Vodka 16 fl oz")
        self.assertAlmostEqual(info.standardized_ml, 16 * 29.5735)

    def test_gallons_pints_quarts(self):
        info = extract_volume("Spring Water 1 gal")
        self.assertEqual(info.unit, "gal")
        self.assertAlmostEqual(info.standardized_ml, 3785.41)

        info = extract_volume("Guinness Draught 1 pint")
        self.assertEqual(info.unit, "pt")
        self.assertAlmostEqual(info.standardized_ml, 473.176)

        info = extract_volume("Hard Cider 2 qt")
        self.assertEqual(info.unit, "qt")
        self.assertAlmostEqual(info.standardized_ml, 2 * 946.353)

    def test_matcher_priority_wins_over_position(self):
        # ml matcher is tried before litres even though 1.75L comes first
        info = extract_volume("Jameson 1.75L 750ml")
        self.assertEqual(info.unit, "ml")
        self.assertEqual(info.standardized_ml, 750.0)
        self.assertEqual(parse_product_name("Jameson 1.75L 750ml").volume, "750ml")

    def test_no_volume(self):
        self.assertIsNone(extract_volume("Corona Extra"))
        self.assertIsNone(extract_volume(""))


class TestPackageCount(unittest.TestCase):
    """Test cases for package-count extraction."""

    def test_pack_notations(self):
        cases = {
            "AVUA PRATA CACHACA 6PK 750M": 6,
            "Modelo 6-pack": 6,
            "Corona 12 Pack": 12,
            "Case of 24 Corona": 24,
            "Heineken 24ct": 24,
            "Tito's Vodka 12 x 750ml": 12,
            "Corona 24 bottles": 24,
            "Heineken 12 btl": 12,
            "Case of 12 Corona 355ml": 12,
            "Modelo 18 count": 18,
        }
        for name, expected in cases.items():
            with self.subTest(name=name):
                self.assertEqual(extract_package_count(name), expected)

    def test_defaults_to_single_unit(self):
        self.assertEqual(extract_package_count("Grey Goose Vodka 750mL"), 1)
        self.assertEqual(extract_package_count(""), 1)

    def test_zero_count_ignored(self):
        self.assertEqual(extract_package_count("Vodka 0pk"), 1)

    def test_oversized_digit_run_never_raises(self):
        name = "Corona Extra " + "9" * 5000 + "pk"
        comp = parse_product_name(name)
        self.assertGreaterEqual(comp.package_count, 1)
        self.assertGreaterEqual(extract_package_count(name), 1)


class TestNormalization(unittest.TestCase):
    """Test cases for name normalization."""

    def test_brand_variants_collapse(self):
        self.assertEqual(
            normalize_product_name("Jack Daniel's Old No. 7"), "jackdaniels old no 7",
        )
        self.assertEqual(
            normalize_product_name("Tito's Handmade Vodka"), "titos handmade vodka",
        )

    def test_punctuation_and_case(self):
        self.assertEqual(normalize_product_name("Grey Goose – Vodka™"), "greygoose vodka")
        self.assertEqual(
            normalize_product_name("GREY GOOSE VODKA 750ML"),
            normalize_product_name("Grey Goose Vodka 750mL"),
        )


class TestTokenization(unittest.TestCase):
    """Test cases for tokenization."""

    def test_volume_removed(self):
        self.assertEqual(
            tokenize_product_name("Avua Cachaca Prata- 750mL"),
            ["avua", "cachaca", "prata"],
        )

    def test_package_notation_removed(self):
        self.assertEqual(
            tokenize_product_name("AVUA PRATA CACHACA 6PK 750M"),
            ["avua", "prata", "cachaca"],
        )
        self.assertEqual(
            tokenize_product_name("Tito's Vodka 12 x 750ml"), ["tito", "vodka"],
        )

    def test_stop_words_and_short_tokens_dropped(self):
        self.assertEqual(
            tokenize_product_name("The Macallan 12 Year"), ["macallan", "12", "year"],
        )


class TestBrandDetection(unittest.TestCase):
    """Test cases for brand detection branches."""

    def _brand(self, name):
        return extract_brand_with_source(name, tokenize_product_name(name))

    def test_multi_word(self):
        self.assertEqual(
            self._brand("JACK DANIELS WHISKEY 750ML"), ("Jack Daniels", "multi_word"),
        )
        self.assertEqual(self._brand("Corona Extra"), ("Corona Extra", "multi_word"))

    def test_vocabulary(self):
        self.assertEqual(
            self._brand("Patron Silver Tequila 750mL"), ("Patron", "vocabulary"),
        )
        self.assertEqual(self._brand("Tito's Handmade Vodka"), ("Titos", "vocabulary"))

    def test_positional_fallback(self):
        self.assertEqual(
            self._brand("Generic Vodka 750ml"), ("Generic Vodka", "positional"),
        )

    def test_no_brand(self):
        self.assertEqual(self._brand("750ml"), ("", "none"))


class TestProductType(unittest.TestCase):
    """Test cases for product-type detection."""

    def test_known_types(self):
        self.assertEqual(extract_product_type("Grey Goose Vodka"), "Vodka")
        self.assertEqual(extract_product_type("Avua Cachaca Prata"), "Cachaca")
        self.assertEqual(extract_product_type("Jameson Irish Whiskey"), "Whiskey")

    def test_unknown_type(self):
        self.assertEqual(extract_product_type("Corona Extra"), "")


class TestParseProductName(unittest.TestCase):
    """Test cases for full parsing."""

    def test_full_parse(self):
        comp = parse_product_name("AVUA PRATA CACHACA 6PK 750M")
        self.assertEqual(comp.brand, "Avua")
        self.assertEqual(comp.product_type, "Cachaca")
        self.assertEqual(comp.volume, "750ml")
        self.assertEqual(comp.volume_ml, 750.0)
        self.assertEqual(comp.package_count, 6)
        self.assertEqual(comp.descriptors, ("prata",))
        self.assertEqual(comp.original_name, "AVUA PRATA CACHACA 6PK 750M")

    def test_volume_string_keeps_source_unit(self):
        comp = parse_product_name("Grey Goose Vodka 1.75L")
        self.assertEqual(comp.volume, "1.75l")
        self.assertEqual(comp.volume_ml, 1750.0)

    def test_missing_input_never_raises(self):
        comp = parse_product_name(None)
        self.assertEqual(comp.original_name, "")
        self.assertEqual(comp.brand, "")
        self.assertEqual(comp.volume, "")
        self.assertIsNone(comp.volume_ml)
        self.assertEqual(comp.package_count, 1)
        self.assertEqual(comp.tokens, ())

        self.assertEqual(parse_product_name(123).original_name, "123")

    def test_components_to_dict(self):
        data = components_to_dict(parse_product_name("Grey Goose Vodka 750mL"))
        self.assertEqual(data["brand"], "Grey Goose")
        self.assertEqual(data["tokens"], ["grey", "goose", "vodka"])
        self.assertEqual(data["descriptors"], [])


class TestStandardizedName(unittest.TestCase):
    """Test cases for standardized display names."""

    def test_single_and_multipack(self):
        self.assertEqual(
            create_standardized_name(parse_product_name("Avua Cachaca Prata- 750mL")),
            "Avua Cachaca Prata 750mL",
        )
        self.assertEqual(
            create_standardized_name(parse_product_name("AVUA PRATA CACHACA 6PK 750M")),
            "Avua Cachaca Prata 750mL 6PK",
        )

    def test_volume_rounded_to_millilitres(self):
        self.assertEqual(
            create_standardized_name(parse_product_name("Grey Goose Vodka 1.75L")),
            "Grey Goose Vodka 1750mL",
        )
        self.assertEqual(
            create_standardized_name(parse_product_name("Coors Light 12oz")),
            "Coors Light 355mL",
        )

    def test_descriptors_follow_type(self):
        self.assertEqual(
            create_standardized_name(
                parse_product_name("Casamigos Blanco Tequila 750mL"),
            ),
            "Casamigos Tequila Blanco 750mL",
        )

    def test_empty(self):
        self.assertEqual(create_standardized_name(parse_product_name("")), "")


class TestParseDataFrame(unittest.TestCase):
    """Test cases for DataFrame parsing."""

    def test_adds_component_columns(self):
        df = pd.DataFrame(
            {"product_name": ["Grey Goose Vodka 750mL", None], "sku": ["a", "b"]},
        )
        result = parse_dataframe(df)

        self.assertEqual(list(result["brand"]), ["Grey Goose", ""])
        self.assertEqual(result["volume_ml"].iloc[0], 750.0)
        self.assertTrue(math.isnan(result["volume_ml"].iloc[1]))
        self.assertEqual(result["package_count"].dtype, "int64")
        self.assertEqual(list(result["package_count"]), [1, 1])
        self.assertEqual(result["normalized_name"].iloc[0], "greygoose vodka 750ml")
        self.assertNotIn("brand", df.columns)

    def test_missing_column_returns_input(self):
        df = pd.DataFrame({"name": ["Grey Goose"]})
        self.assertIs(parse_dataframe(df), df)


if __name__ == "__main__":
    unittest.main()
