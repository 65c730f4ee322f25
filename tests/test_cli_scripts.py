"""Tests for the command-line scripts."""

import pandas as pd
import pytest

from scripts import match_products, scan_duplicates, score_pair
from product_identity.utils.io_utils import DEFAULTS


@pytest.fixture
def catalog_csv(tmp_path):
    path = tmp_path / "catalog.csv"
    pd.DataFrame(
        {
            "product_id": ["p1", "p2", "p3"],
            "product_name": [
                "Avua Cachaca Prata 1.75L",
                "AVUA PRATA CACHACA 6PK 750M",
                "Grey Goose Vodka 750mL",
            ],
        },
    ).to_csv(path, index=False)
    return path


@pytest.fixture
def missing_config(tmp_path):
    return str(tmp_path / "no_settings.yaml")


class TestMatchProducts:
    def test_ranks_candidates(self, catalog_csv, missing_config, capsys):
        code = match_products.main(
            [
                "Avua Cachaca Prata- 750mL",
                "--candidates", str(catalog_csv),
                "--config", missing_config,
            ],
        )
        out = capsys.readouterr().out

        assert code == 0
        assert "1. AVUA PRATA CACHACA 6PK 750M  0.98 [auto-merge]" in out
        assert "2. Avua Cachaca Prata 1.75L  0.76 [review]" in out
        assert "Grey Goose" not in out

    def test_no_match(self, catalog_csv, missing_config, capsys):
        code = match_products.main(
            ["Casamigos Blanco Tequila", "--candidates", str(catalog_csv),
             "--config", missing_config],
        )
        assert code == 0
        assert "No match" in capsys.readouterr().out

    def test_bad_column(self, catalog_csv, missing_config):
        code = match_products.main(
            ["Avua", "--candidates", str(catalog_csv), "--column", "name",
             "--config", missing_config],
        )
        assert code == 1


class TestScanDuplicates:
    def test_writes_pairs(self, catalog_csv, missing_config, tmp_path, capsys):
        output = tmp_path / "pairs.csv"
        code = scan_duplicates.main(
            [str(catalog_csv), "--output", str(output), "--config", missing_config],
        )

        assert code == 0
        pairs = pd.read_csv(output)
        assert len(pairs) == 1
        assert (pairs["product1_id"].iloc[0], pairs["product2_id"].iloc[0]) == ("p1", "p2")
        assert "Candidates found: 1" in capsys.readouterr().out

    def test_missing_catalog(self, tmp_path, missing_config):
        code = scan_duplicates.main(
            [str(tmp_path / "missing.csv"), "--config", missing_config],
        )
        assert code == 1


class TestScorePair:
    def test_trace(self, capsys):
        confidence = score_pair.trace_scoring(
            "Avua Cachaca Prata- 750mL", "AVUA PRATA CACHACA 6PK 750M", DEFAULTS,
        )
        out = capsys.readouterr().out

        assert confidence == pytest.approx(0.98)
        assert "brand: 'Avua' (via vocabulary)" in out
        assert "AUTO-MERGE" in out
