"""Tests for the local CLI entry point."""

import json
from unittest.mock import patch

import pytest

from price_ranges.main import load_products, main
from price_ranges.models import PriceRangesResponse


@pytest.fixture
def seed_file(tmp_path, luggage_products):
    path = tmp_path / "products.json"
    path.write_text(json.dumps([p.model_dump(mode="json") for p in luggage_products]))
    return path


def test_load_products(seed_file):
    products = load_products(seed_file)

    assert len(products) == 10
    assert str(products[0].price) == "78.60"


def test_main_seeds_and_runs_pipeline(seed_file, capsys):
    """Test that --seed-file recreates the index before aggregating."""
    expected = PriceRangesResponse(category="Luggage", mode="collapsed", buckets=[])

    with patch("price_ranges.main.ElasticsearchRepository") as mock_repo_class:
        with patch("price_ranges.main.create_products_index") as mock_create:
            with patch("price_ranges.main.index_products") as mock_index:
                with patch("price_ranges.main.run_pipeline", return_value=expected) as mock_run_pipeline:
                    main([
                        "--elasticsearch-url", "http://localhost:9200",
                        "--category", "Luggage",
                        "--buckets", "4",
                        "--seed-file", str(seed_file),
                        "--quiet",
                    ])

                    repository = mock_repo_class.return_value.__enter__.return_value
                    mock_repo_class.assert_called_once_with(base_url="http://localhost:9200", index="products")
                    mock_create.assert_called_once_with(repository, verbose=False)
                    assert len(mock_index.call_args[0][1]) == 10
                    mock_run_pipeline.assert_called_once_with(
                        repository=repository,
                        category="Luggage",
                        mode="collapsed",
                        bucket_count=4,
                        verbose=False,
                    )

    assert json.loads(capsys.readouterr().out) == {"category": "Luggage", "mode": "collapsed", "buckets": []}


def test_main_requires_elasticsearch_url(monkeypatch):
    monkeypatch.delenv("ELASTICSEARCH_URL", raising=False)

    with pytest.raises(ValueError, match="--elasticsearch-url"):
        main(["--category", "Luggage"])
