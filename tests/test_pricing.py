"""
Unit tests for the pricing engine.

Covers the documented example scenarios, the edge cases that must degrade
instead of raising, and catalogs supplied by the backend.
"""

import pytest

from models.print_job import MAX_PAGE_COUNT, PrintConfig
from models.print_options import resolve_catalog
from modules.pricing import PricingEngine, compute_price, round2


# Fixtures

@pytest.fixture
def engine():
    return PricingEngine()


@pytest.fixture
def default_catalog():
    return resolve_catalog(None)


@pytest.fixture
def backend_catalog():
    """Catalog with non-trivial rates and multipliers."""
    return resolve_catalog({
        "paperSizes": [
            {"value": "A4", "label": "A4", "costMultiplier": 1.0},
            {"value": "A3", "label": "A3", "costMultiplier": 1.5},
        ],
        "colorTypes": [
            {"value": "color", "label": "Color", "costPerPage": 30},
            {"value": "black_white", "label": "B&W", "costPerPage": 12},
        ],
        "duplexOptions": [
            {"value": "single_sided", "label": "Single", "costMultiplier": 1.0},
            {"value": "double_sided_long_edge", "label": "Long", "costMultiplier": 0.8},
        ],
        "resolutions": [
            {"value": 600, "label": "600 DPI", "costMultiplier": 2.0},
        ],
        "additionalServices": [
            {"name": "Stapling", "cost": 20, "description": "Corner staple"},
        ],
        "maxCopies": 50,
    })


# Example scenarios

class TestExampleScenarios:
    """Worked examples against the default catalog."""

    def test_color_a4_single_sided(self, engine, default_catalog):
        config = PrintConfig(color_type="color", paper_size="A4", duplex="single_sided", copies=1)

        quote = engine.compute_price(config, 5, default_catalog)

        assert quote.total_price == 125.0
        assert quote.total_pages == 5
        assert quote.price_per_page == 25.0
        assert quote.staple_fee == 0.0
        assert quote.provisional is False
        assert quote.warnings == ()

    def test_black_white_duplex_stapled(self, engine, default_catalog):
        config = PrintConfig(
            color_type="black_white",
            duplex="double_sided_long_edge",
            copies=3,
            staple=True,
        )

        quote = engine.compute_price(config, 10, default_catalog)

        assert quote.total_price == 300.05
        assert quote.total_pages == 10
        assert quote.staple_fee == 0.05

    def test_custom_range_bills_selected_pages(self, engine, default_catalog):
        config = PrintConfig(color_type="black_white", page_range="1-3,7", copies=2)

        quote = engine.compute_price(config, 20, default_catalog)

        assert quote.total_pages == 4
        assert quote.total_price == 80.0

    def test_unknown_color_type_uses_black_white_rate(self, engine, default_catalog):
        config = PrintConfig(color_type="sepia")

        quote = engine.compute_price(config, 1, default_catalog)

        assert quote.price_per_page == 10.0
        assert quote.total_price == 10.0
        assert any("sepia" in w for w in quote.warnings)


class TestDefaults:
    """No catalog means the built-in defaults."""

    def test_catalog_argument_optional(self):
        config = PrintConfig(color_type="color", copies=2)
        assert compute_price(config, 3).total_price == 150.0

    def test_same_as_explicit_default_catalog(self, default_catalog):
        config = PrintConfig(color_type="color", staple=True)
        assert compute_price(config, 4) == compute_price(config, 4, default_catalog)


class TestProperties:
    """Determinism, idempotence and monotonicity."""

    def test_idempotent(self, engine, backend_catalog):
        config = PrintConfig(color_type="color", paper_size="A3", copies=4, staple=True)

        first = engine.compute_price(config, 9, backend_catalog)
        second = engine.compute_price(config, 9, backend_catalog)

        assert first == second
        assert first.total_price >= 0

    def test_config_not_mutated(self, engine, default_catalog):
        config = PrintConfig(copies=1000)
        engine.compute_price(config, 2, default_catalog)
        assert config.copies == 1000

    def test_more_copies_never_cheaper(self, engine, default_catalog):
        totals = [
            engine.compute_price(PrintConfig(copies=c, staple=True), 3, default_catalog).total_price
            for c in range(1, 120)
        ]
        assert totals == sorted(totals)

    def test_duplex_does_not_change_billed_pages(self, engine, default_catalog):
        single = engine.compute_price(PrintConfig(duplex="single_sided"), 7, default_catalog)
        double = engine.compute_price(PrintConfig(duplex="double_sided_short_edge"), 7, default_catalog)

        assert single.total_pages == double.total_pages == 7
        assert single.total_price == double.total_price

    def test_resolution_is_price_neutral_by_default(self, engine, default_catalog):
        low = engine.compute_price(PrintConfig(resolution=150), 2, default_catalog)
        high = engine.compute_price(PrintConfig(resolution=600), 2, default_catalog)
        assert low.total_price == high.total_price


class TestMissingPageCount:
    """Unknown page count gives a provisional quote with no price."""

    @pytest.mark.parametrize("page_count", [None, 0, -4])
    def test_provisional_quote(self, engine, default_catalog, page_count):
        quote = engine.compute_price(PrintConfig(), page_count, default_catalog)

        assert quote.provisional is True
        assert quote.total_price is None
        assert quote.total_pages == 0
        assert quote.is_final is False
        assert "Page count unavailable, pricing pending" in quote.warnings

    def test_bool_is_not_a_page_count(self, engine, default_catalog):
        quote = engine.compute_price(PrintConfig(), True, default_catalog)
        assert quote.provisional is True


class TestCopiesClamping:
    """Copies outside [1, maxCopies] are clamped, not rejected."""

    def test_above_max(self, engine, default_catalog):
        quote = engine.compute_price(PrintConfig(copies=500), 1, default_catalog)

        assert quote.total_price == 1000.0  # 10 x 1 page x 100 copies
        assert "Copies adjusted from 500 to 100" in quote.warnings

    def test_below_one(self, engine, default_catalog):
        quote = engine.compute_price(PrintConfig(copies=0), 2, default_catalog)
        assert quote.total_price == 20.0

    def test_max_from_catalog(self, engine, backend_catalog):
        quote = engine.compute_price(PrintConfig(copies=80), 1, backend_catalog)
        assert quote.total_price == 12.0 * 50

    def test_non_numeric_copies(self, engine, default_catalog):
        config = PrintConfig()
        config.copies = "many"

        quote = engine.compute_price(config, 1, default_catalog)

        assert quote.total_price == 10.0
        assert "Invalid copies 'many', using 1" in quote.warnings


class TestPageRangeBilling:

    def test_unparsable_range_bills_whole_document(self, engine, default_catalog):
        quote = engine.compute_price(PrintConfig(page_range="pages please"), 6, default_catalog)

        assert quote.total_pages == 6
        assert quote.total_price == 60.0
        assert any("defaulting to all pages" in w for w in quote.warnings)

    def test_partially_valid_range(self, engine, default_catalog):
        quote = engine.compute_price(PrintConfig(page_range="1-2, 9-4"), 10, default_catalog)

        assert quote.total_pages == 2
        assert "Ignored page range entries: 9-4" in quote.warnings

    def test_all_keyword(self, engine, default_catalog):
        quote = engine.compute_price(PrintConfig(page_range="all"), 11, default_catalog)
        assert quote.total_pages == 11


class TestBackendCatalog:
    """Rates, multipliers and fees from a server-supplied catalog."""

    def test_multipliers_compound(self, engine, backend_catalog):
        config = PrintConfig(
            color_type="color",
            paper_size="A3",
            duplex="double_sided_long_edge",
            copies=2,
            staple=True,
        )

        quote = engine.compute_price(config, 4, backend_catalog)

        # 30 x 1.5 x 0.8 = 36 per page; 36 x 4 x 2 + 20
        assert quote.price_per_page == pytest.approx(36.0)
        assert quote.total_price == 308.0

    def test_staple_service_found_case_insensitively(self, engine, backend_catalog):
        quote = engine.compute_price(PrintConfig(staple=True), 1, backend_catalog)
        assert quote.staple_fee == 20.0

    def test_staple_fee_not_multiplied(self, engine, backend_catalog):
        one = engine.compute_price(PrintConfig(staple=True, copies=1), 1, backend_catalog)
        five = engine.compute_price(PrintConfig(staple=True, copies=5), 1, backend_catalog)
        assert five.total_price - one.total_price == pytest.approx(12.0 * 4)

    def test_staple_fee_falls_back_when_service_missing(self, engine):
        catalog = resolve_catalog({"colorTypes": [{"value": "black_white", "costPerPage": 10}]})
        quote = engine.compute_price(PrintConfig(staple=True), 1, catalog)
        assert quote.staple_fee == 0.05
        assert quote.total_price == 10.05

    def test_paper_size_missing_from_catalog(self, engine, backend_catalog):
        quote = engine.compute_price(PrintConfig(paper_size="Legal"), 1, backend_catalog)

        assert quote.total_price == 12.0
        assert any("paper size 'Legal'" in w for w in quote.warnings)

    def test_duplex_missing_from_catalog(self, engine, backend_catalog):
        quote = engine.compute_price(PrintConfig(duplex="double_sided_short_edge"), 1, backend_catalog)
        assert quote.total_price == 12.0

    def test_color_rate_missing_uses_default_for_that_color(self, engine):
        catalog = resolve_catalog({"colorTypes": [{"value": "black_white", "costPerPage": 12}]})
        quote = engine.compute_price(PrintConfig(color_type="color"), 1, catalog)
        assert quote.price_per_page == 25.0

    def test_resolution_multiplier_applies_when_priced(self, engine, backend_catalog):
        priced = engine.compute_price(PrintConfig(resolution=600), 1, backend_catalog)
        unpriced = engine.compute_price(PrintConfig(resolution=300), 1, backend_catalog)

        assert priced.total_price == 24.0
        assert unpriced.total_price == 12.0

    def test_zero_multiplier_treated_as_missing(self, engine):
        catalog = resolve_catalog({
            "paperSizes": [{"value": "A4", "costMultiplier": 0}],
        })
        quote = engine.compute_price(PrintConfig(paper_size="A4"), 1, catalog)
        assert quote.total_price == 10.0


class TestRound2:

    def test_half_up(self):
        assert round2(2.675) == 2.68
        assert round2(0.125) == 0.13

    def test_float_noise_removed(self):
        assert round2(0.1 * 3) == 0.3


class TestUntrustedInput:
    """Hostile numbers degrade the quote instead of raising."""

    def test_page_count_above_limit_is_provisional(self, engine, default_catalog):
        quote = engine.compute_price(PrintConfig(page_range="1"), MAX_PAGE_COUNT + 1, default_catalog)

        assert quote.provisional is True
        assert quote.total_price is None

    def test_page_count_at_limit(self, engine, default_catalog):
        quote = engine.compute_price(PrintConfig(page_range="1"), MAX_PAGE_COUNT, default_catalog)

        assert quote.total_pages == 1
        assert quote.total_price == 10.0

    def test_infinite_copies(self, engine, default_catalog):
        config = PrintConfig()
        config.copies = float("inf")

        quote = engine.compute_price(config, 2, default_catalog)

        assert quote.total_price == 20.0
        assert "Invalid copies 'inf', using 1" in quote.warnings

    def test_infinite_resolution_is_price_neutral(self, engine, default_catalog):
        config = PrintConfig()
        config.resolution = float("inf")

        assert engine.compute_price(config, 1, default_catalog).total_price == 10.0

    def test_overlong_page_number(self, engine, default_catalog):
        quote = engine.compute_price(PrintConfig(page_range="1" * 5000), 10, default_catalog)

        assert quote.total_pages == 10
        assert quote.total_price == 100.0

    @pytest.mark.parametrize("copies", [1e400, "1e400", "-1e400", "nan"])
    def test_non_finite_copies_from_request(self, copies):
        assert PrintConfig.from_dict({"copies": copies}).copies == 1
