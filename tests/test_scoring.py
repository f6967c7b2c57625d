"""Tests for confidence scoring and the potential-item counter."""

import pytest

from lyncis.intake.config import ScoringWeights
from lyncis.intake.models import Contact, ExtractedItem
from lyncis.intake.scoring import count_potential_items, score_confidence

FULL = Contact(name="Budi", phone="081234567890", address="Jl. Sudirman No. 1")
PRICED = [ExtractedItem.from_unit_price("Pocky", 2, 30000)]
UNPRICED = [ExtractedItem.from_unit_price("ayam goreng", 2, 0)]


class TestScoreConfidence:
    def test_nothing_recognized(self):
        assert score_confidence(Contact(), []) == 0.0

    def test_complete_order_is_capped(self):
        assert score_confidence(FULL, PRICED) == 1.0

    def test_unpriced_items(self):
        assert score_confidence(FULL, UNPRICED) == pytest.approx(1.0)
        assert score_confidence(Contact(), UNPRICED) == pytest.approx(0.15)
        assert score_confidence(Contact(), PRICED) == pytest.approx(0.2)

    def test_length_thresholds(self):
        assert score_confidence(Contact(name="Al"), []) == 0.0
        assert score_confidence(Contact(name="Ali"), []) == pytest.approx(0.35)
        assert score_confidence(Contact(phone="1234567"), []) == 0.0
        assert score_confidence(Contact(address="Jl. Mawar"), []) == 0.0

    def test_adding_fields_never_decreases(self):
        steps = [
            (Contact(name="Budi"), []),
            (Contact(name="Budi", phone="081234567890"), []),
            (FULL, []),
            (FULL, UNPRICED),
            (FULL, PRICED),
        ]
        scores = [score_confidence(c, i) for c, i in steps]
        assert scores == sorted(scores)

    def test_custom_weights(self):
        weights = ScoringWeights(name=0.5, phone=0.5, address=0.0, items=0.0,
                                 priced_items=0.0)
        contact = Contact(name="Budi", phone="081234567890")
        assert score_confidence(contact, [], weights) == 1.0


class TestCountPotentialItems:
    def test_counts_item_shapes(self):
        text = "\n".join([
            "2x Pocky @30000",
            "3 Chitato 45000",
            "- Chitato sapi 12rb",
            "Pocky Matcha x2",
            "Indomie 9000",
            "1. Teh Botol",
        ])
        assert count_potential_items(text) == 6

    def test_skips_contact_lines(self):
        text = "Nama: Budi\nHP: 081234567890\nAlamat: Jl. Mawar 5\nalamat jl mawar 5"
        assert count_potential_items(text) == 0

    def test_skips_address_and_region_lines(self):
        text = "Jl. Mawar 10\nKec. Setiabudi 12910\nPerumahan Griya 2"
        assert count_potential_items(text) == 0

    def test_skips_phone_lines(self):
        assert count_potential_items("081234567890") == 0
        assert count_potential_items("0812 3456 7890") == 0

    def test_skips_tabular_lines(self):
        assert count_potential_items("Budi, 0812, Jl Mawar, 2 Pocky") == 0

    def test_skips_headers(self):
        assert count_potential_items("Pesanan:\nOrder") == 0

    def test_plain_text_is_not_an_item(self):
        assert count_potential_items("Makasih kak") == 0

    def test_city_word_inside_item_name(self):
        assert count_potential_items("2x Kue Kota Tua @15000") == 1

    def test_skips_postal_code_lines(self):
        assert count_potential_items("Jakarta Selatan 12120") == 0
