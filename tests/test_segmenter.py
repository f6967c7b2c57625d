"""Tests for block segmentation."""

from lyncis.intake.segmenter import segment_blocks


def test_blank_lines_split_orders():
    text = "Nama: Budi\n2x Pocky @30000\n\n\nNama: Siti\n1 Chitato 12000"
    assert segment_blocks(text) == [
        "Nama: Budi\n2x Pocky @30000",
        "Nama: Siti\n1 Chitato 12000",
    ]


def test_separator_lines_split_orders():
    text = "Nama: Budi\n=====\nNama: Siti\n-----\nNama: Rina"
    assert segment_blocks(text) == ["Nama: Budi", "Nama: Siti", "Nama: Rina"]


def test_numbered_name_entries_split_and_drop_number():
    text = "1. Nama: Budi\n2x Pocky @30000\n2) Nama: Siti\n1 Chitato 12000"
    assert segment_blocks(text) == [
        "Nama: Budi\n2x Pocky @30000",
        "Nama: Siti\n1 Chitato 12000",
    ]


def test_numbered_items_do_not_split():
    text = "Nama: Budi\n1. Chitato @12000\n2. Pocky @30000"
    assert len(segment_blocks(text)) == 1


def test_short_blocks_are_noise():
    assert segment_blocks("ok\n\nNama: Budi") == ["Nama: Budi"]


def test_custom_min_length():
    assert segment_blocks("ok\n\nNama: Budi", min_length=1) == ["ok", "Nama: Budi"]


def test_empty_text():
    assert segment_blocks("") == []
    assert segment_blocks("\n\n   \n") == []


def test_second_name_label_starts_new_order():
    text = (
        "Nama: Budi\nHP: 081111111111\n2x Pocky @30000\n"
        "Nama: Siti\nHP: 082222222222\n1x Chitato @12000"
    )
    assert segment_blocks(text) == [
        "Nama: Budi\nHP: 081111111111\n2x Pocky @30000",
        "Nama: Siti\nHP: 082222222222\n1x Chitato @12000",
    ]


def test_items_before_name_stay_in_one_block():
    text = "2x Pocky @30000\n1x Chitato @12000\nNama: Budi\nHP: 081111111111"
    assert len(segment_blocks(text)) == 1


def test_label_synonyms_split_back_to_back_orders():
    text = "Penerima: Budi\n2x Pocky @30000\nA/N: Siti\n1x Chitato @12000"
    assert [b.splitlines()[0] for b in segment_blocks(text)] == [
        "Penerima: Budi", "A/N: Siti",
    ]
