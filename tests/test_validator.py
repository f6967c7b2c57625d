"""Tests for order completeness validation."""

from lyncis.intake.models import Contact, ExtractedItem, PartialOrder, RegionMatch
from lyncis.intake.validator import validate_batch, validate_order

REGION = RegionMatch("DKI JAKARTA", "KOTA JAKARTA PUSAT", "TANAH ABANG", "GELORA",
                     "10270", 0.95)
CONTACT = Contact(name="Budi", phone="081234567890", address="Jl. Sudirman No. 1")


def _order(**kwargs):
    defaults = {
        "contact": CONTACT,
        "items": [ExtractedItem.from_unit_price("Pocky", 2, 30000)],
        "region": REGION,
    }
    defaults.update(kwargs)
    return PartialOrder(**defaults)


def test_complete_order():
    result = validate_order(_order())
    assert result.is_complete is True
    assert result.issues == []


def test_missing_contact_fields():
    result = validate_order(_order(contact=Contact()))
    assert result.is_complete is False
    assert result.issues == [
        "Nama penerima kosong",
        "No. telepon kosong",
        "Alamat lengkap kosong",
    ]


def test_unresolved_region():
    issues = validate_order(_order(region=None)).issues
    assert issues == [
        "Provinsi belum teridentifikasi",
        "Kota belum teridentifikasi",
        "Kecamatan belum teridentifikasi",
        "Kelurahan belum teridentifikasi",
        "Kodepos belum teridentifikasi",
    ]


def test_partial_region():
    region = RegionMatch("DKI JAKARTA", "KOTA JAKARTA PUSAT", "", "", "", 0.5)
    issues = validate_order(_order(region=region)).issues
    assert "Provinsi belum teridentifikasi" not in issues
    assert "Kecamatan belum teridentifikasi" in issues


def test_no_items():
    assert validate_order(_order(items=[])).issues == ["Tidak ada barang"]


def test_all_items_unpriced():
    items = [ExtractedItem.from_unit_price("ayam goreng", 2, 0)]
    assert validate_order(_order(items=items)).issues == ["Semua barang belum ada harga"]


def test_some_items_priced():
    items = [
        ExtractedItem.from_unit_price("ayam goreng", 2, 0),
        ExtractedItem.from_total_price("Chitato", 3, 45000),
    ]
    assert validate_order(_order(items=items)).is_complete is True


def test_validate_batch():
    results = validate_batch([_order(), _order(items=[])])
    assert [r.is_complete for r in results] == [True, False]
