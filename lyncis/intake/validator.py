"""Completeness checks for parsed orders before they are committed."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import PartialOrder


@dataclass
class ValidationResult:
    is_complete: bool
    issues: list[str] = field(default_factory=list)


def validate_order(order: PartialOrder) -> ValidationResult:
    """List what still has to be filled in by hand for ``order``."""
    issues: list[str] = []
    contact = order.contact

    if not contact.name.strip():
        issues.append("Nama penerima kosong")
    if not contact.phone.strip():
        issues.append("No. telepon kosong")
    if not contact.address.strip():
        issues.append("Alamat lengkap kosong")

    region = order.region
    if region is None or not region.province:
        issues.append("Provinsi belum teridentifikasi")
    if region is None or not region.city:
        issues.append("Kota belum teridentifikasi")
    if region is None or not region.district:
        issues.append("Kecamatan belum teridentifikasi")
    if region is None or not region.subdistrict:
        issues.append("Kelurahan belum teridentifikasi")
    if region is None or not region.postal_code:
        issues.append("Kodepos belum teridentifikasi")

    if not order.items:
        issues.append("Tidak ada barang")
    elif all(i.unit_price == 0 and i.total_price == 0 for i in order.items):
        issues.append("Semua barang belum ada harga")

    return ValidationResult(is_complete=not issues, issues=issues)


def validate_batch(orders: list[PartialOrder]) -> list[ValidationResult]:
    return [validate_order(o) for o in orders]
