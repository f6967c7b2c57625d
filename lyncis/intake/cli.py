"""CLI entry point for the order intake module."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from .assembler import OrderAssembler
from .config import IntakeConfig, load_config
from .fallback import create_extractor
from .models import PartialOrder
from .pipeline import IntakePipeline, IntakeResult
from .region import create_resolver
from .validator import validate_order


def main(argv: list[str] | None = None) -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="lyncis-intake",
        description="Ubah teks pesanan WhatsApp menjadi data pesanan terstruktur",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path file konfigurasi (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Tampilkan log debug"
    )

    sub = parser.add_subparsers(dest="command")

    # parse
    parse_parser = sub.add_parser("parse", help="Urai teks pesanan")
    parse_parser.add_argument(
        "file", nargs="?", default="-",
        help="File teks pesanan (default: stdin)",
    )
    parse_parser.add_argument("--json", action="store_true", help="Keluaran JSON")
    parse_parser.add_argument(
        "--ai", action="store_true",
        help="Gunakan ekstraksi AI bila hasil aturan belum lengkap",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    match args.command:
        case "parse":
            asyncio.run(_cmd_parse(config, args))


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def build_pipeline(config: IntakeConfig, use_ai: bool = False) -> IntakePipeline:
    assembler = OrderAssembler(resolver=create_resolver(config), config=config)
    fallback = None
    if use_ai or config.fallback.enabled:
        fallback = create_extractor(config)
    return IntakePipeline(assembler=assembler, fallback=fallback)


async def _cmd_parse(config: IntakeConfig, args) -> None:
    try:
        text = _read_input(args.file)
    except OSError as e:
        print(f"Gagal membaca input: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        pipeline = build_pipeline(config, use_ai=args.ai)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    result = await pipeline.run(text)

    if args.json:
        print(json.dumps(result_to_json(result), ensure_ascii=False, indent=2))
        return

    if not result.orders:
        print("Tidak ada pesanan yang terdeteksi.")
        return

    source = "AI" if result.used_fallback else "aturan"
    print(f"📦 {len(result.orders)} pesanan terdeteksi (sumber: {source})")
    threshold = config.scoring.review_threshold
    for idx, order in enumerate(result.orders, start=1):
        print()
        print(format_order(order, idx, threshold))


def result_to_json(result: IntakeResult) -> dict:
    data = result.to_dict()
    for entry, order in zip(data["orders"], result.orders):
        validation = validate_order(order)
        entry["validation"] = {
            "is_complete": validation.is_complete,
            "issues": validation.issues,
        }
    return data


def format_rupiah(amount: int) -> str:
    """``15000`` → ``"Rp15.000"``"""
    return "Rp" + f"{amount:,}".replace(",", ".")


def format_order(order: PartialOrder, index: int, review_threshold: float) -> str:
    lines = [f"Pesanan {index}  (keyakinan {order.confidence:.0%})"]
    contact = order.contact
    lines.append(f"  Nama    : {contact.name or '-'}")
    lines.append(f"  Telepon : {contact.phone or '-'}")
    lines.append(f"  Alamat  : {contact.address or '-'}")
    if order.region:
        r = order.region
        lines.append(
            f"  Wilayah : {r.subdistrict}, {r.district}, {r.city}, "
            f"{r.province} {r.postal_code}"
        )

    if order.items:
        lines.append("  Barang  :")
        for item in order.items:
            price = (
                f"@ {format_rupiah(item.unit_price)} = {format_rupiah(item.total_price)}"
                if item.total_price
                else "(belum ada harga)"
            )
            lines.append(f"    {item.qty} x {item.name}  {price}")
        lines.append(f"  Subtotal: {format_rupiah(order.subtotal)}")
    else:
        lines.append("  Barang  : -")

    if order.item_shortfall:
        lines.append(
            f"  ⚠ {order.item_shortfall} baris mirip barang tidak terbaca"
        )
    if order.confidence < review_threshold:
        issues = validate_order(order).issues
        lines.append("  ⚠ Perlu dicek: " + "; ".join(issues or ["keyakinan rendah"]))
    return "\n".join(lines)
