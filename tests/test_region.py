"""Tests for region resolvers."""

import json

import pytest

from lyncis.intake.assembler import parse_orders
from lyncis.intake.config import IntakeConfig
from lyncis.intake.region import NullRegionResolver, create_resolver
from lyncis.intake.region.gazetteer import (
    GazetteerRegionResolver,
    RegionRecord,
    extract_keywords,
    match_region,
    name_variants,
)

LOCATIONS = [
    {
        "province_name": "DKI JAKARTA",
        "city_name": "KOTA JAKARTA SELATAN",
        "district_name": "SETIABUDI",
        "subdistrict_name": "KUNINGAN TIMUR",
        "postal_code": "12950",
    },
    {
        "province_name": "DKI JAKARTA",
        "city_name": "KOTA JAKARTA SELATAN",
        "district_name": "CILANDAK",
        "subdistrict_name": "CIPETE SELATAN",
        "postal_code": "12410",
    },
    {
        "province_name": "JAWA BARAT",
        "city_name": "KOTA BANDUNG",
        "district_name": "COBLONG",
        "subdistrict_name": "DAGO",
        "postal_code": 40135,
    },
]


@pytest.fixture
def gazetteer_path(tmp_path):
    path = tmp_path / "locations.json"
    path.write_text(json.dumps(LOCATIONS), encoding="utf-8")
    return path


@pytest.fixture
def records():
    return [
        RegionRecord(
            province=e["province_name"],
            city=e["city_name"],
            district=e["district_name"],
            subdistrict=e["subdistrict_name"],
            postal_code=str(e["postal_code"]),
        )
        for e in LOCATIONS
    ]


class TestKeywords:
    def test_extract_keywords(self):
        kw = extract_keywords("Jl. Juanda, Kel. Dago, Kec. Coblong, Kota Bandung 40135")
        assert kw.postal_codes == ["40135"]
        assert kw.subdistrict == ["dago"]
        assert kw.district == ["coblong"]
        assert kw.city == ["bandung"]
        assert kw.province == []

    def test_name_variants(self):
        assert name_variants("setia budi (setiabudi)") == [
            "setia budi (setiabudi)", "setia budi", "setiabudi",
        ]
        assert name_variants("dago") == ["dago"]


class TestMatchRegion:
    def test_postal_code(self, records):
        match = match_region("Jl. Mawar 5, Jakarta 12410", records)
        assert match.subdistrict == "CIPETE SELATAN"
        assert match.confidence == 0.95

    def test_keywords_with_cross_validation(self, records):
        match = match_region("Jl. Juanda, Kel. Dago, Kec. Coblong, Kota Bandung", records)
        assert match.subdistrict == "DAGO"
        assert match.province == "JAWA BARAT"
        assert match.confidence == 1.0

    def test_district_only(self, records):
        match = match_region("Jl. Rasuna Said, Kec. Setiabudi", records)
        assert match.district == "SETIABUDI"
        assert match.confidence == pytest.approx(0.5 + 25 / 60)

    def test_weak_city_match_rejected(self, records):
        assert match_region("Kota Bandung", records) is None

    def test_no_keywords(self, records):
        assert match_region("Jl. Mawar 5", records) is None

    def test_unknown_place(self, records):
        assert match_region("Kec. Antah Berantah", records) is None


class TestGazetteerRegionResolver:
    @pytest.mark.asyncio
    async def test_resolve(self, gazetteer_path):
        resolver = GazetteerRegionResolver(gazetteer_path)
        match = await resolver.resolve("Dago, Bandung 40135")
        assert match.district == "COBLONG"
        assert match.postal_code == "40135"

    @pytest.mark.asyncio
    async def test_dataset_loaded_once(self, gazetteer_path):
        resolver = GazetteerRegionResolver(gazetteer_path)
        await resolver.resolve("Jakarta 12950")
        gazetteer_path.unlink()
        match = await resolver.resolve("Jakarta 12950")
        assert match.subdistrict == "KUNINGAN TIMUR"

    @pytest.mark.asyncio
    async def test_locations_wrapper(self, tmp_path):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"locations": LOCATIONS}), encoding="utf-8")
        records = await GazetteerRegionResolver(path).records()
        assert len(records) == 3

    @pytest.mark.asyncio
    async def test_blank_address(self, gazetteer_path):
        assert await GazetteerRegionResolver(gazetteer_path).resolve("  ") is None

    @pytest.mark.asyncio
    async def test_missing_file_degrades_in_assembler(self, tmp_path):
        resolver = GazetteerRegionResolver(tmp_path / "missing.json")
        orders = await parse_orders("Nama: Budi\nAlamat: Jl. Mawar 5, Jakarta 12950",
                                    resolver=resolver)
        assert orders[0].region is None

    @pytest.mark.asyncio
    async def test_unlabeled_postal_line_reaches_resolver(self, gazetteer_path):
        resolver = GazetteerRegionResolver(gazetteer_path)
        order = (await parse_orders(
            "Nama: Budi\nAlamat: Jl. Mawar 5\nJakarta Selatan 12950\n2x Pocky @30000",
            resolver=resolver,
        ))[0]
        assert [i.name for i in order.items] == ["Pocky"]
        assert order.contact.address == "Jl. Mawar 5, Jakarta Selatan 12950"
        assert order.potential_item_count == 1
        assert order.region.subdistrict == "KUNINGAN TIMUR"

    @pytest.mark.asyncio
    async def test_assembler_integration(self, gazetteer_path):
        resolver = GazetteerRegionResolver(gazetteer_path)
        orders = await parse_orders(
            "Nama: Budi\nHP: 081234567890\nAlamat: Jl. Mawar 5, Kec. Cilandak\n"
            "2x Pocky @30000",
            resolver=resolver,
        )
        assert orders[0].region.subdistrict == "CIPETE SELATAN"


class TestCreateResolver:
    def test_disabled(self):
        assert isinstance(create_resolver(IntakeConfig()), NullRegionResolver)

    def test_enabled_without_path(self):
        config = IntakeConfig()
        config.region.enabled = True
        with pytest.raises(ValueError, match="gazetteer_path"):
            create_resolver(config)

    def test_enabled(self, gazetteer_path):
        config = IntakeConfig()
        config.region.enabled = True
        config.region.gazetteer_path = str(gazetteer_path)
        assert isinstance(create_resolver(config), GazetteerRegionResolver)

    @pytest.mark.asyncio
    async def test_null_resolver(self):
        assert await NullRegionResolver().resolve("Jl. Mawar 5") is None
