"""Tests for the construction gate and material shortfall."""

import pytest

from bottega import (
    BuildingSpec,
    ConstructionGate,
    CraftedItem,
    Era,
    InventoryLedger,
    Material,
    ProgressBook,
    Science,
)

MORTAR_HOUSE = 100
TEMPLE = 200


def _complete_temple_lessons(session) -> None:
    record = session.progress_for(TEMPLE)
    record.earn_badge(Science.GEOMETRY)
    record.earn_badge(Science.ARCHITECTURE)
    record.mark_sketch_complete()
    record.mark_quiz_passed()


class TestCheck:
    def test_unknown_building_raises(self, session):
        with pytest.raises(ValueError, match="Unknown building"):
            session.gate.check(999)
        with pytest.raises(ValueError):
            session.gate.can_start_building(999)

    def test_materials_only_building(self, session):
        report = session.gate.check(MORTAR_HOUSE)
        assert report.sciences_ok
        assert report.sketch_ok
        assert report.quiz_ok
        assert not report.materials_ok
        assert report.missing_materials == {CraftedItem.LIME_MORTAR: 2}
        assert report.requirements_met == 3
        assert report.total_requirements == 4
        assert not report.can_start

    def test_partial_stock_reports_remaining(self, session):
        session.ledger.credit_crafted_item(CraftedItem.LIME_MORTAR)
        report = session.gate.check(MORTAR_HOUSE)
        assert report.missing_materials == {CraftedItem.LIME_MORTAR: 1}

    def test_materials_satisfied(self, session):
        session.ledger.credit_crafted_item(CraftedItem.LIME_MORTAR, 2)
        assert session.gate.can_start_building(MORTAR_HOUSE)

    def test_fresh_temple_meets_nothing(self, session):
        report = session.gate.check(TEMPLE)
        assert report.requirements_met == 0
        assert report.missing_sciences == [Science.GEOMETRY, Science.ARCHITECTURE]

    def test_missing_one_badge(self, session):
        _complete_temple_lessons(session)
        session.progress_for(TEMPLE).science_badges_earned.discard(Science.ARCHITECTURE)
        session.ledger.credit_crafted_item(CraftedItem.LIME_MORTAR)
        session.ledger.credit_crafted_item(CraftedItem.TERRACOTTA_TILES)

        report = session.gate.check(TEMPLE)

        assert report.missing_sciences == [Science.ARCHITECTURE]
        assert report.requirements_met == 3
        assert not report.can_start

    def test_all_requirements_met(self, session):
        _complete_temple_lessons(session)
        session.ledger.credit_crafted_item(CraftedItem.LIME_MORTAR)
        session.ledger.credit_crafted_item(CraftedItem.TERRACOTTA_TILES)
        assert session.gate.can_start_building(TEMPLE)

    def test_badges_for_other_building_do_not_count(self, session):
        session.progress_for(MORTAR_HOUSE).earn_badge(Science.GEOMETRY)
        assert Science.GEOMETRY in session.gate.check(TEMPLE).missing_sciences

    def test_gate_does_not_consume_stock(self, session):
        session.ledger.credit_crafted_item(CraftedItem.LIME_MORTAR, 2)
        session.gate.can_start_building(MORTAR_HOUSE)
        session.gate.can_start_building(MORTAR_HOUSE)
        assert session.ledger.crafted_count(CraftedItem.LIME_MORTAR) == 2

    def test_more_progress_never_closes_gate(self, session):
        _complete_temple_lessons(session)
        session.ledger.credit_crafted_item(CraftedItem.LIME_MORTAR)
        session.ledger.credit_crafted_item(CraftedItem.TERRACOTTA_TILES)
        assert session.gate.can_start_building(TEMPLE)

        session.progress_for(TEMPLE).earn_badge(Science.OPTICS)
        session.progress_for(TEMPLE).mark_lesson_read()
        session.ledger.credit_crafted_item(CraftedItem.LIME_MORTAR, 3)
        session.ledger.add_raw_materials({Material.CLAY: 5})
        assert session.gate.can_start_building(TEMPLE)


class TestMaterialShortfall:
    def test_nothing_missing(self, session):
        session.ledger.credit_crafted_item(CraftedItem.LIME_MORTAR, 2)
        shortfall = session.gate.material_shortfall(MORTAR_HOUSE)
        assert shortfall.is_empty
        assert shortfall.total_cost == 0

    def test_counts_units_and_on_hand_stock(self, session):
        # Two mortars need 4 limestone and 2 water; one limestone is on hand.
        session.ledger.add_raw_materials({Material.LIMESTONE: 1})
        shortfall = session.gate.material_shortfall(MORTAR_HOUSE)
        assert shortfall.raw_deficit == {Material.LIMESTONE: 3, Material.WATER: 2}
        assert shortfall.total_cost == 3 * 2 + 2 * 1

    def test_crafted_stock_reduces_need(self, session):
        session.ledger.credit_crafted_item(CraftedItem.LIME_MORTAR)
        shortfall = session.gate.material_shortfall(MORTAR_HOUSE)
        assert shortfall.raw_deficit == {Material.LIMESTONE: 2, Material.WATER: 1}

    def test_shared_stock_counted_once(self, session):
        # Mortar and tiles both need one water; a single water on hand covers only one.
        session.ledger.add_raw_materials({Material.WATER: 1})
        shortfall = session.gate.material_shortfall(TEMPLE)
        assert shortfall.raw_deficit == {
            Material.LIMESTONE: 2,
            Material.WATER: 1,
            Material.CLAY: 3,
        }
        assert shortfall.total_cost == 2 * 2 + 1 * 1 + 3 * 2

    def test_surplus_raw_stock_is_not_a_deficit(self, session):
        session.ledger.add_raw_materials({Material.LIMESTONE: 10, Material.WATER: 10})
        shortfall = session.gate.material_shortfall(MORTAR_HOUSE)
        assert shortfall.is_empty

    def test_uncraftable_item_reported(self, catalog):
        spec = BuildingSpec(
            building_id=7,
            name="Glasshouse",
            era=Era.RENAISSANCE,
            required_materials={CraftedItem.GLASS_PANES: 1},
        )
        gate = ConstructionGate({7: spec}, InventoryLedger(), ProgressBook(), catalog)
        shortfall = gate.material_shortfall(7)
        assert shortfall.uncraftable == [CraftedItem.GLASS_PANES]
        assert shortfall.raw_deficit == {}
        assert not shortfall.is_empty

    def test_unknown_building_raises(self, session):
        with pytest.raises(ValueError):
            session.gate.material_shortfall(999)
