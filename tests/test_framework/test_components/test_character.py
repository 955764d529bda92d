import pytest
from pydantic import ValidationError
from combat_engine.core.component import get_all_component_types, get_component_type
from combat_framework.components import Health, Mana, CombatStats, Position


def test_health_clamped_on_creation():
    assert Health(current=150, max_hp=100).current == 100
    assert Health(current=-5, max_hp=100).current == 0


def test_health_rejects_negative_max():
    with pytest.raises(ValidationError):
        Health(current=0, max_hp=-1)


def test_health_percent():
    health = Health(current=25, max_hp=100)
    assert health.percent == 0.25
    assert not health.is_full

    assert Health(current=0, max_hp=0).percent == 0.0


def test_health_take_damage_and_heal():
    health = Health(current=40, max_hp=100)

    assert health.take_damage(50) == 40
    assert health.is_dead

    assert health.heal(200) == 100
    assert health.is_full


def test_mana_spend_and_restore():
    mana = Mana(current=10, max_mp=20)

    assert mana.spend(4) == 4
    assert mana.current == 6
    assert mana.restore(100) == 14
    assert mana.current == 20
    assert mana.percent == 1.0


def test_components_reject_unknown_fields():
    with pytest.raises(ValidationError):
        CombatStats(attack=10, luck=3)


def test_component_clone_is_independent():
    stats = CombatStats(attack=10, defense=2, speed=5)
    copy = stats.clone()

    copy.attack = 99

    assert stats.attack == 10
    assert copy.get_type_name() == "CombatStats"


def test_position_move():
    pos = Position(x=1.0, y=2.0)
    pos.move_to(5.0, -3.0)

    assert pos.as_tuple() == (5.0, -3.0)


def test_components_are_registered():
    assert get_component_type("Health") is Health
    assert get_component_type("Mana") is Mana
    assert get_component_type("Position") is Position
    assert get_component_type("Missing") is None
    assert "CombatStats" in get_all_component_types()
