import pytest
from combat_framework.battle.actor import create_character
from combat_framework.battle.damage import DamageCalculator
from combat_framework.battle.skills import (
    Effect,
    EffectType,
    Skill,
    TargetType,
    create_basic_attack,
    create_strong_attack,
)


def make_skill(effects, mp_cost=0, target_type=TargetType.SINGLE_ENEMY):
    return Skill(
        id="test",
        name="Test Skill",
        mp_cost=mp_cost,
        target_type=target_type,
        effects=tuple(effects),
    )


def test_damage_skill(hero, slime):
    skill = make_skill([Effect(EffectType.DAMAGE, 150)], mp_cost=10)

    result = skill.use(hero, [slime])

    # floor(30 * 1.5) - 5 = 40
    assert result.success
    assert result.message == "Hero uses Test Skill!"
    assert slime.hp == 10
    assert hero.mp == 40
    assert len(result.effects) == 1
    assert result.effects[0].target == "Slime"
    assert result.effects[0].value == 40
    assert result.effects[0].message == "Slime takes 40 damage!"


def test_insufficient_mp_changes_nothing(hero, slime):
    hero.spend_mp(45)
    skill = make_skill([Effect(EffectType.DAMAGE, 100)], mp_cost=10)

    result = skill.use(hero, [slime])

    assert not result.success
    assert result.message == "Hero insufficient MP"
    assert result.effects == []
    assert hero.mp == 5
    assert slime.hp == 50


def test_dead_caster_cannot_use(hero, slime):
    hero.take_damage(hero.hp)
    skill = make_skill([Effect(EffectType.DAMAGE, 100)])

    assert not skill.can_use(hero)
    assert not skill.use(hero, [slime]).success


def test_heal_clamps_to_max(hero):
    hero.take_damage(20)
    skill = make_skill([Effect(EffectType.HEAL, 50)], target_type=TargetType.SELF)

    result = skill.use(hero, [hero])

    assert hero.hp == 100
    assert result.effects[0].value == 20
    assert result.effects[0].message == "Hero recovers 20 HP!"


def test_heal_reaches_fallen_ally(hero):
    ally = create_character("Ally", 60, 10, 0)
    ally.take_damage(60)
    skill = make_skill([Effect(EffectType.HEAL, 25)], target_type=TargetType.SINGLE_ALLY)

    skill.use(hero, [ally])

    assert ally.hp == 25
    assert ally.is_alive


def test_damage_skips_dead_targets(hero, slimes):
    slimes[1].take_damage(50)
    skill = make_skill([Effect(EffectType.DAMAGE, 100)], target_type=TargetType.ALL_ENEMIES)

    result = skill.use(hero, slimes)

    assert [e.target for e in result.effects] == ["Slime1", "Slime3"]
    assert slimes[0].hp == 25
    assert slimes[1].hp == 0
    assert slimes[2].hp == 25


def test_effects_apply_in_order(hero, slime):
    skill = make_skill([
        Effect(EffectType.DAMAGE, 100),
        Effect(EffectType.DEBUFF, 10, duration=2),
    ])

    result = skill.use(hero, [slime])

    assert [e.type for e in result.effects] == [EffectType.DAMAGE, EffectType.DEBUFF]
    assert result.effects[1].message == "debuff applied to Slime!"


def test_lethal_damage_stops_later_effects(hero, slime):
    skill = make_skill([
        Effect(EffectType.DAMAGE, 300),
        Effect(EffectType.DAMAGE, 100),
    ])

    result = skill.use(hero, [slime])

    assert slime.hp == 0
    assert len(result.effects) == 1


def test_mp_spent_even_if_nothing_hit(hero, slime):
    slime.take_damage(slime.hp)
    skill = make_skill([Effect(EffectType.DAMAGE, 100)], mp_cost=10)

    result = skill.use(hero, [slime])

    assert result.success
    assert result.effects == []
    assert hero.mp == 40


def test_skill_without_effects(hero):
    skill = make_skill([], mp_cost=3)

    result = skill.use(hero, [])

    assert result.success
    assert result.effects == []
    assert hero.mp == 47


def test_skill_damage_does_not_roll_critical(hero, scripted_rng):
    always_crit = DamageCalculator(scripted_rng([0.0]))
    skill = make_skill([Effect(EffectType.DAMAGE, 100)])
    target = create_character("Dummy", 200, 0, 0)

    # Skill rolls do not crit: the calculator is called without a rate
    result = skill.use(hero, [target], always_crit)

    assert not result.effects[0].is_critical
    assert target.hp == 170


def test_from_dict():
    skill = Skill.from_dict({
        "id": "fireball",
        "name": "Fireball",
        "mpCost": 10,
        "targetType": "single-enemy",
        "effects": [{"type": "damage", "value": 150}],
        "category": "magic",
        "rarity": "common",
    })

    assert skill.mp_cost == 10
    assert skill.target_type == TargetType.SINGLE_ENEMY
    assert skill.effects == (Effect(EffectType.DAMAGE, 150),)
    assert skill.has_effect(EffectType.DAMAGE)
    assert not skill.has_effect(EffectType.HEAL)
    assert skill.category == "magic"


def test_stock_attacks(hero, slime):
    basic = create_basic_attack()
    strong = create_strong_attack()

    assert basic.mp_cost == 0
    assert strong.mp_cost == 5

    basic.use(hero, [slime])
    assert slime.hp == 25

    strong.use(hero, [slime])
    assert slime.hp == 0
    assert hero.mp == 45


def test_target_type_helpers():
    assert TargetType.SINGLE_ALLY.is_single
    assert TargetType.ALL_ENEMIES.is_group
    assert TargetType.ALL_ENEMIES.targets_enemies
    assert not TargetType.SELF.is_single
    assert not TargetType.SELF.is_group


def test_large_heal_stops_at_max(hero):
    hero.take_damage(40)
    skill = make_skill([Effect(EffectType.HEAL, 100)], target_type=TargetType.SELF)

    result = skill.use(hero, [hero])

    assert hero.hp == hero.max_hp
    assert result.effects[0].value == 40
