import pytest
from combat_framework.battle.skills import Effect, EffectType, Skill, TargetType
from combat_framework.battle.targeting import (
    TargetingState,
    TargetingStateMachine,
    auto_targets,
    requires_targeting,
    valid_targets_for,
)


def make_skill(target_type):
    effect_type = EffectType.DAMAGE if target_type.targets_enemies else EffectType.HEAL
    return Skill(
        id=target_type.value,
        name=target_type.value,
        target_type=target_type,
        effects=(Effect(effect_type, 100),),
    )


@pytest.fixture
def machine():
    return TargetingStateMachine()


def test_valid_targets_by_type(hero, slimes):
    ally = slimes[0]  # any character works as an ally here
    allies = [hero, ally]
    enemies = slimes[1:]

    assert valid_targets_for(make_skill(TargetType.SELF), hero, allies, enemies) == [hero]
    assert valid_targets_for(make_skill(TargetType.SINGLE_ENEMY), hero, allies, enemies) == enemies
    assert valid_targets_for(make_skill(TargetType.ALL_ALLIES), hero, allies, enemies) == allies


def test_dead_are_not_valid(hero, slimes):
    slimes[0].take_damage(50)

    valid = valid_targets_for(make_skill(TargetType.ALL_ENEMIES), hero, [hero], slimes)

    assert valid == slimes[1:]


def test_requires_targeting_only_with_choice(hero, slimes):
    single = make_skill(TargetType.SINGLE_ENEMY)

    assert requires_targeting(single, hero, [hero], slimes)
    assert not requires_targeting(single, hero, [hero], slimes[:1])
    assert not requires_targeting(make_skill(TargetType.ALL_ENEMIES), hero, [hero], slimes)
    assert not requires_targeting(make_skill(TargetType.SELF), hero, [hero], slimes)


def test_auto_targets(hero, slimes):
    assert auto_targets(make_skill(TargetType.SELF), hero, [hero], slimes) == [hero]
    assert auto_targets(make_skill(TargetType.SINGLE_ENEMY), hero, [hero], slimes[2:]) == [slimes[2]]
    assert auto_targets(make_skill(TargetType.ALL_ENEMIES), hero, [hero], slimes) == slimes

    for slime in slimes:
        slime.take_damage(50)
    assert auto_targets(make_skill(TargetType.SINGLE_ENEMY), hero, [hero], slimes) == []


def test_select_single_target(machine, hero, slimes):
    skill = make_skill(TargetType.SINGLE_ENEMY)
    machine.start_targeting(skill, [hero], slimes, hero)

    assert machine.state == TargetingState.SELECTING
    assert machine.is_active
    assert machine.valid_targets == slimes
    assert machine.current_skill is skill
    assert machine.caster is hero

    result = machine.select_target(slimes[1])

    assert result.success
    assert result.message == "Target selected."
    assert result.targets == [slimes[1]]
    assert machine.state == TargetingState.CONFIRMED
    assert machine.complete_targeting() == [slimes[1]]
    assert machine.state == TargetingState.IDLE


def test_group_selection_takes_all(machine, hero, slimes):
    machine.start_targeting(make_skill(TargetType.ALL_ENEMIES), [hero], slimes, hero)

    result = machine.select_target(slimes[2])

    assert result.targets == slimes


def test_self_selection_commits_caster(machine, hero):
    machine.start_targeting(make_skill(TargetType.SELF), [hero], [], hero)

    result = machine.select_target(hero)

    assert result.success
    assert machine.selected_targets == [hero]


def test_invalid_target_keeps_state(machine, hero, slimes):
    machine.start_targeting(make_skill(TargetType.SINGLE_ENEMY), [hero], slimes, hero)

    result = machine.select_target(hero)

    assert not result.success
    assert result.message == "Invalid target."
    assert machine.state == TargetingState.SELECTING
    assert machine.selected_targets == []


def test_target_died_after_start(machine, hero, slimes):
    machine.start_targeting(make_skill(TargetType.SINGLE_ENEMY), [hero], slimes, hero)
    slimes[0].take_damage(50)

    assert not machine.select_target(slimes[0]).success


def test_equal_looking_targets_are_distinct(machine, hero, slimes):
    machine.start_targeting(make_skill(TargetType.SINGLE_ENEMY), [hero], slimes[:2], hero)

    # Same stats as the valid slimes, but not one of them
    assert not machine.select_target(slimes[2]).success


def test_select_while_idle(machine, slimes):
    result = machine.select_target(slimes[0])

    assert not result.success
    assert result.message == "Not in targeting mode."
    assert machine.state == TargetingState.IDLE


def test_cancel(machine, hero, slimes):
    machine.start_targeting(make_skill(TargetType.SINGLE_ENEMY), [hero], slimes, hero)
    machine.select_target(slimes[0])

    machine.cancel_targeting()

    assert machine.state == TargetingState.IDLE
    assert machine.complete_targeting() == []


def test_complete_without_selection(machine, hero, slimes):
    machine.start_targeting(make_skill(TargetType.SINGLE_ENEMY), [hero], slimes, hero)

    assert machine.complete_targeting() == []
    assert not machine.is_active


def test_reset_clears_everything(machine, hero, slimes):
    machine.start_targeting(make_skill(TargetType.SINGLE_ENEMY), [hero], slimes, hero)

    machine.reset()

    assert machine.caster is None
    assert machine.current_skill is None
    assert machine.valid_targets == []
