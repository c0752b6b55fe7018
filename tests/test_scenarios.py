"""
End-to-end planning scenarios.

Each scenario builds a small world, plans, then replays the plan step by
step to confirm every precondition held and the goal is reached.
"""

from typing import List

import pytest

from goap_planner.errors import NoPlanFoundError
from goap_planner.models.action import Action
from goap_planner.models.effect import Effect, EffectOperation
from goap_planner.models.goal import Goal
from goap_planner.models.requirement import Requirement
from goap_planner.models.value import ValueKind
from goap_planner.planner.search import Planner
from goap_planner.world_state.state import WorldState


def _req(variable, value) -> Requirement:
    return Requirement(variable=variable, expected=value)


def _set(variable, value) -> Effect:
    return Effect(variable=variable, value=value)


def _add(variable, amount) -> Effect:
    return Effect(variable=variable, operation=EffectOperation.ADD, value=amount)


def _sub(variable, amount) -> Effect:
    return Effect(variable=variable, operation=EffectOperation.SUBTRACT, value=amount)


def _replay(initial: WorldState, goal: Goal, actions: List[Action]) -> WorldState:
    state = initial
    for action in actions:
        assert action.can_execute(state), f"{action.name} not executable in {state!r}"
        state = action.apply(state)
    assert goal.is_satisfied(state)
    return state


class TestGatherWood:
    def _make_actions(self) -> List[Action]:
        return [
            Action(name="goto_store", cost=1, effects=[_set("at_store", True)]),
            Action(
                name="buy_axe",
                cost=1,
                preconditions=[_req("at_store", True), _req("has_money", True)],
                effects=[_set("has_axe", True), _set("has_money", False)],
            ),
            Action(
                name="goto_tree",
                cost=1,
                effects=[_set("at_store", False), _set("at_tree", True)],
            ),
            Action(
                name="chop_tree",
                cost=2,
                preconditions=[_req("has_axe", True), _req("at_tree", True)],
                effects=[_set("has_wood", True)],
            ),
        ]

    def test_buys_axe_then_chops(self):
        initial = WorldState({
            "has_wood": False,
            "has_axe": False,
            "has_money": True,
            "at_store": False,
            "at_tree": False,
        })
        goal = Goal(name="gather_wood", requirements=[_req("has_wood", True)])

        plan = Planner().plan(initial, goal, self._make_actions())

        assert plan.cost == 5
        assert len(plan.actions) == 4
        assert plan.action_names[-1] == "chop_tree"
        assert plan.action_names.index("goto_store") < plan.action_names.index("buy_axe")
        final = _replay(initial, goal, plan.actions)
        assert final.get_typed("has_money", ValueKind.BOOLEAN).as_bool() is False

    def test_without_money(self):
        initial = WorldState({
            "has_wood": False,
            "has_axe": False,
            "has_money": False,
            "at_store": False,
            "at_tree": False,
        })
        goal = Goal(name="gather_wood", requirements=[_req("has_wood", True)])
        with pytest.raises(NoPlanFoundError):
            Planner().plan(initial, goal, self._make_actions())


class TestTemperatureControl:
    def test_heats_in_half_degree_steps(self):
        initial = WorldState({
            "temperature": 22.5,
            "heater_on": False,
            "cooler_on": False,
            "power_available": 100.0,
        })
        goal = Goal(name="adjust_temperature", requirements=[_req("temperature", 24.0)])
        actions = [
            Action(
                name="turn_on_heater",
                cost=1,
                preconditions=[_req("heater_on", False), _req("power_available", 20.0)],
                effects=[_set("heater_on", True), _sub("power_available", 20.0)],
            ),
            Action(
                name="heat_room",
                cost=2,
                preconditions=[_req("heater_on", True), _req("power_available", 5.0)],
                effects=[_add("temperature", 0.5), _sub("power_available", 5.0)],
            ),
            Action(
                name="turn_on_cooler",
                cost=1,
                preconditions=[_req("cooler_on", False), _req("power_available", 30.0)],
                effects=[_set("cooler_on", True), _sub("power_available", 30.0)],
            ),
            Action(
                name="cool_room",
                cost=2,
                preconditions=[_req("cooler_on", True), _req("power_available", 8.0)],
                effects=[_sub("temperature", 1.0), _sub("power_available", 8.0)],
            ),
        ]

        plan = Planner().plan(initial, goal, actions)

        assert plan.action_names == ["turn_on_heater", "heat_room", "heat_room", "heat_room"]
        assert plan.cost == 7
        final = _replay(initial, goal, plan.actions)
        assert final.get("temperature").as_float() == 24.0
        assert final.get("power_available").as_float() == 65.0


class TestPatrol:
    def test_visits_checkpoints_and_returns(self):
        initial = WorldState({
            "location": "base",
            "reported_at_a": False,
            "reported_at_b": False,
            "has_radio": True,
        })
        goal = Goal(
            name="complete_patrol",
            requirements=[
                _req("reported_at_a", True),
                _req("reported_at_b", True),
                _req("location", "base"),
            ],
        )
        actions = [
            Action(name="go_to_a", cost=2, effects=[_set("location", "a")]),
            Action(name="go_to_b", cost=2, effects=[_set("location", "b")]),
            Action(name="go_to_base", cost=2, effects=[_set("location", "base")]),
            Action(
                name="report_a",
                cost=1,
                preconditions=[_req("location", "a"), _req("has_radio", True)],
                effects=[_set("reported_at_a", True)],
            ),
            Action(
                name="report_b",
                cost=1,
                preconditions=[_req("location", "b"), _req("has_radio", True)],
                effects=[_set("reported_at_b", True)],
            ),
        ]

        plan = Planner().plan(initial, goal, actions)

        assert plan.cost == 8
        assert plan.action_names[-1] == "go_to_base"
        _replay(initial, goal, plan.actions)


class TestTrading:
    def test_sells_goods_to_afford_target(self):
        initial = WorldState({"gold": 5, "ore": 0, "has_pickaxe": True})
        goal = Goal(name="save_up", requirements=[_req("gold", 20)])
        actions = [
            Action(
                name="mine_ore",
                cost=1,
                preconditions=[_req("has_pickaxe", True)],
                effects=[_add("ore", 2)],
            ),
            Action(
                name="sell_ore",
                cost=1,
                preconditions=[_req("ore", 2)],
                effects=[_sub("ore", 2), _add("gold", 10)],
            ),
        ]

        plan = Planner().plan(initial, goal, actions)

        assert sorted(plan.action_names) == ["mine_ore", "mine_ore", "sell_ore", "sell_ore"]
        assert plan.action_names[0] == "mine_ore"
        assert plan.cost == 4
        assert _replay(initial, goal, plan.actions).get("gold").as_int() == 25
