"""
Tests for influence analysis.

See campaign/stats/influence.py for implementation.

Default weights: relationship 1, positive 2, faction 5, connection 1.
"""

from dataclasses import replace

import pytest

from campaign.stats.config import get_config, set_config
from campaign.stats.core import FactionStanding, Standing
from campaign.stats.influence import (
    analyze_faction_influence,
    build_relationship_network,
    calculate_all_influences,
    calculate_character_influence,
    find_faction_connections,
    find_key_connectors,
    find_mutual_relationships,
    find_power_centers,
    get_top_influencers,
)
from campaign.stats.validation import find_asymmetric_relationships
from tests.helpers import link, make_character, make_faction, names, pairs

ALLY = Standing.ALLY
FRIEND = Standing.FRIEND
NEUTRAL = Standing.NEUTRAL
HOSTILE = Standing.HOSTILE
ENEMY = Standing.ENEMY


@pytest.fixture
def power_roster():
    """
    Hub is allied with Big (influential) and friends with Small.
    Rival is Big's enemy. All edges reciprocal.

    Base scores: Big 16, Hub 8, Small 4, Rival 2.
    """
    big = make_character("Big", factions={"North": ALLY, "South": ALLY})
    small = make_character("Small")
    hub = make_character("Hub")
    rival = make_character("Rival")
    link(hub, big, ALLY)
    link(hub, small, FRIEND)
    link(rival, big, ENEMY)
    roster = [big, small, hub, rival]

    # Storage-layer precondition: every edge has its reciprocal
    assert find_asymmetric_relationships(roster) == []
    return roster


def score_of(roster, name):
    return next(i.influence_score for i in calculate_all_influences(roster) if i.name == name)


# =============================================================================
# BASE INFLUENCE
# =============================================================================

def test_isolated_character_scores_zero():
    loner = make_character("Loner")

    influence = calculate_character_influence(loner, [loner])

    assert influence.influence_score == 0
    assert influence.connections == []


def test_single_character_roster_still_ranked():
    loner = make_character("Loner")

    top = get_top_influencers([loner], 10)

    assert names(top) == ["Loner"]
    assert top[0].influence_score == 0


def test_score_is_weighted_sum():
    x = make_character("X", factions={"F": ALLY}, relationships={"Y": ALLY, "Z": ENEMY})
    y = make_character("Y", factions={"F": FRIEND})
    z = make_character("Z")

    influence = calculate_character_influence(x, [x, y, z])

    assert influence.relationship_count == 2
    assert influence.positive_relationships == 1
    assert influence.negative_relationships == 1
    assert influence.faction_count == 1
    assert influence.connections == ["Y", "Z"]
    # 1*2 + 2*1 + 5*1 + 1*2
    assert influence.influence_score == 11


def test_shared_positive_faction_connects_without_relationship():
    p = make_character("P", factions={"F": ALLY})
    q = make_character("Q", factions={"F": FRIEND})

    influence = calculate_character_influence(p, [p, q])

    assert influence.connections == ["Q"]
    assert influence.influence_score == 6


def test_non_positive_faction_entry_does_not_connect():
    p = make_character("P", factions={"F": ALLY})
    r = make_character("R", factions={"F": HOSTILE})
    roster = [p, r]

    assert calculate_character_influence(p, roster).connections == []
    assert calculate_character_influence(r, roster).connections == []
    # faction_count still counts the hostile entry
    assert calculate_character_influence(r, roster).influence_score == 5


def test_adding_relationship_never_lowers_score():
    before = make_character("M", factions={"F": ALLY})
    after = make_character("M", factions={"F": ALLY}, relationships={"N": ENEMY})
    n = make_character("N")

    assert (calculate_character_influence(after, [after, n]).influence_score
            > calculate_character_influence(before, [before, n]).influence_score)


def test_adding_faction_never_lowers_score():
    before = make_character("M")
    after = make_character("M", factions={"F": NEUTRAL})

    assert (calculate_character_influence(after, [after]).influence_score
            > calculate_character_influence(before, [before]).influence_score)


def test_weights_come_from_config():
    config = get_config()
    set_config(replace(config, influence=replace(config.influence, faction=50.0)))
    c = make_character("C", factions={"F": NEUTRAL})

    assert calculate_character_influence(c, [c]).influence_score == 50.0


# =============================================================================
# TOP INFLUENCERS
# =============================================================================

def test_top_influencers_sorted_with_name_tiebreak():
    roster = [
        make_character("Bravo", factions={"F2": ALLY}),
        make_character("Charlie", factions={"F3": ALLY, "F4": ALLY}),
        make_character("Alpha", factions={"F1": ALLY}),
    ]

    top = get_top_influencers(roster, 10)

    assert names(top) == ["Charlie", "Alpha", "Bravo"]
    assert [i.influence_score for i in top] == [10, 5, 5]


def test_top_influencers_respects_limit():
    roster = [make_character(f"C{i:02d}", factions={f"F{i}": ALLY}) for i in range(12)]

    top = get_top_influencers(roster, 10)

    assert len(top) == 10
    scores = [i.influence_score for i in top]
    assert scores == sorted(scores, reverse=True)


def test_top_influencers_zero_limit():
    assert get_top_influencers([make_character("A")], 0) == []


def test_influence_is_deterministic(power_roster):
    first = get_top_influencers(power_roster)
    second = get_top_influencers(power_roster)

    assert [(i.name, i.influence_score) for i in first] == \
        [(i.name, i.influence_score) for i in second]


def test_power_roster_base_scores(power_roster):
    assert score_of(power_roster, "Big") == 16
    assert score_of(power_roster, "Hub") == 8
    assert score_of(power_roster, "Small") == 4
    assert score_of(power_roster, "Rival") == 2


# =============================================================================
# FACTION INFLUENCE
# =============================================================================

def create_faction_roster():
    """A: Ally F, Enemy G. B: Friend F. C: Hostile F."""
    return [
        make_character("A", factions={"F": ALLY, "G": ENEMY}),
        make_character("B", factions={"F": FRIEND}),
        make_character("C", factions={"F": HOSTILE}),
    ]


def test_faction_influence_totals_and_average():
    result = analyze_faction_influence(create_faction_roster())

    f = next(r for r in result if r.name == "F")
    assert f.member_count == 2
    # A: 10 + 1 connection, B: 5 + 1 connection
    assert f.total_influence == 17
    assert f.average_influence == 8.5
    assert names(f.members) == ["A", "B"]


def test_zero_member_faction_has_zero_average():
    result = analyze_faction_influence(create_faction_roster())

    g = next(r for r in result if r.name == "G")
    assert g.member_count == 0
    assert g.average_influence == 0.0


def test_faction_influence_sorted_by_total():
    result = analyze_faction_influence(create_faction_roster())

    assert [r.name for r in result] == ["F", "G"]


def test_stances_inferred_from_members():
    result = analyze_faction_influence(create_faction_roster())

    f = next(r for r in result if r.name == "F")
    assert f.allies == []
    assert f.enemies == ["G"]


def test_stances_from_declared_faction_standings():
    factions = [make_faction("F", {"H": ALLY, "G": ENEMY, "F": ALLY})]

    result = analyze_faction_influence(create_faction_roster(), factions)

    f = next(r for r in result if r.name == "F")
    assert f.allies == ["H"]
    assert f.enemies == ["G"]


def test_declared_faction_without_characters_is_reported():
    result = analyze_faction_influence([], [make_faction("Empty")])

    assert len(result) == 1
    assert result[0].member_count == 0
    assert result[0].total_influence == 0


def test_empty_roster_has_no_factions():
    assert analyze_faction_influence([]) == []


# =============================================================================
# KEY CONNECTORS
# =============================================================================

def test_key_connectors_need_two_factions():
    roster = [
        make_character("K1", factions={"A": ALLY, "B": ALLY, "C": NEUTRAL},
                       relationships={"X": ALLY}),
        make_character("K2", factions={"A": ALLY, "D": HOSTILE},
                       relationships={"X": ALLY, "Y": ALLY, "Z": ENEMY, "W": FRIEND}),
        make_character("Solo", factions={"A": ALLY},
                       relationships={n: ALLY for n in "PQRSTUVWXY"}),
    ]

    connectors = find_key_connectors(roster, 5)

    # K1: 3*10 + 1 = 31, K2: 2*10 + 4 = 24
    assert names(connectors) == ["K1", "K2"]


def test_key_connectors_tiebreak_and_limit():
    roster = [
        make_character(name, factions={"A": ALLY, "B": ALLY})
        for name in ["Delta", "Alpha", "Charlie", "Bravo"]
    ]

    assert names(find_key_connectors(roster, 3)) == ["Alpha", "Bravo", "Charlie"]


def test_key_connectors_min_relationships_from_config():
    config = get_config()
    set_config(replace(config, key_connectors=replace(config.key_connectors, min_relationships=3)))
    roster = [
        make_character("Quiet", factions={"A": ALLY, "B": ALLY}),
        make_character("Busy", factions={"A": ALLY, "B": ALLY},
                       relationships={"X": ALLY, "Y": ALLY, "Z": ALLY}),
    ]

    assert names(find_key_connectors(roster)) == ["Busy"]


# =============================================================================
# POWER CENTERS
# =============================================================================

def test_power_centers_rank_by_ally_influence(power_roster):
    centers = find_power_centers(power_roster, 5)

    assert names(centers) == ["Hub", "Big", "Small"]
    assert centers[0].ally_influence == 16 + 4
    assert centers[0].influential_allies == ["Big", "Small"]


def test_power_center_ties_use_own_influence(power_roster):
    centers = find_power_centers(power_roster, 5)

    # Big and Small both have Hub (8) as their only positive contact
    assert centers[1].ally_influence == centers[2].ally_influence == 8
    assert centers[1].influence.influence_score > centers[2].influence.influence_score


def test_enemies_do_not_make_power_centers(power_roster):
    assert "Rival" not in names(find_power_centers(power_roster, 5))


def test_power_centers_limit(power_roster):
    assert names(find_power_centers(power_roster, 1)) == ["Hub"]


def test_power_center_threshold_from_config(power_roster):
    config = get_config()
    set_config(replace(config, power_centers=replace(config.power_centers, min_ally_influence=10)))

    assert names(find_power_centers(power_roster, 5)) == ["Hub"]


def test_power_centers_ignore_contacts_outside_roster():
    ghost_friend = make_character("Lonely", relationships={"Nobody": ALLY})

    assert find_power_centers([ghost_friend]) == []


# =============================================================================
# NETWORK QUERIES
# =============================================================================

def test_relationship_network_groups_by_standing(power_roster):
    hub = next(c for c in power_roster if c.name == "Hub")

    network = build_relationship_network(hub, power_roster)

    assert names(network.allies) == ["Big"]
    assert names(network.friends) == ["Small"]
    assert network.enemies == []


def test_relationship_network_skips_unknown_names():
    c = make_character("C", relationships={"Missing": ENEMY})

    network = build_relationship_network(c, [c])

    assert network.enemies == []


def test_faction_connections_any_standing():
    a = make_character("A", factions={"F": ALLY, "G": ALLY})
    b = make_character("B", factions={"F": HOSTILE})

    connections = find_faction_connections(a, [a, b])

    assert list(connections) == ["F"]
    assert names(connections["F"]) == ["B"]


def test_mutual_relationships_listed_once(power_roster):
    mutual = find_mutual_relationships(power_roster)

    assert pairs(mutual) == [("Big", "Hub"), ("Big", "Rival"), ("Small", "Hub")]


def test_one_way_relationship_is_not_mutual():
    a = make_character("A", relationships={"B": ALLY})
    b = make_character("B")

    assert find_mutual_relationships([a, b]) == []
    assert find_asymmetric_relationships([a, b]) == [("A", "B")]


def test_duplicate_faction_entries_use_first_standing():
    """Connections and faction membership agree on the first entry for a faction."""
    a = make_character("A")
    a.factions = [FactionStanding("F", HOSTILE), FactionStanding("F", ALLY)]
    b = make_character("B", factions={"F": ALLY})
    roster = [a, b]

    influences = {i.name: i for i in calculate_all_influences(roster)}
    f = next(r for r in analyze_faction_influence(roster) if r.name == "F")

    assert names(f.members) == ["B"]
    assert influences["B"].connections == []
    assert influences["A"].connections == []
