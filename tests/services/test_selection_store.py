from access_console.schemas.application import ApplicationWithChecked
from access_console.schemas.selection import SelectionState
from access_console.services.selection import (
    application_permission_ids,
    find_menu,
    selection_service,
)


def test_toggle_application_selects_without_touching_permissions(scenario_application):
    state = selection_service.seed([], [99])
    new_state = selection_service.toggle_application(state, 1, [scenario_application])

    assert new_state.selected_application_ids == {1}
    assert new_state.selected_permission_ids == {99}


def test_toggle_application_twice_restores_state(scenario_application, second_application):
    applications = [scenario_application, second_application]
    state = selection_service.seed([2], [5])

    once = selection_service.toggle_application(state, 1, applications)
    twice = selection_service.toggle_application(once, 1, applications)
    assert twice == state


def test_deselecting_application_cascades_to_owned_permissions(scenario_application, second_application):
    applications = [scenario_application, second_application]
    state = selection_service.seed([1, 2], [1, 2, 3, 5, 6])

    new_state = selection_service.toggle_application(state, 1, applications)

    owned = set(application_permission_ids(scenario_application))
    assert new_state.selected_application_ids == {2}
    assert not (new_state.selected_permission_ids & owned)
    assert new_state.selected_permission_ids == {5, 6}


def test_deselecting_unknown_application_removes_no_permissions(scenario_application):
    state = selection_service.seed([77], [1, 2])
    new_state = selection_service.toggle_application(state, 77, [scenario_application])

    assert new_state.selected_application_ids == set()
    assert new_state.selected_permission_ids == {1, 2}


def test_toggle_permission_flips_membership_only():
    state = selection_service.empty()
    added = selection_service.toggle_permission(state, 3)
    removed = selection_service.toggle_permission(added, 3)

    assert added.selected_permission_ids == {3}
    assert added.selected_application_ids == set()
    assert removed == state


def test_toggle_all_menu_permissions_selects_all_when_partially_selected(scenario_application):
    menu = scenario_application.menus[0]
    state = selection_service.seed([], [2])

    new_state = selection_service.toggle_all_menu_permissions(state, menu)
    assert new_state.selected_permission_ids == {2, 3}


def test_toggle_all_menu_permissions_deselects_when_all_selected(scenario_application):
    menu = scenario_application.menus[0]
    state = selection_service.seed([], [1, 2, 3])

    new_state = selection_service.toggle_all_menu_permissions(state, menu)
    assert new_state.selected_permission_ids == {1}


def test_toggle_all_menu_permissions_twice_restores_menu_ids(scenario_application):
    menu = scenario_application.menus[0]
    for seeded in ([], [2], [2, 3]):
        state = selection_service.seed([], seeded)
        twice = selection_service.toggle_all_menu_permissions(
            selection_service.toggle_all_menu_permissions(state, menu), menu
        )
        if len(seeded) in (0, 2):
            assert twice == state
        else:
            # A partial selection resolves to "select all" first, then clears.
            assert twice.selected_permission_ids == set()


def test_toggle_all_on_menu_without_permissions_is_noop(menu_factory):
    state = selection_service.seed([1], [1])
    assert selection_service.toggle_all_menu_permissions(state, menu_factory(9)) == state


def test_clear_all_empties_both_sets():
    assert selection_service.clear_all() == SelectionState()


def test_operations_do_not_mutate_inputs(scenario_application):
    before = scenario_application.model_dump()
    state = selection_service.seed([1], [2])
    selection_service.toggle_application(state, 1, [scenario_application])
    selection_service.toggle_all_menu_permissions(state, scenario_application.menus[0])

    assert scenario_application.model_dump() == before
    assert state.selected_application_ids == {1}
    assert state.selected_permission_ids == {2}


def test_seed_from_checked_collects_checked_ids(catalog_document):
    role_edit = catalog_document["roles"][0]
    applications = [ApplicationWithChecked.model_validate(a) for a in role_edit["available_applications"]]

    state = selection_service.seed_from_checked(applications)
    assert state.selected_application_ids == {2}
    assert state.selected_permission_ids == {10, 11, 12}


def test_prune_stale_drops_unknown_ids_only(scenario_application):
    state = selection_service.seed([1, 8], [1, 3, 40])
    pruned = selection_service.prune_stale(state, [scenario_application])

    assert pruned.selected_application_ids == {1}
    assert pruned.selected_permission_ids == {1, 3}


def test_to_payload_flattens_sorted_arrays():
    state = selection_service.seed([3, 1], [9, 2, 5])
    payload = selection_service.to_payload(state)

    assert payload.applications == [1, 3]
    assert payload.permissions == [2, 5, 9]


def test_find_menu(scenario_application, second_application):
    assert find_menu([scenario_application, second_application], 20).id == 20
    assert find_menu([scenario_application], 20) is None


def test_selection_state_serializes_sorted_lists():
    state = selection_service.seed([2, 1], [3])
    assert state.model_dump(mode="json") == {
        "selected_application_ids": [1, 2],
        "selected_permission_ids": [3],
    }
