from access_console.core.constants import ToggleDirectionEnum
from access_console.schemas.application import Application
from access_console.services.selection import selection_service
from access_console.services.selection_summary import selection_summary_service


def test_summary_counts_direct_and_menu_permissions(scenario_application):
    state = selection_service.seed([], [2, 99])
    summary = selection_summary_service.summarize(scenario_application, state)

    assert summary.application_id == 1
    assert summary.total == 3
    assert summary.selected == 1
    assert summary.all_selected is False
    assert summary.next_toggle == ToggleDirectionEnum.SELECT


def test_summary_reports_deselect_when_everything_selected(scenario_application):
    state = selection_service.seed([], [1, 2, 3])
    summary = selection_summary_service.summarize(scenario_application, state)

    assert (summary.selected, summary.total) == (3, 3)
    assert summary.next_toggle == ToggleDirectionEnum.DESELECT


def test_summary_does_not_descend_into_children(scenario_application, menu_factory):
    nested = scenario_application.model_copy(deep=True)
    nested.menus[0].children = [menu_factory(11, parent_id=10, permission_ids=(50,))]

    summary = selection_summary_service.summarize(nested, selection_service.seed([], [50]))
    assert (summary.selected, summary.total) == (0, 3)


def test_summary_is_bounded(scenario_application):
    for seeded in ([], [1], [1, 2, 3], [1, 2, 3, 4, 5]):
        summary = selection_summary_service.summarize(scenario_application, selection_service.seed([], seeded))
        assert 0 <= summary.selected <= summary.total


def test_summarize_all_keeps_catalog_order(scenario_application, second_application):
    summaries = selection_summary_service.summarize_all(
        [second_application, scenario_application], selection_service.empty()
    )
    assert [s.application_id for s in summaries] == [2, 1]


def test_is_menu_fully_selected(scenario_application, menu_factory):
    menu = scenario_application.menus[0]
    assert selection_summary_service.is_menu_fully_selected(menu, selection_service.seed([], [2, 3])) is True
    assert selection_summary_service.is_menu_fully_selected(menu, selection_service.seed([], [2])) is False
    assert selection_summary_service.is_menu_fully_selected(menu_factory(5), selection_service.empty()) is True


def test_filter_applications_matches_name_code_and_description():
    applications = [
        Application(id=1, name="User Management", code="user_mgmt"),
        Application(id=2, name="Content", code="cms", description="Articles and media"),
        Application(id=3, name="Analytics", code="analytics"),
    ]
    assert [a.id for a in selection_summary_service.filter_applications(applications, "USER")] == [1]
    assert [a.id for a in selection_summary_service.filter_applications(applications, "media")] == [2]
    assert [a.id for a in selection_summary_service.filter_applications(applications, "")] == [1, 2, 3]


def test_filter_permissions_matches_action(scenario_application):
    permissions = scenario_application.permissions + scenario_application.menus[0].permissions
    assert [p.id for p in selection_summary_service.filter_permissions(permissions, "access")] == [1]


def test_selected_applications_preview_is_limited():
    applications = [Application(id=i, name=f"App {i}", code=f"app{i}") for i in range(1, 6)]
    state = selection_service.seed([5, 2, 4, 1], [])

    preview = selection_summary_service.selected_applications_preview(applications, state, limit=3)
    assert [a.id for a in preview] == [1, 2, 4]


def test_build_view_lists_fully_selected_menus_and_preview(scenario_application, second_application, menu_factory):
    empty_menu_app = second_application.model_copy(update={"menus": second_application.menus + [menu_factory(21, application_id=2)]})
    state = selection_service.seed([2, 1], [2, 3, 5])

    view = selection_summary_service.build_view([scenario_application, empty_menu_app], state, preview_limit=1)

    assert view.state == state
    assert [s.application_id for s in view.summaries] == [1, 2]
    assert view.fully_selected_menu_ids == [10]
    assert view.preview_application_ids == [1]
