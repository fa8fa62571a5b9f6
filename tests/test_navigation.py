from pathlib import Path

from ui.navigation import (
    NAVIGATION_ITEMS,
    SECTION_ORDER,
    WORKFLOW_ITEMS,
    Page,
    check_navigation_coverage,
)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def test_every_page_has_a_navigation_entry() -> None:
    check_navigation_coverage()
    assert set(NAVIGATION_ITEMS) == set(Page)


def test_navigation_targets_exist() -> None:
    for item in NAVIGATION_ITEMS.values():
        assert (PROJECT_ROOT / item.page_path).is_file(), item.page_path
        assert item.section in SECTION_ORDER


def test_workflow_follows_step_numbers() -> None:
    assert [item.page for item in WORKFLOW_ITEMS] == [
        Page.QUESTIONNAIRE,
        Page.LOCATION,
        Page.BUSINESS_PLAN,
        Page.RENTABILITY,
        Page.SUBSIDIES,
        Page.DASHBOARD,
    ]
