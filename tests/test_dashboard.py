from datetime import date
from decimal import Decimal

from calc import ACTIVITY_FEED_LIMIT, DashboardSources, aggregate_dashboard, build_activity_feed
from models import (
    QUESTION_COUNT,
    Answer,
    BusinessPlan,
    ModuleStatus,
    Partnership,
    PartnershipStatus,
    PedagogicalCostData,
    PedagogicalSector,
    QuestionnaireState,
    RentabilityInputs,
    SubsidyApplication,
    SubsidyStatus,
    TrainingModule,
    TrainingPlan,
)

TODAY = date(2025, 6, 1)


def _sources_with_activity() -> DashboardSources:
    modules = [
        TrainingModule(title=f"Module {index}", sector="Industrie", start_date=date(2025, 1, index + 1), students=5)
        for index in range(4)
    ]
    modules[-1] = modules[-1].model_copy(update={"status": ModuleStatus.IN_PROGRESS})
    partnerships = [
        Partnership(company_name="Ancien", contact_person="A", last_contact=date(2024, 1, 1)),
        Partnership(company_name="Récent", contact_person="B", last_contact=date(2025, 5, 20),
                    status=PartnershipStatus.ACTIF),
        Partnership(company_name="Sans date", contact_person="C"),
    ]
    subsidies = [
        SubsidyApplication(funding_body="Région", project_title="Dossier 1", amount="1000"),
        SubsidyApplication(funding_body="OPCO", project_title="Dossier 2", amount="2000",
                           submission_date=date(2025, 2, 1), status=SubsidyStatus.SUBMITTED),
        SubsidyApplication(funding_body="État", project_title="Dossier 3", amount="3000",
                           submission_date=date(2025, 4, 1)),
    ]
    return DashboardSources(
        training_plan=TrainingPlan(modules=modules),
        partnerships=partnerships,
        subsidies=subsidies,
    )


def test_defaults_produce_sensible_metrics() -> None:
    metrics = aggregate_dashboard(DashboardSources(), today=TODAY)

    assert metrics.total_students == 20
    assert metrics.revenue == Decimal("90000")
    assert metrics.total_budget == Decimal("100000")
    assert metrics.students_per_trainer is None
    assert metrics.questionnaire_score is None
    assert metrics.certification_rate == Decimal("0")
    assert metrics.activities == []


def test_total_students_is_the_largest_source() -> None:
    sources = DashboardSources(
        pedagogical_costs=PedagogicalCostData(
            sectors=[
                PedagogicalSector(name="Bâtiment", students=12, trainers=1),
                PedagogicalSector(name="Industrie", students=18, trainers=2),
            ]
        ),
    )
    metrics = aggregate_dashboard(sources, today=TODAY)

    assert metrics.total_students == 30
    assert metrics.students_per_trainer == Decimal("10")
    assert metrics.pedagogical_costs > 0


def test_revenue_falls_back_to_rentability_inputs() -> None:
    sources = DashboardSources(business_plan=BusinessPlan())
    metrics = aggregate_dashboard(sources, today=TODAY)

    assert metrics.revenue == Decimal("95000")


def test_activity_feed_is_sorted_and_capped() -> None:
    feed = build_activity_feed(_sources_with_activity(), today=TODAY)

    assert len(feed) == ACTIVITY_FEED_LIMIT
    dates = [item.date for item in feed]
    assert dates == sorted(dates, reverse=True)
    # Undated records are shown as happening today.
    assert feed[0].date == TODAY
    assert feed[0].title == "Sans date"
    assert "Module 0" not in {item.title for item in feed}


def test_tracker_counters() -> None:
    metrics = aggregate_dashboard(_sources_with_activity(), today=TODAY)

    assert metrics.active_modules == 1
    assert metrics.completed_modules == 0
    assert metrics.active_partnerships == 1
    assert metrics.pending_subsidies == 1


def test_questionnaire_score_only_when_completed() -> None:
    answers = [Answer.NON, Answer.NON] + [Answer.OUI] * (QUESTION_COUNT - 2)
    in_progress = QuestionnaireState(answers=answers, is_started=True)
    completed = in_progress.model_copy(update={"is_completed": True})

    assert aggregate_dashboard(DashboardSources(questionnaire=in_progress), today=TODAY).questionnaire_score is None
    assert aggregate_dashboard(DashboardSources(questionnaire=completed), today=TODAY).questionnaire_score == Decimal("90")


def test_cost_metrics_use_pedagogical_costs_and_total_students() -> None:
    sources = DashboardSources(
        pedagogical_costs=PedagogicalCostData(
            sectors=[PedagogicalSector(name="Bâtiment", students=10, trainers=1, trainer_salary="35000")],
            admin_costs="15000",
        ),
    )
    metrics = aggregate_dashboard(sources, today=TODAY)

    # 35000 trainer cost + 25 % overhead; admin costs stay out of the dashboard.
    assert metrics.pedagogical_costs == Decimal("43750")
    # Rentability inputs bring 20 students, more than the sector's 10.
    assert metrics.total_students == 20
    assert metrics.avg_cost_per_student == Decimal("2187.5")
    assert metrics.students_per_trainer == Decimal("20")
    # (90000 - 43750) / 90000
    assert round(metrics.profit_margin, 2) == Decimal("51.39")


def test_profit_margin_is_zero_without_revenue() -> None:
    sources = DashboardSources(
        business_plan=BusinessPlan(),
        rentability=RentabilityInputs(),
        pedagogical_costs=PedagogicalCostData(sectors=[PedagogicalSector(name="Industrie", students=4)]),
    )
    metrics = aggregate_dashboard(sources, today=TODAY)

    assert metrics.revenue == Decimal("0")
    assert metrics.profit_margin == Decimal("0")
    assert metrics.avg_cost_per_student == metrics.pedagogical_costs / 4


def test_costs_above_revenue_give_a_negative_margin() -> None:
    sources = DashboardSources(
        business_plan=BusinessPlan(),
        rentability=RentabilityInputs(students=2, tuition_fee="5000"),
        pedagogical_costs=PedagogicalCostData(
            sectors=[PedagogicalSector(name="Industrie", students=2, trainer_salary="16000")], overhead_rate="0"
        ),
    )
    metrics = aggregate_dashboard(sources, today=TODAY)

    assert metrics.revenue == Decimal("10000")
    assert metrics.profit_margin == Decimal("-60")
