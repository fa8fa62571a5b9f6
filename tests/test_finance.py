from decimal import Decimal
import unittest

from calc import (
    NOT_PROFITABLE,
    breakeven_label,
    breakeven_years,
    compare_scenarios,
    compute_rentability,
    margin_status,
    pedagogical_cost_rows,
    return_on_investment,
    sector_cost,
    summarize_pedagogical_costs,
)
from models import (
    DEFAULT_BUSINESS_PLAN,
    DEFAULT_RENTABILITY_INPUTS,
    BudgetInputs,
    BusinessPlan,
    FinancialProjections,
    PedagogicalCostData,
    PedagogicalSector,
    RentabilityInputs,
    Scenario,
    YearProjection,
)


class BusinessPlanIndicatorTests(unittest.TestCase):
    def test_default_plan_indicators(self) -> None:
        self.assertEqual(return_on_investment(DEFAULT_BUSINESS_PLAN), Decimal("40"))
        self.assertEqual(breakeven_years(DEFAULT_BUSINESS_PLAN), Decimal("4"))
        self.assertEqual(breakeven_label(DEFAULT_BUSINESS_PLAN), "4,0 ans")

    def test_roi_is_undefined_without_investment(self) -> None:
        plan = DEFAULT_BUSINESS_PLAN.model_copy(update={"initial_investment": Decimal("0")})
        self.assertIsNone(return_on_investment(plan))

    def test_loss_making_plan_is_not_profitable(self) -> None:
        plan = BusinessPlan(
            initial_investment="50000",
            financial_projections=FinancialProjections(
                year1=YearProjection(revenue="10000", expenses="20000"),
                year2=YearProjection(revenue="10000", expenses="20000"),
                year3=YearProjection(revenue="30000", expenses="20000"),
            ),
        )
        self.assertIsNone(breakeven_years(plan))
        self.assertEqual(breakeven_label(plan), NOT_PROFITABLE)
        self.assertEqual(return_on_investment(plan), Decimal("20"))

    def test_zero_average_profit_is_not_profitable(self) -> None:
        plan = BusinessPlan(
            initial_investment="50000",
            financial_projections=FinancialProjections(
                year1=YearProjection(revenue="10000", expenses="20000"),
                year2=YearProjection(revenue="20000", expenses="20000"),
                year3=YearProjection(revenue="30000", expenses="20000"),
            ),
        )
        self.assertIsNone(breakeven_years(plan))
        self.assertEqual(breakeven_label(plan), NOT_PROFITABLE)

    def test_small_positive_average_profit_gives_breakeven_years(self) -> None:
        plan = BusinessPlan(
            initial_investment="100",
            financial_projections=FinancialProjections(
                year1=YearProjection(revenue="10", expenses="10"),
                year2=YearProjection(revenue="10", expenses="10"),
                year3=YearProjection(revenue="13", expenses="10"),
            ),
        )
        self.assertEqual(breakeven_years(plan), Decimal("100"))
        self.assertEqual(breakeven_label(plan), "100,0 ans")

    def test_amounts_are_coerced(self) -> None:
        plan = BusinessPlan(initial_investment="1 500,50", student_capacity="-3")
        self.assertEqual(plan.initial_investment, Decimal("1500.50"))
        self.assertEqual(plan.student_capacity, 0)

    def test_budget_total(self) -> None:
        self.assertEqual(BudgetInputs().total(), Decimal("105000"))
        self.assertEqual(BudgetInputs(local_cost="", it_cost="1000").total(), Decimal("41000"))


class RentabilityTests(unittest.TestCase):
    def test_default_inputs_are_in_deficit(self) -> None:
        metrics = compute_rentability(DEFAULT_RENTABILITY_INPUTS)
        self.assertEqual(metrics.revenue, Decimal("95000"))
        self.assertEqual(metrics.expenses, Decimal("160000"))
        self.assertEqual(metrics.profit, Decimal("-65000"))
        self.assertLess(metrics.margin, 0)
        self.assertEqual(margin_status(metrics.margin), ("Déficit", "negative"))
        self.assertEqual(metrics.cost_per_student, Decimal("8000"))

    def test_scenario_multipliers(self) -> None:
        comparison = compare_scenarios(DEFAULT_RENTABILITY_INPUTS)
        self.assertEqual(set(comparison), set(Scenario))
        self.assertEqual(comparison[Scenario.OPTIMISTIC].revenue, Decimal("114000"))
        self.assertEqual(comparison[Scenario.OPTIMISTIC].expenses, Decimal("144000"))
        self.assertEqual(comparison[Scenario.PESSIMISTIC].revenue, Decimal("76000"))
        self.assertEqual(comparison[Scenario.PESSIMISTIC].expenses, Decimal("176000"))
        self.assertEqual(comparison[Scenario.REALISTIC].profit, Decimal("-65000"))

    def test_margin_sign_follows_profit(self) -> None:
        inputs = RentabilityInputs(students=10, tuition_fee="10000", salaries="80000")
        metrics = compute_rentability(inputs)
        self.assertEqual(metrics.margin, Decimal("20"))
        self.assertEqual(margin_status(metrics.margin), ("Excellente rentabilité", "positive"))

    def test_zero_revenue_and_students(self) -> None:
        metrics = compute_rentability(RentabilityInputs(salaries="1000"))
        self.assertEqual(metrics.margin, Decimal("0"))
        self.assertEqual(metrics.cost_per_student, Decimal("0"))
        self.assertEqual(metrics.revenue_per_student, Decimal("0"))

    def test_margin_tiers(self) -> None:
        self.assertEqual(margin_status(Decimal("5"))[0], "Bonne rentabilité")
        self.assertEqual(margin_status(Decimal("0")), ("Rentabilité fragile", "caution"))
        self.assertEqual(margin_status(Decimal("-0.1"))[0], "Déficit")

    def test_blank_scenario_defaults_to_realistic(self) -> None:
        self.assertEqual(RentabilityInputs(scenario="").scenario, Scenario.REALISTIC)


class PedagogicalCostTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sector = PedagogicalSector(
            name="Bâtiment - Maçonnerie",
            students=10,
            hours=1000,
            trainers=1,
            trainer_salary="35000",
            equipment="8000",
            materials="2000",
            certifications="500",
        )

    def test_sector_cost_breakdown(self) -> None:
        cost = sector_cost(self.sector, Decimal("25"))
        self.assertEqual(cost.trainer_costs, Decimal("35000"))
        self.assertEqual(cost.direct_costs, Decimal("45500"))
        self.assertEqual(cost.overhead_costs, Decimal("11375"))
        self.assertEqual(cost.total_cost, Decimal("56875"))
        self.assertEqual(cost.cost_per_student, Decimal("5687.5"))
        self.assertEqual(cost.cost_per_hour, Decimal("56.875"))

    def test_summary_includes_admin_costs_in_averages(self) -> None:
        data = PedagogicalCostData(sectors=[self.sector], overhead_rate="25", admin_costs="15000")
        summary = summarize_pedagogical_costs(data)
        self.assertEqual(summary.total_students, 10)
        self.assertEqual(summary.total_hours, 1000)
        self.assertEqual(summary.total_costs, Decimal("56875"))
        self.assertEqual(summary.avg_cost_per_student, Decimal("7187.5"))
        self.assertEqual(summary.avg_cost_per_hour, Decimal("71.875"))

        rows = pedagogical_cost_rows(data)
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["Filière"], "Bâtiment - Maçonnerie")
        self.assertEqual(rows[0]["Coût total (€)"], 56875.0)

    def test_empty_data_has_zero_averages(self) -> None:
        summary = summarize_pedagogical_costs(PedagogicalCostData())
        self.assertEqual(summary.total_students, 0)
        self.assertEqual(summary.avg_cost_per_student, Decimal("0"))
        self.assertEqual(summary.avg_cost_per_hour, Decimal("0"))
