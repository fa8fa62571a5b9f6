from decimal import Decimal
import unittest

from calc import (
    questionnaire_assessment,
    questionnaire_report,
    questionnaire_score,
    score_location,
    territorial_score,
    territory_tier,
)
from calc.scoring import TERRITORY_WEIGHTS
from models import QUESTION_COUNT, Answer, LocationAnalysis, LocationCriteria


class TerritorialScoreTests(unittest.TestCase):
    def test_reference_territory_scores_seventy(self) -> None:
        criteria = LocationCriteria(
            population=80,
            unemployment_rate=90,
            average_income=50,
            industrial_presence=70,
            transport_access=60,
            education_level=40,
            competition_level=30,
            local_support=50,
        )
        score = territorial_score(criteria)
        self.assertEqual(score, 70)
        self.assertEqual(territory_tier(score).label, "Bon")

    def test_weights_sum_to_one(self) -> None:
        self.assertEqual(sum(TERRITORY_WEIGHTS.values()), Decimal("1"))

    def test_score_bounds(self) -> None:
        best = LocationCriteria(**{**dict.fromkeys(TERRITORY_WEIGHTS, 100), "competition_level": 0})
        worst = LocationCriteria(**{**dict.fromkeys(TERRITORY_WEIGHTS, 0), "competition_level": 100})
        self.assertEqual(territorial_score(best), 100)
        self.assertEqual(territorial_score(worst), 0)
        self.assertEqual(territorial_score(LocationCriteria()), 50)

    def test_ratings_are_clamped(self) -> None:
        criteria = LocationCriteria(population=250, local_support=-10)
        self.assertEqual(criteria.population, 100)
        self.assertEqual(criteria.local_support, 0)

    def test_tier_thresholds(self) -> None:
        self.assertEqual(territory_tier(80).label, "Excellent")
        self.assertEqual(territory_tier(79).label, "Bon")
        self.assertEqual(territory_tier(40).label, "Moyen")
        self.assertEqual(territory_tier(39).label, "Faible")

    def test_score_location_derives_score_and_recommendation(self) -> None:
        analysis = LocationAnalysis(
            city_name="Lyon",
            region="Auvergne-Rhône-Alpes",
            criteria=LocationCriteria(**{**dict.fromkeys(TERRITORY_WEIGHTS, 90), "competition_level": 10}),
            overall_score=3,
        )
        scored = score_location(analysis)
        self.assertEqual(scored.overall_score, 90)
        self.assertIn("très favorable", scored.recommendation)
        self.assertEqual(analysis.overall_score, 3)


class QuestionnaireScoreTests(unittest.TestCase):
    def test_extremes(self) -> None:
        self.assertEqual(questionnaire_score([Answer.OUI] * QUESTION_COUNT), Decimal("100"))
        self.assertEqual(questionnaire_score([Answer.NON] * QUESTION_COUNT), Decimal("0"))
        self.assertEqual(questionnaire_score([]), Decimal("100"))

    def test_score_decreases_with_each_non(self) -> None:
        scores = [
            questionnaire_score([Answer.NON] * count + [Answer.OUI] * (QUESTION_COUNT - count))
            for count in range(QUESTION_COUNT + 1)
        ]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual(len(set(scores)), QUESTION_COUNT + 1)

    def test_report(self) -> None:
        answers = [Answer.NON] * 3 + [Answer.OUI] * (QUESTION_COUNT - 3)
        report = questionnaire_report(answers)
        self.assertEqual(report.score, Decimal("85"))
        self.assertEqual(report.no_count, 3)
        self.assertTrue(report.assessment.startswith("Bon"))

    def test_assessment_thresholds(self) -> None:
        self.assertTrue(questionnaire_assessment(Decimal("90")).startswith("Excellent"))
        self.assertTrue(questionnaire_assessment(Decimal("75")).startswith("Bon"))
        self.assertTrue(questionnaire_assessment(Decimal("60")).startswith("Moyen"))
        self.assertTrue(questionnaire_assessment(Decimal("55")).startswith("Insuffisant"))
