"""Deterministic scoring tests for PriorityScorer and score_ticket.

Uses the real rule tables (no mocking) since scoring is pure deterministic
Python. Expected scores are spelled out as rule-weight sums in each test.

Covers:
    - Empty input -> 0, low, no reasons
    - Single critical tag -> 20, low, tag reason
    - Keyword + tag -> 80, high, two reasons
    - Combo rules fire once per entry; no duplicate reasons
    - Literal accent matching (no folding)
    - Tag weights: case-insensitive exact equality, one contribution per tag
    - General severity keywords
    - Clamp at 100
    - Band boundaries at 39/40/69/70
    - Idempotence and monotonicity
    - is_urgent does not affect the score
    - Custom rule sets and thresholds
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.ticketfast.priority.schemas import (
    ComboRule,
    KeywordRule,
    PriorityInput,
    PriorityRuleSet,
)
from src.ticketfast.priority.scorer import (
    PriorityScorer,
    build_search_text,
    classify_score,
    normalize_tags,
    normalize_text,
    score_ticket,
)
from src.ticketfast.tickets.schemas import Ticket


# -- Helpers ------------------------------------------------------------------


def _input(
    description: str | None = "",
    tags: list[str] | None = None,
    *,
    is_urgent: bool = False,
) -> PriorityInput:
    """Build a PriorityInput with an empty tag list by default."""
    return PriorityInput(
        description=description,
        tags=[] if tags is None else tags,
        is_urgent=is_urgent,
    )


# -- Normalization ------------------------------------------------------------


class TestNormalization:
    """Search text construction."""

    def test_normalize_text_lowercases(self) -> None:
        assert normalize_text("La RECEPCIÓN") == "la recepción"

    def test_normalize_text_none_and_empty(self) -> None:
        assert normalize_text(None) == ""
        assert normalize_text("") == ""

    def test_normalize_tags_joins_with_single_space(self) -> None:
        assert normalize_tags(["Sin WiFi", "Cocina"]) == "sin wifi cocina"

    def test_normalize_tags_none_and_empty(self) -> None:
        assert normalize_tags(None) == ""
        assert normalize_tags([]) == ""

    def test_build_search_text_combines_description_and_tags(self) -> None:
        assert build_search_text("Sin Luz", ["Cocina"]) == "sin luz cocina"

    def test_build_search_text_all_empty(self) -> None:
        assert build_search_text(None, None) == " "


# -- Core Properties ----------------------------------------------------------


class TestScoreTicket:
    """Reference scenarios for the default rule set."""

    def test_empty_input_is_zero_low(self) -> None:
        result = score_ticket(_input("", []))

        assert result.score == 0
        assert result.level == "low"
        assert result.reasons == []

    def test_none_fields_are_total(self) -> None:
        result = score_ticket(PriorityInput(description=None, tags=None))

        assert result.score == 0
        assert result.level == "low"

    def test_single_critical_tag_is_low(self) -> None:
        result = score_ticket(_input("", ["Impresora"]))

        # tag 20
        assert result.score == 20
        assert result.level == "low"
        assert result.reasons == ["Etiqueta marcada: impresora"]

    def test_internet_keyword_plus_tag_is_high(self) -> None:
        result = score_ticket(
            _input("No hay internet en toda la recepción", ["Sin WiFi"])
        )

        # keyword internet 60 + tag 20 = 80
        assert result.score == 80
        assert result.level == "high"
        assert set(result.reasons) == {
            "Reporte indica caída de internet",
            "Etiqueta marcada: sin wifi",
        }

    def test_wifi_down_is_high(self) -> None:
        result = score_ticket(_input("El wifi está caído desde hace una hora"))

        # keyword internet 60 + general "caído" 25 = 85
        assert result.score == 85
        assert result.level == "high"
        assert "Incidente crítico detectado" in result.reasons

    def test_printer_keyword_and_tag_is_medium(self) -> None:
        result = score_ticket(_input("La impresora no imprime", ["Impresora"]))

        # keyword printer 35 + tag 20 = 55
        assert result.score == 55
        assert result.level == "medium"
        assert result.reasons == [
            "Problema con impresora detectado",
            "Etiqueta marcada: impresora",
        ]

    def test_guest_impact(self) -> None:
        result = score_ticket(_input("El huésped está esperando en el lobby"))

        assert result.score == 45
        assert result.level == "medium"
        assert result.reasons == ["Impacto directo en huésped"]

    def test_notebook_not_booting(self) -> None:
        result = score_ticket(_input("La notebook no arranca"))

        # keyword notebook 30 + general "no arranca" 15 = 45
        assert result.score == 45
        assert result.reasons == [
            "Reporte de notebook/pc con fallas",
            "Error técnico detectado",
        ]

    def test_low_priority_general_question(self) -> None:
        result = score_ticket(
            _input("Necesito ayuda con una consulta general", ["Consulta General"])
        )

        assert result.score == 0
        assert result.level == "low"


# -- Combo Rules --------------------------------------------------------------


class TestComboRules:
    """Multi-substring combination rules."""

    def test_kitchen_without_power_applied_once(self) -> None:
        result = score_ticket(_input("La cocina está sin luz"))

        assert result.score == 55
        assert result.level == "medium"
        assert result.reasons == ["Cocina sin energía"]

    def test_kitchen_needs_both_substrings(self) -> None:
        result = score_ticket(_input("La cocina no tiene luz"))

        assert result.score == 0
        assert result.reasons == []

    def test_kitchen_substrings_need_not_be_adjacent(self) -> None:
        result = score_ticket(_input("Sin gas desde la mañana", ["Cocina"]))

        # combo cocina + sin gas 55 + tag 20 = 75
        assert result.score == 75
        assert result.level == "high"
        assert "Cocina sin gas" in result.reasons

    def test_reception_not_working(self) -> None:
        result = score_ticket(
            _input("La recepción no funciona correctamente", ["Recepción"])
        )

        # combo 50 + tag 20 + general "no funciona" 25 = 95
        assert result.score == 95
        assert result.reasons == [
            "Recepción sin sistema funcional",
            "Etiqueta marcada: recepción",
            "Incidente crítico detectado",
        ]

    def test_reception_unaccented_variant(self) -> None:
        result = score_ticket(_input("la recepcion no funciona"))

        # combo (unaccented entry) 50 + general 25 = 75
        assert result.score == 75
        assert "Recepción sin sistema funcional" in result.reasons

    def test_mixed_accents_do_not_fold(self) -> None:
        result = score_ticket(_input("el sistema de recepcion esta caído"))

        # no combo entry pairs "recepcion" with "caído"; general "caído" 25
        assert result.score == 25
        assert result.reasons == ["Incidente crítico detectado"]

    def test_both_variants_firing_share_one_reason(self) -> None:
        result = score_ticket(_input("recepción / recepcion no funciona"))

        # two combo entries 50 + 50 + general 25 = 125 -> clamped
        assert result.score == 100
        assert result.reasons == [
            "Recepción sin sistema funcional",
            "Incidente crítico detectado",
        ]


# -- Tag Weights --------------------------------------------------------------


class TestTagWeights:
    """Exact, case-insensitive tag matching."""

    @pytest.mark.parametrize(
        "tag",
        [
            "Recepción",
            "Huesped",
            "Sin Internet",
            "No Proyecta",
            "Cocina",
            "Problemas con Notebook",
            "Impresora",
            "Sin WiFi",
            "Consulta Técnica",
            "Solicitud de Adaptador",
        ],
    )
    def test_registered_tags_carry_reason(self, tag: str) -> None:
        result = score_ticket(_input("Problema reportado", [tag]))

        assert f"Etiqueta marcada: {tag.lower()}" in result.reasons
        assert result.score >= 20

    def test_tag_match_is_case_insensitive(self) -> None:
        result = score_ticket(_input("", ["IMPRESORA"]))

        assert result.score == 20
        assert result.reasons == ["Etiqueta marcada: impresora"]

    def test_tag_match_is_exact_not_substring(self) -> None:
        result = score_ticket(_input("", ["Impresora rota"]))

        assert result.score == 0

    def test_unregistered_vocabulary_tag_scores_nothing(self) -> None:
        result = score_ticket(_input("", ["Problemas POG"]))

        assert result.score == 0

    def test_duplicate_tags_each_contribute(self) -> None:
        result = score_ticket(_input("", ["Impresora", "impresora"]))

        # 20 + 20, one shared reason
        assert result.score == 40
        assert result.level == "medium"
        assert result.reasons == ["Etiqueta marcada: impresora"]


# -- General Keywords ---------------------------------------------------------


class TestGeneralRules:
    """Broad severity signals."""

    @pytest.mark.parametrize(
        ("description", "score", "reason"),
        [
            ("El servidor está caído", 25, "Incidente crítico detectado"),
            ("La caja no responde", 25, "Incidente crítico detectado"),
            ("Usuario bloqueado", 25, "Incidente crítico detectado"),
            ("Error 404 al abrir la intranet", 15, "Error técnico detectado"),
            ("Sin acceso al correo", 15, "Error técnico detectado"),
            ("Esto es urgente", 25, "Usuario marcó el incidente como crítico"),
            ("Es crítico", 25, "Usuario marcó el incidente como crítico"),
        ],
    )
    def test_general_signal(self, description: str, score: int, reason: str) -> None:
        result = score_ticket(_input(description))

        assert result.score == score
        assert result.reasons == [reason]


# -- Aggregation --------------------------------------------------------------


class TestAggregation:
    """Clamping, bands, idempotence and monotonicity."""

    def test_score_clamped_at_100(self) -> None:
        result = score_ticket(
            _input(
                "Sin internet, el huésped espera y la impresora no imprime. Urgente",
                ["Sin WiFi", "Huesped", "Impresora"],
            )
        )

        assert result.score == 100
        assert result.level == "high"

    def test_multiple_tags_clamp(self) -> None:
        result = score_ticket(
            _input("Múltiples problemas", ["Impresora", "Recepción", "Sin WiFi"])
        )

        # keyword "sin wifi" (from tags) 60 + 3 tags 60 = 120
        assert result.score == 100

    def test_score_40_is_medium(self) -> None:
        result = score_ticket(_input("El proyector no proyecta nada"))

        assert result.score == 40
        assert result.level == "medium"

    def test_score_70_is_high(self) -> None:
        result = score_ticket(_input("La impresora no imprime, error 500", ["Impresora"]))

        # printer 35 + tag 20 + general error 500 15 = 70
        assert result.score == 70
        assert result.level == "high"

    @pytest.mark.parametrize(
        ("score", "level"),
        [(0, "low"), (39, "low"), (40, "medium"), (69, "medium"), (70, "high"), (100, "high")],
    )
    def test_classify_score_boundaries(self, score: int, level: str) -> None:
        assert classify_score(score) == level

    def test_idempotent(self) -> None:
        ticket = _input("La recepción no funciona, huésped molesto", ["Recepción"])

        first = score_ticket(ticket)
        second = score_ticket(ticket)

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_adding_a_tag_never_decreases_score(self) -> None:
        base = score_ticket(_input("La impresora no imprime"))
        more = score_ticket(_input("La impresora no imprime", ["Impresora"]))

        assert more.score >= base.score

    def test_adding_a_keyword_never_decreases_score(self) -> None:
        base = score_ticket(_input("La cocina está sin luz", ["Cocina"]))
        more = score_ticket(_input("La cocina está sin luz, urgente", ["Cocina"]))

        assert more.score >= base.score

    def test_is_urgent_not_scored(self) -> None:
        calm = score_ticket(_input("Problema general", is_urgent=False))
        urgent = score_ticket(_input("Problema general", is_urgent=True))

        assert urgent == calm
        assert urgent.score == 0

    def test_scores_full_ticket_rows(self) -> None:
        ticket = Ticket(
            id="t-1",
            description="La cocina está sin luz",
            tags=["Cocina"],
            created_by="u-1",
            created_at=datetime(2025, 3, 15, 9, 0, tzinfo=timezone.utc),
        )

        assert score_ticket(ticket).score == 75


# -- Configuration ------------------------------------------------------------


class TestPriorityScorerConfiguration:
    """Injected rule sets and thresholds."""

    def test_custom_rule_set(self) -> None:
        rules = PriorityRuleSet(
            keyword_rules=(KeywordRule(keywords=("foo",), weight=10, reason="Foo"),),
            combo_rules=(ComboRule(required=("a", "b"), weight=5, reason="AB"),),
            tag_weights=(("Bar", 7),),
        )
        scorer = PriorityScorer(rules)

        result = scorer.score(_input("foo a b", ["bar"]))

        assert result.score == 22
        assert result.reasons == ["Foo", "AB", "Etiqueta marcada: bar"]

    def test_custom_thresholds(self) -> None:
        scorer = PriorityScorer(high_threshold=50, medium_threshold=20)

        assert scorer.score(_input("La cocina está sin luz")).level == "high"
        assert scorer.score(_input("", ["Impresora"])).level == "medium"
