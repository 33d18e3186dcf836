"""Rule tables for the automatic ticket-priority engine.

All tables are immutable and built once at import. Keywords are literal
lower-case substrings: accented and unaccented spellings of the same word are
registered as separate entries and no Unicode folding is applied, so
``"caido"`` and ``"caído"`` only match their own spelling.

Weights:
    Keyword rules (a):  60 internet, 45 guest, 40 projection, 35 printer,
                        30 notebook/pc
    Combo rules (b):    55 kitchen, 50 reception
    Tag weights (c):    20 per critical tag
    General rules (d):  25 critical incident, 25 user-flagged critical,
                        15 technical error

Exports:
    KEYWORD_RULES, COMBO_RULES, TAG_WEIGHTS, GENERAL_RULES: The four rule
        families.
    DEFAULT_RULE_SET: All four families bundled for ``PriorityScorer``.
"""

from __future__ import annotations

from src.ticketfast.priority.schemas import ComboRule, KeywordRule, PriorityRuleSet

CRITICAL_TAG_WEIGHT = 20

TAG_REASON_PREFIX = "Etiqueta marcada: "


# -- (a) Keyword rules --------------------------------------------------------

KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        keywords=(
            "sin internet",
            "no hay internet",
            "internet caído",
            "internet caido",
            "sin wifi",
            "no hay wifi",
            "wifi caído",
            "wifi caido",
            "wifi está caído",
            "wifi esta caido",
        ),
        weight=60,
        reason="Reporte indica caída de internet",
    ),
    KeywordRule(
        keywords=(
            "no proyecta",
            "proyector no funciona",
            "proyector no enciende",
            "sin proyección",
            "sin proyeccion",
        ),
        weight=40,
        reason="Problema con proyección detectado",
    ),
    KeywordRule(
        keywords=(
            "huésped",
            "huesped",
            "cliente molesto",
            "cliente esperando",
        ),
        weight=45,
        reason="Impacto directo en huésped",
    ),
    KeywordRule(
        keywords=(
            "no imprime",
            "impresora no funciona",
            "impresora no responde",
            "impresora atascada",
            "atasco de papel",
        ),
        weight=35,
        reason="Problema con impresora detectado",
    ),
    KeywordRule(
        keywords=(
            "notebook no enciende",
            "notebook no prende",
            "notebook no arranca",
            "notebook con fallas",
            "laptop no enciende",
            "laptop no arranca",
            "pc no enciende",
            "pc no arranca",
        ),
        weight=30,
        reason="Reporte de notebook/pc con fallas",
    ),
)


# -- (b) Combo rules ----------------------------------------------------------

COMBO_RULES: tuple[ComboRule, ...] = (
    ComboRule(
        required=("recepción", "no funciona"),
        weight=50,
        reason="Recepción sin sistema funcional",
    ),
    ComboRule(
        required=("recepcion", "no funciona"),
        weight=50,
        reason="Recepción sin sistema funcional",
    ),
    ComboRule(
        required=("recepción", "caído"),
        weight=50,
        reason="Recepción reporta sistema caído",
    ),
    ComboRule(
        required=("recepcion", "caido"),
        weight=50,
        reason="Recepción reporta sistema caído",
    ),
    ComboRule(
        required=("cocina", "sin luz"),
        weight=55,
        reason="Cocina sin energía",
    ),
    ComboRule(
        required=("cocina", "sin gas"),
        weight=55,
        reason="Cocina sin gas",
    ),
)


# -- (c) Tag weights ----------------------------------------------------------

# Display labels and their lower-case variants are both registered.
_CRITICAL_TAGS = (
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
)

TAG_WEIGHTS: tuple[tuple[str, int], ...] = tuple(
    (label, CRITICAL_TAG_WEIGHT)
    for tag in _CRITICAL_TAGS
    for label in (tag, tag.lower())
)


# -- (d) General keyword rules ------------------------------------------------

GENERAL_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        keywords=("no funciona", "no responde", "caído", "caido", "bloqueado"),
        weight=25,
        reason="Incidente crítico detectado",
    ),
    KeywordRule(
        keywords=("no arranca", "sin acceso", "error 500", "error 404"),
        weight=15,
        reason="Error técnico detectado",
    ),
    KeywordRule(
        keywords=("urgente", "crítico", "critico"),
        weight=25,
        reason="Usuario marcó el incidente como crítico",
    ),
)


DEFAULT_RULE_SET = PriorityRuleSet(
    keyword_rules=KEYWORD_RULES,
    combo_rules=COMBO_RULES,
    tag_weights=TAG_WEIGHTS,
    general_rules=GENERAL_RULES,
)
