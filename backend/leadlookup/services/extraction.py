"""Extracción heurística de contactId/contactListId desde una conversación.

Genesys no documenta dónde deja estos identificadores: depende del tipo de
conversación y de la campaña, y los nombres de clave cambian de forma. Por eso
no se parsea un esquema; se recorren los mapas de atributos y se comparan los
nombres de clave contra una tabla de patrones.

Orden de evaluación:

1. `participants[*].attributes`, en orden de participantes y de claves.
2. `attributes` de la conversación, con patrones más laxos.

Para cada objetivo gana la primera clave que coincide con un valor no vacío.
Los atributos de participante tienen prioridad sobre los de la conversación.
Si dos claves distintas coinciden en la misma pasada, decide el orden de
iteración del mapa: es determinista, pero no implica que sea la correcta.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Literal

Scope = Literal["participants", "conversation"]
Target = Literal["contact_id", "contact_list_id"]


@dataclass(slots=True, frozen=True)
class ExtractionRule:
    """Patrón de nombre de clave que alimenta un campo dentro de un alcance."""

    scope: Scope
    target: Target
    pattern: re.Pattern[str]

    def matches(self, key: str) -> bool:
        return self.pattern.search(key) is not None


def _rule(scope: Scope, target: Target, pattern: str) -> ExtractionRule:
    return ExtractionRule(scope, target, re.compile(pattern, re.IGNORECASE))


# Para agregar una variante nueva de clave basta con sumar una fila.
RULES: tuple[ExtractionRule, ...] = (
    _rule("participants", "contact_id", r"outbound.*contact.*id"),
    _rule("participants", "contact_id", r"^contactid$"),
    _rule("participants", "contact_list_id", r"contactlist.*id"),
    _rule("participants", "contact_list_id", r"outbound.*contactlist"),
    _rule("conversation", "contact_id", r"contactid"),
    _rule("conversation", "contact_list_id", r"contactlistid"),
    _rule("conversation", "contact_list_id", r"contactlist"),
)

SCOPE_ORDER: tuple[Scope, ...] = ("participants", "conversation")


@dataclass(slots=True, frozen=True)
class OutboundIds:
    """Identificadores del registro de discado; cualquiera puede faltar."""

    contact_id: str | None = None
    contact_list_id: str | None = None

    @property
    def complete(self) -> bool:
        return bool(self.contact_id and self.contact_list_id)


def _as_mapping(value: Any) -> Mapping[Any, Any]:
    return value if isinstance(value, Mapping) else {}


def _attribute_maps(
    conversation: Mapping[str, Any], scope: Scope
) -> Iterator[Mapping[Any, Any]]:
    if scope == "conversation":
        yield _as_mapping(conversation.get("attributes"))
        return

    participants = conversation.get("participants")
    if not isinstance(participants, list):
        return
    for participant in participants:
        yield _as_mapping(_as_mapping(participant).get("attributes"))


def _scan(
    maps: Iterable[Mapping[Any, Any]],
    rules: tuple[ExtractionRule, ...],
    found: dict[Target, str],
) -> None:
    for attributes in maps:
        for key, value in attributes.items():
            if not value:
                continue
            name = str(key)
            for rule in rules:
                if found.get(rule.target) is None and rule.matches(name):
                    found[rule.target] = str(value)


def extract_outbound_ids(
    conversation: Mapping[str, Any] | None,
    *,
    rules: tuple[ExtractionRule, ...] = RULES,
) -> OutboundIds:
    """Busca contactId y contactListId en los atributos de la conversación.

    Nunca lanza excepciones: un payload sin participantes, sin atributos o con
    tipos inesperados simplemente produce identificadores ausentes.
    """
    payload = _as_mapping(conversation)
    found: dict[Target, str] = {}
    for scope in SCOPE_ORDER:
        scoped_rules = tuple(rule for rule in rules if rule.scope == scope)
        _scan(_attribute_maps(payload, scope), scoped_rules, found)

    return OutboundIds(
        contact_id=found.get("contact_id"),
        contact_list_id=found.get("contact_list_id"),
    )
