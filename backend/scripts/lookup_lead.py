#!/usr/bin/env python3
"""Resuelve desde la terminal el lead de discado de una conversación de Genesys Cloud."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from typing import Any

from leadlookup.core.errors import ExtractionFailedError, LeadLookupError
from leadlookup.services.lead_resolver import LeadResolver, get_lead_resolver


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Usa las credenciales configuradas (GC_CLIENT_ID / GC_CLIENT_SECRET) para "
            "buscar la conversación, extraer contactId/contactListId y obtener el lead."
        )
    )
    parser.add_argument("conversation_id", help="Identificador de la conversación.")
    parser.add_argument(
        "--extract-only",
        action="store_true",
        help="Sólo muestra los identificadores extraídos, sin consultar el lead.",
    )
    return parser.parse_args(argv)


async def run(
    resolver: LeadResolver, conversation_id: str, *, extract_only: bool
) -> dict[str, Any]:
    if extract_only:
        ids = await resolver.extract_ids(conversation_id)
        return {
            "contactId": ids.contact_id,
            "contactListId": ids.contact_list_id,
            "complete": ids.complete,
        }
    result = await resolver.resolve(conversation_id)
    return {
        "contactId": result.contact_id,
        "contactListId": result.contact_list_id,
        "lead": result.lead,
    }


def main(argv: Sequence[str] | None = None, *, resolver: LeadResolver | None = None) -> int:
    args = parse_args(argv)
    resolver = resolver or get_lead_resolver()

    try:
        output = asyncio.run(run(resolver, args.conversation_id, extract_only=args.extract_only))
    except ExtractionFailedError as exc:
        print(f"[lookup_lead] {exc}\n[lookup_lead] Tip: {exc.tip}", file=sys.stderr)
        return 1
    except LeadLookupError as exc:
        print(f"[lookup_lead] ERROR: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover - script manual
    sys.exit(main())
