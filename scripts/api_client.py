"""Lightweight REST client for the GRIT fighter import API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_mappings(value: str) -> str | None:
    """Accept inline JSON or a path to a saved mapping profile."""

    if not value:
        return None
    path = Path(value)
    if path.exists():
        value = path.read_text(encoding="utf-8")
    try:
        json.loads(value)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc
    return value


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the GRIT fighter import API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("fighters", type=Path, nargs="?", help="Fighters CSV")
    parser.add_argument("--mappings", default="", help="Mapping JSON or path to a mapping profile")
    parser.add_argument("--preview-only", action="store_true", help="Fetch preview diagnostics without importing")
    parser.add_argument("--list-fighters", action="store_true", help="List stored fighters and exit")
    parser.add_argument("--get-fighter", metavar="FIGHTER_ID", help="Fetch a specific fighter and exit")
    args = parser.parse_args()

    if args.list_fighters or args.get_fighter:
        with httpx.Client(base_url=args.base_url) as client:
            if args.list_fighters:
                resp = client.get("/fighters")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.get_fighter:
                resp = client.get(f"/fighters/{args.get_fighter}")
                if resp.status_code == 404:
                    raise SystemExit(f"fighter {args.get_fighter} not found")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
        return

    if args.fighters is None:
        raise SystemExit("fighters CSV is required unless using --list-fighters/--get-fighter")

    def make_files() -> dict[str, tuple[str, bytes, str]]:
        return {"file": (args.fighters.name, args.fighters.read_bytes(), "text/csv")}

    with httpx.Client(base_url=args.base_url) as client:
        mappings = load_mappings(args.mappings)
        if mappings is None:
            resp = client.post("/fighters/import/mapping", files=make_files())
            resp.raise_for_status()
            suggestion = resp.json()
            print("Suggested mappings:", json.dumps(suggestion["mappings"], indent=2))
            mappings = json.dumps(suggestion["mappings"])

        data = {"mappings": mappings}
        resp = client.post("/fighters/import/preview", files=make_files(), data=data)
        resp.raise_for_status()
        preview = resp.json()
        print("Validation:", json.dumps(preview["validation"], indent=2))
        print("Preview report:", json.dumps(preview["report"], indent=2))
        print(f"Duplicate rows: {preview['duplicate_rows']}")

        if args.preview_only:
            return

        resp = client.post("/fighters/import", files=make_files(), data=data)
        if resp.status_code == 400:
            raise SystemExit(f"import rejected: {resp.json()['detail']}")
        resp.raise_for_status()
        payload = resp.json()
        print(f"Created {payload['created']}, updated {payload['updated']} fighters")
        if payload.get("message"):
            print(payload["message"])


if __name__ == "__main__":
    main()
