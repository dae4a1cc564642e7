"""Lightweight REST client for the Spirit11 API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _print(resp: httpx.Response) -> None:
    print(json.dumps(resp.json(), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the Spirit11 REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--import-csv", type=Path, help="Upload a players CSV through the admin import")
    parser.add_argument("--mapping", default="", help="JSON mapping for player columns")
    parser.add_argument("--replace", action="store_true", help="Replace the stored catalog on import")
    parser.add_argument("--admin-token", default="", help="Value for the X-Admin-Token header")
    parser.add_argument("--search", default=None, help="List players matching a search term")
    parser.add_argument("--category", default="all", help="Category filter for --search")
    parser.add_argument("--user", help="User id for team operations")
    parser.add_argument("--create-user", metavar="USERNAME", help="Create --user with this username")
    parser.add_argument("--add", action="append", default=[], metavar="PLAYER_ID", help="Add a player to --user's team")
    parser.add_argument("--remove", action="append", default=[], metavar="PLAYER_ID", help="Remove a player from --user's team")
    parser.add_argument("--budget", action="store_true", help="Show --user's budget summary")
    parser.add_argument("--ask", metavar="QUESTION", help="Ask the assistant a question")
    parser.add_argument("--suggest", action="store_true", help="Ask the assistant for a best team")
    args = parser.parse_args()

    if (args.create_user or args.add or args.remove or args.budget) and not args.user:
        raise SystemExit("--user is required for team operations")

    headers = {"X-Admin-Token": args.admin_token} if args.admin_token else {}
    with httpx.Client(base_url=args.base_url, headers=headers, timeout=60.0) as client:
        if args.import_csv:
            files = {"players": (args.import_csv.name, args.import_csv.read_bytes(), "text/csv")}
            data = {"replace": str(args.replace).lower()}
            if args.mapping:
                data["mapping"] = args.mapping
            resp = client.post("/admin/players/import", files=files, data=data)
            if resp.status_code == 400:
                raise SystemExit(f"import rejected: {resp.json()['detail']}")
            resp.raise_for_status()
            print("Import report:")
            _print(resp)

        if args.search is not None:
            resp = client.get("/players", params={"search": args.search, "category": args.category})
            resp.raise_for_status()
            payload = resp.json()
            print(f"{payload['total']} players")
            for player in payload["players"]:
                print(f"  {player['player_id']}  {player['name']} ({player['university']}) {player['stats']['value']:,}")

        if args.create_user:
            resp = client.post("/users", json={"user_id": args.user, "username": args.create_user})
            if resp.status_code == 409:
                print(f"user {args.user} already exists")
            else:
                resp.raise_for_status()

        for player_id in args.add:
            resp = client.post(f"/users/{args.user}/team/{player_id}")
            if resp.status_code in (404, 409):
                print(f"add {player_id} rejected: {resp.json()['detail']}")
                continue
            resp.raise_for_status()
            print(f"added {player_id}; budget now {resp.json()['budget']:,}")

        for player_id in args.remove:
            resp = client.delete(f"/users/{args.user}/team/{player_id}")
            if resp.status_code in (404, 409):
                print(f"remove {player_id} rejected: {resp.json()['detail']}")
                continue
            resp.raise_for_status()
            print(f"removed {player_id}; budget now {resp.json()['budget']:,}")

        if args.budget:
            resp = client.get(f"/users/{args.user}/budget")
            if resp.status_code == 404:
                raise SystemExit(f"user {args.user} not found")
            resp.raise_for_status()
            _print(resp)

        if args.ask:
            resp = client.post("/assistant/chat", json={"message": args.ask})
            resp.raise_for_status()
            print(resp.json()["reply"])

        if args.suggest:
            resp = client.post("/assistant/suggest-team")
            resp.raise_for_status()
            print(resp.json()["reply"])


if __name__ == "__main__":
    main()
