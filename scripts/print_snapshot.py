"""Print the derived dashboard views for a chat as JSON.

Fetches ``/api/stats`` through the same client and controller the app uses,
or renders a synthetic snapshot with ``--sample``.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict

from finstats import synth
from finstats.client import StatsClient, snapshot_from_payload
from finstats.config import configure_logging, get_settings, resolve_base_url
from finstats.state import DashboardController, Status


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--chat-id", type=int, help="Chat id to load; defaults to the development id")
    parser.add_argument("--base-url", help="API base URL; defaults to the configured or local one")
    parser.add_argument("--sample", action="store_true", help="Use a synthetic snapshot instead of the API")
    parser.add_argument("--seed", type=int, default=synth.DEFAULT_SEED)
    return parser.parse_args(argv)


class SampleClient:
    """Serves a synthetic snapshot in place of the API."""

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def fetch_stats(self, user_id: int):
        return snapshot_from_payload(synth.generate_snapshot(seed=self.seed))


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    configure_logging()

    if args.sample:
        client = SampleClient(args.seed)
    else:
        base_url = args.base_url or resolve_base_url(settings.api_url, "localhost")
        client = StatsClient(base_url, timeout=settings.request_timeout)

    controller = DashboardController(client, args.chat_id or settings.dev_chat_id, timezone=settings.timezone)
    state = controller.initialize()
    if state.status is not Status.READY:
        print(f"error: {state.error_message}", file=sys.stderr)
        return 1

    payload = {
        "overview": asdict(controller.overview()),
        "history": asdict(controller.history()),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
