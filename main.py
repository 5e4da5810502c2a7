from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Dict, Optional

from api.state import AppState
from medisync.chat_service import refresh_chats
from medisync.config import Config
from medisync.entities import AuthUser
from medisync.prescription_service import refresh_medicines, refresh_prescriptions

logger = logging.getLogger(__name__)


async def sync_user(
    state: AppState,
    user_id: str,
    prescription_id: Optional[str] = None,
) -> Dict[str, int]:
    """
    Pull a user's snapshots from the backend into the stores of *state*.

    Steps:
    1. Mark the user as signed in.
    2. Replace the chat list.
    3. Replace the prescription lists.
    4. Replace the medicines with those of *prescription_id*, or of the
       newest prescription when none is given.

    Returns:
        Counts of what each store now holds.

    Raises:
        httpx.HTTPError: Any backend failure, unchanged. Stores already
            replaced before the failure keep their new snapshot.
    """
    state.auth.set_user(AuthUser(id=user_id))

    await refresh_chats(state.chat_service, state.chat_list, user_id)
    prescriptions = await refresh_prescriptions(
        state.prescription_service, state.prescriptions, user_id
    )

    if prescription_id is None and prescriptions:
        prescription_id = prescriptions[0].id
    await refresh_medicines(state.prescription_service, state.prescriptions, prescription_id)

    return {
        "chats": len(state.chat_list.chats),
        "prescriptions": len(state.prescriptions.prescription_list),
        "medicines": len(state.prescriptions.medicines),
        "orphaned_medicines": len(state.prescriptions.orphaned_medicines()),
    }


async def _run(cfg: Config, user_id: str, prescription_id: Optional[str]) -> Dict[str, int]:
    state = AppState(cfg)
    state.load()
    try:
        return await sync_user(state, user_id, prescription_id)
    finally:
        await state.close()


def main() -> None:
    """Load one user's chats, prescriptions and medicines and print a summary."""
    parser = argparse.ArgumentParser(description=main.__doc__)
    parser.add_argument("user_id")
    parser.add_argument("--prescription-id", default=None)
    args = parser.parse_args()

    cfg = Config.from_env()
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    summary = asyncio.run(_run(cfg, args.user_id, args.prescription_id))
    print(f"Synced user {args.user_id} from {cfg.api_url}")
    for name, count in summary.items():
        print(f"  {name:<20} {count}")


if __name__ == "__main__":
    main()
