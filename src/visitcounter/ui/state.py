"""
Visit Panel State

UI state for the counter page: a human readable status and the last count the
service returned. Each action is an async generator of signal patches, so the
in-progress message reaches the browser before the round trip finishes.
"""

import json
from typing import Any, AsyncIterator, Dict, Optional

from pydantic import BaseModel

from ..client import CounterClient, RequestFailed


def compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


class VisitPanel(BaseModel):
    status: str = "Idle"
    count: Optional[int] = None

    def _patch(self, **changes) -> Dict[str, Any]:
        """Apply changes and return them as a signal patch."""
        for name, value in changes.items():
            setattr(self, name, value)
        return changes

    async def ping(self, client: CounterClient) -> AsyncIterator[Dict[str, Any]]:
        yield self._patch(status="Pinging API...")
        try:
            res = await client.ping()
        except RequestFailed as e:
            yield self._patch(status=f"Ping failed: {e}")
            return
        yield self._patch(status=f"Ping success: {compact_json(res)}")

    async def add_visit(self, client: CounterClient) -> AsyncIterator[Dict[str, Any]]:
        yield self._patch(status="Adding visit...")
        try:
            res = await client.add_visit()
        except RequestFailed as e:
            yield self._patch(status=f"Add visit failed: {e}")
            return
        yield self._patch(count=res["count"], status="Visit added")

    async def load_count(self, client: CounterClient) -> AsyncIterator[Dict[str, Any]]:
        yield self._patch(status="Loading visits...")
        try:
            res = await client.fetch_visits()
        except RequestFailed as e:
            yield self._patch(status=f"Load failed: {e}")
            return
        yield self._patch(count=res["count"], status="Count loaded")
