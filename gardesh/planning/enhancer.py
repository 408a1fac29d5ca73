"""Optional post-ranking enhancement hook.

Enhancers receive the ranked candidates and may reorder them. None of the
shipped enhancers call a model; :class:`SettingGatedEnhancer` only checks
whether an API key has been stored and leaves the order untouched.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from gardesh.core.venue_store import VenueStore
from gardesh.schemas import Candidate

_LOGGER = logging.getLogger(__name__)

API_KEY_SETTING = "OPENAI_API_KEY"


class RankingEnhancer(Protocol):
    def enhance(
        self, items: Sequence[Candidate], context: Mapping[str, Any]
    ) -> List[Candidate]:
        ...


class NoOpEnhancer:
    """Return candidates unchanged."""

    def enhance(
        self, items: Sequence[Candidate], context: Mapping[str, Any]
    ) -> List[Candidate]:
        return list(items)


class SettingGatedEnhancer:
    """Enhancer that activates only when an API key setting is stored."""

    def __init__(self, store: VenueStore, setting_key: str = API_KEY_SETTING) -> None:
        self._store = store
        self._setting_key = setting_key

    def _api_key(self) -> Optional[str]:
        return self._store.get_setting(self._setting_key)

    def enhance(
        self, items: Sequence[Candidate], context: Mapping[str, Any]
    ) -> List[Candidate]:
        try:
            if not self._api_key():
                return list(items)
            _LOGGER.info(
                "Ranking enhancement requested for %d candidates (%s) but no model is wired",
                len(items),
                context.get("plan_type", "unknown"),
            )
        except Exception:  # noqa: BLE001
            _LOGGER.exception("Ranking enhancement failed; keeping original order")
        return list(items)


__all__ = ["API_KEY_SETTING", "NoOpEnhancer", "RankingEnhancer", "SettingGatedEnhancer"]
