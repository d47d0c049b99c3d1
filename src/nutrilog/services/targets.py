"""Target profile service."""

import json
import logging
from dataclasses import dataclass

from nutrilog.adapters.serialization import dump_target_profile, parse_target_profile
from nutrilog.domain.progress import DEFAULT_TARGET_PROFILE, TargetProfile
from nutrilog.services.storage import KeyValueStore

TARGET_PROFILE_KEY = "targetProfile"

_logger = logging.getLogger(__name__)


@dataclass
class TargetProfileService:
    """Service for the user's nutrient targets."""

    store: KeyValueStore

    def get_profile(self) -> TargetProfile:
        """Return the stored profile or the default one."""
        try:
            raw = self.store.get_item(TARGET_PROFILE_KEY)
            if raw is None:
                return DEFAULT_TARGET_PROFILE
            payload = json.loads(raw)
            if not isinstance(payload, dict):
                raise ValueError("Stored target profile is not an object")
            return parse_target_profile(payload)
        except Exception:
            _logger.exception("Failed to load target profile, using defaults")
            return DEFAULT_TARGET_PROFILE

    def save(self, profile: TargetProfile) -> None:
        """Persist a target profile."""
        try:
            self.store.set_item(
                TARGET_PROFILE_KEY, json.dumps(dump_target_profile(profile))
            )
        except Exception:
            _logger.exception("Failed to save target profile")
