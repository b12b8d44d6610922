"""
Application State Store - theme, profile, recent activity and layout flags.

One store per process. Views read snapshots; every change goes through the
mutation methods below, which persist the affected keys and notify
subscribers.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from ..models import ActivityEntry, AppSnapshot, ProfileUpdate, Theme, UserProfile
from ..storage import CodecError, StateCodec, StorageInterface

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
USER_DATA_KEY = "userData"
ACTIVITIES_KEY = "recentActivities"
PROFILE_COMPLETE_KEY = "profileComplete"
AI_MODEL_KEY = "aiModel"

Listener = Callable[[AppSnapshot], None]


class AppStateStore:
    """
    Observable application state persisted to key/value storage.

    Profile and activity values go through the codec; theme, the
    profile-complete flag and the AI model preference are stored as plain
    strings.
    """

    def __init__(
        self,
        storage: StorageInterface,
        codec: StateCodec,
        activity_limit: int = 10,
        prefers_dark: bool = False,
        namespace: str = "state",
    ):
        """
        Args:
            storage: Key/value storage backend
            codec: Codec for profile and activity values
            activity_limit: Maximum number of activity entries kept
            prefers_dark: Host colour-scheme preference, used when no theme is stored
            namespace: Key prefix inside the storage
        """
        if activity_limit < 1:
            raise ValueError("activity_limit must be at least 1")
        self.storage = storage
        self.codec = codec
        self.activity_limit = activity_limit
        self.prefers_dark = prefers_dark
        self.namespace = namespace

        self._theme = Theme.DARK if prefers_dark else Theme.LIGHT
        self._profile = UserProfile()
        self._activities: List[ActivityEntry] = []
        self._sidebar_open = True
        self._ai_model: Optional[str] = None
        self._lock = asyncio.Lock()
        self._listeners: List[Listener] = []

    def _key(self, name: str) -> str:
        return f"{self.namespace}/{name}"

    # ------------------------------------------------------------------
    # Codec
    # ------------------------------------------------------------------

    def encode(self, value: Any) -> str:
        return self.codec.encode(value)

    def decode(self, text: str) -> Any:
        return self.codec.decode(text)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> AppSnapshot:
        """
        Load persisted state. Unreadable values are treated as absent.
        """
        async with self._lock:
            stored_theme = await self.storage.load(self._key(THEME_KEY))
            try:
                self._theme = Theme(stored_theme.strip()) if stored_theme else self._default_theme()
            except ValueError:
                logger.warning(f"Ignoring unknown stored theme: {stored_theme!r}")
                self._theme = self._default_theme()

            self._profile = await self._load_slice(
                USER_DATA_KEY, UserProfile.model_validate, UserProfile()
            )
            self._activities = await self._load_slice(
                ACTIVITIES_KEY, self._parse_activities, []
            )
            self._ai_model = (await self.storage.load(self._key(AI_MODEL_KEY))) or None

        logger.info(
            "Application state loaded",
            extra={"extra_fields": {
                "theme": self._theme.value,
                "profile_fields": len(self._profile.model_dump(exclude_defaults=True)),
                "activities": len(self._activities),
            }}
        )
        return self.snapshot()

    def _default_theme(self) -> Theme:
        return Theme.DARK if self.prefers_dark else Theme.LIGHT

    def _parse_activities(self, raw: Any) -> List[ActivityEntry]:
        if not isinstance(raw, list):
            raise TypeError(f"expected a list, got {type(raw).__name__}")
        entries = [ActivityEntry.model_validate(item) for item in raw]
        return entries[:self.activity_limit]

    async def _load_slice(self, name: str, parse: Callable[[Any], Any], default: Any) -> Any:
        text = await self.storage.load(self._key(name))
        if not text:
            return default
        try:
            return parse(self.decode(text))
        except (CodecError, ValidationError, TypeError) as e:
            logger.warning(f"Discarding unreadable stored value for {name}: {e}")
            return default

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def profile(self) -> UserProfile:
        return self._profile.model_copy(deep=True)

    @property
    def activities(self) -> List[ActivityEntry]:
        return list(self._activities)

    @property
    def sidebar_open(self) -> bool:
        return self._sidebar_open

    @property
    def ai_model(self) -> Optional[str]:
        return self._ai_model

    def snapshot(self) -> AppSnapshot:
        return AppSnapshot(
            theme=self._theme,
            profile=self.profile,
            activities=self.activities,
            sidebar_open=self._sidebar_open,
            ai_model=self._ai_model,
            profile_complete=self._profile.is_complete,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every change.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def toggle_theme(self) -> Theme:
        """Flip between light and dark and persist the choice."""
        async with self._lock:
            self._theme = self._theme.toggled()
            await self._save(THEME_KEY, self._theme.value)
        logger.info(f"Theme switched to {self._theme.value}")
        self._notify()
        return self._theme

    async def update_profile(
        self,
        partial: Union[ProfileUpdate, Dict[str, Any]],
        record_activity: bool = True,
    ) -> UserProfile:
        """
        Shallow-merge the set fields of ``partial`` into the profile.

        Args:
            partial: ProfileUpdate or mapping of profile fields
            record_activity: Append an activity entry naming the updated fields

        Returns:
            UserProfile: The merged profile
        """
        update = partial if isinstance(partial, ProfileUpdate) else ProfileUpdate.model_validate(partial)
        changes = update.changes()
        if not changes:
            return self.profile

        async with self._lock:
            merged = {**self._profile.model_dump(), **changes}
            self._profile = UserProfile.model_validate(merged)
            await self._save(USER_DATA_KEY, self.encode(self._profile.model_dump(mode="json")))
            await self._save(PROFILE_COMPLETE_KEY, "true" if self._profile.is_complete else "false")
            if record_activity:
                self._push_activity(f"Updated profile fields: {', '.join(changes)}")
                await self._save_activities()

        logger.info(f"Profile updated: {', '.join(changes)}")
        self._notify()
        return self.profile

    async def add_activity(self, text: str) -> ActivityEntry:
        """Prepend a timestamped activity entry, keeping only the newest entries."""
        async with self._lock:
            entry = self._push_activity(text)
            await self._save_activities()
        logger.debug(f"Activity recorded: {text}")
        self._notify()
        return entry

    async def reset_all(self) -> bool:
        """
        Clear the profile and activity log and remove their persisted keys.

        Returns:
            bool: Always True; the client should reload its views
        """
        async with self._lock:
            self._profile = UserProfile()
            self._activities = []
            for name in (USER_DATA_KEY, ACTIVITIES_KEY, PROFILE_COMPLETE_KEY):
                await self.storage.delete(self._key(name))
        logger.info("User data reset")
        self._notify()
        return True

    def toggle_sidebar(self) -> bool:
        self._sidebar_open = not self._sidebar_open
        self._notify()
        return self._sidebar_open

    async def set_ai_model(self, model: str) -> str:
        async with self._lock:
            self._ai_model = model
            await self._save(AI_MODEL_KEY, model)
        logger.info(f"AI model preference set to {model}")
        self._notify()
        return model

    def _push_activity(self, text: str) -> ActivityEntry:
        entry = ActivityEntry(text=text)
        self._activities = [entry, *self._activities][:self.activity_limit]
        return entry

    async def _save_activities(self) -> None:
        payload = [entry.model_dump(mode="json") for entry in self._activities]
        await self._save(ACTIVITIES_KEY, self.encode(payload))

    async def _save(self, name: str, content: str) -> None:
        if not await self.storage.save(self._key(name), content):
            logger.warning(f"Could not persist {name}; keeping in-memory value")
