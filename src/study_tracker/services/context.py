from __future__ import annotations

from dataclasses import dataclass, field

from ..config import AppSettings, get_settings
from ..core import JsonStore


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings and the store."""

    settings: AppSettings = field(default_factory=get_settings)
    store: JsonStore = field(init=False)

    def __post_init__(self) -> None:
        self.store = JsonStore(self.settings.storage.store_path)
