from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..services import ServiceContext, StudyService


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    study: StudyService = field(init=False)

    def __post_init__(self) -> None:
        self.study = StudyService(self.context)

    def reset(self, context: Optional[ServiceContext] = None, *, study: Optional[StudyService] = None) -> None:
        """Rebind to a fresh context, dropping any in-flight timer run."""

        if study is not None:
            self.context = study.context
            self.study = study
            return
        self.context = context or ServiceContext()
        self.study = StudyService(self.context)


api_state = ApiState()
