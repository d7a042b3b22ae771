"""Validate stage: schema checks, sanitization and business-rule advisories."""

import logging
from datetime import date, datetime, timezone
from typing import Callable

from eventplanner.config import Settings
from eventplanner.pipeline import rules
from eventplanner.pipeline.stages.base import BaseStage
from eventplanner.pipeline.state import PipelineState, Stage, ValidationMeta

logger = logging.getLogger(__name__)


class ValidateStage(BaseStage):
    stage = Stage.VALIDATE

    def __init__(self, settings: Settings, today: Callable[[], date] = date.today):
        self.settings = settings
        self._today = today

    async def execute(self, state: PipelineState) -> PipelineState:
        if state.event_data is None:
            return state.fail("Invalid state: no event data to validate")

        config = self.settings.planner
        schema_errors = rules.check_schema(state.event_data, config, self._today())
        if schema_errors:
            logger.warning(f"Validation failed: {schema_errors}")
            return state.fail(*schema_errors)

        sanitized = rules.sanitize(state.event_data, config)
        warnings = rules.check_business_rules(sanitized, config)
        if warnings:
            logger.info(f"Business rules raised {len(warnings)} warnings")

        return state.with_warnings(*warnings).evolve(
            event_data=sanitized,
            validation_meta=ValidationMeta(validated_at=datetime.now(timezone.utc)),
            next_stage=Stage.PLAN,
        )
