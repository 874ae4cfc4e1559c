"""
Removal of a talk together with every row that depends on it.

Deletion is a fixed, ordered list of steps run inside one transaction:

    links -> tracks -> speakers -> talk

The dependent rows protect the talk at the database level, so the talk row has to come last. If
any step fails the whole transaction is rolled back and no partial deletion is ever visible.
Supporting a new dependent table means adding a step in front of the talk step.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import structlog
from django.db import DatabaseError, models, transaction

from .models import Talk, TalkLink, TalkSpeaker, TalkTrack


logger = structlog.get_logger(__name__)


class DeleteStepFailedError(Exception):
    """Raised inside the deletion transaction when a step did not do its job."""

    def __init__(self, step: str, talk_id: int) -> None:
        """
        Initialize the DeleteStepFailedError.

        Args:
            step: Name of the failing step
            talk_id: The talk being deleted

        """
        self.step = step
        self.talk_id = talk_id
        super().__init__(f"Step '{step}' failed while deleting talk {talk_id}")


@dataclass(frozen=True)
class DeleteStep:
    """
    One removal in the cascade.

    Attributes:
        name: Label used in logs.
        run: Removes rows for a talk id and returns how many rows were removed.
        expect_row: When True the step fails unless it removed at least one row.

    """

    name: str
    run: Callable[[int], int]
    expect_row: bool = False


def _delete_rows(model: type[models.Model], field: str) -> Callable[[int], int]:
    def run(talk_id: int) -> int:
        deleted, _ = model.objects.filter(**{field: talk_id}).delete()
        return deleted

    return run


DEFAULT_STEPS: tuple[DeleteStep, ...] = (
    DeleteStep("links", _delete_rows(TalkLink, "talk_id")),
    DeleteStep("tracks", _delete_rows(TalkTrack, "talk_id")),
    DeleteStep("speakers", _delete_rows(TalkSpeaker, "talk_id")),
    DeleteStep("talk", _delete_rows(Talk, "pk"), expect_row=True),
)


class TalkDeletion:
    """Run the delete steps for a talk as a single all-or-nothing unit."""

    def __init__(self, steps: Sequence[DeleteStep] = DEFAULT_STEPS) -> None:
        """Initialize with the ordered steps; the talk row step must be last."""
        self.steps = tuple(steps)

    def delete(self, talk_id: int) -> bool:
        """
        Delete the talk and its dependents.

        Returns True once everything is committed. Returns False after rolling back when a step
        raises a database error or removes nothing where a row was expected.
        """
        try:
            with transaction.atomic():
                for step in self.steps:
                    self._run_step(step, talk_id)
        except DeleteStepFailedError as exc:
            logger.warning("Talk deletion rolled back", talk_id=talk_id, step=exc.step)
            return False

        logger.info("Talk deleted", talk_id=talk_id)
        return True

    @staticmethod
    def _run_step(step: DeleteStep, talk_id: int) -> None:
        try:
            removed = step.run(talk_id)
        except DatabaseError as exc:
            logger.exception("Talk deletion step raised", talk_id=talk_id, step=step.name)
            raise DeleteStepFailedError(step.name, talk_id) from exc
        if step.expect_row and not removed:
            raise DeleteStepFailedError(step.name, talk_id)
        logger.debug("Talk deletion step done", talk_id=talk_id, step=step.name, removed=removed)


def delete_talk(talk_id: int) -> bool:
    """Delete the talk and all its links, track and speaker associations atomically."""
    return TalkDeletion().delete(talk_id)
