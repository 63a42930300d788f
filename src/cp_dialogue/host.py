"""Optional cross-check against a live host dialogue engine.

The editor can run without the game installed.  When the game is present,
a caller may plug in a :class:`HostEngineAdapter` that parses a raw string
with the engine's own parser and reports the handful of fields compared
here.  No adapter (or an adapter that cannot parse) is reported as
"unavailable", never as a failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from cp_dialogue.log import get_logger
from cp_dialogue.models.dialogue import DialogueDocument

logger = get_logger(__name__)


@dataclass(frozen=True)
class HostSnapshot:
    """Fields the host engine reports for a freshly parsed dialogue.

    Attributes:
        is_interactive: Whether the last line is a question.
        is_quick_response: Whether quick responses are in use.
        finished: Whether the host already considers the dialogue done.
        indexes_without_portrait: Line indexes drawn without a portrait.
    """

    is_interactive: bool
    is_quick_response: bool
    finished: bool = False
    indexes_without_portrait: frozenset[int] = frozenset()


class HostEngineAdapter(Protocol):
    """Parses a raw dialogue with the host engine."""

    def snapshot(self, raw: str, translation_key: str | None = None) -> HostSnapshot | None:
        """Return the engine's view of *raw*, or ``None`` if it cannot."""
        ...


@dataclass(frozen=True)
class CrossCheckResult:
    """Outcome of :func:`cross_check`.

    Attributes:
        available: ``False`` when no host engine could be consulted.
        mismatches: One message per field that disagrees.
    """

    available: bool
    mismatches: list[str] = field(default_factory=list)

    @property
    def matches(self) -> bool:
        """``True`` when the host was consulted and agreed on every field."""
        return self.available and not self.mismatches


def cross_check(
    document: DialogueDocument,
    raw: str,
    adapter: HostEngineAdapter | None = None,
) -> CrossCheckResult:
    """Compare *document* with the host engine's parse of *raw*.

    Args:
        document: The document as decoded or authored here.
        raw: The raw dialogue string handed to the host engine.
        adapter: Host engine adapter, or ``None`` when the game is absent.

    Returns:
        A :class:`CrossCheckResult`.
    """
    if adapter is None:
        return CrossCheckResult(available=False)

    snapshot = adapter.snapshot(raw, document.translation_key)
    if snapshot is None:
        logger.info("Host engine could not parse dialogue %s", document.id)
        return CrossCheckResult(available=False)

    mismatches: list[str] = []

    if snapshot.is_interactive != document.is_interactive:
        mismatches.append(
            f"is_interactive: host={snapshot.is_interactive} "
            f"document={document.is_interactive}"
        )
    if snapshot.is_quick_response != document.is_quick_response:
        mismatches.append(
            f"is_quick_response: host={snapshot.is_quick_response} "
            f"document={document.is_quick_response}"
        )
    # A fresh session is never finished unless the document has no lines.
    expected_finished = not document.lines
    if snapshot.finished != expected_finished:
        mismatches.append(
            f"finished: host={snapshot.finished} document={expected_finished}"
        )

    without_portrait = frozenset(
        index for index, line in enumerate(document.lines) if not line.show_portrait
    )
    if snapshot.indexes_without_portrait != without_portrait:
        mismatches.append(
            f"indexes_without_portrait: host={sorted(snapshot.indexes_without_portrait)} "
            f"document={sorted(without_portrait)}"
        )

    if mismatches:
        logger.warning(
            "Dialogue %s differs from host engine: %s", document.id, "; ".join(mismatches)
        )
    return CrossCheckResult(available=True, mismatches=mismatches)
