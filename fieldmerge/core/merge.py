"""Copy matched, non-null fields from a source object onto a destination."""
from __future__ import annotations

from typing import Iterable, Optional, TypeVar

from fieldmerge.config.settings import MergeSettings
from fieldmerge.core.errors import MergeConsistencyError
from fieldmerge.core.introspect import is_read_only, read_field, resolve_field
from fieldmerge.core.matching import get_common_fields, types_compatible
from fieldmerge.core.types import FieldPair
from fieldmerge.observability.log import get_logger
from fieldmerge.observability.metrics import MergeOutcome, MetricsRegistry, record_duration

LOGGER = get_logger(__name__)

T = TypeVar("T")


def _allow_list(field_names: Optional[Iterable[str]]) -> Optional[set[str]]:
    if field_names is None:
        return None
    if isinstance(field_names, str):
        raise TypeError("field_names must be a collection of names, not a single string")
    names = set(field_names)
    return names or None


class FieldMerger:
    """Merges objects field by field using the configured resolution rules."""

    def __init__(
        self,
        settings: Optional[MergeSettings] = None,
        metrics: Optional[MetricsRegistry] = None,
    ) -> None:
        self._settings = settings or MergeSettings()
        self._metrics = metrics

    @property
    def settings(self) -> MergeSettings:
        return self._settings

    def merge(self, source: object, destination: T, field_names: Optional[Iterable[str]] = None) -> T:
        """Copy the non-null, accessible fields shared with ``destination``.

        ``field_names`` restricts the copy to the listed names; ``None`` or an
        empty collection copies every shared field. Returns ``destination``.
        """
        allowed = _allow_list(field_names)
        if self._metrics is None:
            self._merge(source, destination, allowed)
        else:
            with record_duration(self._metrics):
                outcome = self._merge(source, destination, allowed)
            self._metrics.record_merge(outcome)
        return destination

    def _merge(self, source: object, destination: object, allowed: Optional[set[str]]) -> MergeOutcome:
        pairs = get_common_fields(source, destination, include_private=self._settings.include_private)
        outcome = MergeOutcome(pairs=len(pairs))
        for pair in pairs:
            value = read_field(source, pair.source)
            if value is None:
                LOGGER.debug("field_skipped", field=pair.name, reason="absent")
                outcome.skipped_absent += 1
                continue
            if allowed is not None and pair.name not in allowed:
                LOGGER.debug("field_skipped", field=pair.name, reason="restricted")
                outcome.skipped_restricted += 1
                continue
            self._write(destination, pair, value)
            outcome.copied += 1
        LOGGER.info(
            "merge_complete",
            source_type=type(source).__qualname__,
            destination_type=type(destination).__qualname__,
            pairs=outcome.pairs,
            copied=outcome.copied,
        )
        return outcome

    def _write(self, destination: object, pair: FieldPair, value: object) -> None:
        destination_type = type(destination)
        name = pair.name
        handle = resolve_field(destination_type, name, resolution=self._settings.resolution)
        if handle is None:
            self._fail(destination_type, name, "no declaring class found")
        if not types_compatible(pair.source.field_type, handle.field_type):
            self._fail(
                destination_type,
                name,
                f"declaration on {handle.owner.__qualname__} is {handle.field_type.label}, "
                f"source is {pair.source.field_type.label}",
            )
        if is_read_only(destination_type, name):
            self._fail(destination_type, name, "attribute is read-only")
        try:
            setattr(destination, handle.name, value)
        except (AttributeError, TypeError, ValueError) as exc:
            self._fail(destination_type, name, str(exc), cause=exc)
        LOGGER.debug("field_copied", field=name, owner=handle.owner.__qualname__)

    @staticmethod
    def _fail(destination_type: type, name: str, reason: str, cause: Optional[BaseException] = None) -> None:
        LOGGER.error("merge_write_failed", field=name, destination_type=destination_type.__qualname__, reason=reason)
        raise MergeConsistencyError(name, destination_type, reason) from cause


_DEFAULT_MERGER = FieldMerger()


def merge(source: object, destination: T, field_names: Optional[Iterable[str]] = None) -> T:
    """Module-level shortcut for ``FieldMerger().merge`` with default settings."""
    return _DEFAULT_MERGER.merge(source, destination, field_names)
