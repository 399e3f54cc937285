"""
Event Builder

Converts finalized Version ranges into the Affected / Range / Event structure of the
output schema. One Version yields one Affected holding one SEMVER Range.
"""

from typing import Iterable, List

from .models import Affected, Event, EventKind, Range, SEMVER, Version


def build_events(v: Version) -> List[Event]:
    """introduced first, then fixed, else last_affected, else introduced as last_affected"""
    introduced = "0" if v.introduced == "0.0.0" else v.introduced
    events = [Event(EventKind.INTRODUCED, introduced)]
    if v.fixed:
        events.append(Event(EventKind.FIXED, v.fixed))
    elif v.last_affected:
        events.append(Event(EventKind.LAST_AFFECTED, v.last_affected))
    else:
        events.append(Event(EventKind.LAST_AFFECTED, introduced))
    return events


def build_affected(versions: Iterable[Version]) -> List[Affected]:
    """Versions without an introduced value are dropped"""
    return [
        Affected(ranges=[Range(events=build_events(v), range_type=SEMVER)])
        for v in versions
        if v.introduced
    ]


def flatten_affected(affected: Iterable[Affected]) -> List[Version]:
    """Inverse of build_affected: one Version per range"""
    versions = []
    for a in affected:
        for r in a.ranges:
            v = Version()
            for event in r.events:
                if event.kind is EventKind.INTRODUCED:
                    v.introduced = event.value
                elif event.kind is EventKind.FIXED:
                    v.fixed = event.value
                else:
                    v.last_affected = event.value
            versions.append(v)
    return versions
