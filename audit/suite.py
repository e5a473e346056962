"""Probe registration."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from audit.models import Probe, ProbeBody


class ProbeSuite:
    """Ordered collection of probes; names are unique."""

    def __init__(self) -> None:
        self._probes: dict[str, Probe] = {}

    def add(
        self,
        name: str,
        aliases: Iterable[str] = (),
        body: ProbeBody | None = None,
    ) -> Probe:
        if not name:
            raise ValueError("Probe name must not be empty")
        if name in self._probes:
            raise ValueError(f"Probe {name!r} is already registered")
        probe = Probe(name=name, aliases=tuple(aliases), body=body)
        self._probes[name] = probe
        return probe

    def check(self, name: str, *aliases: str) -> Callable[[ProbeBody], ProbeBody]:
        """Decorator form of :meth:`add`."""

        def decorator(body: ProbeBody) -> ProbeBody:
            self.add(name, aliases, body)
            return body

        return decorator

    def untested(self, name: str, *aliases: str) -> Probe:
        return self.add(name, aliases, None)

    def __iter__(self) -> Iterator[Probe]:
        return iter(list(self._probes.values()))

    def __len__(self) -> int:
        return len(self._probes)

    def __contains__(self, name: object) -> bool:
        return name in self._probes

    @property
    def probes(self) -> list[Probe]:
        return list(self._probes.values())
