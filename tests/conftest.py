"""Pytest configuration and shared fakes for bundle-provisioner tests."""

from __future__ import annotations

import re
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

import pytest

from bundle_provisioner.environment import MemoryEnvironment
from bundle_provisioner.properties import DictPropertyResolver


@dataclass(frozen=True)
class FakeResource:
    symbolic_name: str
    version: str
    url: str


def resource(name: str, version: str = "1.0.0") -> FakeResource:
    return FakeResource(name, version, f"file:/repo/{name}-{version}.jar")


@dataclass
class FakeResolver:
    """Resolver returning canned dependencies for the resources added to it."""

    required_map: dict[str, list[FakeResource]]
    optional_map: dict[str, list[FakeResource]]
    succeed: bool = True
    error: Exception | None = None
    added: list[FakeResource] = field(default_factory=list)
    resolve_calls: int = 0
    _required: list[FakeResource] = field(default_factory=list)
    _optional: list[FakeResource] = field(default_factory=list)

    def add(self, res: FakeResource) -> None:
        self.added.append(res)

    def resolve(self) -> bool:
        self.resolve_calls += 1
        if self.error is not None:
            raise self.error
        for res in self.added:
            self._required.extend(self.required_map.get(res.symbolic_name, []))
            self._optional.extend(self.optional_map.get(res.symbolic_name, []))
        return self.succeed

    def required_resources(self) -> list[FakeResource]:
        return list(self._required)

    def optional_resources(self) -> list[FakeResource]:
        return list(self._optional)

    def unsatisfied_requirements(self) -> list[str]:
        return ["(package=org.missing)"]


_CLAUSE = re.compile(r"\((symbolicname|version)=([^()]*)\)")


class FakeCatalog:
    """Catalog matching filters by symbolic name and version."""

    def __init__(
        self,
        resources: list[FakeResource] | None = None,
        required: dict[str, list[FakeResource]] | None = None,
        optional: dict[str, list[FakeResource]] | None = None,
    ):
        self.resources = list(resources or [])
        self.required = required or {}
        self.optional = optional or {}
        self.succeed = True
        self.error: Exception | None = None
        self.filters: list[str] = []
        self.resolvers: list[FakeResolver] = []

    def discover_resources(self, filter_expression: str) -> list[FakeResource]:
        self.filters.append(filter_expression)
        clauses = dict(_CLAUSE.findall(filter_expression))
        return [
            res
            for res in self.resources
            if res.symbolic_name == clauses.get("symbolicname")
            and ("version" not in clauses or res.version == clauses["version"])
        ]

    def resolver(self) -> FakeResolver:
        resolver = FakeResolver(self.required, self.optional, succeed=self.succeed, error=self.error)
        self.resolvers.append(resolver)
        return resolver


@pytest.fixture
def make_resource():
    return resource


@pytest.fixture
def make_catalog():
    return FakeCatalog


@pytest.fixture
def environment() -> MemoryEnvironment:
    return MemoryEnvironment()


@pytest.fixture
def properties() -> DictPropertyResolver:
    return DictPropertyResolver()


@pytest.fixture
def write_file(tmp_path):
    """Write a reference file and return its path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def opened_for_reading(monkeypatch):
    """Record every stream opened for reading through Path.open."""
    streams = []
    original_open = Path.open

    def recording_open(self, *args, **kwargs):
        stream = original_open(self, *args, **kwargs)
        if "r" in stream.mode:
            streams.append(stream)
        return stream

    monkeypatch.setattr(Path, "open", recording_open)
    return streams
