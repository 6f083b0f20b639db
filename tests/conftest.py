"""Shared pytest fixtures for the psu test suite.

Guidelines
----------
* No network access in any test.
* The Portainer API is replaced by :class:`FakePortainerClient` (core tests)
  or ``httpx.MockTransport`` (adapter tests).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from core.domain.models import Endpoint, EndpointGroup, Stack, User


class FakePortainerClient:
    """In-memory :class:`PortainerClient` that records every call."""

    def __init__(
        self,
        *,
        endpoints: list[Endpoint] | None = None,
        endpoint_groups: list[EndpointGroup] | None = None,
        stacks: list[Stack] | None = None,
        users: list[User] | None = None,
        docker_info: dict[int, dict[str, Any]] | None = None,
        responses: dict[str, Any] | None = None,
    ) -> None:
        self.endpoints = endpoints or []
        self.endpoint_groups = endpoint_groups or []
        self.stacks = stacks or []
        self.users = users or []
        self.docker_info = docker_info or {}
        self.responses = responses or {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.closed = False

    def __enter__(self) -> FakePortainerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True

    def endpoint_list(self) -> list[Endpoint]:
        self.calls.append(("endpoint_list", ()))
        return list(self.endpoints)

    def endpoint_group_list(self) -> list[EndpointGroup]:
        self.calls.append(("endpoint_group_list", ()))
        return list(self.endpoint_groups)

    def stack_list(self, *, swarm_id: str = "", endpoint_id: int = 0) -> list[Stack]:
        self.calls.append(("stack_list", (swarm_id, endpoint_id)))
        return [
            s
            for s in self.stacks
            if (not swarm_id or s.swarm_id == swarm_id)
            and (not endpoint_id or s.endpoint_id == endpoint_id)
        ]

    def user_list(self) -> list[User]:
        self.calls.append(("user_list", ()))
        return list(self.users)

    def endpoint_docker_info(self, endpoint_id: int) -> dict[str, Any]:
        self.calls.append(("endpoint_docker_info", (endpoint_id,)))
        return self.docker_info.get(endpoint_id, {})

    def do_json_with_token(
        self,
        path: str,
        method: str,
        headers: Mapping[str, str] | None,
        body: Any,
        model: type,
    ) -> Any:
        self.calls.append(("do_json_with_token", (path, method)))
        payload = self.responses[path]
        if isinstance(payload, Exception):
            raise payload
        return model.model_validate(payload)


@pytest.fixture()
def endpoints() -> list[Endpoint]:
    return [
        Endpoint(Id=1, Name="prod", Type=2, URL="tcp://prod:9001"),
        Endpoint(Id=2, Name="staging", Type=1, URL="unix:///var/run/docker.sock"),
    ]


@pytest.fixture()
def fake_client(endpoints: list[Endpoint]) -> FakePortainerClient:
    return FakePortainerClient(
        endpoints=endpoints,
        endpoint_groups=[
            EndpointGroup(Id=1, Name="Unassigned"),
            EndpointGroup(Id=2, Name="edge"),
        ],
        stacks=[
            Stack(Id=5, Name="web", Type=1, EndpointId=1, SwarmId="abc"),
            Stack(Id=6, Name="db", Type=2, EndpointId=2),
            Stack(Id=7, Name="web", Type=2, EndpointId=2),
        ],
        users=[
            User(Id=1, Username="admin", Role=1),
            User(Id=2, Username="alice", Role=2),
        ],
        docker_info={
            1: {"ID": "node", "Swarm": {"NodeID": "n1", "Cluster": {"ID": "abc"}}},
            2: {"ID": "node2", "Swarm": {"NodeID": "", "LocalNodeState": "inactive"}},
        },
    )
