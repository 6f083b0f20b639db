"""Modelos del dominio (Pydantic v2).

Describen las entidades que devuelve la API de Portainer: endpoints, grupos de
endpoints, stacks, usuarios y controles de acceso (ResourceControl).

Nota:
- Los alias replican los nombres JSON de Portainer (`Id`, `Name`, ...).
- Los identificadores aceptan tanto `Id` como `ID`.
- Un `ResourceControl` con `id == 0` significa "sin control de acceso".
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field
from pydantic.config import ConfigDict


def _id_field(*, default: int = 0, description: str) -> Any:
    return Field(
        default=default,
        ge=0,
        validation_alias=AliasChoices("Id", "ID", "id"),
        serialization_alias="Id",
        description=description,
    )


class PortainerModel(BaseModel):
    """Base común: ignora campos desconocidos y permite poblar por nombre."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EndpointType(IntEnum):
    DOCKER = 1
    AGENT_ON_DOCKER = 2
    AZURE = 3
    EDGE_AGENT_ON_DOCKER = 4
    KUBERNETES_LOCAL = 5
    AGENT_ON_KUBERNETES = 6
    EDGE_AGENT_ON_KUBERNETES = 7


class EndpointStatus(IntEnum):
    UP = 1
    DOWN = 2


class StackType(IntEnum):
    SWARM = 1
    COMPOSE = 2
    KUBERNETES = 3


class UserRole(IntEnum):
    ADMINISTRATOR = 1
    STANDARD = 2


class AccessLevel(IntEnum):
    READ_WRITE = 1


class ResourceType(str, Enum):
    """Tipos de recurso Docker que Portainer puede decorar.

    El valor coincide con el segmento de la ruta de la API de Docker
    (`containers`, `services`, ... sin la `s` final).
    """

    CONTAINER = "container"
    SERVICE = "service"
    VOLUME = "volume"
    NETWORK = "network"
    SECRET = "secret"
    CONFIG = "config"
    STACK = "stack"


class DockerResourceType(str, Enum):
    """Subconjunto de `ResourceType` con ruta propia en la API de Docker.

    Los stacks son un concepto de Portainer: no existen bajo `/docker/`.
    """

    CONTAINER = "container"
    SERVICE = "service"
    VOLUME = "volume"
    NETWORK = "network"
    SECRET = "secret"
    CONFIG = "config"


class Endpoint(PortainerModel):
    """Un entorno gestionado por Portainer (host Docker, swarm, k8s...)."""

    id: int = _id_field(description="Identificador del endpoint.")
    name: str = Field(
        ...,
        alias="Name",
        description="Nombre visible del endpoint.",
    )
    type: int = Field(
        default=EndpointType.DOCKER.value,
        alias="Type",
        description="Tipo de motor (ver `EndpointType`).",
    )
    url: str = Field(
        default="",
        alias="URL",
        description="URL del motor (p.ej. 'unix:///var/run/docker.sock').",
    )
    public_url: str = Field(
        default="",
        alias="PublicURL",
        description="URL pública usada para publicar puertos.",
    )
    group_id: int = Field(
        default=1,
        alias="GroupId",
        description="Grupo de endpoints al que pertenece.",
    )
    status: int = Field(
        default=EndpointStatus.UP.value,
        alias="Status",
        description="Estado según el último snapshot (1 up, 2 down).",
    )


class EndpointGroup(PortainerModel):
    id: int = _id_field(description="Identificador del grupo.")
    name: str = Field(..., alias="Name")
    description: str = Field(default="", alias="Description")


class Pair(PortainerModel):
    """Variable de entorno de un stack."""

    name: str = Field(..., alias="name")
    value: str = Field(default="", alias="value")


class Stack(PortainerModel):
    """Aplicación multi-contenedor desplegada sobre un endpoint."""

    id: int = _id_field(description="Identificador del stack.")
    name: str = Field(
        ...,
        alias="Name",
        description="Nombre del stack (único por endpoint/cluster).",
    )
    type: int = Field(
        default=StackType.SWARM.value,
        alias="Type",
        description="Tipo de stack (1 swarm, 2 compose, 3 kubernetes).",
    )
    endpoint_id: int = Field(
        default=0,
        alias="EndpointId",
        description="Endpoint propietario.",
    )
    swarm_id: str = Field(
        default="",
        alias="SwarmId",
        description="Cluster swarm propietario (vacío en stacks compose).",
    )
    entry_point: str = Field(
        default="",
        alias="EntryPoint",
        description="Fichero compose principal.",
    )
    env: list[Pair] = Field(
        default_factory=list,
        alias="Env",
        description="Variables de entorno del despliegue.",
    )


class User(PortainerModel):
    id: int = _id_field(description="Identificador del usuario.")
    username: str = Field(..., alias="Username")
    role: int = Field(default=UserRole.STANDARD.value, alias="Role")


class UserResourceAccess(PortainerModel):
    user_id: int = Field(..., alias="UserId")
    access_level: int = Field(default=AccessLevel.READ_WRITE.value, alias="AccessLevel")


class TeamResourceAccess(PortainerModel):
    team_id: int = Field(..., alias="TeamId")
    access_level: int = Field(default=AccessLevel.READ_WRITE.value, alias="AccessLevel")


class ResourceControl(PortainerModel):
    """Registro de propiedad/permisos que Portainer adjunta a un recurso.

    Importante:
    - La API nunca devuelve null para "sin control": devuelve la estructura
      con `Id == 0`. Ver `has_access_control`.
    """

    id: int = _id_field(description="Identificador; 0 significa ausente.")
    resource_id: str = Field(
        default="",
        alias="ResourceId",
        description="Id del recurso Docker (o nombre del stack).",
    )
    sub_resource_ids: list[str] = Field(
        default_factory=list,
        alias="SubResourceIds",
        description="Recursos que heredan este control.",
    )
    type: int = Field(
        default=0,
        alias="Type",
        description="Tipo de recurso controlado (1 container ... 7 config).",
    )
    user_accesses: list[UserResourceAccess] = Field(
        default_factory=list,
        alias="UserAccesses",
        description="Usuarios con acceso.",
    )
    team_accesses: list[TeamResourceAccess] = Field(
        default_factory=list,
        alias="TeamAccesses",
        description="Equipos con acceso.",
    )
    public: bool = Field(
        default=False,
        alias="Public",
        description="Accesible por cualquier usuario.",
    )
    administrators_only: bool = Field(
        default=False,
        alias="AdministratorsOnly",
        description="Solo administradores.",
    )
    system: bool = Field(
        default=False,
        alias="System",
        description="Creado por Portainer (no editable).",
    )

    @property
    def has_access_control(self) -> bool:
        return self.id != 0


class PortainerDecoration(PortainerModel):
    """Campo `Portainer` que la API añade a los objetos Docker."""

    resource_control: ResourceControl | None = Field(default=None, alias="ResourceControl")


class DecoratedDockerResource(PortainerModel):
    """Objeto Docker (forma libre) decorado por Portainer.

    El control de acceso vive un nivel más abajo: `Portainer.ResourceControl`.
    """

    portainer: PortainerDecoration | None = Field(default=None, alias="Portainer")

    @property
    def access_control(self) -> ResourceControl | None:
        if self.portainer is None:
            return None
        return self.portainer.resource_control


class DecoratedStack(Stack):
    """Stack tal como lo devuelve `GET /stacks/{id}`: con `ResourceControl` embebido."""

    resource_control: ResourceControl | None = Field(default=None, alias="ResourceControl")

    @property
    def access_control(self) -> ResourceControl | None:
        return self.resource_control
