"""Declarative tool and resource tables.

Each ToolSpec is turned into a pydantic model; the advertised input schema and
the dispatcher's argument validation both come from that model, so what is
listed is exactly what is enforced.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, create_model

_CONTEST_LIMIT = 20
_PROBLEM_LIMIT = 50

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
PositiveInt = Annotated[StrictInt, Field(ge=1)]
HandleList = Annotated[list[NonEmptyStr], Field(min_length=1)]
TagList = list[NonEmptyStr]


@dataclass(frozen=True, slots=True)
class Param:
    """One tool argument; ``default=...`` marks it required."""

    name: str
    annotation: Any
    description: str
    default: Any = ...

    @property
    def required(self) -> bool:
        return self.default is ...

    def field(self) -> tuple[Any, Any]:
        return self.annotation, Field(self.default, description=self.description)


def keep_result(result: Any) -> Any:
    return result


def first_contests(result: Any) -> Any:
    """Keep only the first contests of the list, in order."""
    if isinstance(result, list):
        return result[:_CONTEST_LIMIT]
    return result


def first_problems(result: Any) -> Any:
    """Keep only the first entries of ``problems``; siblings pass through."""
    if isinstance(result, dict) and isinstance(result.get("problems"), list):
        return {**result, "problems": result["problems"][:_PROBLEM_LIMIT]}
    return result


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """A tool: its arguments, the client method it calls, and result shaping."""

    name: str
    description: str
    resource: str
    operation: str  # CodeforcesClient method name
    params: tuple[Param, ...] = ()
    shape: Callable[[Any], Any] = keep_result

    @property
    def arguments_model(self) -> type[BaseModel]:
        return ARGUMENT_MODELS[self.name]

    def input_schema(self) -> dict[str, Any]:
        return self.arguments_model.model_json_schema()


@dataclass(frozen=True, slots=True)
class ResourceSpec:
    uri: str
    name: str
    description: str
    summary: str
    mime_type: str = "application/json"


def build_arguments_model(spec: ToolSpec) -> type[BaseModel]:
    return create_model(
        spec.name,
        __config__=ConfigDict(extra="forbid"),
        **{p.name: p.field() for p in spec.params},
    )


_HANDLE = Param("handle", NonEmptyStr, "User handle")

TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="get_user_info",
        description="Get information about Codeforces users",
        resource="codeforces://users",
        operation="user_info",
        params=(Param("handles", HandleList, "List of user handles"),),
    ),
    ToolSpec(
        name="get_user_submissions",
        description="Get recent submissions for a user",
        resource="codeforces://users",
        operation="user_status",
        params=(
            _HANDLE,
            Param("count", PositiveInt, "Number of submissions to retrieve", default=10),
        ),
    ),
    ToolSpec(
        name="get_user_rating",
        description="Get rating history for a user",
        resource="codeforces://users",
        operation="user_rating",
        params=(_HANDLE,),
    ),
    ToolSpec(
        name="get_contest_list",
        description=f"Get list of contests (first {_CONTEST_LIMIT})",
        resource="codeforces://contests",
        operation="contest_list",
        params=(Param("gym", StrictBool, "Include gym contests", default=False),),
        shape=first_contests,
    ),
    ToolSpec(
        name="get_contest_standings",
        description="Get contest standings",
        resource="codeforces://contests",
        operation="contest_standings",
        params=(
            Param("contest_id", PositiveInt, "Contest ID"),
            Param("count", PositiveInt, "Number of participants to retrieve", default=10),
        ),
    ),
    ToolSpec(
        name="get_problems",
        description=f"Get problems from problemset (first {_PROBLEM_LIMIT})",
        resource="codeforces://problems",
        operation="problemset_problems",
        params=(Param("tags", TagList, "Problem tags to filter by", default=[]),),
        shape=first_problems,
    ),
)

RESOURCES: tuple[ResourceSpec, ...] = (
    ResourceSpec(
        uri="codeforces://users",
        name="Codeforces Users",
        description="Access to Codeforces user information",
        summary="Codeforces user data access",
    ),
    ResourceSpec(
        uri="codeforces://contests",
        name="Codeforces Contests",
        description="Access to Codeforces contest information",
        summary="Codeforces contest data access",
    ),
    ResourceSpec(
        uri="codeforces://problems",
        name="Codeforces Problems",
        description="Access to Codeforces problem information",
        summary="Codeforces problem data access",
    ),
)

ARGUMENT_MODELS: dict[str, type[BaseModel]] = {t.name: build_arguments_model(t) for t in TOOLS}
TOOLS_BY_NAME: dict[str, ToolSpec] = {t.name: t for t in TOOLS}
RESOURCES_BY_URI: dict[str, ResourceSpec] = {r.uri: r for r in RESOURCES}


def operations_for(uri: str) -> list[str]:
    """Tool names listed under a resource, in catalog order."""
    return [t.name for t in TOOLS if t.resource == uri]
