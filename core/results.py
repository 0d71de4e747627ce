"""Result types shared by the api client, validation and the tools.

Both unions carry an `ok` discriminator so callers can branch with
`if result.ok:` and still get the precise type from isinstance checks.
"""
from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass(frozen=True)
class ApiSuccess:
    body: str
    ok: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class ApiFailure:
    message: str
    ok: Literal[False] = field(default=False, init=False)


ApiResult = Union[ApiSuccess, ApiFailure]


@dataclass(frozen=True)
class ValidCampaignId:
    value: str
    ok: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class InvalidInput:
    message: str
    ok: Literal[False] = field(default=False, init=False)


ValidationResult = Union[ValidCampaignId, InvalidInput]
