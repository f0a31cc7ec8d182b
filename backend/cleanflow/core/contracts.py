"""Boundary Protocols — contracts between the pipeline and pluggable stages.

Invariants:
    - Each protocol is one narrow capability (decode, validate, encode, present)
    - Pipeline code depends only on these protocols, never on concrete stages
    - Async methods are the ones that touch the transport or do IO;
      validate/encode/content_type/status_code are pure and synchronous

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Generic over Input/Output so a decoder, a use case and a presenter
      built for the same endpoint type-check against each other
"""

from typing import Protocol, TypeVar, runtime_checkable

from starlette.datastructures import MutableHeaders
from starlette.requests import Request

from cleanflow.core.request_context import RequestContext

P = TypeVar("P")
InputT_co = TypeVar("InputT_co", covariant=True)
InputT_contra = TypeVar("InputT_contra", contravariant=True)
OutputT_co = TypeVar("OutputT_co", covariant=True)
OutputT_contra = TypeVar("OutputT_contra", contravariant=True)


@runtime_checkable
class Validatable(Protocol):
    """A payload that knows its own business rules.

    validate() returns None on success and raises the domain error otherwise.
    """
    def validate(self) -> None: ...


class PayloadCodec(Protocol):
    """Decodes a raw request body into an instance of payload_type."""
    def decode(self, body: bytes, payload_type: type[P]) -> P: ...


@runtime_checkable
class ViewModel(Protocol):
    """Presentation-ready structure. All three methods are pure; encode may raise."""
    def content_type(self) -> str: ...
    def status_code(self) -> int: ...
    def encode(self) -> bytes: ...


class ResponseWriter(Protocol):
    """Transport response sink.

    Headers must be complete before write_header(); the first status
    line written wins.
    """
    headers: MutableHeaders

    async def write_header(self, status_code: int) -> None: ...
    async def write(self, body: bytes) -> None: ...


class RequestDecoder(Protocol[InputT_co]):
    """Turns a raw request into a use case input (usually a Result)."""
    async def decode(self, request: Request) -> InputT_co: ...


class UseCaseHandler(Protocol[InputT_contra, OutputT_co]):
    """Business rules: consumes an input, produces an output (usually a Result)."""
    async def handle(self, context: RequestContext, input: InputT_contra) -> OutputT_co: ...


class Presenter(Protocol[OutputT_contra]):
    """Writes the response matching a use case output."""
    async def present(
        self, context: RequestContext, writer: ResponseWriter, output: OutputT_contra,
    ) -> None: ...
