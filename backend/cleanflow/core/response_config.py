"""Response Configuration — immutable headers and fallback body for the sender.

Invariants:
    - Built once (startup or per sender) and never mutated: frozen dataclass,
      tuples only, so concurrent reads need no locking
    - Header names are stored lower-cased; values keep their configured order
    - On name collision the later configuration replaces every earlier value
    - fallback_payload None means "use DEFAULT_FALLBACK_PAYLOAD"

Design Decisions:
    - Builders return new instances (dataclasses.replace) instead of
      mutating option setters
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

DEFAULT_FALLBACK_PAYLOAD = b"internal error"

HeaderItems = tuple[tuple[str, tuple[str, ...]], ...]


def _merge_headers(
    current: HeaderItems, headers: Mapping[str, Iterable[str] | str],
) -> HeaderItems:
    merged = dict(current)
    for name, values in headers.items():
        if isinstance(values, str):
            values = (values,)
        merged[name.lower()] = tuple(values)
    return tuple(merged.items())


@dataclass(frozen=True)
class ResponseConfig:
    """Common headers and encoding-failure fallback shared by all responses."""
    headers: HeaderItems = ()
    fallback_payload: bytes | None = None

    @classmethod
    def build(
        cls,
        headers: Mapping[str, Iterable[str] | str] | None = None,
        fallback_payload: bytes | str | None = None,
    ) -> "ResponseConfig":
        config = cls()
        if headers:
            config = config.with_headers(headers)
        if fallback_payload is not None:
            config = config.with_fallback_payload(fallback_payload)
        return config

    @classmethod
    def from_settings(cls, settings) -> "ResponseConfig":
        return cls.build(
            headers=settings.response_headers,
            fallback_payload=settings.fallback_payload,
        )

    def with_headers(
        self, headers: Mapping[str, Iterable[str] | str],
    ) -> "ResponseConfig":
        return replace(self, headers=_merge_headers(self.headers, headers))

    def with_fallback_payload(self, payload: bytes | str) -> "ResponseConfig":
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        return replace(self, fallback_payload=bytes(payload))

    @property
    def effective_fallback_payload(self) -> bytes:
        if self.fallback_payload is None:
            return DEFAULT_FALLBACK_PAYLOAD
        return self.fallback_payload
